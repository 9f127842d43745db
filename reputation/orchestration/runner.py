"""
Reputation Analysis Runner

Coordinates one complete run:
plan -> backlink enrichment -> sequential task execution -> fold into Report.

Validation errors fail the run before any gateway call. Per-task and
backlink failures degrade the Report. Anything else (cancellation, internal
defects) propagates and no Report is produced.
"""

import logging
import time
from typing import Optional, Sequence

from .aggregator import ResultAggregator
from .executor import CancellationToken, Executor, ProgressCallback, ProgressTracker
from .gateways import AnalysisGateway, BacklinkGateway
from .models import ProgressState, Report, ResearchBrief
from .planner import TaskPlanner

logger = logging.getLogger(__name__)


class ReputationAnalysisRunner:
    """
    Runs reputation analyses end to end.

    Usage:
        runner = ReputationAnalysisRunner(ClaudeAnalysisGateway(), SemrushBacklinkGateway())
        report = await runner.run(brief, ["chatgpt", "gemini"])
        print(runner.progress.state)
    """

    def __init__(
        self,
        analysis_gateway: AnalysisGateway,
        backlink_gateway: Optional[BacklinkGateway] = None,
        on_progress: Optional[ProgressCallback] = None,
        timeout: Optional[float] = None,
        planner: Optional[TaskPlanner] = None,
    ):
        """
        Args:
            analysis_gateway: Provider for simulated AI-search analyses
            backlink_gateway: Optional backlink/authority provider
            on_progress: Listener for progress updates
            timeout: Per gateway call limit in seconds
            planner: Task planner (defaults to TaskPlanner())
        """
        self.analysis_gateway = analysis_gateway
        self.backlink_gateway = backlink_gateway
        self.timeout = timeout
        self.planner = planner or TaskPlanner()
        self.progress = ProgressTracker(on_progress)

    @property
    def state(self) -> ProgressState:
        return self.progress.state

    async def run(
        self,
        brief: ResearchBrief,
        engine_ids: Sequence[str],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Report:
        """
        Execute a full run.

        Args:
            brief: Research brief (treated as frozen for the run)
            engine_ids: Selected engines, in order
            cancellation_token: Optional cooperative cancellation

        Returns:
            The run's Report

        Raises:
            InvalidBriefError: Before any task runs
            RunCancelled: If cancelled mid-run
        """
        plan = self.planner.plan(brief, engine_ids)

        start_time = time.monotonic()
        logger.info(f"Starting reputation analysis for {brief.company_name} ({plan.total} tasks)")

        executor = Executor(timeout=self.timeout, cancellation_token=cancellation_token)
        self.progress.reset()

        try:
            backlinks = await executor.collect_backlinks(brief, self.backlink_gateway)
            outcomes = await executor.run(plan.tasks, self.progress, self.analysis_gateway)
            report = ResultAggregator(brief).fold_outcomes(outcomes, backlinks)
        finally:
            self.progress.reset()

        duration = time.monotonic() - start_time
        logger.info(f"Reputation analysis complete in {duration:.1f}s")

        return report
