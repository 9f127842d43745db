"""
Task Executor

Drains a planned task queue one task at a time:
- Strict plan order, never more than one gateway call in flight
- A progress event before each task (1-based, with the run total)
- Per-task failure isolation: any gateway failure becomes a sentinel result
- Opportunistic backlink enrichment that degrades to None on failure
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from ..utils.domain import clean_domain
from .exceptions import RunCancelled
from .gateways import AnalysisGateway, BacklinkGateway
from .models import (
    AnalysisResult,
    AnalysisTask,
    AnalysisType,
    BacklinkProfile,
    ProgressState,
    ResearchBrief,
    TaskOutcome,
)

logger = logging.getLogger(__name__)


ProgressCallback = Callable[[ProgressState], None]


@dataclass
class CancellationToken:
    """
    Cooperative cancellation token for analysis runs.

    Pass it to the executor (or runner) and call ``token.cancel()`` from any
    coroutine to stop the run before its next gateway call.
    """

    _cancelled: bool = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        """Raise ``RunCancelled`` if cancellation was requested."""
        if self._cancelled:
            raise RunCancelled("Run was cancelled")


class ProgressTracker:
    """
    Holds the ProgressState of the current run.

    Callable, so it can be handed to Executor.run as the progress callback.
    Observers (API job status, CLI output) read ``state`` or register a
    listener.
    """

    def __init__(self, listener: Optional[ProgressCallback] = None):
        self.state = ProgressState()
        self._listener = listener

    def __call__(self, state: ProgressState) -> None:
        self.state = state
        if self._listener:
            self._listener(state)

    def reset(self) -> None:
        """Back to {0, 0, ''} (run start and end)."""
        self(ProgressState())


_TASK_DESCRIPTIONS = {
    AnalysisType.ENTITY: "Analyzing {target} on {engine}...",
    AnalysisType.LEADERSHIP: "Analyzing {target}'s reputation on {engine}...",
    AnalysisType.PRESS: "Finding press opportunities for {target} on {engine}...",
    AnalysisType.SOCIAL: "Analyzing social sentiment for {target} on {engine}...",
    AnalysisType.PODCAST: "Finding podcast opportunities for {target} on {engine}...",
    AnalysisType.COMPETITOR: "Analyzing competitor {target} on {engine}...",
}


def describe_task(task: AnalysisTask) -> str:
    """Human-readable progress message for a task."""
    return _TASK_DESCRIPTIONS[task.analysis_type].format(
        target=task.target_ref,
        engine=task.engine_name,
    )


class Executor:
    """
    Sequential worker for a planned task list.

    Args:
        timeout: Per gateway call limit in seconds (None = no limit)
        cancellation_token: Checked before every gateway call
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ):
        self.timeout = timeout
        self.cancellation_token = cancellation_token

    async def run(
        self,
        tasks: Sequence[AnalysisTask],
        on_progress: Optional[ProgressCallback],
        gateway: AnalysisGateway,
    ) -> List[TaskOutcome]:
        """
        Execute every task in order.

        Args:
            tasks: Planned tasks (consumed in the given order)
            on_progress: Called with ProgressState before each task
            gateway: Analysis provider

        Returns:
            One TaskOutcome per task, in task order

        Raises:
            RunCancelled: If the cancellation token fires between tasks
        """
        total = len(tasks)
        outcomes: List[TaskOutcome] = []
        failures = 0

        for index, task in enumerate(tasks, start=1):
            self._check_cancelled()

            if on_progress:
                on_progress(ProgressState(current=index, total=total, message=describe_task(task)))

            result = await self._execute_task(task, gateway)
            if result.error:
                failures += 1
            outcomes.append(TaskOutcome(task=task, result=result))

        logger.info(f"Executed {total} tasks ({failures} failed)")
        return outcomes

    async def _execute_task(self, task: AnalysisTask, gateway: AnalysisGateway) -> AnalysisResult:
        """Run one gateway call; every failure is converted to the sentinel result."""
        logger.debug(f"Task {task.analysis_type.value}/{task.engine_id}: {task.query_text[:100]}")

        try:
            result = await self._call(
                gateway.analyze(task.query_text, task.engine_name, task.analysis_type)
            )
        except asyncio.TimeoutError:
            message = (
                f"Analysis timed out after {self.timeout:.0f}s" if self.timeout else "Analysis timed out"
            )
            logger.warning(f"{message} ({task.target_ref} on {task.engine_name})")
            return AnalysisResult.failed(message)
        except Exception as e:
            logger.warning(
                f"Analysis failed for {task.target_ref} on {task.engine_name} "
                f"({task.analysis_type.value}): {e}"
            )
            return AnalysisResult.failed(str(e) or type(e).__name__)

        if not isinstance(result, AnalysisResult):
            logger.warning(f"Gateway returned {type(result).__name__} for {task.target_ref}")
            return AnalysisResult.failed("Analysis provider returned no result")

        return result

    async def collect_backlinks(
        self,
        brief: ResearchBrief,
        gateway: Optional[BacklinkGateway],
    ) -> Dict[str, Optional[BacklinkProfile]]:
        """
        Fetch backlink profiles for the company and each named competitor.

        Each distinct domain is fetched at most once, sequentially. Missing or
        failed lookups map to None. Not counted in task progress.

        Returns:
            Dict of cleaned domain -> BacklinkProfile or None
        """
        profiles: Dict[str, Optional[BacklinkProfile]] = {}
        if gateway is None:
            return profiles

        websites = [brief.website] + [c.website for c in brief.named_competitors()]

        for website in websites:
            domain = clean_domain(website)
            if not domain or domain in profiles:
                continue

            self._check_cancelled()

            try:
                profiles[domain] = await self._call(gateway.fetch(domain, scope="all"))
            except asyncio.TimeoutError:
                logger.warning(f"Backlink lookup timed out for {domain}")
                profiles[domain] = None
            except Exception as e:
                logger.warning(f"Backlink lookup failed for {domain}: {e}")
                profiles[domain] = None

        found = sum(1 for p in profiles.values() if p is not None)
        logger.info(f"Backlink profiles: {found}/{len(profiles)} domains")
        return profiles

    async def _call(self, coro):
        if self.timeout:
            return await asyncio.wait_for(coro, self.timeout)
        return await coro

    def _check_cancelled(self) -> None:
        if self.cancellation_token:
            self.cancellation_token.raise_if_cancelled()
