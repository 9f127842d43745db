"""
Analysis Orchestration

Plans, executes and aggregates a reputation analysis run:
- TaskPlanner: brief + engines -> ordered AnalysisTasks
- Executor: one task at a time, progress events, per-task failure isolation
- ResultAggregator: outcomes -> nested Report (+ summary metrics)
- ReputationAnalysisRunner: ties the three together

Usage:
    from reputation.orchestration import ReputationAnalysisRunner, ResearchBrief

    runner = ReputationAnalysisRunner(analysis_gateway, backlink_gateway)
    report = await runner.run(ResearchBrief(company_name="Acme"), ["chatgpt"])
"""

from .aggregator import ResultAggregator, average_score, majority_sentiment
from .engines import (
    DEFAULT_ENGINE_IDS,
    Engine,
    engine_name,
    get_all_engines,
    get_engine,
    resolve_engines,
)
from .exceptions import InvalidBriefError, ReputationError, RunCancelled
from .executor import CancellationToken, Executor, ProgressTracker, describe_task
from .gateways import AnalysisGateway, BacklinkGateway
from .models import (
    UNKNOWN_SENTIMENT,
    AnalysisResult,
    AnalysisTask,
    AnalysisType,
    BacklinkProfile,
    BacklinkTotals,
    Competitor,
    CompetitorReport,
    Leader,
    LeaderReport,
    PodcastEntry,
    ProgressState,
    Report,
    ResearchBrief,
    TargetKind,
    TaskOutcome,
    TaskPlan,
    TopBacklink,
)
from .planner import TaskPlanner, expected_total
from .runner import ReputationAnalysisRunner

__all__ = [
    # Models
    "AnalysisResult",
    "AnalysisTask",
    "AnalysisType",
    "BacklinkProfile",
    "BacklinkTotals",
    "Competitor",
    "CompetitorReport",
    "Leader",
    "LeaderReport",
    "PodcastEntry",
    "ProgressState",
    "Report",
    "ResearchBrief",
    "TargetKind",
    "TaskOutcome",
    "TaskPlan",
    "TopBacklink",
    "UNKNOWN_SENTIMENT",
    # Engines
    "DEFAULT_ENGINE_IDS",
    "Engine",
    "engine_name",
    "get_all_engines",
    "get_engine",
    "resolve_engines",
    # Errors
    "InvalidBriefError",
    "ReputationError",
    "RunCancelled",
    # Orchestration
    "AnalysisGateway",
    "BacklinkGateway",
    "CancellationToken",
    "Executor",
    "ProgressTracker",
    "ResultAggregator",
    "ReputationAnalysisRunner",
    "TaskPlanner",
    "average_score",
    "describe_task",
    "expected_total",
    "majority_sentiment",
]
