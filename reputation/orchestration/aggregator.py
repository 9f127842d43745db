"""
Result Aggregator

Folds task outcomes into the nested Report and provides the derived summary
metrics renderers show (average score, majority sentiment). The metrics are
pure functions of the map they are given and are never stored.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from ..utils.domain import clean_domain
from .models import (
    UNKNOWN_SENTIMENT,
    AnalysisResult,
    AnalysisTask,
    AnalysisType,
    BacklinkProfile,
    CompetitorReport,
    LeaderReport,
    PodcastEntry,
    Report,
    ResearchBrief,
    TargetKind,
    TaskOutcome,
)

logger = logging.getLogger(__name__)


def average_score(by_engine: Mapping[str, AnalysisResult]) -> float:
    """
    Mean score across engines, rounded to one decimal.

    Uses the confidence score, or the sentiment score when confidence is
    absent. Error results and zero scores are excluded; 0.0 when nothing
    qualifies.
    """
    scores = [
        result.score
        for result in by_engine.values()
        if not result.error and result.score > 0
    ]
    if not scores:
        return 0.0
    return round(sum(scores) / len(scores), 1)


def majority_sentiment(by_engine: Mapping[str, AnalysisResult]) -> str:
    """
    Most frequent sentiment across engines (case-insensitive).

    Ties go to the sentiment seen first in map order. Failed results count
    with their "unknown" sentiment; blank sentiments are skipped and
    "unknown" is returned when nothing remains.
    """
    counts: Dict[str, int] = {}
    for result in by_engine.values():
        sentiment = (result.sentiment or "").strip().lower()
        if sentiment:
            counts[sentiment] = counts.get(sentiment, 0) + 1

    best = UNKNOWN_SENTIMENT
    best_count = 0
    for sentiment, count in counts.items():
        if count > best_count:
            best, best_count = sentiment, count
    return best


class ResultAggregator:
    """
    Routes each (task, result) pair to its Report slot.

    Usage:
        report = ResultAggregator(brief).fold(plan.tasks, results, backlinks)
    """

    def __init__(self, brief: ResearchBrief):
        self.brief = brief

    def fold(
        self,
        tasks: Sequence[AnalysisTask],
        results: Sequence[AnalysisResult],
        backlinks: Optional[Mapping[str, Optional[BacklinkProfile]]] = None,
    ) -> Report:
        """
        Build the Report for a run.

        Args:
            tasks: Planned tasks
            results: One result per task, aligned with ``tasks``
            backlinks: Cleaned domain -> profile (or None) from backlink collection

        Returns:
            The run's Report
        """
        if len(tasks) != len(results):
            raise ValueError(f"Got {len(results)} results for {len(tasks)} tasks")

        backlinks = backlinks or {}

        report = Report(
            company_name=self.brief.company_name.strip(),
            website=self.brief.website,
            industry=self.brief.industry,
            backlink_profile=self._profile_for(self.brief.website, backlinks),
        )

        leaders: List[LeaderReport] = [
            LeaderReport(name=leader.name.strip(), title=leader.title or "")
            for leader in self.brief.named_leaders()
        ]
        competitors: List[CompetitorReport] = [
            CompetitorReport(
                name=comp.name.strip(),
                website=comp.website,
                backlink_profile=self._profile_for(comp.website, backlinks),
            )
            for comp in self.brief.named_competitors()
        ]

        for task, result in zip(tasks, results):
            self._route(report, leaders, competitors, task, result)

        report.leadership = leaders
        report.competitors = competitors

        logger.info(
            f"Report for {report.company_name}: {report.result_count} results, "
            f"company score {average_score(report.company)}/10"
        )
        return report

    def fold_outcomes(
        self,
        outcomes: Sequence[TaskOutcome],
        backlinks: Optional[Mapping[str, Optional[BacklinkProfile]]] = None,
    ) -> Report:
        """Fold executor outcomes (task/result pairs)."""
        return self.fold(
            [outcome.task for outcome in outcomes],
            [outcome.result for outcome in outcomes],
            backlinks,
        )

    def _route(
        self,
        report: Report,
        leaders: List[LeaderReport],
        competitors: List[CompetitorReport],
        task: AnalysisTask,
        result: AnalysisResult,
    ) -> None:
        kind, analysis_type = task.target_kind, task.analysis_type

        if kind == TargetKind.COMPANY and analysis_type == AnalysisType.ENTITY:
            report.company[task.engine_id] = result
        elif kind == TargetKind.COMPANY and analysis_type == AnalysisType.PODCAST:
            report.podcast_opportunities.append(PodcastEntry(engine_id=task.engine_id, result=result))
        elif kind == TargetKind.LEADER:
            leader = leaders[task.target_index]
            if analysis_type == AnalysisType.LEADERSHIP:
                leader.by_engine[task.engine_id] = result
            elif analysis_type == AnalysisType.PRESS:
                leader.press_opportunities[task.engine_id] = result
            elif analysis_type == AnalysisType.SOCIAL:
                leader.social_sentiment[task.engine_id] = result
            else:
                raise ValueError(f"Unexpected leader analysis: {analysis_type.value}")
        elif kind == TargetKind.COMPETITOR and analysis_type == AnalysisType.COMPETITOR:
            competitors[task.target_index].by_engine[task.engine_id] = result
        else:
            raise ValueError(f"Cannot route {kind.value}/{analysis_type.value} task")

    def _profile_for(
        self,
        website: Optional[str],
        backlinks: Mapping[str, Optional[BacklinkProfile]],
    ) -> Optional[BacklinkProfile]:
        domain = clean_domain(website)
        return backlinks.get(domain) if domain else None
