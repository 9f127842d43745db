"""
Task Planner

Turns a research brief and an engine selection into the exact, ordered list
of analysis tasks for a run:

1. Company entity analysis, one per engine
2. Per named leader, per engine: reputation, press, social
3. Podcast opportunities, one per engine (company level)
4. Per named competitor, per engine: competitor analysis

The order is fixed so progress numbering is deterministic, and
total = E * (1 + 3L + C) + E for E engines, L leaders and C competitors.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .engines import Engine, resolve_engines
from .exceptions import InvalidBriefError
from .models import (
    AnalysisTask,
    AnalysisType,
    Competitor,
    Leader,
    ResearchBrief,
    TargetKind,
    TaskPlan,
)

logger = logging.getLogger(__name__)


LEADER_ANALYSES = (AnalysisType.LEADERSHIP, AnalysisType.PRESS, AnalysisType.SOCIAL)


def expected_total(engine_count: int, leader_count: int, competitor_count: int) -> int:
    """Task count for a run: company + leaders + competitors terms, plus podcasts."""
    return engine_count * (1 + 3 * leader_count + competitor_count) + engine_count


class TaskPlanner:
    """
    Deterministic planner for analysis runs.

    Usage:
        plan = TaskPlanner().plan(brief, ["chatgpt", "gemini"])
        for task in plan.tasks:
            ...
    """

    # Optional clauses are rendered to "" when their field is missing
    QUERY_TEMPLATES = {
        AnalysisType.ENTITY: (
            "Tell me about {company}{industry_clause}.{website_clause}{keywords_clause}"
        ),
        AnalysisType.LEADERSHIP: (
            "Tell me about {leader}{title_clause} at {company}. "
            "What is their reputation, thought leadership, and online presence?"
        ),
        AnalysisType.PRESS: (
            "What press opportunities, media outlets, industry publications and speaking "
            "engagements would suit {leader}{title_clause} at {company}{industry_clause}?"
        ),
        AnalysisType.SOCIAL: (
            "What is the social media sentiment and online reputation of {leader}{title_clause} "
            "at {company} on LinkedIn, Twitter/X and industry forums?"
        ),
        AnalysisType.PODCAST: (
            "Which podcasts would be a good fit for executives from {company}{industry_clause} "
            "to appear on as guests?{keywords_clause}"
        ),
        AnalysisType.COMPETITOR: (
            "Analyze {competitor}{competitor_website_clause} as a competitor to {company}."
            "{competitor_leader_clause} What is their online presence, backlink profile, "
            "and content strategy?"
        ),
    }

    def plan(self, brief: ResearchBrief, engine_ids: Sequence[str]) -> TaskPlan:
        """
        Enumerate the tasks for a run.

        Args:
            brief: Research brief (company, leaders, competitors)
            engine_ids: Selected engine ids, in selection order

        Returns:
            TaskPlan with ordered tasks and their total

        Raises:
            InvalidBriefError: Empty engine selection, unknown engine, or empty company name
        """
        engines = resolve_engines(engine_ids)

        if not brief.company_name or not brief.company_name.strip():
            raise InvalidBriefError("Company name is required")

        leaders = brief.named_leaders()
        competitors = brief.named_competitors()

        tasks: List[AnalysisTask] = []

        for engine in engines:
            tasks.append(self._company_task(brief, engine, AnalysisType.ENTITY))

        for index, leader in enumerate(leaders):
            for engine in engines:
                for analysis_type in LEADER_ANALYSES:
                    tasks.append(self._leader_task(brief, leader, index, engine, analysis_type))

        for engine in engines:
            tasks.append(self._company_task(brief, engine, AnalysisType.PODCAST))

        for index, competitor in enumerate(competitors):
            for engine in engines:
                tasks.append(self._competitor_task(brief, competitor, index, engine))

        total = expected_total(len(engines), len(leaders), len(competitors))
        if total != len(tasks):
            # Enumeration and formula are maintained together; a mismatch is a defect
            raise AssertionError(f"Planned {len(tasks)} tasks, expected {total}")

        logger.info(
            f"Planned {total} tasks for {brief.company_name}: "
            f"{len(engines)} engines, {len(leaders)} leaders, {len(competitors)} competitors"
        )

        return TaskPlan(tasks=tuple(tasks), total=total)

    # =========================================================================
    # TASK BUILDERS
    # =========================================================================

    def _company_task(
        self,
        brief: ResearchBrief,
        engine: Engine,
        analysis_type: AnalysisType,
    ) -> AnalysisTask:
        return AnalysisTask(
            target_kind=TargetKind.COMPANY,
            target_ref=brief.company_name.strip(),
            target_index=None,
            engine_id=engine.id,
            engine_name=engine.name,
            analysis_type=analysis_type,
            query_text=self.render_query(analysis_type, brief),
        )

    def _leader_task(
        self,
        brief: ResearchBrief,
        leader: Leader,
        index: int,
        engine: Engine,
        analysis_type: AnalysisType,
    ) -> AnalysisTask:
        return AnalysisTask(
            target_kind=TargetKind.LEADER,
            target_ref=leader.name.strip(),
            target_index=index,
            engine_id=engine.id,
            engine_name=engine.name,
            analysis_type=analysis_type,
            query_text=self.render_query(analysis_type, brief, leader=leader),
        )

    def _competitor_task(
        self,
        brief: ResearchBrief,
        competitor: Competitor,
        index: int,
        engine: Engine,
    ) -> AnalysisTask:
        return AnalysisTask(
            target_kind=TargetKind.COMPETITOR,
            target_ref=competitor.name.strip(),
            target_index=index,
            engine_id=engine.id,
            engine_name=engine.name,
            analysis_type=AnalysisType.COMPETITOR,
            query_text=self.render_query(AnalysisType.COMPETITOR, brief, competitor=competitor),
        )

    # =========================================================================
    # QUERY RENDERING
    # =========================================================================

    def render_query(
        self,
        analysis_type: AnalysisType,
        brief: ResearchBrief,
        leader: Optional[Leader] = None,
        competitor: Optional[Competitor] = None,
    ) -> str:
        """Render the query text for one task from brief fields."""
        template = self.QUERY_TEMPLATES[analysis_type]
        return template.format(**self._query_vars(brief, leader, competitor)).strip()

    def _query_vars(
        self,
        brief: ResearchBrief,
        leader: Optional[Leader],
        competitor: Optional[Competitor],
    ) -> Dict[str, str]:
        industry = _clean(brief.industry)
        website = _clean(brief.website)
        keywords = _clean(brief.keywords)

        query_vars = {
            "company": brief.company_name.strip(),
            "industry_clause": f" in the {industry} industry" if industry else "",
            "website_clause": f" Their website is {website}." if website else "",
            "keywords_clause": f" Focus on: {keywords.rstrip('.')}." if keywords else "",
            "leader": "",
            "title_clause": "",
            "competitor": "",
            "competitor_website_clause": "",
            "competitor_leader_clause": "",
        }

        if leader is not None:
            title = _clean(leader.title)
            query_vars["leader"] = leader.name.strip()
            query_vars["title_clause"] = f", {title}" if title else ""

        if competitor is not None:
            comp_website = _clean(competitor.website)
            query_vars["competitor"] = competitor.name.strip()
            query_vars["competitor_website_clause"] = f" ({comp_website})" if comp_website else ""
            if competitor.leader is not None and competitor.leader.is_named:
                comp_title = _clean(competitor.leader.title)
                query_vars["competitor_leader_clause"] = (
                    f" Their leadership includes {competitor.leader.name.strip()}"
                    f"{', ' + comp_title if comp_title else ''}."
                )

        return query_vars


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""
