"""
Reputation Analysis Data Models

Defines the types that flow through an analysis run:
- Operator input (ResearchBrief, Leader, Competitor)
- Planned work (AnalysisTask, TaskPlan)
- Outcomes (AnalysisResult, BacklinkProfile, TaskOutcome)
- Run observation (ProgressState)
- The final nested Report handed to renderers and delivery
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


UNKNOWN_SENTIMENT = "unknown"
SENTIMENTS = ("positive", "neutral", "negative")


# =============================================================================
# ENUMS
# =============================================================================


class TargetKind(str, Enum):
    """Which part of the brief a task is about."""
    COMPANY = "company"
    LEADER = "leader"
    COMPETITOR = "competitor"


class AnalysisType(str, Enum):
    """Kind of analysis requested from the provider."""
    ENTITY = "entity"
    LEADERSHIP = "leadership"  # Leader reputation
    PRESS = "press"
    SOCIAL = "social"
    PODCAST = "podcast"
    COMPETITOR = "competitor"


# =============================================================================
# OPERATOR INPUT
# =============================================================================


@dataclass(frozen=True)
class Leader:
    name: str
    title: str = ""

    @property
    def is_named(self) -> bool:
        return bool(self.name and self.name.strip())


@dataclass(frozen=True)
class Competitor:
    name: str
    website: Optional[str] = None
    leader: Optional[Leader] = None

    @property
    def is_named(self) -> bool:
        return bool(self.name and self.name.strip())


@dataclass(frozen=True)
class ResearchBrief:
    """
    What to research. Read-only for the duration of a run.

    Leaders and competitors are stored as tuples so a brief cannot be
    mutated mid-run; lists are accepted and converted.
    """
    company_name: str
    website: Optional[str] = None
    industry: Optional[str] = None
    keywords: Optional[str] = None
    leaders: Tuple[Leader, ...] = ()
    competitors: Tuple[Competitor, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "leaders", tuple(self.leaders))
        object.__setattr__(self, "competitors", tuple(self.competitors))

    def named_leaders(self) -> List[Leader]:
        """Leaders that take part in planning (blank names are skipped)."""
        return [leader for leader in self.leaders if leader.is_named]

    def named_competitors(self) -> List[Competitor]:
        """Competitors that take part in planning (blank names are skipped)."""
        return [comp for comp in self.competitors if comp.is_named]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResearchBrief":
        leaders = [
            Leader(name=l.get("name") or "", title=l.get("title") or "")
            for l in data.get("leaders") or []
        ]
        competitors = []
        for c in data.get("competitors") or []:
            leader = c.get("leader")
            competitors.append(Competitor(
                name=c.get("name") or "",
                website=c.get("website") or None,
                leader=Leader(name=leader.get("name") or "", title=leader.get("title") or "")
                if leader and leader.get("name") else None,
            ))
        return cls(
            company_name=data.get("company_name") or "",
            website=data.get("website") or None,
            industry=data.get("industry") or None,
            keywords=data.get("keywords") or None,
            leaders=leaders,
            competitors=competitors,
        )


# =============================================================================
# PLANNED WORK
# =============================================================================


@dataclass(frozen=True)
class AnalysisTask:
    """One rendered query against one engine for one target and analysis type."""
    target_kind: TargetKind
    target_ref: str
    target_index: Optional[int]  # Position among named leaders/competitors
    engine_id: str
    engine_name: str
    analysis_type: AnalysisType
    query_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_kind": self.target_kind.value,
            "target_ref": self.target_ref,
            "target_index": self.target_index,
            "engine_id": self.engine_id,
            "engine_name": self.engine_name,
            "analysis_type": self.analysis_type.value,
            "query_text": self.query_text,
        }


@dataclass(frozen=True)
class TaskPlan:
    """Ordered tasks for a run and their count."""
    tasks: Tuple[AnalysisTask, ...]
    total: int


# =============================================================================
# OUTCOMES
# =============================================================================


_RECORD_FIELDS = (
    "sources", "backlinks", "press_opportunities", "podcast_opportunities",
    "media_appearances", "platforms",
)
_TEXT_FIELDS = ("positive_highlights", "concerns", "strengths", "weaknesses")


@dataclass(frozen=True)
class AnalysisResult:
    """Structured answer for a single task. Never mutated after creation."""
    summary: str = ""
    entity_found: bool = False
    confidence_score: Optional[float] = None  # 0-10
    sentiment_score: Optional[float] = None  # 0-10, 10 = very positive
    sentiment: str = UNKNOWN_SENTIMENT
    sources: Tuple[Mapping[str, Any], ...] = ()
    backlinks: Tuple[Mapping[str, Any], ...] = ()
    press_opportunities: Tuple[Mapping[str, Any], ...] = ()
    podcast_opportunities: Tuple[Mapping[str, Any], ...] = ()
    recommendations: str = ""

    # Analysis-type specific extras
    media_appearances: Tuple[Mapping[str, Any], ...] = ()
    platforms: Tuple[Mapping[str, Any], ...] = ()
    positive_highlights: Tuple[str, ...] = ()
    concerns: Tuple[str, ...] = ()
    strengths: Tuple[str, ...] = ()
    weaknesses: Tuple[str, ...] = ()
    content_strategy: str = ""

    error: bool = False
    error_message: Optional[str] = None

    def __post_init__(self):
        for name in _RECORD_FIELDS:
            object.__setattr__(
                self, name, tuple(MappingProxyType(dict(item)) for item in getattr(self, name) or ())
            )
        for name in _TEXT_FIELDS:
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))

    @classmethod
    def failed(cls, message: str) -> "AnalysisResult":
        """Sentinel result marking a failed task without aborting the run."""
        return cls(
            summary=f"Error: {message}",
            entity_found=False,
            confidence_score=0.0,
            sentiment_score=0.0,
            sentiment=UNKNOWN_SENTIMENT,
            recommendations="Analysis failed",
            error=True,
            error_message=message,
        )

    @property
    def score(self) -> float:
        """Confidence score, falling back to sentiment score when absent."""
        if self.confidence_score is not None:
            return self.confidence_score
        return self.sentiment_score or 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary,
            "entity_found": self.entity_found,
            "confidence_score": self.confidence_score,
            "sentiment_score": self.sentiment_score,
            "sentiment": self.sentiment,
            "sources": [dict(item) for item in self.sources],
            "backlinks": [dict(item) for item in self.backlinks],
            "press_opportunities": [dict(item) for item in self.press_opportunities],
            "podcast_opportunities": [dict(item) for item in self.podcast_opportunities],
            "recommendations": self.recommendations,
            "media_appearances": [dict(item) for item in self.media_appearances],
            "platforms": [dict(item) for item in self.platforms],
            "positive_highlights": list(self.positive_highlights),
            "concerns": list(self.concerns),
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "content_strategy": self.content_strategy,
            "error": self.error,
            "error_message": self.error_message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        known = cls.__dataclass_fields__
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class BacklinkTotals:
    backlinks: int = 0
    referring_domains: int = 0
    follow_links: int = 0
    nofollow_links: int = 0


@dataclass(frozen=True)
class TopBacklink:
    source_url: str
    authority_score: int = 0
    anchor: Optional[str] = None


@dataclass(frozen=True)
class BacklinkProfile:
    """Backlink and authority metrics for one domain."""
    domain: str
    authority_score: Optional[int] = None
    totals: BacklinkTotals = field(default_factory=BacklinkTotals)
    top_backlinks: Tuple[TopBacklink, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "authority_score": self.authority_score,
            "totals": {
                "backlinks": self.totals.backlinks,
                "referring_domains": self.totals.referring_domains,
                "follow_links": self.totals.follow_links,
                "nofollow_links": self.totals.nofollow_links,
            },
            "top_backlinks": [
                {
                    "source_url": link.source_url,
                    "authority_score": link.authority_score,
                    "anchor": link.anchor,
                }
                for link in self.top_backlinks
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BacklinkProfile":
        totals = data.get("totals") or {}
        return cls(
            domain=data.get("domain") or "",
            authority_score=data.get("authority_score"),
            totals=BacklinkTotals(
                backlinks=totals.get("backlinks", 0),
                referring_domains=totals.get("referring_domains", 0),
                follow_links=totals.get("follow_links", 0),
                nofollow_links=totals.get("nofollow_links", 0),
            ),
            top_backlinks=tuple(
                TopBacklink(
                    source_url=link.get("source_url") or "",
                    authority_score=link.get("authority_score") or 0,
                    anchor=link.get("anchor"),
                )
                for link in data.get("top_backlinks") or []
            ),
        )


@dataclass(frozen=True)
class TaskOutcome:
    """A task paired with the single result produced for it."""
    task: AnalysisTask
    result: AnalysisResult


@dataclass(frozen=True)
class ProgressState:
    """Progress of the current run as seen by observers."""
    current: int = 0
    total: int = 0
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"current": self.current, "total": self.total, "message": self.message}


# =============================================================================
# REPORT
# =============================================================================


def _results_to_dict(by_engine: Dict[str, AnalysisResult]) -> Dict[str, Any]:
    return {engine_id: result.to_dict() for engine_id, result in by_engine.items()}


def _results_from_dict(data: Optional[Dict[str, Any]]) -> Dict[str, AnalysisResult]:
    return {engine_id: AnalysisResult.from_dict(r) for engine_id, r in (data or {}).items()}


@dataclass
class LeaderReport:
    name: str
    title: str = ""
    by_engine: Dict[str, AnalysisResult] = field(default_factory=dict)
    press_opportunities: Dict[str, AnalysisResult] = field(default_factory=dict)
    social_sentiment: Dict[str, AnalysisResult] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "by_engine": _results_to_dict(self.by_engine),
            "press_opportunities": _results_to_dict(self.press_opportunities),
            "social_sentiment": _results_to_dict(self.social_sentiment),
        }


@dataclass
class CompetitorReport:
    name: str
    website: Optional[str] = None
    by_engine: Dict[str, AnalysisResult] = field(default_factory=dict)
    backlink_profile: Optional[BacklinkProfile] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "website": self.website,
            "by_engine": _results_to_dict(self.by_engine),
            "backlink_profile": self.backlink_profile.to_dict() if self.backlink_profile else None,
        }


@dataclass
class PodcastEntry:
    engine_id: str
    result: AnalysisResult

    def to_dict(self) -> Dict[str, Any]:
        return {"engine_id": self.engine_id, "result": self.result.to_dict()}


@dataclass
class Report:
    """
    Nested aggregate of every task outcome for one run.

    This is the whole surface handed to renderers and delivery. Optional
    parts (backlink profiles, leader sub-maps, podcast entries) may be
    empty or None and consumers must not assume them populated.
    """
    company_name: str
    website: Optional[str] = None
    industry: Optional[str] = None
    company: Dict[str, AnalysisResult] = field(default_factory=dict)
    leadership: List[LeaderReport] = field(default_factory=list)
    competitors: List[CompetitorReport] = field(default_factory=list)
    backlink_profile: Optional[BacklinkProfile] = None
    podcast_opportunities: List[PodcastEntry] = field(default_factory=list)

    @property
    def result_count(self) -> int:
        """Number of task results held by the report."""
        count = len(self.company) + len(self.podcast_opportunities)
        for leader in self.leadership:
            count += len(leader.by_engine) + len(leader.press_opportunities) + len(leader.social_sentiment)
        for comp in self.competitors:
            count += len(comp.by_engine)
        return count

    def iter_results(self):
        """Yield every AnalysisResult in the report."""
        yield from self.company.values()
        for leader in self.leadership:
            yield from leader.by_engine.values()
            yield from leader.press_opportunities.values()
            yield from leader.social_sentiment.values()
        yield from (entry.result for entry in self.podcast_opportunities)
        for comp in self.competitors:
            yield from comp.by_engine.values()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "company_name": self.company_name,
            "website": self.website,
            "industry": self.industry,
            "company": _results_to_dict(self.company),
            "leadership": [leader.to_dict() for leader in self.leadership],
            "competitors": [comp.to_dict() for comp in self.competitors],
            "backlink_profile": self.backlink_profile.to_dict() if self.backlink_profile else None,
            "podcast_opportunities": [entry.to_dict() for entry in self.podcast_opportunities],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Report":
        """Rebuild a Report from its exported dict (e.g. posted back for delivery)."""
        profile = data.get("backlink_profile")
        return cls(
            company_name=data.get("company_name") or "",
            website=data.get("website"),
            industry=data.get("industry"),
            company=_results_from_dict(data.get("company")),
            leadership=[
                LeaderReport(
                    name=l.get("name") or "",
                    title=l.get("title") or "",
                    by_engine=_results_from_dict(l.get("by_engine")),
                    press_opportunities=_results_from_dict(l.get("press_opportunities")),
                    social_sentiment=_results_from_dict(l.get("social_sentiment")),
                )
                for l in data.get("leadership") or []
            ],
            competitors=[
                CompetitorReport(
                    name=c.get("name") or "",
                    website=c.get("website"),
                    by_engine=_results_from_dict(c.get("by_engine")),
                    backlink_profile=BacklinkProfile.from_dict(c["backlink_profile"])
                    if c.get("backlink_profile") else None,
                )
                for c in data.get("competitors") or []
            ],
            backlink_profile=BacklinkProfile.from_dict(profile) if profile else None,
            podcast_opportunities=[
                PodcastEntry(engine_id=p.get("engine_id") or "", result=AnalysisResult.from_dict(p.get("result") or {}))
                for p in data.get("podcast_opportunities") or []
            ],
        )
