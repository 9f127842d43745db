"""
Engine Registry

Static catalog of the AI search engines a run can simulate.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .exceptions import InvalidBriefError


@dataclass(frozen=True)
class Engine:
    """An AI search/answer provider the analysis simulates."""
    id: str
    name: str
    color: str = "#666666"


ENGINES = (
    Engine("chatgpt", "ChatGPT", "#10a37f"),
    Engine("gemini", "Google Gemini", "#4285f4"),
    Engine("claude", "Claude", "#cc785c"),
    Engine("perplexity", "Perplexity", "#20808d"),
    Engine("copilot", "Microsoft Copilot", "#00bcf2"),
)

DEFAULT_ENGINE_IDS = ("chatgpt", "gemini")

_BY_ID = {engine.id: engine for engine in ENGINES}


def get_all_engines() -> List[Engine]:
    """Get list of all available engines, in display order."""
    return list(ENGINES)


def get_engine(engine_id: str) -> Optional[Engine]:
    """Get engine by id."""
    return _BY_ID.get(engine_id)


def engine_name(engine_id: str) -> str:
    """Display name for an engine id (falls back to the id itself)."""
    engine = _BY_ID.get(engine_id)
    return engine.name if engine else engine_id


def resolve_engines(engine_ids: Iterable[str]) -> List[Engine]:
    """
    Resolve a selection of engine ids, keeping selection order.

    Duplicates are dropped (first occurrence wins).

    Raises:
        InvalidBriefError: If the selection is empty or names an unknown engine
    """
    resolved = []
    seen = set()
    for engine_id in engine_ids:
        engine = _BY_ID.get(engine_id)
        if engine is None:
            raise InvalidBriefError(f"Unknown AI search engine: {engine_id}")
        if engine.id not in seen:
            seen.add(engine.id)
            resolved.append(engine)

    if not resolved:
        raise InvalidBriefError("Please select at least one AI search engine")

    return resolved
