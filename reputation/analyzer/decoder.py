"""
Analysis Response Decoder

Turns the model's text answer into an AnalysisResult:
1. Strip markdown code fences
2. Extract the outermost JSON object
3. Validate and coerce fields (scores clamped to 0-10, sentiment normalised)

Anything that cannot be decoded raises AnalysisDecodeError. There is no
text fallback: a bad answer is a failed task like any other.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from ..orchestration.models import SENTIMENTS, UNKNOWN_SENTIMENT, AnalysisResult
from .errors import AnalysisDecodeError

logger = logging.getLogger(__name__)


_FENCE_PATTERN = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
_NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")


def decode_analysis(text: str) -> AnalysisResult:
    """
    Decode a model answer into an AnalysisResult.

    Args:
        text: Concatenated text blocks from the model response

    Returns:
        AnalysisResult

    Raises:
        AnalysisDecodeError: No JSON object, invalid JSON, or missing summary
    """
    data = extract_json_object(text)

    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise AnalysisDecodeError("Analysis response has no summary")

    return AnalysisResult(
        summary=summary.strip(),
        entity_found=bool(data.get("entityFound", False)),
        confidence_score=_score(data.get("confidenceScore")),
        sentiment_score=_score(data.get("sentimentScore")),
        sentiment=_sentiment(data.get("sentiment")),
        sources=_dict_list(data.get("topSources") or data.get("sources")),
        backlinks=_dict_list(data.get("backlinks") or data.get("keyBacklinks")),
        press_opportunities=_dict_list(data.get("pressOpportunities")),
        podcast_opportunities=_dict_list(data.get("podcastOpportunities")),
        recommendations=_text(data.get("recommendations")),
        media_appearances=_dict_list(data.get("mediaAppearances")),
        platforms=_dict_list(data.get("platforms")),
        positive_highlights=_str_list(data.get("positiveHighlights")),
        concerns=_str_list(data.get("concerns")),
        strengths=_str_list(data.get("strengths")),
        weaknesses=_str_list(data.get("weaknesses")),
        content_strategy=_text(data.get("contentStrategy")),
    )


def extract_json_object(text: str) -> Dict[str, Any]:
    """Find and parse the JSON object in a model answer."""
    if not text or not text.strip():
        raise AnalysisDecodeError("Empty analysis response")

    cleaned = _FENCE_PATTERN.sub("", text).strip()
    match = _OBJECT_PATTERN.search(cleaned)
    if not match:
        raise AnalysisDecodeError("No JSON object found in response")

    try:
        data = json.loads(match.group())
    except json.JSONDecodeError as e:
        logger.debug(f"Raw response: {text[:500]}")
        raise AnalysisDecodeError(f"Invalid JSON in response: {e}") from e

    if not isinstance(data, dict):
        raise AnalysisDecodeError("Analysis response is not a JSON object")

    return data


def _score(value: Any) -> Optional[float]:
    """Coerce a 0-10 score ("7", 7, "7/10") or None if absent/unreadable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMBER_PATTERN.search(value)
        if not match:
            return None
        number = float(match.group())
    else:
        return None
    return max(0.0, min(10.0, number))


def _sentiment(value: Any) -> str:
    if not isinstance(value, str):
        return UNKNOWN_SENTIMENT
    sentiment = value.strip().lower()
    return sentiment if sentiment in SENTIMENTS else UNKNOWN_SENTIMENT


def _dict_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if isinstance(item, (str, int, float)) and str(item).strip()]


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        return " ".join(str(item).strip() for item in value if str(item).strip())
    return ""
