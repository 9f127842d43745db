"""
Analysis Gateway (Claude)

Simulates AI search engines with Claude + web search and decodes the JSON
answer into an AnalysisResult.
"""

from .client import ClaudeAnalysisGateway, TokenUsage
from .decoder import decode_analysis, extract_json_object
from .errors import AnalysisDecodeError, AnalysisGatewayError
from .prompts import build_prompt

__all__ = [
    "ClaudeAnalysisGateway",
    "TokenUsage",
    "decode_analysis",
    "extract_json_object",
    "build_prompt",
    "AnalysisGatewayError",
    "AnalysisDecodeError",
]
