"""
Claude Analysis Gateway

Answers reputation queries with Claude and its web search tool, simulating
how a named AI search engine would respond. Includes token usage and cost
tracking per session.
"""

import os
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass

import anthropic

from ..orchestration.gateways import AnalysisGateway
from ..orchestration.models import AnalysisResult, AnalysisType
from .decoder import decode_analysis
from .errors import AnalysisGatewayError
from .prompts import build_prompt

logger = logging.getLogger(__name__)


@dataclass
class TokenUsage:
    """Track token usage for cost calculation."""
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    @property
    def estimated_cost(self) -> float:
        """Estimate cost based on Claude Sonnet 4 pricing."""
        # Sonnet 4 pricing: $3/1M input, $15/1M output
        input_cost = (self.input_tokens / 1_000_000) * 3.0
        output_cost = (self.output_tokens / 1_000_000) * 15.0
        return input_cost + output_cost


def _error_hint(status_code: Optional[int]) -> Optional[str]:
    if status_code == 401:
        return "Invalid API key. Check ANTHROPIC_API_KEY."
    if status_code == 429:
        return "Rate limited. Add credits or wait."
    if status_code and status_code >= 500:
        return "Anthropic server error. Try again later."
    return None


class ClaudeAnalysisGateway(AnalysisGateway):
    """
    Analysis gateway backed by the Anthropic Messages API.

    One call per analysis, web search enabled, no retries.
    """

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    MAX_TOKENS = 2000
    WEB_SEARCH_MAX_USES = 5

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = MAX_TOKENS,
        web_search_max_uses: int = WEB_SEARCH_MAX_USES,
    ):
        """
        Initialize the gateway.

        Args:
            api_key: Anthropic API key (defaults to env var)
            model: Model to use (defaults to Sonnet 4)
            max_tokens: Maximum output tokens per analysis
            web_search_max_uses: Web searches allowed per analysis
        """
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise ValueError("ANTHROPIC_API_KEY not provided")

        self.model = model or self.DEFAULT_MODEL
        self.max_tokens = max_tokens
        self.web_search_max_uses = web_search_max_uses
        self.async_client = anthropic.AsyncAnthropic(api_key=self.api_key)

        # Track cumulative usage
        self.total_usage = TokenUsage()
        self.call_count = 0

    @classmethod
    def from_settings(cls, settings) -> "ClaudeAnalysisGateway":
        return cls(
            api_key=settings.ANTHROPIC_API_KEY,
            model=settings.CLAUDE_MODEL,
            max_tokens=settings.ANALYSIS_MAX_TOKENS,
            web_search_max_uses=settings.WEB_SEARCH_MAX_USES,
        )

    async def analyze(
        self,
        query: str,
        engine_name: str,
        analysis_type: AnalysisType,
    ) -> AnalysisResult:
        """
        Run one simulated AI-search analysis.

        Args:
            query: Rendered query text
            engine_name: Display name of the engine to simulate
            analysis_type: Selects the focus and the JSON shape requested

        Returns:
            Decoded AnalysisResult

        Raises:
            AnalysisGatewayError: API failure
            AnalysisDecodeError: Response is not a usable analysis
        """
        logger.info(f"Analyzing on {engine_name} ({analysis_type.value}): {query[:100]}")

        try:
            response = await self.async_client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                tools=[
                    {
                        "type": "web_search_20250305",
                        "name": "web_search",
                        "max_uses": self.web_search_max_uses,
                    }
                ],
                messages=[
                    {"role": "user", "content": build_prompt(query, engine_name, analysis_type)}
                ],
            )
        except anthropic.APIStatusError as e:
            logger.error(f"Claude API error ({e.status_code}): {e}")
            raise AnalysisGatewayError(
                str(e), status_code=e.status_code, hint=_error_hint(e.status_code)
            ) from e
        except anthropic.APIError as e:
            logger.error(f"Claude API error: {e}")
            raise AnalysisGatewayError(str(e)) from e

        # Extract text content
        content = ""
        for block in response.content:
            if getattr(block, "type", None) == "text":
                content += block.text + "\n"

        # Track usage
        usage = TokenUsage(
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )
        self.total_usage.input_tokens += usage.input_tokens
        self.total_usage.output_tokens += usage.output_tokens
        self.call_count += 1

        logger.info(
            f"Claude call: {usage.input_tokens} in, {usage.output_tokens} out, "
            f"${usage.estimated_cost:.4f}, stop_reason={response.stop_reason}"
        )

        return decode_analysis(content)

    def get_total_cost(self) -> float:
        """Get total cost for all calls in this session."""
        return self.total_usage.estimated_cost

    def get_usage_summary(self) -> Dict[str, Any]:
        """Get summary of all API usage."""
        return {
            "total_calls": self.call_count,
            "input_tokens": self.total_usage.input_tokens,
            "output_tokens": self.total_usage.output_tokens,
            "total_tokens": self.total_usage.total_tokens,
            "estimated_cost": self.total_usage.estimated_cost,
        }

    async def close(self):
        await self.async_client.close()
