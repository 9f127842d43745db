"""
Test Suite for the Claude Analysis Gateway

The Anthropic client is mocked; no network calls are made.
"""

import anthropic
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from reputation.analyzer import (
    AnalysisDecodeError,
    AnalysisGatewayError,
    ClaudeAnalysisGateway,
    TokenUsage,
    build_prompt,
)
from reputation.orchestration import AnalysisType
from reputation.utils import Settings


@pytest.fixture
def gateway(mock_claude_client):
    gw = ClaudeAnalysisGateway(api_key="sk-ant-test", web_search_max_uses=3)
    gw.async_client = mock_claude_client
    return gw


def _status_error(cls, status_code):
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    response = httpx.Response(status_code, request=request)
    return cls("request failed", response=response, body=None)


class TestAnalyze:

    @pytest.mark.asyncio
    async def test_decodes_response(self, gateway):
        result = await gateway.analyze("Tell me about Acme.", "ChatGPT", AnalysisType.ENTITY)

        assert result.summary == "Acme is a well-known automation vendor."
        assert result.confidence_score == 8.0
        assert result.sentiment == "positive"
        assert result.sources[0]["url"] == "https://acme.com"

    @pytest.mark.asyncio
    async def test_request_uses_web_search_and_prompt(self, gateway, mock_claude_client):
        await gateway.analyze("Tell me about Acme.", "Perplexity", AnalysisType.PODCAST)

        kwargs = mock_claude_client.messages.create.await_args.kwargs
        assert kwargs["model"] == ClaudeAnalysisGateway.DEFAULT_MODEL
        assert kwargs["tools"] == [
            {"type": "web_search_20250305", "name": "web_search", "max_uses": 3}
        ]
        content = kwargs["messages"][0]["content"]
        assert '"Perplexity"' in content
        assert "Query: Tell me about Acme." in content
        assert "podcastOpportunities" in content

    @pytest.mark.asyncio
    async def test_tracks_usage(self, gateway):
        await gateway.analyze("q", "ChatGPT", AnalysisType.ENTITY)
        await gateway.analyze("q", "ChatGPT", AnalysisType.ENTITY)

        usage = gateway.get_usage_summary()
        assert usage["total_calls"] == 2
        assert usage["input_tokens"] == 2400
        assert usage["output_tokens"] == 600
        assert usage["estimated_cost"] == pytest.approx(2400 / 1e6 * 3 + 600 / 1e6 * 15)

    @pytest.mark.asyncio
    async def test_ignores_non_text_blocks(self, gateway, mock_claude_client):
        search_block = MagicMock()
        search_block.type = "server_tool_use"
        response = mock_claude_client.messages.create.return_value
        response.content = [search_block] + list(response.content)

        result = await gateway.analyze("q", "ChatGPT", AnalysisType.ENTITY)
        assert result.confidence_score == 8.0

    @pytest.mark.asyncio
    async def test_unparseable_answer_raises_decode_error(self, gateway, mock_claude_client):
        mock_claude_client.messages.create.return_value.content[0].text = "Sorry, nothing found."

        with pytest.raises(AnalysisDecodeError):
            await gateway.analyze("q", "ChatGPT", AnalysisType.ENTITY)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("cls,status,hint", [
        (anthropic.AuthenticationError, 401, "ANTHROPIC_API_KEY"),
        (anthropic.RateLimitError, 429, "Rate limited"),
        (anthropic.InternalServerError, 500, "server error"),
    ])
    async def test_status_errors_mapped_with_hint(self, gateway, mock_claude_client, cls, status, hint):
        mock_claude_client.messages.create = AsyncMock(side_effect=_status_error(cls, status))

        with pytest.raises(AnalysisGatewayError) as exc_info:
            await gateway.analyze("q", "ChatGPT", AnalysisType.ENTITY)

        assert exc_info.value.status_code == status
        assert hint in exc_info.value.hint

    @pytest.mark.asyncio
    async def test_connection_error_mapped(self, gateway, mock_claude_client):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        mock_claude_client.messages.create = AsyncMock(
            side_effect=anthropic.APIConnectionError(request=request)
        )

        with pytest.raises(AnalysisGatewayError) as exc_info:
            await gateway.analyze("q", "ChatGPT", AnalysisType.ENTITY)
        assert exc_info.value.status_code is None


class TestConstruction:

    def test_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with pytest.raises(ValueError):
            ClaudeAnalysisGateway()

    def test_from_settings(self):
        settings = Settings(
            ANTHROPIC_API_KEY="sk-ant-x",
            CLAUDE_MODEL="claude-test",
            ANALYSIS_MAX_TOKENS=1500,
            WEB_SEARCH_MAX_USES=2,
        )
        gw = ClaudeAnalysisGateway.from_settings(settings)

        assert gw.model == "claude-test"
        assert gw.max_tokens == 1500
        assert gw.web_search_max_uses == 2


def test_token_usage_cost():
    usage = TokenUsage(input_tokens=1_000_000, output_tokens=1_000_000)
    assert usage.total_tokens == 2_000_000
    assert usage.estimated_cost == pytest.approx(18.0)


@pytest.mark.parametrize("analysis_type", list(AnalysisType))
def test_every_analysis_type_has_a_prompt(analysis_type):
    prompt = build_prompt("query", "ChatGPT", analysis_type)
    assert prompt.startswith('You are simulating how the AI search engine "ChatGPT"')
    assert '"summary"' in prompt
