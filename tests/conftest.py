"""
Pytest Configuration and Shared Fixtures

Provides common fixtures and configuration for all test modules.
"""

import pytest
from typing import List
from unittest.mock import AsyncMock, MagicMock

from reputation.orchestration import (
    AnalysisGateway,
    AnalysisResult,
    AnalysisType,
    BacklinkGateway,
    BacklinkProfile,
    BacklinkTotals,
    Competitor,
    Leader,
    ResearchBrief,
    TopBacklink,
)


# ============================================================================
# Brief Fixtures
# ============================================================================

@pytest.fixture
def acme_brief() -> ResearchBrief:
    """Company with one leader and no competitors."""
    return ResearchBrief(
        company_name="Acme",
        leaders=[Leader(name="Jane", title="CEO")],
    )


@pytest.fixture
def full_brief() -> ResearchBrief:
    """Brief with website, industry, two leaders and two competitors."""
    return ResearchBrief(
        company_name="Acme Corp",
        website="https://www.acme.com/",
        industry="industrial automation",
        keywords="robotics, PLC retrofits",
        leaders=[
            Leader(name="Jane Smith", title="CEO"),
            Leader(name="Tom Lee", title="CTO"),
        ],
        competitors=[
            Competitor(name="Globex", website="globex.com"),
            Competitor(name="Initech", website="http://initech.io/about",
                       leader=Leader(name="Bill Lumbergh", title="VP")),
        ],
    )


# ============================================================================
# Result Fixtures
# ============================================================================

@pytest.fixture
def make_result():
    """Factory for successful AnalysisResults."""
    def _make(confidence=7.0, sentiment="positive", summary="Found solid coverage.", **kwargs):
        return AnalysisResult(
            summary=summary,
            entity_found=True,
            confidence_score=confidence,
            sentiment_score=kwargs.pop("sentiment_score", confidence),
            sentiment=sentiment,
            recommendations=kwargs.pop("recommendations", "Publish more case studies."),
            **kwargs,
        )
    return _make


@pytest.fixture
def sample_profile() -> BacklinkProfile:
    return BacklinkProfile(
        domain="acme.com",
        authority_score=42,
        totals=BacklinkTotals(backlinks=12500, referring_domains=2340, follow_links=9800, nofollow_links=2700),
        top_backlinks=(
            TopBacklink(source_url="https://news.example.com/acme-raises", authority_score=71, anchor="Acme"),
            TopBacklink(source_url="https://blog.example.org/robots", authority_score=38),
        ),
    )


# ============================================================================
# Mock Gateways
# ============================================================================

class RecordingAnalysisGateway(AnalysisGateway):
    """Returns a fixed result and records every call in order."""

    def __init__(self, result: AnalysisResult = None, fail_on: List[int] = None):
        self.result = result or AnalysisResult(summary="ok", confidence_score=6.0, sentiment="neutral")
        self.fail_on = set(fail_on or [])
        self.calls = []

    async def analyze(self, query: str, engine_name: str, analysis_type: AnalysisType) -> AnalysisResult:
        self.calls.append((query, engine_name, analysis_type))
        if len(self.calls) in self.fail_on:
            raise RuntimeError(f"provider exploded on call {len(self.calls)}")
        return self.result


@pytest.fixture
def recording_gateway() -> RecordingAnalysisGateway:
    return RecordingAnalysisGateway()


@pytest.fixture
def gateway_factory():
    """Build RecordingAnalysisGateways with a custom result or failing calls (1-based)."""
    return RecordingAnalysisGateway


@pytest.fixture
def mock_backlink_gateway(sample_profile) -> BacklinkGateway:
    """Backlink gateway mock returning sample_profile for every domain."""
    gateway = MagicMock(spec=BacklinkGateway)
    gateway.fetch = AsyncMock(return_value=sample_profile)
    return gateway


@pytest.fixture
def mock_claude_client():
    """Mock Anthropic async client returning a JSON analysis."""
    text_block = MagicMock()
    text_block.type = "text"
    text_block.text = (
        '{"summary": "Acme is a well-known automation vendor.", "entityFound": true, '
        '"confidenceScore": 8, "sentimentScore": 7, "sentiment": "Positive", '
        '"topSources": [{"url": "https://acme.com", "title": "Acme"}], '
        '"recommendations": "Earn more trade press coverage."}'
    )
    response = MagicMock()
    response.content = [text_block]
    response.usage = MagicMock(input_tokens=1200, output_tokens=300)
    response.stop_reason = "end_turn"

    client = MagicMock()
    client.messages.create = AsyncMock(return_value=response)
    client.close = AsyncMock()
    return client


# ============================================================================
# Test Markers
# ============================================================================

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
