"""
Gateway Interfaces

The two external collaborators the run depends on. Implementations live in
reputation.analyzer (Claude) and reputation.collector (SEMrush); tests use
mocks.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .models import AnalysisResult, AnalysisType, BacklinkProfile


class AnalysisGateway(ABC):
    """Answers one natural-language query as a given engine would."""

    @abstractmethod
    async def analyze(
        self,
        query: str,
        engine_name: str,
        analysis_type: AnalysisType,
    ) -> AnalysisResult:
        """
        Run one analysis.

        Returns:
            AnalysisResult decoded from the provider response

        Raises:
            Exception: Any failure; the executor turns it into a sentinel result
        """


class BacklinkGateway(ABC):
    """Looks up backlink/authority metrics for a domain."""

    @abstractmethod
    async def fetch(self, domain: str, scope: str = "all") -> Optional[BacklinkProfile]:
        """Return the domain's profile, or None when unavailable."""
