"""
SEMrush Backlink Gateway

Combines the overview, top-backlinks and authority reports into one
BacklinkProfile. Each report is optional: a failed report is logged and
skipped. When neither the overview nor the authority score is available
the domain has no usable profile and fetch returns None.
"""

import logging
from typing import Optional

import httpx

from ..orchestration.gateways import BacklinkGateway
from ..orchestration.models import BacklinkProfile, BacklinkTotals
from ..utils.domain import clean_domain
from .client import SemrushClient, SemrushError
from .parser import parse_authority_score, parse_backlinks_overview, parse_top_backlinks

logger = logging.getLogger(__name__)


SCOPES = ("all", "backlinks", "authority")


class SemrushBacklinkGateway(BacklinkGateway):
    """BacklinkGateway backed by SemrushClient."""

    def __init__(self, client: SemrushClient, top_backlinks_limit: int = 20):
        self.client = client
        self.top_backlinks_limit = top_backlinks_limit

    async def fetch(self, domain: str, scope: str = "all") -> Optional[BacklinkProfile]:
        """
        Fetch backlink metrics for a domain.

        Args:
            domain: Domain or website URL
            scope: "all", "backlinks" (overview + top links) or "authority"

        Returns:
            BacklinkProfile, or None when nothing usable was returned
        """
        if scope not in SCOPES:
            raise ValueError(f"Unknown backlink scope: {scope}")

        target = clean_domain(domain)
        if not target:
            return None

        logger.info(f"Fetching backlink profile for {target} (scope={scope})")

        totals = None
        top_links = []
        authority = None

        if scope in ("all", "backlinks"):
            text = await self._report(self.client.backlinks_overview(target), target, "overview")
            if text is not None:
                totals = parse_backlinks_overview(text)

            text = await self._report(
                self.client.top_backlinks(target, self.top_backlinks_limit), target, "top backlinks"
            )
            if text is not None:
                top_links = parse_top_backlinks(text)

        if scope in ("all", "authority"):
            text = await self._report(self.client.authority_score(target), target, "authority")
            if text is not None:
                authority = parse_authority_score(text)

        if totals is None and authority is None:
            logger.warning(f"No backlink data available for {target}")
            return None

        return BacklinkProfile(
            domain=target,
            authority_score=authority,
            totals=totals or BacklinkTotals(),
            top_backlinks=tuple(top_links),
        )

    async def _report(self, request, target: str, label: str) -> Optional[str]:
        try:
            return await request
        except (SemrushError, httpx.HTTPError) as e:
            logger.warning(f"SEMrush {label} report failed for {target}: {e}")
            return None
