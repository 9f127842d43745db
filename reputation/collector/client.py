"""
SEMrush Analytics API Client

Async HTTP client for the backlink analytics reports. SEMrush answers with
semicolon-separated text rather than JSON, and signals errors in the body
("ERROR 50 :: NOTHING FOUND") with a 200 status.
"""

import httpx
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class SemrushError(Exception):
    """Custom exception for SEMrush API errors."""
    def __init__(self, message: str, status_code: int = None, response: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class SemrushClient:
    """
    Async client for the SEMrush analytics API.

    Usage:
        async with SemrushClient(api_key="...") as client:
            text = await client.backlinks_overview("example.com")
    """

    BASE_URL = "https://api.semrush.com"
    ANALYTICS_PATH = "/analytics/v1/"

    OVERVIEW_COLUMNS = (
        "total,domains_num,urls_num,ips_num,follows_num,nofollows_num,"
        "texts_num,images_num,forms_num,frames_num"
    )
    BACKLINK_COLUMNS = (
        "source_url,source_title,external_num,internal_num,last_seen,"
        "first_seen,anchor,form,nofollow,page_ascore"
    )

    def __init__(
        self,
        api_key: str,
        timeout: float = 60.0,
    ):
        """
        Initialize SEMrush client.

        Args:
            api_key: SEMrush API key
            timeout: Request timeout in seconds
        """
        if not api_key:
            raise ValueError("SEMRUSH_API_KEY not provided")

        self.api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=self.BASE_URL,
            timeout=httpx.Timeout(timeout),
        )
        self._closed = False

    async def get_report(self, params: dict) -> str:
        """
        Fetch one analytics report as raw text.

        Raises:
            SemrushError: Non-200 status or an error message in the body
        """
        if self._closed:
            raise SemrushError("Client is closed")

        query = {"key": self.api_key, **params}
        logger.debug(f"GET {self.ANALYTICS_PATH} type={params.get('type')} target={params.get('target')}")

        response = await self._client.get(self.ANALYTICS_PATH, params=query)

        if response.status_code != 200:
            raise SemrushError(
                f"API request failed: {response.status_code}",
                status_code=response.status_code,
                response=response.text,
            )

        text = response.text
        if "ERROR" in text:
            raise SemrushError(
                f"API error: {text.strip()[:200]}",
                status_code=response.status_code,
                response=text,
            )

        return text

    async def backlinks_overview(self, domain: str) -> str:
        return await self.get_report({
            "type": "backlinks_overview",
            "target": domain,
            "target_type": "root_domain",
            "export_columns": self.OVERVIEW_COLUMNS,
        })

    async def top_backlinks(self, domain: str, limit: int = 20) -> str:
        return await self.get_report({
            "type": "backlinks",
            "target": domain,
            "target_type": "root_domain",
            "export_columns": self.BACKLINK_COLUMNS,
            "display_limit": limit,
        })

    async def authority_score(self, domain: str) -> str:
        return await self.get_report({
            "type": "domain_rank",
            "target": domain,
            "export_columns": "domain_ascore",
        })

    async def close(self):
        """Close the HTTP client."""
        if not self._closed:
            await self._client.aclose()
            self._closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def create_client(settings=None) -> Optional[SemrushClient]:
    """Build a client from settings, or None when no API key is configured."""
    if settings is None:
        from ..utils.config import get_settings
        settings = get_settings()

    if not settings.SEMRUSH_API_KEY:
        logger.warning("SEMRUSH_API_KEY not set, backlink metrics disabled")
        return None

    return SemrushClient(
        api_key=settings.SEMRUSH_API_KEY,
        timeout=settings.API_TIMEOUT,
    )
