"""
Backlink Collection (SEMrush)

Fetches backlink totals, top referring links and the authority score for
a domain.
"""

from .client import SemrushClient, SemrushError, create_client
from .gateway import SemrushBacklinkGateway
from .parser import parse_authority_score, parse_backlinks_overview, parse_top_backlinks

__all__ = [
    "SemrushClient",
    "SemrushError",
    "create_client",
    "SemrushBacklinkGateway",
    "parse_backlinks_overview",
    "parse_top_backlinks",
    "parse_authority_score",
]
