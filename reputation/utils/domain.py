"""
Domain Utilities

Normalises user-entered websites into the bare domain form the backlink
provider expects ("https://www.acme.com/about/" -> "acme.com").
"""

from typing import Optional


def clean_domain(website: Optional[str]) -> Optional[str]:
    """
    Reduce a website or URL to its bare domain.

    Args:
        website: Website as entered (may include scheme, www., path)

    Returns:
        Lowercase domain, or None if nothing usable remains
    """
    if not website:
        return None

    domain = website.strip().lower()

    for prefix in ("https://", "http://"):
        if domain.startswith(prefix):
            domain = domain[len(prefix):]
            break

    # Remove www. prefix if present
    if domain.startswith("www."):
        domain = domain[4:]

    domain = domain.rstrip("/").split("/")[0]
    return domain or None
