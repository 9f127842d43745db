"""
SEMrush Report Parsing

Reports are a header line followed by semicolon-separated rows. Missing or
non-numeric cells count as 0.
"""

from typing import List, Optional

from ..orchestration.models import BacklinkTotals, TopBacklink


def _rows(text: str) -> List[List[str]]:
    """Split a report into data rows, dropping the header."""
    lines = [line for line in (text or "").strip().splitlines() if line.strip()]
    return [line.split(";") for line in lines[1:]]


def _int(values: List[str], index: int) -> int:
    if index >= len(values):
        return 0
    try:
        return int(float(values[index].strip()))
    except ValueError:
        return 0


def parse_backlinks_overview(text: str) -> Optional[BacklinkTotals]:
    """
    Parse a backlinks_overview report.

    Columns: total, domains_num, urls_num, ips_num, follows_num,
    nofollows_num, ...
    """
    rows = _rows(text)
    if not rows:
        return None

    values = rows[0]
    return BacklinkTotals(
        backlinks=_int(values, 0),
        referring_domains=_int(values, 1),
        follow_links=_int(values, 4),
        nofollow_links=_int(values, 5),
    )


def parse_top_backlinks(text: str) -> List[TopBacklink]:
    """
    Parse a backlinks report.

    Columns: source_url, source_title, external_num, internal_num,
    last_seen, first_seen, anchor, form, nofollow, page_ascore
    """
    links = []
    for values in _rows(text):
        source_url = values[0].strip() if values else ""
        if not source_url:
            continue
        anchor = values[6].strip() if len(values) > 6 else ""
        links.append(TopBacklink(
            source_url=source_url,
            authority_score=_int(values, 9),
            anchor=anchor or None,
        ))
    return links


def parse_authority_score(text: str) -> Optional[int]:
    """Parse a domain_rank report exported with the domain_ascore column."""
    rows = _rows(text)
    if not rows:
        return None
    return _int(rows[0], 0)
