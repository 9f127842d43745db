"""
Score presentation helpers shared by the PDF report and the email body.
"""

from typing import Optional

# (threshold, label, color), highest first
SCORE_BANDS = (
    (8, "Excellent", "#22c55e"),
    (6, "Good", "#3b82f6"),
    (4, "Needs Work", "#eab308"),
    (2, "Poor", "#f97316"),
)
CRITICAL = ("Critical", "#ef4444")


def _band(score: Optional[float]):
    value = score or 0
    for threshold, label, color in SCORE_BANDS:
        if value >= threshold:
            return label, color
    return CRITICAL


def score_label(score: Optional[float]) -> str:
    """Excellent >= 8, Good >= 6, Needs Work >= 4, Poor >= 2, else Critical."""
    return _band(score)[0]


def score_color(score: Optional[float]) -> str:
    """Hex color matching score_label."""
    return _band(score)[1]


def format_number(value: Optional[int]) -> str:
    """Thousands separators, "-" when missing."""
    if value is None:
        return "-"
    return f"{value:,}"
