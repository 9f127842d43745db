"""
AI Reputation Report Generation

HTML report building and WeasyPrint PDF rendering, plus the score
label/color helpers shared with the email body.
"""

from .generator import GeneratedReport, ReportGenerator, report_filename
from .report import ReportBuilder
from .summary import format_number, score_color, score_label

__all__ = [
    "ReportBuilder",
    "ReportGenerator",
    "GeneratedReport",
    "report_filename",
    "score_label",
    "score_color",
    "format_number",
]
