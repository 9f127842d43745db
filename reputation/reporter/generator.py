"""
Report Generator - PDF rendering of the AI reputation report.
"""

import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..orchestration.models import Report
from .report import ReportBuilder

logger = logging.getLogger(__name__)


@dataclass
class GeneratedReport:
    """A generated PDF report."""
    filename: str
    pdf_bytes: bytes
    generated_at: datetime


def report_filename(company_name: str, generated_at: datetime) -> str:
    """AI-Reputation-Report-<company>-<YYYY-MM-DD>.pdf"""
    company = re.sub(r'[\\/:*?"<>|]+', "", company_name or "").strip() or "Analysis"
    return f"AI-Reputation-Report-{company}-{generated_at.strftime('%Y-%m-%d')}.pdf"


class ReportGenerator:
    """
    Renders a Report to PDF bytes.

    Usage:
        generated = ReportGenerator().generate(report, "Jane Smith", "Acme")
    """

    def __init__(self, builder: Optional[ReportBuilder] = None):
        self.builder = builder or ReportBuilder()

    def generate(
        self,
        report: Report,
        recipient_name: str,
        recipient_company: str,
    ) -> GeneratedReport:
        """
        Generate the PDF report.

        Args:
            report: Aggregated run report
            recipient_name: Person the report is prepared for
            recipient_company: Their company

        Returns:
            GeneratedReport with PDF bytes
        """
        generated_at = datetime.now()
        html_content = self.builder.build(report, recipient_name, recipient_company, generated_at)
        pdf_bytes = self._html_to_pdf(html_content)

        return GeneratedReport(
            filename=report_filename(report.company_name, generated_at),
            pdf_bytes=pdf_bytes,
            generated_at=generated_at,
        )

    def _html_to_pdf(self, html_content: str) -> bytes:
        """
        Convert HTML to PDF using WeasyPrint.

        Args:
            html_content: Complete HTML document

        Returns:
            PDF as bytes
        """
        from weasyprint import HTML

        try:
            pdf_bytes = HTML(string=html_content).write_pdf()
            logger.info(f"Generated PDF: {len(pdf_bytes)} bytes")
            return pdf_bytes

        except Exception as e:
            logger.error(f"PDF generation failed: {e}")
            raise

    def save_report(self, report: GeneratedReport, output_dir: str) -> str:
        """
        Save report to disk.

        Args:
            report: Generated report
            output_dir: Directory to save to

        Returns:
            Full path to saved file
        """
        os.makedirs(output_dir, exist_ok=True)
        filepath = os.path.join(output_dir, report.filename)

        with open(filepath, "wb") as f:
            f.write(report.pdf_bytes)

        logger.info(f"Saved report: {filepath}")
        return filepath
