"""
Email Delivery Module

Renders the PDF report and sends it via the Resend email service.
"""

import os
import re
import base64
import logging
from typing import Optional
from dataclasses import dataclass
from datetime import datetime
from html import escape

import resend

from ..orchestration.aggregator import average_score
from ..orchestration.models import Report
from ..reporter.generator import ReportGenerator
from ..reporter.summary import score_color

logger = logging.getLogger(__name__)


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class EmailResult:
    """Result of email delivery."""
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


@dataclass
class DeliveryRequest:
    """Who receives the report, and the report itself."""
    recipient_name: str
    recipient_company: str
    recipient_email: str
    report: Report

    def validate(self) -> Optional[str]:
        """Return an error message, or None when the request is deliverable."""
        missing = [
            name for name in ("recipient_name", "recipient_company", "recipient_email")
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            return f"Missing required fields: {', '.join(missing)}"
        if not EMAIL_PATTERN.match(self.recipient_email.strip()):
            return "Invalid email format"
        return None


class EmailDelivery:
    """
    Email delivery service using Resend.

    Usage:
        delivery = EmailDelivery()
        result = await delivery.send_report(DeliveryRequest(...))
    """

    DEFAULT_FROM_EMAIL = "onboarding@resend.dev"
    DEFAULT_FROM_NAME = "AI Reputation Report"

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_email: Optional[str] = None,
        generator: Optional[ReportGenerator] = None,
    ):
        """
        Initialize email delivery.

        Args:
            api_key: Resend API key (defaults to env var)
            from_email: Sender email address
            generator: PDF generator (defaults to ReportGenerator())
        """
        self.api_key = api_key or os.getenv("RESEND_API_KEY")
        if not self.api_key:
            logger.warning("RESEND_API_KEY not set - email delivery disabled")

        self.from_email = from_email or os.getenv("FROM_EMAIL", self.DEFAULT_FROM_EMAIL)
        self.generator = generator or ReportGenerator()

        if self.api_key:
            resend.api_key = self.api_key

    async def send_report(self, request: DeliveryRequest) -> EmailResult:
        """
        Render the report PDF and email it to the recipient.

        Args:
            request: Recipient details and the report

        Returns:
            EmailResult indicating success/failure
        """
        problem = request.validate()
        if problem:
            return EmailResult(success=False, error=problem)

        if not self.api_key:
            return EmailResult(
                success=False,
                error="Email delivery not configured (missing API key)"
            )

        report = request.report
        logger.info(
            f"Generating AI Reputation Report for {request.recipient_name} at {request.recipient_company}"
        )

        try:
            generated = self.generator.generate(report, request.recipient_name, request.recipient_company)
        except Exception as e:
            logger.error(f"Report generation failed: {e}")
            return EmailResult(success=False, error=f"Failed to generate report: {e}")

        # Encode PDF for attachment
        pdf_base64 = base64.b64encode(generated.pdf_bytes).decode("utf-8")

        try:
            params = {
                "from": f"{self.DEFAULT_FROM_NAME} <{self.from_email}>",
                "to": [request.recipient_email.strip()],
                "subject": f"AI Reputation Report - {report.company_name or 'Your Company'}",
                "html": self._get_report_email_html(request, generated.generated_at),
                "attachments": [
                    {
                        "filename": generated.filename,
                        "content": pdf_base64,
                    }
                ],
            }

            response = resend.Emails.send(params)

            logger.info(f"Email sent to {request.recipient_email}: {response.get('id', 'unknown')}")

            return EmailResult(
                success=True,
                message_id=response.get("id"),
            )

        except Exception as e:
            logger.error(f"Email delivery failed: {e}")
            return EmailResult(
                success=False,
                error=str(e),
            )

    def _get_report_email_html(self, request: DeliveryRequest, generated_at: datetime) -> str:
        """Generate HTML for report delivery email."""
        report = request.report
        avg = average_score(report.company)
        company = escape(report.company_name or "your company")

        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <style>
                body {{ font-family: 'Segoe UI', Arial, sans-serif; margin: 0; padding: 0; background: #f4f4f4; }}
                .container {{ max-width: 600px; margin: 0 auto; background: #ffffff; }}
                .header {{ background: linear-gradient(135deg, #E85D04, #F48C06); color: white; padding: 30px; text-align: center; }}
                .header h1 {{ margin: 0; font-size: 24px; }}
                .content {{ padding: 30px; color: #666; line-height: 1.6; }}
                .highlight {{ background: #f8f9fa; border-radius: 8px; padding: 20px; margin: 20px 0; border-left: 4px solid #E85D04; }}
                .footer {{ background: #1a1a2e; padding: 20px; text-align: center; font-size: 12px; color: rgba(255,255,255,0.6); }}
            </style>
        </head>
        <body>
            <div class="container">
                <div class="header">
                    <h1>AI Reputation Report</h1>
                </div>

                <div class="content">
                    <p style="color: #333;">Hi {escape(request.recipient_name)},</p>

                    <p>Your AI Reputation Report for <strong>{company}</strong> is ready!
                    Please find the detailed PDF report attached to this email.</p>

                    <div class="highlight">
                        <h3 style="margin-top: 0; color: #333;">Quick Overview</h3>
                        <p><strong>Overall AI Visibility Score:</strong>
                        <span style="color: {score_color(avg)}; font-weight: bold;">{avg:g}/10</span></p>
                        <p><strong>Company:</strong> {escape(report.company_name or 'N/A')}</p>
                        <p><strong>Report Date:</strong> {generated_at.strftime('%B %d, %Y')}</p>
                    </div>

                    <p>Your report includes:</p>
                    <ul>
                        <li>Executive Overview &amp; Key Metrics</li>
                        <li>Company AI Search Visibility Analysis</li>
                        <li>Leadership Reputation &amp; Press Opportunities</li>
                        <li>Competitor Gap Analysis</li>
                        <li>Podcast Guest Opportunities</li>
                        <li>Social Sentiment Analysis</li>
                    </ul>
                </div>

                <div class="footer">
                    <p>&copy; {generated_at.year} AI Reputation Report. Generated automatically using AI-powered analysis.</p>
                </div>
            </div>
        </body>
        </html>
        """
