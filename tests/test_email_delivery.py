"""
Test Suite for Email Delivery

Resend and PDF rendering are mocked.
"""

import base64
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest

from reputation.delivery import DeliveryRequest, EmailDelivery
from reputation.orchestration import AnalysisResult, Report
from reputation.reporter import GeneratedReport, ReportGenerator


@pytest.fixture
def report():
    return Report(
        company_name="Acme Corp",
        company={
            "chatgpt": AnalysisResult(summary="Visible", confidence_score=8.0),
            "gemini": AnalysisResult(summary="Visible", confidence_score=6.0),
        },
    )


@pytest.fixture
def generator():
    gen = MagicMock(spec=ReportGenerator)
    gen.generate.return_value = GeneratedReport(
        filename="AI-Reputation-Report-Acme Corp-2026-03-14.pdf",
        pdf_bytes=b"%PDF-1.7",
        generated_at=datetime(2026, 3, 14),
    )
    return gen


@pytest.fixture
def delivery(generator):
    return EmailDelivery(api_key="re_test", from_email="reports@example.com", generator=generator)


def _request(report, **overrides):
    fields = dict(
        recipient_name="Jane Smith",
        recipient_company="Acme Corp",
        recipient_email="jane@acme.com",
        report=report,
    )
    fields.update(overrides)
    return DeliveryRequest(**fields)


class TestValidation:

    def test_valid(self, report):
        assert _request(report).validate() is None

    def test_missing_fields(self, report):
        problem = _request(report, recipient_name=" ", recipient_email="").validate()
        assert problem == "Missing required fields: recipient_name, recipient_email"

    @pytest.mark.parametrize("email", ["jane", "jane@acme", "jane @acme.com", "@acme.com"])
    def test_invalid_email(self, report, email):
        assert _request(report, recipient_email=email).validate() == "Invalid email format"


class TestSendReport:

    @pytest.mark.asyncio
    async def test_sends_pdf_attachment(self, delivery, generator, report):
        with patch("reputation.delivery.email.resend.Emails.send", return_value={"id": "msg_123"}) as send:
            result = await delivery.send_report(_request(report))

        assert result.success is True
        assert result.message_id == "msg_123"
        generator.generate.assert_called_once_with(report, "Jane Smith", "Acme Corp")

        params = send.call_args.args[0]
        assert params["from"] == "AI Reputation Report <reports@example.com>"
        assert params["to"] == ["jane@acme.com"]
        assert params["subject"] == "AI Reputation Report - Acme Corp"
        attachment = params["attachments"][0]
        assert attachment["filename"] == "AI-Reputation-Report-Acme Corp-2026-03-14.pdf"
        assert base64.b64decode(attachment["content"]) == b"%PDF-1.7"

    @pytest.mark.asyncio
    async def test_email_body(self, delivery, report):
        with patch("reputation.delivery.email.resend.Emails.send", return_value={"id": "x"}) as send:
            await delivery.send_report(_request(report, recipient_name="Jane <Admin>"))

        body = send.call_args.args[0]["html"]
        assert "Hi Jane &lt;Admin&gt;," in body
        assert "7/10" in body
        assert "#3b82f6" in body
        assert "March 14, 2026" in body

    @pytest.mark.asyncio
    async def test_invalid_request_not_sent(self, delivery, generator, report):
        with patch("reputation.delivery.email.resend.Emails.send") as send:
            result = await delivery.send_report(_request(report, recipient_email="not-an-email"))

        assert result.success is False
        assert result.error == "Invalid email format"
        send.assert_not_called()
        generator.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_api_key(self, generator, report, monkeypatch):
        monkeypatch.delenv("RESEND_API_KEY", raising=False)
        delivery = EmailDelivery(generator=generator)

        result = await delivery.send_report(_request(report))

        assert result.success is False
        assert "missing API key" in result.error

    @pytest.mark.asyncio
    async def test_pdf_failure_reported(self, delivery, generator, report):
        generator.generate.side_effect = RuntimeError("cairo missing")

        with patch("reputation.delivery.email.resend.Emails.send") as send:
            result = await delivery.send_report(_request(report))

        assert result.success is False
        assert result.error == "Failed to generate report: cairo missing"
        send.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_failure_reported(self, delivery, report):
        with patch("reputation.delivery.email.resend.Emails.send", side_effect=Exception("domain not verified")):
            result = await delivery.send_report(_request(report))

        assert result.success is False
        assert result.error == "domain not verified"
