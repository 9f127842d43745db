"""Report delivery by email (Resend)."""

from .email import DeliveryRequest, EmailDelivery, EmailResult

__all__ = ["DeliveryRequest", "EmailDelivery", "EmailResult"]
