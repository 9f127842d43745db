"""Errors raised by the analysis gateway."""

from typing import Optional


class AnalysisGatewayError(Exception):
    """Analysis provider call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.hint = hint


class AnalysisDecodeError(AnalysisGatewayError):
    """Provider answered, but the answer is not a usable analysis object."""
