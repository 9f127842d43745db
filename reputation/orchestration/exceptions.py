"""Exceptions raised by the analysis orchestration layer."""


class ReputationError(Exception):
    """Base class for orchestration errors."""


class InvalidBriefError(ReputationError):
    """Brief or engine selection cannot be planned (raised before any task runs)."""


class RunCancelled(ReputationError):
    """Raised when a run is cancelled via CancellationToken."""
