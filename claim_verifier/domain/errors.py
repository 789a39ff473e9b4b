"""Domain errors raised during claim verification."""

from typing import Optional


class VerificationError(Exception):
    """Base class for verification errors."""


class InvalidClaimError(VerificationError, ValueError):
    """Raised when a claim is missing, empty or not a string."""

    def __init__(self, message: str = "Claim is required."):
        super().__init__(message)


class AdmissionDeniedError(VerificationError):
    """Raised when the admission gate refuses a verification attempt.

    This is an expected, user-facing condition rather than a fault.
    """

    def __init__(self, retry_after_seconds: int):
        self.retry_after_seconds = retry_after_seconds
        super().__init__(
            f"Rate limit exceeded. Please wait {retry_after_seconds} seconds before checking again."
        )


class EvidenceSourceError(VerificationError):
    """Raised by an evidence source that could not produce usable evidence."""

    def __init__(self, source: str, reason: str, cause: Optional[Exception] = None):
        self.source = source
        self.reason = reason
        self.cause = cause
        super().__init__(f"{source}: {reason}")
