"""Errors raised by the star ledger."""

from enum import Enum


class LedgerError(Exception):
    """Base class for ledger errors."""
    pass


class DecodeError(LedgerError):
    """Raised when a stored block body cannot be decoded."""
    pass


class AppendError(LedgerError):
    """Raised when a block cannot be sealed onto the chain."""
    pass


class SubmissionFailure(Enum):
    """Reasons a star submission is rejected."""
    MALFORMED_MESSAGE = "malformed_message"
    FUTURE_TIMESTAMP = "future_timestamp"
    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"


class SubmissionError(LedgerError):
    """Raised when a star submission fails one of its gates."""

    def __init__(self, reason: SubmissionFailure, message: str = ""):
        self.reason = reason
        super().__init__(message or reason.value)
