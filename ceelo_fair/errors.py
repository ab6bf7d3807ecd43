from __future__ import annotations


class CeeloError(Exception):
    """Base class for every error raised by the game core."""


class VerificationFailure(CeeloError):
    """Raised when a revealed seed does not hash to the recorded commitment."""

    def __init__(self, commitment: str, message: str | None = None):
        self.commitment = commitment
        super().__init__(message or f"revealed seed does not match commitment {commitment}")


class InvalidConfiguration(CeeloError, ValueError):
    """Raised when engine settings (house edge, stake limits) are unusable."""


class MalformedInput(CeeloError, ValueError):
    """Raised when dice, stakes, seeds or commitments are outside their domain."""


class RoundStateError(CeeloError):
    """Raised when a round operation is invoked in the wrong phase."""
