"""Bar speed error types."""

from __future__ import annotations

from enum import Enum


class BarSpeedErrorCode(Enum):
    """Error classification codes."""

    UNSUPPORTED_AGGREGATION = "unsupported_aggregation"
    INSUFFICIENT_DATA = "insufficient_data"
    INVALID_CONFIG = "invalid_config"
    NO_DATA = "no_data"
    PROVIDER_ERROR = "provider_error"


class BarSpeedError(Exception):
    """Indicator exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the next update is expected to succeed.
    """

    def __init__(
        self,
        message: str,
        code: BarSpeedErrorCode = BarSpeedErrorCode.PROVIDER_ERROR,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable
