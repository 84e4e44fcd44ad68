"""Failure kinds surfaced by the recognition pipeline."""

from dataclasses import dataclass
from enum import StrEnum


class ErrorType(StrEnum):
    """Why a meal could not be analyzed."""

    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    NO_FOOD_DETECTED = "NO_FOOD_DETECTED"
    INCOMPLETE_FOOD_INFORMATION = "INCOMPLETE_FOOD_INFORMATION"
    INVALID_NUTRITION_RANGE = "INVALID_NUTRITION_RANGE"
    TIMEOUT = "TIMEOUT"
    AI_API_ERROR = "AI_API_ERROR"
    DOWNLOAD_FAILED = "DOWNLOAD_FAILED"

    @property
    def is_validation_failure(self) -> bool:
        return self in _VALIDATION_FAILURES

    @property
    def retryable(self) -> bool:
        """Whether asking the user to simply try again is meaningful."""
        return self in {
            ErrorType.TIMEOUT,
            ErrorType.AI_API_ERROR,
            ErrorType.DOWNLOAD_FAILED,
        }


_VALIDATION_FAILURES = frozenset(
    {
        ErrorType.NO_FOOD_DETECTED,
        ErrorType.INCOMPLETE_FOOD_INFORMATION,
        ErrorType.INVALID_NUTRITION_RANGE,
    }
)


@dataclass(frozen=True)
class ValidationFailure:
    """Rejected AI payload with the first violated rule."""

    type: ErrorType
    detail: str


@dataclass(frozen=True)
class RecognitionError:
    """User-facing failure with localized text."""

    type: ErrorType
    message: str
    suggestion: str | None = None

    @property
    def retryable(self) -> bool:
        return self.type.retryable


class UnsupportedImageFormatError(ValueError):
    """Raised when bytes do not decode as a supported image."""
