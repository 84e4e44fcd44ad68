"""Food recognition via a vision LLM."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from meal_coach import localization
from meal_coach.domain.errors import ErrorType, RecognitionError, ValidationFailure
from meal_coach.domain.models import Language
from meal_coach.domain.recognition import RecognitionResult
from meal_coach.services import prompts
from meal_coach.services.images import NormalizedImage, to_data_url
from meal_coach.services.validation import RecognitionValidator

_logger = logging.getLogger(__name__)

HTTP_TOO_MANY_REQUESTS = 429


class VisionClient(Protocol):
    """Interface for LLM calls that return a JSON object."""

    async def complete_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_data_url: str | None,
        max_tokens: int,
        temperature: float,
    ) -> dict[str, object]:
        """Return the decoded JSON object produced by the model."""


@dataclass(frozen=True)
class RecognitionContext:
    """Who is asking, in which language, and when the meal was eaten."""

    user_id: str | None = None
    language: Language = Language.EN
    meal_time: datetime | None = None


@dataclass(frozen=True)
class RecognitionOutcome:
    """Validated result or a user-facing error."""

    result: RecognitionResult | None = None
    error: RecognitionError | None = None
    processing_ms: int = 0
    low_confidence: bool = False

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass
class FoodRecognizer:
    """Calls the vision client under a deadline and validates its answer."""

    client: VisionClient
    model: str
    validator: RecognitionValidator = field(default_factory=RecognitionValidator)
    max_tokens: int = 1000
    temperature: float = 0.3
    timeout_seconds: float = 45.0

    async def recognize_image(
        self, image: NormalizedImage, context: RecognitionContext
    ) -> RecognitionOutcome:
        """Recognize a meal from a normalized photo."""
        language = Language.resolve(context.language)
        _logger.info("Starting food recognition: user=%s hash=%s", context.user_id, image.hash)
        return await self._recognize(
            user_prompt=prompts.build_image_prompt(language),
            image_data_url=to_data_url(image.buffer, image.format),
            context=context,
        )

    async def recognize_text(
        self, text: str, context: RecognitionContext
    ) -> RecognitionOutcome:
        """Estimate a meal from a free-text description."""
        _logger.info("Starting text food recognition: user=%s", context.user_id)
        return await self._recognize(
            user_prompt=prompts.build_text_prompt(text),
            image_data_url=None,
            context=context,
        )

    async def _recognize(
        self,
        *,
        user_prompt: str,
        image_data_url: str | None,
        context: RecognitionContext,
    ) -> RecognitionOutcome:
        language = Language.resolve(context.language)
        started = time.monotonic()
        try:
            raw = await asyncio.wait_for(
                self.client.complete_json(
                    model=self.model,
                    system_prompt=prompts.build_system_prompt(language),
                    user_prompt=user_prompt,
                    image_data_url=image_data_url,
                    max_tokens=self.max_tokens,
                    temperature=self.temperature,
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError:
            _logger.warning(
                "Recognition timed out after %ss: user=%s",
                self.timeout_seconds,
                context.user_id,
            )
            return _failure(ErrorType.TIMEOUT, language, started)
        except Exception as exc:
            _logger.error("Food recognition failed: user=%s error=%s", context.user_id, exc)
            if _is_rate_limited(exc):
                message, suggestion = localization.RATE_LIMITED[language]
                return RecognitionOutcome(
                    error=RecognitionError(ErrorType.AI_API_ERROR, message, suggestion),
                    processing_ms=_elapsed_ms(started),
                )
            return _failure(ErrorType.AI_API_ERROR, language, started)

        validated = self.validator.validate(raw, meal_time=context.meal_time)
        if isinstance(validated, ValidationFailure):
            return _failure(validated.type, language, started)

        processing_ms = _elapsed_ms(started)
        low_confidence = bool(self.validator.low_confidence_items(validated))
        _logger.info(
            "Food recognition completed: foods=%s confidence=%s took=%sms",
            len(validated.foods),
            validated.foods[0].confidence,
            processing_ms,
        )
        return RecognitionOutcome(
            result=validated,
            processing_ms=processing_ms,
            low_confidence=low_confidence,
        )


def recognition_error(error_type: ErrorType, language: Language) -> RecognitionError:
    """Build a localized error for a failure kind."""
    message, suggestion = localization.error_text(error_type, language)
    return RecognitionError(type=error_type, message=message, suggestion=suggestion)


def _failure(error_type: ErrorType, language: Language, started: float) -> RecognitionOutcome:
    return RecognitionOutcome(
        error=recognition_error(error_type, language),
        processing_ms=_elapsed_ms(started),
    )


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def _is_rate_limited(exc: Exception) -> bool:
    """Detect HTTP 429 responses or rate limit messages."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if status_code == HTTP_TOO_MANY_REQUESTS:
        return True
    return "rate limit" in str(exc).lower()
