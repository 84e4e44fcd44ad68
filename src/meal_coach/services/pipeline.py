"""End-to-end meal analysis: normalize, cache, recognize, rate."""

import logging
from dataclasses import dataclass
from datetime import datetime

import httpx

from meal_coach.adapters.image_downloader import ImageDownloader, ImageTooLargeError
from meal_coach.domain.errors import (
    ErrorType,
    RecognitionError,
    UnsupportedImageFormatError,
)
from meal_coach.domain.models import Language
from meal_coach.domain.rating import HealthRating
from meal_coach.domain.recognition import RecognitionResult
from meal_coach.services.cache import RecognitionCache
from meal_coach.services.images import ImageNormalizer
from meal_coach.services.profiles import ProfileService
from meal_coach.services.rating import RatingEngine
from meal_coach.services.vision import (
    FoodRecognizer,
    RecognitionContext,
    RecognitionOutcome,
    recognition_error,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MealAnalysis:
    """Validated recognition result with its personalized rating."""

    result: RecognitionResult
    rating: HealthRating
    image_hash: str | None = None
    cached: bool = False
    low_confidence: bool = False


@dataclass
class MealAnalysisPipeline:
    """Runs one meal event through the whole pipeline, sequentially.

    Two concurrent submissions of the same photo may both miss the cache and
    both call the recognizer; the last cache write wins.
    """

    normalizer: ImageNormalizer
    cache: RecognitionCache
    recognizer: FoodRecognizer
    rating_engine: RatingEngine
    profiles: ProfileService
    personalized_cache: bool = False
    downloader: ImageDownloader | None = None
    default_language: Language = Language.EN

    def context(
        self,
        user_id: str | None = None,
        language: Language | str | None = None,
        meal_time: datetime | None = None,
    ) -> RecognitionContext:
        """Build a request context, falling back to the default language."""
        return RecognitionContext(
            user_id=user_id,
            language=Language.resolve(language or self.default_language),
            meal_time=meal_time,
        )

    async def analyze_image_url(
        self, url: str, context: RecognitionContext
    ) -> MealAnalysis | RecognitionError:
        """Download a meal photo and analyze it."""
        if self.downloader is None:
            raise RuntimeError("No image downloader configured")
        language = Language.resolve(context.language)
        try:
            image_bytes = await self.downloader.download(url)
        except ImageTooLargeError as exc:
            _logger.warning("Rejected oversized image: %s", exc)
            return recognition_error(ErrorType.UNSUPPORTED_FORMAT, language)
        except httpx.HTTPError as exc:
            _logger.warning("Image download failed: url=%s error=%s", url, exc)
            return recognition_error(ErrorType.DOWNLOAD_FAILED, language)
        return await self.analyze_image(image_bytes, context)

    async def analyze_image(
        self, image_bytes: bytes, context: RecognitionContext
    ) -> MealAnalysis | RecognitionError:
        """Analyze a meal photo."""
        language = Language.resolve(context.language)
        if not self.normalizer.validate(image_bytes):
            return recognition_error(ErrorType.UNSUPPORTED_FORMAT, language)
        try:
            image = self.normalizer.normalize(image_bytes)
        except UnsupportedImageFormatError as exc:
            _logger.warning("Image normalization failed: %s", exc)
            return recognition_error(ErrorType.UNSUPPORTED_FORMAT, language)

        cache_user = context.user_id if self.personalized_cache else None
        result = self.cache.get_food_recognition(image.hash, cache_user)
        cached = result is not None
        low_confidence = False
        if result is None:
            outcome = await self.recognizer.recognize_image(image, context)
            if outcome.error is not None:
                return outcome.error
            result = _require_result(outcome)
            low_confidence = outcome.low_confidence
            self.cache.set_food_recognition(image.hash, result, cache_user)
        else:
            _logger.info("Recognition cache hit: hash=%s user=%s", image.hash, context.user_id)
            low_confidence = bool(self.recognizer.validator.low_confidence_items(result))

        return MealAnalysis(
            result=result,
            rating=self._rate(result, context, language),
            image_hash=image.hash,
            cached=cached,
            low_confidence=low_confidence,
        )

    async def analyze_text(
        self, text: str, context: RecognitionContext
    ) -> MealAnalysis | RecognitionError:
        """Analyze a free-text meal description; text results are not cached."""
        language = Language.resolve(context.language)
        outcome = await self.recognizer.recognize_text(text, context)
        if outcome.error is not None:
            return outcome.error
        result = _require_result(outcome)
        return MealAnalysis(
            result=result,
            rating=self._rate(result, context, language),
            low_confidence=outcome.low_confidence,
        )

    def _rate(
        self, result: RecognitionResult, context: RecognitionContext, language: Language
    ) -> HealthRating:
        profile = self.profiles.get_profile(context.user_id)
        rating = self.rating_engine.rate(result, profile, language)
        _logger.info(
            "Health rating: user=%s overall=%s score=%s",
            context.user_id,
            rating.overall,
            rating.score,
        )
        return rating


def _require_result(outcome: RecognitionOutcome) -> RecognitionResult:
    if outcome.result is None:
        raise RuntimeError("Recognition outcome has neither result nor error")
    return outcome.result
