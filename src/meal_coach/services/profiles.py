"""Health profile lookup with caching."""

import logging
from dataclasses import dataclass
from typing import Protocol

from meal_coach.domain.profile import HealthProfile, default_profile
from meal_coach.services.cache import RecognitionCache

_logger = logging.getLogger(__name__)


class ProfileProvider(Protocol):
    """Read-only access to stored health profiles."""

    def get_profile(self, user_id: str) -> HealthProfile | None:
        """Return the user's profile, or None when not set up."""


@dataclass
class ProfileService:
    """Resolve a user's profile through the cache, then the provider."""

    provider: ProfileProvider
    cache: RecognitionCache

    def get_profile(self, user_id: str | None) -> HealthProfile:
        """Return the stored profile, or defaults for unknown users."""
        if not user_id:
            return default_profile()
        cached = self.cache.get_user_profile(user_id)
        if cached is not None:
            return cached
        profile = self.provider.get_profile(user_id)
        if profile is None:
            _logger.info("No health profile for user=%s, using defaults", user_id)
            return default_profile()
        self.cache.set_user_profile(user_id, profile)
        return profile

    def profile_updated(self, user_id: str) -> None:
        """Drop the cached snapshot after the profile changes."""
        self.cache.invalidate_user_profile(user_id)


class InMemoryProfileProvider(ProfileProvider):
    """Dict-backed provider for tests and local runs."""

    def __init__(self, profiles: dict[str, HealthProfile] | None = None) -> None:
        self.profiles = dict(profiles or {})
        self.lookups = 0

    def get_profile(self, user_id: str) -> HealthProfile | None:
        self.lookups += 1
        return self.profiles.get(user_id)
