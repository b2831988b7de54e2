"""
Stampcard configuration.

Usage in settings.py:
    STAMPCARD = {
        "ENROLLMENT_MAX_ATTEMPTS": 5,
        "NOTIFICATION_BACKEND": "stampcard.adapters.expo.ExpoPushBackend",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings
from django.utils.module_loading import import_string


@dataclass
class StampcardSettings:
    """Stampcard configuration settings."""

    # Card code generation (per enrollment attempt)
    CODE_MAX_ATTEMPTS: int = 1000

    # Enrollment retries after a code collision
    ENROLLMENT_MAX_ATTEMPTS: int = 5

    # Side-effect collaborators (dotted paths)
    NOTIFICATION_BACKEND: str = "stampcard.adapters.console.ConsoleNotificationBackend"
    CUE_BACKEND: str = "stampcard.adapters.console.ConsoleCueBackend"

    # Expo push API
    EXPO_PUSH_URL: str = "https://exp.host/--/api/v2/push/send"
    EXPO_ACCESS_TOKEN: str = ""
    PUSH_TIMEOUT: float = 10.0


def get_stampcard_settings() -> StampcardSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STAMPCARD", {})
    return StampcardSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_stampcard_settings(), name)


stampcard_settings = _LazySettings()


def get_notification_backend():
    """Instantiate the configured NotificationBackend."""
    return import_string(stampcard_settings.NOTIFICATION_BACKEND)()


def get_cue_backend():
    """Instantiate the configured CueBackend."""
    return import_string(stampcard_settings.CUE_BACKEND)()
