"""
Django settings for Stampcard tests.
"""

SECRET_KEY = "test-secret-key-for-stampcard-tests"

DEBUG = True

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.admin",
    "stampcard",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = "America/Sao_Paulo"

STAMPCARD = {
    "NOTIFICATION_BACKEND": "stampcard.adapters.console.ConsoleNotificationBackend",
    "CUE_BACKEND": "stampcard.adapters.console.ConsoleCueBackend",
}
