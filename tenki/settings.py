"""Base Django settings for the tenki weather service."""
from __future__ import annotations

import os

from django.core.exceptions import ImproperlyConfigured


def env(name: str, default: str | None = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


SECRET_KEY = env("DJANGO_SECRET_KEY")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",")

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "rest_framework",
    "tenki.api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "tenki.urls"

WSGI_APPLICATION = "tenki.wsgi.application"

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
}

# Weather providers
WEATHERAPI_KEY = os.environ.get("WEATHERAPI_KEY", "")
WEATHERAPI_URL = os.environ.get("WEATHERAPI_URL", "https://api.weatherapi.com/v1/current.json")
WEATHERAPI_LANG = os.environ.get("WEATHERAPI_LANG", "ja")
KUJIRA_URL = os.environ.get("KUJIRA_URL", "https://api.aoikujira.com/tenki/week.php")
TENKI_REGIONAL_ENABLED = os.environ.get("TENKI_REGIONAL_ENABLED", "1") == "1"
TENKI_HTTP_TIMEOUT = float(os.environ.get("TENKI_HTTP_TIMEOUT", "10"))
TENKI_HISTORY_LIMIT = int(os.environ.get("TENKI_HISTORY_LIMIT", "10"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "tenki": {"handlers": ["console"], "level": os.environ.get("TENKI_LOG_LEVEL", "INFO")},
    },
}

LANGUAGE_CODE = "ja"
TIME_ZONE = "Asia/Tokyo"
USE_I18N = True
USE_TZ = True
