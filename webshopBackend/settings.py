"""
Django settings for webshopBackend project.

Only configuration is used from Django: the marketplace core has no models,
views or URL routes. Values come from environment variables.
"""

import os
from datetime import timedelta
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured


BASE_DIR = Path(__file__).resolve().parent.parent

DEBUG = os.environ.get("DEBUG", "false").lower() in {"1", "true", "yes"}

SECRET_KEY = os.environ.get("SECRET_KEY", "")
if not SECRET_KEY:
    if not DEBUG:
        raise ImproperlyConfigured("SECRET_KEY environment variable is required when DEBUG is off")
    SECRET_KEY = "django-insecure-dev-key"

INSTALLED_APPS = []

USE_TZ = True
TIME_ZONE = "UTC"

# Infrastructure backends
INFRASTRUCTURE = {
    # "memory" or "dynamodb"
    "REPOSITORY_BACKEND": os.environ.get("REPOSITORY_BACKEND", "memory"),
    "DYNAMODB_TABLE_PREFIX": os.environ.get("DYNAMODB_TABLE_PREFIX", "webshop"),
    # Set for DynamoDB Local, e.g. http://localhost:8000
    "DYNAMODB_ENDPOINT_URL": os.environ.get("DYNAMODB_ENDPOINT_URL") or None,
    "AWS_REGION": os.environ.get("AWS_REGION", "eu-central-1"),
}

SIMPLE_JWT = {
    "ALGORITHM": "HS256",
    "SIGNING_KEY": os.environ.get("JWT_SIGNING_KEY") or SECRET_KEY,
    "ISSUER": os.environ.get("JWT_ISSUER", "webshop"),
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=int(os.environ.get("JWT_LIFETIME_HOURS", "24"))),
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.PBKDF2PasswordHasher",
    "django.contrib.auth.hashers.PBKDF2SHA1PasswordHasher",
]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} [{levelname}] {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "botocore": {"level": "WARNING"},
        "boto3": {"level": "WARNING"},
    },
}
