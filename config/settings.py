"""
Django settings for config project.

Everything deploy-specific comes from the environment; the defaults give a
local SQLite setup.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-only-insecure-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "false").lower() in ("1", "true", "yes")

ALLOWED_HOSTS = [h for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h]


# ================================================================
# APPS
# ================================================================

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "draftroom",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"


# ================================================================
# DATABASE
# ================================================================
# Per-league locking relies on SELECT ... FOR UPDATE, so run PostgreSQL
# anywhere more than one request can hit the same league at once.

DB_ENGINE = os.environ.get("DRAFTROOM_DB_ENGINE", "sqlite")

if DB_ENGINE == "postgresql":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.environ.get("DRAFTROOM_DB_NAME", "draftroom"),
            "USER": os.environ.get("DRAFTROOM_DB_USER", "draftroom"),
            "PASSWORD": os.environ.get("DRAFTROOM_DB_PASSWORD", ""),
            "HOST": os.environ.get("DRAFTROOM_DB_HOST", "localhost"),
            "PORT": os.environ.get("DRAFTROOM_DB_PORT", "5432"),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": os.environ.get("DRAFTROOM_DB_NAME", str(BASE_DIR / "db.sqlite3")),
            "OPTIONS": {
                # take the write lock at BEGIN so concurrent picks queue up
                # instead of failing with "database is locked"
                "transaction_mode": "IMMEDIATE",
                "timeout": int(os.environ.get("DRAFTROOM_DB_TIMEOUT", "20")),
            },
            # file-backed so threads in tests share one database
            "TEST": {"NAME": str(BASE_DIR / "test_db.sqlite3")},
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# ================================================================
# I18N / STATIC
# ================================================================

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"


# ================================================================
# REST FRAMEWORK
# ================================================================

REST_FRAMEWORK = {
    "EXCEPTION_HANDLER": "draftroom.api.exceptions.draft_exception_handler",
}


# ================================================================
# LOGGING
# ================================================================

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "draftroom": {
            "handlers": ["console"],
            "level": os.environ.get("DRAFTROOM_LOG_LEVEL", "INFO").upper(),
            "propagate": True,
        },
    },
}
