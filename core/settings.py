import datetime as dt
from pathlib import Path

import environ

from core import __version__

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DJANGO_DEBUG=(bool, False),
    DJANGO_ALLOWED_HOSTS=(list, ["*"]),
)
environ.Env.read_env(BASE_DIR / ".env")

SECRET_KEY = env("DJANGO_SECRET_KEY", default="django-insecure-dev-only")
DEBUG = env("DJANGO_DEBUG")
ALLOWED_HOSTS = env("DJANGO_ALLOWED_HOSTS")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "core",
    "accounts",
    "watch_history",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "core.urls"
WSGI_APPLICATION = "core.wsgi.application"
APPEND_SLASH = False

DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
}
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = "UTC"

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "accounts.authentication.SessionTokenAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}

# Sessions handed out to clients stay valid for this long.
SESSION_LIFETIME = dt.timedelta(days=21)

RUNTIME_CONFIG = {
    "public": {
        "meta": {
            "name": env("META_NAME", default=""),
            "description": env("META_DESCRIPTION", default=""),
            "version": __version__,
            "captcha": str(env("CAPTCHA", default="") == "true").lower(),
            "captchaClientKey": env("CAPTCHA_CLIENT_KEY", default=""),
        },
    },
    "cryptoSecret": env("CRYPTO_SECRET", default=SECRET_KEY),
    "tmdbApiKey": env("TMDB_API_KEY", default=""),
    "trakt": {
        "clientId": env("TRAKT_CLIENT_ID", default=""),
        "clientSecret": env("TRAKT_SECRET_ID", default=""),
    },
}

SCHEDULED_TASKS = {
    # Daily, midnight
    "0 0 * * *": ["jobs:clear-metrics:daily"],
    # Weekly, Sunday midnight
    "0 0 * * 0": ["jobs:clear-metrics:weekly"],
    # Monthly, 1st of the month at midnight
    "0 0 1 * *": ["jobs:clear-metrics:monthly"],
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": env("LOG_LEVEL", default="INFO"),
    },
}
