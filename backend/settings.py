"""
Django settings for the SCORM hosting backend - Production Ready
"""

import os
import dj_database_url
from pathlib import Path
from datetime import timedelta

# .env Datei laden für Development
from dotenv import load_dotenv

load_dotenv()

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-q7v!3m0t#scorm-hosting-dev-only-9c$w2k8x1z5p"
)

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.environ.get("DEBUG", "True").lower() == "true"

# Production-ready ALLOWED_HOSTS
ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")

# Application definition
INSTALLED_APPS = [
    "jazzmin",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third Party Apps
    "corsheaders",
    "rest_framework",
    "rest_framework_simplejwt",
    # Local Apps
    "scorm_hosting.apps.ScormHostingConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# CORS Settings - Production-ready
CORS_ALLOWED_ORIGINS = os.environ.get(
    "CORS_ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"
).split(",")
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = [
    "DELETE",
    "GET",
    "OPTIONS",
    "PATCH",
    "POST",
    "PUT",
]

ROOT_URLCONF = "backend.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "backend.wsgi.application"

# Database - Production-ready mit PostgreSQL
if os.environ.get("DATABASE_URL"):
    DATABASES = {"default": dj_database_url.parse(os.environ.get("DATABASE_URL"))}
else:
    # Development: SQLite
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"
    },
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Internationalization
LANGUAGE_CODE = "de-de"
TIME_ZONE = "Europe/Berlin"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images) - Production-ready
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"
    },
}

# Security Settings für Production
if not DEBUG:
    SECURE_CONTENT_TYPE_NOSNIFF = True
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_SECONDS = 31536000
    SECURE_SSL_REDIRECT = True
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework Settings
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
        "backend.custom_auth.JWTCookieAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.IsAuthenticated",),
}

# Simple JWT Settings
SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(
        minutes=int(os.environ.get("JWT_ACCESS_TOKEN_LIFETIME_MINUTES", "15"))
    ),
    "REFRESH_TOKEN_LIFETIME": timedelta(
        days=int(os.environ.get("JWT_REFRESH_TOKEN_LIFETIME_DAYS", "1"))
    ),
    "ALGORITHM": "HS256",
    "SIGNING_KEY": SECRET_KEY,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_FIELD": "id",
    "USER_ID_CLAIM": "user_id",
}

# ---- Object Storage (S3-kompatibel: Cloudflare R2, Wasabi, AWS S3) ----
# Alle Paket-Dateien landen in diesem Bucket unter "<SCORM_PACKAGE_PREFIX>/<package_id>/".
STORAGE_BUCKET_NAME = os.environ.get("STORAGE_BUCKET_NAME", "scorm-packages")
STORAGE_ENDPOINT_URL = os.environ.get("STORAGE_ENDPOINT_URL", "")
STORAGE_REGION = os.environ.get("STORAGE_REGION", "auto")
STORAGE_ACCESS_KEY_ID = os.environ.get("STORAGE_ACCESS_KEY_ID", "")
STORAGE_SECRET_ACCESS_KEY = os.environ.get("STORAGE_SECRET_ACCESS_KEY", "")

# Öffentliche Basis-URL (z.B. R2 Custom Domain). Leer → URL aus Endpoint + Bucket.
STORAGE_PUBLIC_URL = os.environ.get("STORAGE_PUBLIC_URL", "")

# Timeouts in Sekunden für jeden einzelnen Upload-Request
STORAGE_CONNECT_TIMEOUT = int(os.environ.get("STORAGE_CONNECT_TIMEOUT", "10"))
STORAGE_READ_TIMEOUT = int(os.environ.get("STORAGE_READ_TIMEOUT", "60"))

# Origins, die Paket-Inhalte direkt aus dem Bucket laden dürfen (setup_storage_cors)
STORAGE_CORS_ORIGINS = os.environ.get(
    "STORAGE_CORS_ORIGINS", ",".join(CORS_ALLOWED_ORIGINS)
).split(",")

# ---- SCORM Package Ingestion ----
SCORM_MAX_UPLOAD_SIZE = int(os.environ.get("SCORM_MAX_UPLOAD_SIZE", str(100 * 1024 * 1024)))
SCORM_PACKAGE_PREFIX = os.environ.get("SCORM_PACKAGE_PREFIX", "packages")

# 1 = strikt sequentiell in Archiv-Reihenfolge
SCORM_UPLOAD_WORKERS = int(os.environ.get("SCORM_UPLOAD_WORKERS", "1"))

# Obergrenzen gegen übergroße bzw. manipulierte Archive
SCORM_MAX_ARCHIVE_MEMBERS = int(os.environ.get("SCORM_MAX_ARCHIVE_MEMBERS", "10000"))
SCORM_MAX_UNCOMPRESSED_SIZE = int(
    os.environ.get("SCORM_MAX_UNCOMPRESSED_SIZE", str(1024 * 1024 * 1024))
)

# Uploads bis zum Limit im Speicher halten
DATA_UPLOAD_MAX_MEMORY_SIZE = SCORM_MAX_UPLOAD_SIZE + 1024 * 1024
FILE_UPLOAD_MAX_MEMORY_SIZE = SCORM_MAX_UPLOAD_SIZE

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

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
        "urllib3": {"level": "WARNING"},
    },
}

# Jazzmin Settings
JAZZMIN_SETTINGS = {
    "site_title": "SCORM Hosting Admin",
    "site_header": "SCORM Hosting",
    "site_brand": "SCORM Hosting",
    "welcome_sign": "Willkommen im SCORM Hosting Admin-Bereich",
    "copyright": "DSP Team",
    "topmenu_links": [
        {"name": "Home", "url": "admin:index", "permissions": ["auth.view_user"]},
    ],
    "icons": {
        "auth": "fas fa-users-cog",
        "auth.user": "fas fa-user",
        "auth.Group": "fas fa-users",
        "scorm_hosting": "fas fa-box-open",
        "scorm_hosting.project": "fas fa-folder-open",
    },
    "show_ui_builder": False,
    "changeform_format": "horizontal_tabs",
    "order_with_respect_to": [
        "auth",
        "scorm_hosting",
    ],
}
