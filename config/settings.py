import os
from pathlib import Path
from dotenv import load_dotenv
import dj_database_url

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

# ---- Core ----
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-eticket-local-dev-key")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()

ALLOWED_HOSTS = [
    "localhost",
    "127.0.0.1",
    "testserver",
] + [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if h]

# ---- Apps ----
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.staticfiles",
    "rest_framework",
    "corsheaders",
    "eticket",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": ["django.template.context_processors.request"]},
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# ---- DB ----
if DATABASE_URL:
    DATABASES = {"default": dj_database_url.parse(DATABASE_URL, conn_max_age=600)}
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

# ---- I18N/Timezone ----
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ---- Static ----
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STATICFILES_DIRS = [BASE_DIR / "static"]

# ---- CORS ----
CORS_ALLOWED_ORIGINS = [o for o in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",") if o]
CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]

# ---- DRF ----
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
}

# ---- E-ticket renderer (env-driven) ----
ETICKET = {
    "LOGO": os.getenv("ETICKET_LOGO", "logo.png"),
    "IOS_BADGE": os.getenv("ETICKET_IOS_BADGE", "ios.png"),
    "ANDROID_BADGE": os.getenv("ETICKET_ANDROID_BADGE", "android.png"),
    "SELLER_IMAGE": os.getenv("ETICKET_SELLER_IMAGE", "logo.png"),
    "QR_PAYLOAD": os.getenv("ETICKET_QR_PAYLOAD", "https://example.com/order/{order_id}/item/{index}"),
    "IOS_STORE_URL": os.getenv("ETICKET_IOS_STORE_URL", "https://apps.apple.com/us/genre/ios/id36"),
    "ANDROID_STORE_URL": os.getenv("ETICKET_ANDROID_STORE_URL", "https://play.google.com/store/apps"),
    "TIME_ZONE": os.getenv("ETICKET_TIME_ZONE", "America/New_York"),
    "IMAGE_TIMEOUT": float(os.getenv("ETICKET_IMAGE_TIMEOUT", "10")),
    "TEMP_DIR": os.getenv("ETICKET_TEMP_DIR") or None,
    "PER_ITEM_IMAGE": os.getenv("ETICKET_PER_ITEM_IMAGE", "0") == "1",
}

# ---- Logging ----
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {
        "eticket": {"handlers": ["console"], "level": os.getenv("ETICKET_LOG_LEVEL", "INFO")},
        "django.request": {"handlers": ["console"], "level": "WARNING"},
    },
}
