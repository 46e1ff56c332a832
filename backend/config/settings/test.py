"""Test settings."""
import os
import tempfile

os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret-key")

from .base import *  # noqa: E402, F401, F403

DEBUG = False

# Use in-memory SQLite for faster tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Faster password hashing in tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Uploaded images go to a throwaway directory
MEDIA_ROOT = tempfile.mkdtemp(prefix="gst-invoice-media-")
STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

DEFAULT_COMPANY_NAME = "Test Traders"
DEFAULT_GSTIN = "33ABCDE1234F1Z5"
DEFAULT_STATE = "Tamilnadu"
DEFAULT_STATE_CODE = "33"
