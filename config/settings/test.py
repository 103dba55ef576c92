"""Test settings for Staybook project.

In-memory database, fast password hashing and adapters that never leave
the process. Tests replace the geocoder with mocks where needed.
"""

import tempfile

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = 'test-secret-key'

ALLOWED_HOSTS = ['*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

MEDIA_ROOT = tempfile.mkdtemp(prefix='staybook-media-')
MEDIA_STORE_BACKEND = 'apps.listings.media.LocalMediaStore'

MAPBOX_TOKEN = 'test-token'
DEFAULT_LISTING_IMAGE_URL = 'https://example.com/default.jpg'
