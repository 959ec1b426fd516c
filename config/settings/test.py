"""Settings used by the test suite."""

import os

os.environ.setdefault('JWT_SECRET', 'test-signing-secret-not-for-production')

from .base import *  # noqa: F401,F403,E402

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

BOOKINGS_PREVENT_OVERLAP = True
