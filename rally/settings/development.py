# Python imports
from os.path import join

from .common import *

# ##### DEBUG CONFIGURATION ###############################
DEBUG = True

# allow all hosts during development
ALLOWED_HOSTS = ['*']

# ##### DATABASE CONFIGURATION ############################
# Note that Sqlite ignores select_for_update, it serializes all writers on the database file instead. Use
# production.py (or a copy pointing at a local MySQL) to exercise the event row locking.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': join(PROJECT_ROOT, 'run', 'dev.sqlite3'),
    },
}

# Fast hashing for the members created in tests and by the load test tooling
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]
