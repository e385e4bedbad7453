import os

from .common import *

# these persons receive error notification
ADMINS = (
    ('Webmasters', os.environ.get('RALLY_ADMIN_EMAIL', 'webmaster@localhost')),
)
MANAGERS = ADMINS

# turn off all debugging
DEBUG = False

# ##### SERVER CONFIGURATION ##############################
ALLOWED_HOSTS = [h for h in os.environ.get('RALLY_ALLOWED_HOSTS', '').split(',') if h]

# Besides the console, also mail warnings (such as rolled back registration transactions) and errors to the admins.
LOGGING['handlers']['mail_admins'] = {
    'level': 'WARNING',
    'class': 'django.utils.log.AdminEmailHandler',
}
LOGGING['loggers']['django']['handlers'] = ['console', 'mail_admins']
LOGGING['loggers']['apps']['handlers'] = ['console', 'mail_admins']

# ##### DATABASE CONFIGURATION ############################

# Seconds a registration waits for the lock on an event before giving up. Giving up rolls the registration back and
# reports a retryable failure to the client, so keep this well below the request timeout of the webserver.
LOCK_WAIT_TIMEOUT = int(os.environ.get('RALLY_LOCK_WAIT_TIMEOUT', 5))

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.mysql',
        'HOST': os.environ.get('RALLY_DB_HOST', 'db.local'),
        'USER': os.environ.get('RALLY_DB_USER', 'rally'),
        # From local_settings or the environment
        'PASSWORD': os.environ.get('RALLY_DB_PASSWORD', globals().get('MYSQL_PASSWORD', '')),
        'NAME': os.environ.get('RALLY_DB_NAME', 'rally'),
        'OPTIONS': {
            'init_command': "SET SESSION innodb_lock_wait_timeout = {}".format(LOCK_WAIT_TIMEOUT),
            # Counting confirmed registrations must see rows committed by the previous lock holder
            'isolation_level': 'read committed',
        },
    },
}

# ##### SECURITY CONFIGURATION ############################

# Note: Webserver guarantees only secure requests are processed and also sets HSTS headers. Even so, let Django
# redirect to HTTPS as well, just in case the webserver config gets messed up.
SECURE_SSL_REDIRECT = True
# Session cookies will be marked as secure, so the browser will only send them over HTTPS
SESSION_COOKIE_SECURE = True

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
]
