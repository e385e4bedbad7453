"""WSGI entry point, expects DJANGO_SETTINGS_MODULE to point at rally.settings.production (or similar)."""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "rally.settings.production")

application = get_wsgi_application()
