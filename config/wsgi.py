"""WSGI entry point for ContributionTracker (``gunicorn config.wsgi``)."""
import os
from django.core.wsgi import get_wsgi_application

# config.settings loads .env itself
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
application = get_wsgi_application()
