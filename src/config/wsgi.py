"""WSGI entry point for the products HTTP gateway.

Configuration is validated before Django loads, so a missing or malformed
``PORT`` / ``DATABASE_URL`` / ``BROKER_SERVERS`` stops the server with a
``ConfigError`` instead of serving with partial settings.
"""

import os

from django.core.handlers.wsgi import WSGIHandler
from django.core.wsgi import get_wsgi_application

from config.celery import app as celery_app
from config.celery import configure_transport
from config.envs import load_envs

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")


def build_application() -> WSGIHandler:
    envs = load_envs()
    configure_transport(celery_app, envs)
    return get_wsgi_application()


application = build_application()
