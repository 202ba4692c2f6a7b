"""Start the Celery worker serving the products RPC patterns.

Usage::

    python src/manage.py rpc_worker --concurrency 4
"""

from __future__ import annotations

import structlog
from django.core.management.base import BaseCommand, CommandError

from config.celery import app as celery_app
from config.celery import configure_transport
from config.envs import ConfigError, load_envs
from modules.products.repositories.django_repository import ProductDjangoRepository

logger = structlog.get_logger(__name__)


class Command(BaseCommand):
    help = "Validate configuration, connect to the database and serve product RPC calls."

    def add_arguments(self, parser):
        parser.add_argument("--concurrency", type=int, default=1)
        parser.add_argument("--loglevel", default="INFO")

    def handle(self, *args, **options):
        try:
            envs = load_envs()
        except ConfigError as exc:
            raise CommandError(str(exc)) from exc

        configure_transport(celery_app, envs)
        ProductDjangoRepository().connect()

        logger.info(
            "rpc_worker.starting",
            broker_count=len(envs.broker_servers),
            concurrency=options["concurrency"],
        )
        worker = celery_app.Worker(
            concurrency=options["concurrency"],
            loglevel=options["loglevel"],
        )
        worker.start()
