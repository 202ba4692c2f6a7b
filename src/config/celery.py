"""
Celery application serving the products RPC surface.

DJANGO_SETTINGS_MODULE is set before the app is created so Celery reads
its configuration from the Django settings (CELERY_ prefix).  Each task
name is an RPC method pattern (``create_product``, ``find_one_product``...).
"""

import os
from typing import TYPE_CHECKING, Any

from celery import Celery

if TYPE_CHECKING:
    from config.envs import Envs

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

NAMESPACE = "CELERY"

app = Celery("products")

# Reads the Django settings with the CELERY_ prefix
app.config_from_object("django.conf:settings", namespace=NAMESPACE)

# Discovers tasks.py in each installed app
app.autodiscover_tasks()


def set_option(celery_app: Celery, name: str, value: Any) -> None:
    """Override one setting at runtime.

    Lookups try the namespaced key (``CELERY_BROKER_URL``) before the plain
    one, so runtime overrides are written under the namespaced key.
    """
    celery_app.conf[f"{NAMESPACE}_{name.upper()}"] = value


def configure_transport(celery_app: Celery, envs: "Envs") -> None:
    """Point the broker at the validated transport endpoints (failover order)."""
    set_option(celery_app, "broker_url", ";".join(envs.broker_servers))
