"""Django settings for the test suite.

Supplies the variables production entry points must validate, pointing at
an in-memory SQLite database and Celery's in-memory broker.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")

from config.settings import *  # noqa: E402,F401,F403

CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"
