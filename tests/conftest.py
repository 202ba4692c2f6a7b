import pytest

from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def rpc_eager():
    """Run RPC handlers in-process (Celery eager mode, in-memory broker)."""
    from config.celery import app, set_option

    previous = (app.conf.task_always_eager, app.conf.broker_url)
    set_option(app, "task_always_eager", True)
    set_option(app, "broker_url", "memory://")
    assert app.conf.task_always_eager is True
    yield app
    set_option(app, "task_always_eager", previous[0])
    set_option(app, "broker_url", previous[1])
