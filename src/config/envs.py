"""Startup configuration for the products microservice.

``load_envs()`` is called once by each entry point (``manage.py runserver``
and the ``rpc_worker`` command) and returns an immutable ``Envs`` that is
handed to the components needing it.  Missing or malformed values fail
fast with a descriptive ``ConfigError``.

Values come from the process environment, or from a ``.env`` file when
one is present (python-decouple).
"""

from __future__ import annotations

from typing import Callable, List, Optional

from decouple import Csv, UndefinedValueError
from decouple import config as env_config
from django.core.exceptions import ImproperlyConfigured
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ConfigError(ImproperlyConfigured):
    """Required configuration is absent or malformed."""


class Envs(BaseModel):
    """Validated, immutable process configuration."""

    model_config = ConfigDict(frozen=True)

    port: int = Field(ge=1, le=65535)
    database_url: str = Field(min_length=1)
    broker_servers: List[str] = Field(min_length=1)

    @field_validator("broker_servers")
    @classmethod
    def servers_must_not_be_blank(cls, v: List[str]) -> List[str]:
        if any(not server for server in v):
            raise ValueError("Broker server addresses must not be empty.")
        return v


def load_envs(source: Optional[Callable[..., object]] = None) -> Envs:
    """Read and validate ``PORT``, ``DATABASE_URL`` and ``BROKER_SERVERS``.

    ``source`` defaults to decouple's ``config`` and may be any callable
    with the same signature (e.g. ``decouple.Config(RepositoryEnv(path))``).

    Raises:
        ConfigError: a variable is missing or fails validation.
    """
    read = source or env_config
    try:
        raw = {
            "port": read("PORT"),
            "database_url": read("DATABASE_URL"),
            "broker_servers": read("BROKER_SERVERS", cast=Csv()),
        }
    except UndefinedValueError as exc:
        raise ConfigError(f"Config validation error: {exc}") from exc

    try:
        return Envs(**raw)
    except ValidationError as exc:
        raise ConfigError(f"Config validation error: {exc}") from exc
