#!/usr/bin/env python
"""Django's command-line utility for administrative tasks."""

import os
import sys


def main(argv=None) -> None:
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

    from django.core.management import execute_from_command_line

    from config.celery import app as celery_app
    from config.celery import configure_transport
    from config.envs import load_envs

    argv = list(sys.argv if argv is None else argv)

    # Fails fast on missing PORT / DATABASE_URL / BROKER_SERVERS.
    envs = load_envs()
    configure_transport(celery_app, envs)

    if argv[1:2] == ["runserver"] and all(arg.startswith("-") for arg in argv[2:]):
        argv.append(f"0.0.0.0:{envs.port}")

    execute_from_command_line(argv)


if __name__ == "__main__":
    main()
