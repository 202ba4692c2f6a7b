"""Base abstract models shared by the service modules.

Provides ``TimestampedModel``: ``created_at`` / ``updated_at`` bookkeeping
on top of the project-wide integer primary key (``DEFAULT_AUTO_FIELD``).
Writes issued through ``QuerySet.update`` bypass ``auto_now`` and must set
``updated_at`` themselves.
"""

from __future__ import annotations

from django.db import models


class TimestampedModel(models.Model):
    """Abstract base with timestamp bookkeeping."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
