"""Base abstract model for persisted aggregates.

Rows are written from domain entities by the repositories, so the
timestamps come from the entity instead of ``auto_now`` fields.
"""

from __future__ import annotations

import uuid6
from django.db import models
from django.utils import timezone


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(null=True, blank=True, default=None)

    class Meta:
        abstract = True
