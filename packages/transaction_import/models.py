"""Data models for the ``transaction_import`` pipeline.

Two shapes flow through an import run:

- :class:`CandidateRecord`: a parsed, not-yet-persisted CSV row. Values are
  kept as text exactly as parsed; the category is a free-text name.
- :class:`TransactionDraft`: the validated payload handed to the storage
  gateway, with ``value`` converted to an integer and the category resolved to
  an identity.

Persisted entities (``Category``/``Transaction``) live in ``db.models.finance``.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field

from db.models.finance import Category
from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True, slots=True)
class CandidateRecord:
    """A single parsed input row (``title, type, value, category``).

    ``category_name`` is an empty string when the row carries no category.
    """

    title: str
    kind: str
    value: str
    category_name: str = ""


class TransactionDraft(BaseModel):
    """A transaction ready to be bulk-created by the storage gateway."""

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    title: str
    kind: str
    value: int
    category_id: uuid.UUID | None = None


@dataclass(frozen=True, slots=True)
class CategoryResolution:
    """Outcome of one resolver run.

    ``found`` holds categories that already existed in storage, ``created``
    the ones inserted by this run (in first-seen input order).
    """

    found: list[Category] = field(default_factory=list)
    created: list[Category] = field(default_factory=list)

    @property
    def by_title(self) -> Mapping[str, Category]:
        return {c.title: c for c in (*self.found, *self.created)}


__all__ = [
    "CandidateRecord",
    "TransactionDraft",
    "CategoryResolution",
]
