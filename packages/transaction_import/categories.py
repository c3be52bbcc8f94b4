"""Category resolution for an import run.

Maps free-text category names referenced by candidate records to persisted
``categories`` rows, creating the missing ones. Resolution is batched: one
lookup for the whole name set and one bulk create for what is missing, never a
per-row query.

Titles are matched exactly (case-sensitive, no normalization beyond the
trimming done by the parser).
"""

from __future__ import annotations

from collections.abc import Iterable

from .logging_setup import get_logger
from .models import CategoryResolution
from .persistence import StorageGateway

logger = get_logger("transaction_import.categories")


def distinct_names(names: Iterable[str]) -> list[str]:
    """Return distinct non-empty names in first-seen order."""

    return list(dict.fromkeys(n for n in names if n))


def resolve_categories(gateway: StorageGateway, names: Iterable[str]) -> CategoryResolution:
    """Resolve ``names`` to categories, creating those not yet in storage.

    Parameters
    ----------
    gateway:
        Storage gateway used for the lookup and the bulk create.
    names:
        Category names referenced by the candidates of one import. May contain
        duplicates and empty strings; empties mean "no category" and are
        ignored.

    Returns
    -------
    CategoryResolution
        Pre-existing categories in ``found``, newly inserted ones in
        ``created``; ``by_title`` covers every non-empty input name.

    Errors raised by the gateway (e.g., a uniqueness conflict when a
    concurrent import created the same title) propagate unchanged.
    """

    wanted = distinct_names(names)
    if not wanted:
        return CategoryResolution()

    found = gateway.find_categories_by_titles(set(wanted))
    existing = {c.title for c in found}
    missing = [n for n in wanted if n not in existing]

    created = gateway.create_categories(missing) if missing else []
    logger.info(
        "resolved %d categories (%d existing, %d created)",
        len(wanted),
        len(found),
        len(created),
    )
    return CategoryResolution(found=list(found), created=list(created))


__all__ = ["distinct_names", "resolve_categories"]
