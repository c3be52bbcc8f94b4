"""Persistence integration for transaction_import.

The import pipeline talks to storage only through :class:`StorageGateway`.
:class:`SqlAlchemyStorageGateway` implements it on top of a SQLAlchemy session
and the ORM models defined in ``db.models.finance``.

Scope:
- Look up categories by an exact set of titles.
- Bulk-create categories and transactions.
- Delete a transaction by id (idempotent).

Writes are flushed, never committed, by the data methods. Commit boundaries
are explicit via ``commit()``/``rollback()`` so the orchestrator owns the unit
of work.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Protocol

from db.models.finance import Category, Transaction
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from .logging_setup import get_logger
from .models import TransactionDraft

logger = get_logger("transaction_import.persistence")


class StorageGateway(Protocol):
    def find_categories_by_titles(self, titles: set[str]) -> list[Category]: ...

    def create_categories(self, titles: Sequence[str]) -> list[Category]: ...

    def create_transactions(self, drafts: Sequence[TransactionDraft]) -> list[Transaction]: ...

    def delete_transaction(self, transaction_id: uuid.UUID) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


class SqlAlchemyStorageGateway:
    """Storage gateway backed by a SQLAlchemy :class:`~sqlalchemy.orm.Session`.

    The caller owns the session lifecycle (typically via
    ``db.client.session_scope``).
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_categories_by_titles(self, titles: set[str]) -> list[Category]:
        if not titles:
            return []
        rows = (
            self._session.execute(select(Category).where(Category.title.in_(sorted(titles))))
            .scalars()
            .all()
        )
        return list(rows)

    def create_categories(self, titles: Sequence[str]) -> list[Category]:
        """Insert one category per title in a single flush.

        A uniqueness violation surfaces as ``sqlalchemy.exc.IntegrityError``.
        """

        rows = [Category(title=t) for t in titles]
        if not rows:
            return []
        self._session.add_all(rows)
        self._session.flush()
        logger.debug("created %d categories", len(rows))
        return rows

    def create_transactions(self, drafts: Sequence[TransactionDraft]) -> list[Transaction]:
        rows: list[Transaction] = []
        for d in drafts:
            category: Category | None = None
            if d.category_id is not None:
                # Identity-map hit for categories resolved in this session
                category = self._session.get(Category, d.category_id)
                if category is None:
                    raise ValueError(f"Category not found: {d.category_id}")
            # Assign the relationship even when None so returned rows never
            # need a lazy load once the session is closed.
            rows.append(Transaction(title=d.title, kind=d.kind, value=d.value, category=category))
        if not rows:
            return []
        self._session.add_all(rows)
        self._session.flush()
        logger.debug("created %d transactions", len(rows))
        return rows

    def delete_transaction(self, transaction_id: uuid.UUID) -> bool:
        """Delete a transaction; a missing id is a no-op returning ``False``."""

        result = self._session.execute(
            delete(Transaction).where(Transaction.id == transaction_id)
        )
        return bool(result.rowcount)

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()


__all__ = [
    "StorageGateway",
    "SqlAlchemyStorageGateway",
]
