"""Public API for the ``transaction_import`` package.

Two entry points, each running in its own database session:

- :func:`import_transactions` imports an uploaded CSV file.
- :func:`delete_transaction` removes a single transaction by id.

Components receive the storage gateway explicitly; nothing here resolves
repositories from global state beyond the shared engine in ``db.client``.
"""

from __future__ import annotations

import os
import uuid

from db.client import session_scope
from db.models.finance import Transaction

from .config import ImportSettings
from .importer import TransactionImporter
from .logging_setup import get_logger
from .persistence import SqlAlchemyStorageGateway, StorageGateway

logger = get_logger("transaction_import.api")


def import_transactions(
    csv_filename: str | os.PathLike[str],
    *,
    database_url: str | None = None,
    upload_dir: str | os.PathLike[str] | None = None,
    delimiter: str | None = None,
    atomic: bool = True,
) -> list[Transaction]:
    """Import transactions from ``csv_filename`` and return the created rows.

    ``csv_filename`` is resolved against ``upload_dir`` (falls back to
    ``TRANSACTION_IMPORT_UPLOAD_DIR``, then ``./tmp``). The file is deleted
    once the import finishes, successfully or not.

    Storage errors propagate unchanged; no partial batch is committed when
    ``atomic`` is true.
    """

    settings = ImportSettings.from_env(upload_dir=upload_dir, delimiter=delimiter)
    with session_scope(database_url=database_url) as session:
        importer = TransactionImporter(
            SqlAlchemyStorageGateway(session),
            upload_dir=settings.upload_dir,
            delimiter=settings.delimiter,
            atomic=atomic,
        )
        return importer.run(csv_filename)


def remove_transaction(gateway: StorageGateway, transaction_id: uuid.UUID) -> bool:
    """Delete ``transaction_id`` through ``gateway``; absent ids are a no-op."""

    removed = gateway.delete_transaction(transaction_id)
    if not removed:
        logger.info("transaction %s not found; nothing to delete", transaction_id)
    return removed


def delete_transaction(
    transaction_id: uuid.UUID | str,
    *,
    database_url: str | None = None,
) -> bool:
    """Delete a transaction by id. Returns ``True`` when a row was removed."""

    tx_id = transaction_id if isinstance(transaction_id, uuid.UUID) else uuid.UUID(transaction_id)
    with session_scope(database_url=database_url) as session:
        return remove_transaction(SqlAlchemyStorageGateway(session), tx_id)


__all__ = [
    "import_transactions",
    "delete_transaction",
    "remove_transaction",
]
