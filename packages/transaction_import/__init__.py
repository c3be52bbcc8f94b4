"""Public interface for the ``transaction_import`` package.

Only symbol re-exports live here; see ``transaction_import.api`` for the entry
points and ``transaction_import.importer`` for the pipeline itself.
"""

from .api import delete_transaction, import_transactions, remove_transaction
from .categories import resolve_categories
from .importer import TransactionImporter
from .ingest.parser import iter_candidate_records
from .models import CandidateRecord, CategoryResolution, TransactionDraft
from .persistence import SqlAlchemyStorageGateway, StorageGateway

__all__ = [
    # API
    "import_transactions",
    "delete_transaction",
    "remove_transaction",
    # Pipeline
    "TransactionImporter",
    "iter_candidate_records",
    "resolve_categories",
    "StorageGateway",
    "SqlAlchemyStorageGateway",
    # Models / types
    "CandidateRecord",
    "CategoryResolution",
    "TransactionDraft",
]
