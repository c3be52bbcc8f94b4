"""Import orchestrator: CSV file → categories + transactions.

Steps for one run:

1. Open the source file and parse it to completion, collecting candidates and
   the parallel list of category names (empty names included).
2. Resolve all referenced category names in one batch.
3. Bind each candidate to its category (by exact title) as a draft.
4. Bulk-create the drafts.
5. Delete the source file, whatever the outcome; deletion errors are logged.

Commit boundaries
-----------------
With ``atomic=True`` (default) categories and transactions are committed
together after step 4; any failure rolls both back. With ``atomic=False``
categories are committed right after step 2, so a later transaction failure
leaves them in storage.
"""

from __future__ import annotations

import os
from pathlib import Path

from db.models.finance import Transaction

from .categories import resolve_categories
from .ingest.parser import iter_candidate_records
from .logging_setup import get_logger
from .models import CandidateRecord, TransactionDraft
from .persistence import StorageGateway

logger = get_logger("transaction_import.importer")


class TransactionImporter:
    """Run CSV imports against a storage gateway.

    Parameters
    ----------
    gateway:
        Storage gateway; the importer calls its ``commit``/``rollback``.
    upload_dir:
        Directory that relative source names are resolved against.
    delimiter:
        Field delimiter of the input files.
    atomic:
        Commit categories and transactions as one unit (see module docs).
    """

    def __init__(
        self,
        gateway: StorageGateway,
        *,
        upload_dir: str | os.PathLike[str],
        delimiter: str = ",",
        atomic: bool = True,
    ) -> None:
        self._gateway = gateway
        self._upload_dir = Path(upload_dir)
        self._delimiter = delimiter
        self._atomic = atomic

    def source_path(self, source: str | os.PathLike[str]) -> Path:
        # Absolute sources win over the upload directory in ``Path`` joins.
        return self._upload_dir / source

    def run(self, source: str | os.PathLike[str]) -> list[Transaction]:
        """Import ``source`` and return created transactions in input order."""

        path = self.source_path(source)
        try:
            candidates, names = self._read_candidates(path)
            try:
                created = self._persist(candidates, names)
            except Exception:
                self._gateway.rollback()
                raise
        finally:
            self._release(path)

        logger.info("imported %d transactions from %s", len(created), path.name)
        return created

    def _read_candidates(self, path: Path) -> tuple[list[CandidateRecord], list[str]]:
        candidates: list[CandidateRecord] = []
        names: list[str] = []
        # Undecodable bytes become U+FFFD rather than failing the batch
        with path.open(encoding="utf-8", errors="replace", newline="") as f:
            for record in iter_candidate_records(f, delimiter=self._delimiter):
                candidates.append(record)
                names.append(record.category_name)
        logger.debug("parsed %d candidate records from %s", len(candidates), path.name)
        return candidates, names

    def _persist(self, candidates: list[CandidateRecord], names: list[str]) -> list[Transaction]:
        resolution = resolve_categories(self._gateway, names)
        if not self._atomic:
            self._gateway.commit()

        by_title = resolution.by_title
        drafts: list[TransactionDraft] = []
        for c in candidates:
            category = by_title.get(c.category_name) if c.category_name else None
            if c.category_name and category is None:
                logger.warning("category %r not resolved; leaving it unset", c.category_name)
            drafts.append(
                TransactionDraft(
                    title=c.title,
                    kind=c.kind,
                    value=int(c.value),
                    category_id=category.id if category is not None else None,
                )
            )

        created = self._gateway.create_transactions(drafts)
        self._gateway.commit()
        return created

    def _release(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("could not delete import source %s: %s", path, e)


__all__ = ["TransactionImporter"]
