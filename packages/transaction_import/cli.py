# ruff: noqa: I001
"""CLI for the ``transaction_import`` package.

This module exposes callable command handlers (``cmd_import_transactions``,
``cmd_delete_transaction``) and a Typer-based console interface. Environment
variables (notably ``DATABASE_URL``) are loaded from a local ``.env`` using
``python-dotenv`` before delegating to command logic, which lives in
``transaction_import.api``.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .logging_setup import configure_logging


def cmd_import_transactions(
    csv_path: str,
    *,
    database_url: str | None = None,
    upload_dir: str | None = None,
    delimiter: str | None = None,
    atomic: bool = True,
) -> int:
    """Import ``csv_path`` and print created transactions to stdout.

    Writes one line per created transaction in input order, formatted as
    ``"<id>\\t<type>\\t<value>\\t<title>\\t<category>"`` where ``<category>``
    is empty when the transaction has none.

    Errors are written to stderr and the function returns ``1``; on success
    returns ``0``.
    """

    import csv

    from sqlalchemy.exc import SQLAlchemyError

    from .api import import_transactions

    try:
        created = import_transactions(
            csv_path,
            database_url=database_url,
            upload_dir=upload_dir,
            delimiter=delimiter,
            atomic=atomic,
        )
    except FileNotFoundError:
        print(f"Error: File not found: {csv_path}", file=sys.stderr)
        return 1
    except PermissionError:
        print(f"Error: Permission denied: {csv_path}", file=sys.stderr)
        return 1
    except csv.Error as e:
        print(f"Error: Failed to parse CSV: {e}", file=sys.stderr)
        return 1
    except SQLAlchemyError as e:
        print(f"Error: persistence failed: {e}", file=sys.stderr)
        return 1
    except Exception as e:  # pragma: no cover - defensive
        print(f"Error: import failed: {e}", file=sys.stderr)
        return 1

    for tx in created:
        category = tx.category.title if tx.category is not None else ""
        print(f"{tx.id}\t{tx.kind}\t{tx.value}\t{tx.title}\t{category}")
    return 0


def cmd_delete_transaction(transaction_id: str, *, database_url: str | None = None) -> int:
    """Delete a transaction by id. Unknown ids succeed as a no-op."""

    import uuid

    from .api import delete_transaction

    try:
        tx_id = uuid.UUID(transaction_id)
    except ValueError:
        print(f"Error: invalid transaction id: {transaction_id!r}", file=sys.stderr)
        return 1

    try:
        removed = delete_transaction(tx_id, database_url=database_url)
    except Exception as e:  # pragma: no cover - defensive
        print(f"Error: delete failed: {e}", file=sys.stderr)
        return 1

    print("deleted" if removed else "not found")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Import transactions from CSV uploads into the finance database. "
        "Loads DATABASE_URL from a local .env before running."
    ),
)

# Module-level option object to satisfy ruff B008 (no calls in parameter
# defaults). Typer will inspect this when used as a default value below.
CSV_PATH_OPTION: OptionInfo = typer.Option(
    ...,  # required
    "--csv-path",
    help="CSV file to import (relative names resolve against the upload dir)",
    dir_okay=False,
    file_okay=True,
    exists=False,  # allow non-existent here; the handler will report nice errors
)


@app.command("import-transactions")
def import_transactions_cmd(
    csv_path: Annotated[Path, CSV_PATH_OPTION],
    *,
    database_url: str | None = typer.Option(
        None, help="Override DATABASE_URL (falls back to env var)."
    ),
    upload_dir: str | None = typer.Option(
        None, help="Override TRANSACTION_IMPORT_UPLOAD_DIR (default ./tmp)."
    ),
    delimiter: str | None = typer.Option(
        None, help="Field delimiter (falls back to TRANSACTION_IMPORT_CSV_DELIMITER or ',')."
    ),
    two_phase: bool = typer.Option(
        False,
        "--two-phase",
        help="Commit new categories before creating transactions.",
    ),
) -> None:
    """Import a CSV of ``title,type,value,category`` rows (header skipped)."""

    code = cmd_import_transactions(
        str(csv_path),
        database_url=database_url,
        upload_dir=upload_dir,
        delimiter=delimiter,
        atomic=not two_phase,
    )
    raise typer.Exit(code)


@app.command("delete-transaction")
def delete_transaction_cmd(
    transaction_id: str,
    *,
    database_url: str | None = typer.Option(
        None, help="Override DATABASE_URL (falls back to env var)."
    ),
) -> None:
    """Delete a transaction by id."""

    raise typer.Exit(cmd_delete_transaction(transaction_id, database_url=database_url))


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None, help="Log level (falls back to TRANSACTION_IMPORT_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory without overriding any
    already-set environment variables, then configures logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    # Central logging setup so child loggers inherit configuration
    configure_logging(log_level)


if __name__ == "__main__":  # pragma: no cover
    app()
