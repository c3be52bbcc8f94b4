"""Record parser for delimited transaction exports.

Input layout (positional, header line ignored):
``title, type, value, category``

Rows are yielded lazily as :class:`~transaction_import.models.CandidateRecord`
objects. The parser is lenient by policy: structurally malformed rows are
dropped rather than reported. A row is kept only when

- it has exactly four fields,
- ``title``, ``type`` and ``value`` are non-empty after trimming,
- ``value`` is a signed base-10 integer that fits the 32-bit ``value`` column.

``category`` may be empty. ``type`` is passed through unvalidated. A row the
csv module itself rejects (e.g., a field over ``csv.field_size_limit()``) is
dropped too; the reader resumes at the next line.
"""

from __future__ import annotations

import csv
import re
from collections.abc import Iterator
from typing import TextIO

from ..logging_setup import get_logger
from ..models import CandidateRecord

logger = get_logger("transaction_import.ingest.parser")

EXPECTED_FIELDS = 4

_INT_RE = re.compile(r"[+-]?[0-9]+")

# Range of the ``transactions.value`` INT column
VALUE_MIN = -(2**31)
VALUE_MAX = 2**31 - 1


def _parse_value(value: str) -> int | None:
    if not _INT_RE.fullmatch(value):
        return None
    # Bound the digit count before int() so huge inputs stay cheap
    if len(value.lstrip("+-").lstrip("0")) > 10:
        return None
    n = int(value)
    return n if VALUE_MIN <= n <= VALUE_MAX else None


def iter_candidate_records(
    stream: TextIO,
    *,
    skip_lines: int = 1,
    trim: bool = True,
    delimiter: str = ",",
) -> Iterator[CandidateRecord]:
    """Yield candidate records from ``stream`` in input order.

    The generator is single-pass; it reads ``stream`` incrementally and does
    not close it.
    """

    reader = csv.reader(stream, delimiter=delimiter)
    line_no = 0
    while True:
        line_no += 1
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            logger.debug("line %d: unreadable row (%s); skipped", line_no, e)
            continue
        if line_no <= skip_lines:
            continue
        if trim:
            row = [field.strip() for field in row]
        if len(row) != EXPECTED_FIELDS:
            logger.debug(
                "line %d: expected %d fields, got %d; skipped",
                line_no,
                EXPECTED_FIELDS,
                len(row),
            )
            continue
        title, kind, value, category_name = row
        if not title or not kind or not value:
            logger.debug("line %d: missing title/type/value; skipped", line_no)
            continue
        if _parse_value(value) is None:
            logger.debug("line %d: value %r is not a 32-bit integer; skipped", line_no, value)
            continue
        yield CandidateRecord(
            title=title,
            kind=kind,
            value=value,
            category_name=category_name,
        )


__all__ = ["iter_candidate_records", "EXPECTED_FIELDS"]
