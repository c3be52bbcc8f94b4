"""Environment-driven settings for the import pipeline.

Values are read from the process environment (the CLI loads a local ``.env``
first). Explicit arguments passed to the API or CLI always take precedence.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

UPLOAD_DIR_ENV_VAR = "TRANSACTION_IMPORT_UPLOAD_DIR"
DELIMITER_ENV_VAR = "TRANSACTION_IMPORT_CSV_DELIMITER"

DEFAULT_UPLOAD_DIR = Path("tmp")
DEFAULT_DELIMITER = ","


@dataclass(frozen=True, slots=True)
class ImportSettings:
    upload_dir: Path = DEFAULT_UPLOAD_DIR
    delimiter: str = DEFAULT_DELIMITER

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError(
                f"CSV delimiter must be a single character, got {self.delimiter!r}"
            )

    @classmethod
    def from_env(
        cls,
        *,
        upload_dir: str | os.PathLike[str] | None = None,
        delimiter: str | None = None,
    ) -> ImportSettings:
        """Build settings from explicit overrides, falling back to the environment."""

        env_dir = os.getenv(UPLOAD_DIR_ENV_VAR)
        resolved_dir = Path(upload_dir) if upload_dir else Path(env_dir or DEFAULT_UPLOAD_DIR)
        resolved_delim = delimiter or os.getenv(DELIMITER_ENV_VAR) or DEFAULT_DELIMITER
        return cls(upload_dir=resolved_dir, delimiter=resolved_delim)


__all__ = [
    "ImportSettings",
    "UPLOAD_DIR_ENV_VAR",
    "DELIMITER_ENV_VAR",
]
