"""Process-wide database binding.

The first call that needs the database binds one engine to ``DATABASE_URL``
(or to an explicit URL). Every session afterwards comes from that binding;
asking for a different URL is an error until :func:`reset_engine` drops it.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


@dataclass(frozen=True)
class _Binding:
    url: str
    engine: Engine
    sessions: sessionmaker[Session]


_binding: _Binding | None = None


def _bind(database_url: str | None) -> _Binding:
    global _binding
    url = database_url or os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set; cannot initialize database client")

    if _binding is None:
        engine = create_engine(url, pool_pre_ping=True)
        # Imported rows are printed after their session commits
        _binding = _Binding(url, engine, sessionmaker(bind=engine, expire_on_commit=False))
    elif _binding.url != url:
        raise RuntimeError(
            f"database already bound to {_binding.engine.url!r}; call reset_engine() first"
        )
    return _binding


def get_engine(*, database_url: str | None = None) -> Engine:
    return _bind(database_url).engine


def get_session(*, database_url: str | None = None) -> Session:
    return _bind(database_url).sessions()


def reset_engine() -> None:
    """Dispose the bound engine, if any."""

    global _binding
    if _binding is not None:
        _binding.engine.dispose()
        _binding = None


@contextmanager
def session_scope(*, database_url: str | None = None) -> Iterator[Session]:
    """Yield a session that commits on exit, or rolls back if the block raises."""

    session = get_session(database_url=database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = ["get_engine", "get_session", "reset_engine", "session_scope"]
