"""Shared SQLAlchemy models registry for the workspace database.

Currently includes the finance models used by ``transaction_import``.
"""

from .finance import Base, Category, Transaction

__all__ = [
    "Base",
    "Category",
    "Transaction",
]
