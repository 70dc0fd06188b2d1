"""
Specification Pattern

A specification is one named query criterion. Repositories take a single
specification argument instead of a growing list of keyword filters, and the
criterion itself lives next to the other catalog lookups.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar


T = TypeVar('T')


class Specification(ABC, Generic[T]):
    """A filter over the rows of one model."""

    @abstractmethod
    def to_sql_filter(self):
        """
        Express this criterion as a SQLAlchemy filter clause.

        Returns:
            SQLAlchemy filter expression
        """
