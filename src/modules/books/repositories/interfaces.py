"""Book repository interface.

Extends ``IRepository[Book]`` with the catalog look-ups used by the
book and order services.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.books.domain import Book


class IBookRepository(IRepository["Book"]):
    """Repository contract for the Book aggregate."""

    @abstractmethod
    def get_by_category(self, category: str) -> List[Book]:
        """Books in the given ``BookCategory``."""

    @abstractmethod
    def search(self, term: str) -> List[Book]:
        """Books whose title or author contains *term* (case-insensitive)."""

    @abstractmethod
    def get_by_status(self, status: str) -> List[Book]:
        """Books in the given ``BookStatus``."""

    @abstractmethod
    def exists_by_isbn(self, isbn: str) -> bool:
        """Return ``True`` if a book with this ISBN is already registered."""
