"""Django ORM implementation of the Book repository."""

from __future__ import annotations

from typing import Any, Dict, List

import structlog
from django.db.models import Q

from modules.books.domain import Book
from modules.books.filters import BookFilter
from modules.books.models import BookModel
from modules.books.repositories.interfaces import IBookRepository
from modules.core.repositories.django_repository import TrackedDjangoRepository

logger = structlog.get_logger(__name__)


class BookDjangoRepository(TrackedDjangoRepository[Book], IBookRepository):
    """Concrete Book repository backed by Django ORM."""

    model = BookModel
    kind = "book"
    filterset_class = BookFilter

    def _to_entity(self, row: BookModel) -> Book:
        return Book.restore(
            id=row.id,
            title=row.title,
            author=row.author,
            isbn=row.isbn,
            description=row.description,
            price=row.price,
            stock_quantity=row.stock_quantity,
            category=row.category,
            published_date=row.published_date,
            publisher=row.publisher,
            pages=row.pages,
            status=row.status,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _to_fields(self, entity: Book) -> Dict[str, Any]:
        return {
            "title": entity.title,
            "author": entity.author,
            "isbn": entity.isbn,
            "description": entity.description,
            "price": entity.price,
            "stock_quantity": entity.stock_quantity,
            "category": entity.category,
            "published_date": entity.published_date,
            "publisher": entity.publisher,
            "pages": entity.pages,
            "status": entity.status,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    def _write(self, entity: Book) -> int:
        affected = super()._write(entity)
        logger.info(
            "book.saved",
            book_id=str(entity.id),
            stock_quantity=entity.stock_quantity,
            status=entity.status,
        )
        return affected

    # ------------------------------------------------------------------
    # Catalog queries
    # ------------------------------------------------------------------

    def get_by_category(self, category: str) -> List[Book]:
        return self._materialize(self._queryset().filter(category=category))

    def search(self, term: str) -> List[Book]:
        queryset = self._queryset().filter(
            Q(title__icontains=term) | Q(author__icontains=term)
        )
        return self._materialize(queryset)

    def get_by_status(self, status: str) -> List[Book]:
        return self._materialize(self._queryset().filter(status=status))

    def exists_by_isbn(self, isbn: str) -> bool:
        return self._queryset().filter(isbn=isbn.strip()).exists()
