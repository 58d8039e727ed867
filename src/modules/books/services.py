"""Book service layer (Use Cases).

Orchestrates the catalog commands and queries through the injected
``IUnitOfWork``.

Business rules enforced here:
- ISBN must be unique across the catalog.
- A book referenced by order items cannot be deleted.
- Entity invariants (non-blank fields, non-negative price/stock,
  positive pages) are enforced by ``Book`` itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog

from modules.books.domain import Book
from modules.books.dtos import BookOutputDTO
from modules.books.exceptions import BookAlreadyExists, BookInUse, BookNotFound

if TYPE_CHECKING:
    from modules.books.dtos import CreateBookDTO, UpdateBookDTO
    from modules.core.unit_of_work.interfaces import IUnitOfWork

logger = structlog.get_logger(__name__)


class BookService:
    """Application service for Book use-cases.

    Receives an ``IUnitOfWork`` via constructor injection (DIP).
    """

    def __init__(self, unit_of_work: IUnitOfWork) -> None:
        self._uow = unit_of_work

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_book(self, dto: CreateBookDTO) -> BookOutputDTO:
        """Register a new book.

        Raises:
            BookAlreadyExists: the ISBN is already registered.
            ValidationError: the book data breaks an entity invariant.
        """
        log = logger.bind(isbn=dto.isbn)

        if self._uow.books.exists_by_isbn(dto.isbn):
            log.warning("book.duplicate_isbn")
            raise BookAlreadyExists(f"Book with ISBN {dto.isbn} already exists")

        book = Book(
            title=dto.title,
            author=dto.author,
            isbn=dto.isbn,
            description=dto.description,
            price=dto.price,
            stock_quantity=dto.stock_quantity,
            category=dto.category,
            published_date=dto.published_date,
            publisher=dto.publisher,
            pages=dto.pages,
        )
        self._uow.books.add(book)
        self._uow.save_changes()
        log.info("book.created", book_id=str(book.id))
        return BookOutputDTO.from_entity(book)

    def update_book(self, book_id: UUID | str, dto: UpdateBookDTO) -> BookOutputDTO:
        """Replace a book's details, price and stock.

        Raises:
            BookNotFound: the book does not exist.
            ValidationError: the new data breaks an entity invariant.
        """
        book = self._uow.books.get_by_id(book_id)
        if book is None:
            raise BookNotFound(f"Book with ID {book_id} not found")

        book.update_details(
            title=dto.title,
            author=dto.author,
            description=dto.description,
            category=dto.category,
            publisher=dto.publisher,
            pages=dto.pages,
        )
        book.update_price(dto.price)
        book.update_stock(dto.stock_quantity)

        self._uow.books.update(book)
        self._uow.save_changes()
        logger.info("book.updated", book_id=str(book.id), status=book.status)
        return BookOutputDTO.from_entity(book)

    def delete_book(self, book_id: UUID | str) -> bool:
        """Delete a book; returns ``False`` if it does not exist.

        Raises:
            BookInUse: order items still reference the book.
        """
        book = self._uow.books.get_by_id(book_id)
        if book is None:
            return False
        if self._uow.orders.exists_with_book(book.id):
            logger.warning("book.delete_blocked", book_id=str(book.id))
            raise BookInUse(
                f"Cannot delete book with ID {book.id}. "
                "Book is referenced by existing orders."
            )
        self._uow.books.delete(book.id)
        self._uow.save_changes()
        logger.info("book.deleted", book_id=str(book.id))
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_book(self, book_id: UUID | str) -> Optional[BookOutputDTO]:
        book = self._uow.books.get_by_id(book_id)
        return BookOutputDTO.from_entity(book) if book is not None else None

    def list_books(self, filters: Optional[Dict[str, Any]] = None) -> List[BookOutputDTO]:
        """Return books, optionally filtered by ``search``, ``category``, ``status``."""
        return [BookOutputDTO.from_entity(b) for b in self._uow.books.list(filters)]

    def search_books(self, term: str) -> List[BookOutputDTO]:
        return [BookOutputDTO.from_entity(b) for b in self._uow.books.search(term)]

    def list_books_by_category(self, category: str) -> List[BookOutputDTO]:
        return [BookOutputDTO.from_entity(b) for b in self._uow.books.get_by_category(category)]
