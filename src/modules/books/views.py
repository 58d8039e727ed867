"""Book API views.

Exposes the ``BookService`` via HTTP using DRF ViewSets.  Domain
exceptions propagate to ``standard_exception_handler``, which maps them
to HTTP status codes.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from modules.books.dtos import CreateBookDTO, UpdateBookDTO
from modules.books.filters import BookFilter
from modules.books.models import BookModel
from modules.books.serializers import CreateBookSerializer, UpdateBookSerializer
from modules.books.services import BookService
from modules.core.viewsets import UnitOfWorkViewSet


class BookViewSet(UnitOfWorkViewSet):
    """ViewSet for the book catalog.

    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    service_class = BookService
    queryset = BookModel.objects.none()
    filterset_class = BookFilter
    filter_backends = [DjangoFilterBackend]

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/books/

        Filters: ``search`` (title/author), ``category``, ``status``,
        ``author``, ``min_price``, ``max_price``.
        """
        books = self._service.list_books(self.query_filters(request))
        return self.paginated(request, books)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/books/{pk}/"""
        book = self._service.get_book(pk)
        if book is None:
            return self.not_found(f"Book with ID {pk} not found")
        return self.one(book)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/books/"""
        serializer = CreateBookSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        book = self._service.create_book(CreateBookDTO(**serializer.validated_data))
        return self.one(book, status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/books/{pk}/"""
        serializer = UpdateBookSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        book = self._service.update_book(pk, UpdateBookDTO(**serializer.validated_data))
        return self.one(book)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/books/{pk}/"""
        if not self._service.delete_book(pk):
            return self.not_found(f"Book with ID {pk} not found")
        return Response(status=status.HTTP_204_NO_CONTENT)
