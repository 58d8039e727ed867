"""Base ViewSet wiring a request-scoped unit of work into a service.

Views do not touch the ORM: each request gets its own
``DjangoUnitOfWork`` and the service built on it.  The unit of work is
closed once the response is ready, rolling back anything left open.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.core.permissions import IsStaffOrReadOnly
from modules.core.unit_of_work.django_unit_of_work import DjangoUnitOfWork


class UnitOfWorkViewSet(GenericViewSet):
    """``GenericViewSet`` whose ``_service`` is built on a fresh unit of work.

    Subclasses set ``service_class`` (any callable taking an ``IUnitOfWork``).
    """

    service_class: Callable[[Any], Any]
    permission_classes = [IsStaffOrReadOnly]
    pagination_class = StandardResultsSetPagination
    open_write_actions: tuple[str, ...] = ()

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._uow = DjangoUnitOfWork()
        self._service = self.service_class(self._uow)

    def finalize_response(self, request: Request, response: Response, *args, **kwargs):
        self._uow.close()
        return super().finalize_response(request, response, *args, **kwargs)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def query_filters(self, request: Request) -> dict[str, str]:
        """Non-empty query parameters, minus pagination controls."""
        reserved = {"page", StandardResultsSetPagination.page_size_query_param}
        return {
            key: value
            for key, value in request.query_params.items()
            if key not in reserved and value != ""
        }

    def paginated(self, request: Request, items: List[Any]) -> Response:
        page = self.paginate_queryset(items)
        data = [dto.model_dump(mode="json") for dto in page or items]
        if page is None:
            return Response(data)
        return self.get_paginated_response(data)

    def not_found(self, detail: str) -> Response:
        return Response(
            {
                "type": "client_error",
                "errors": [{"code": "not_found", "detail": detail, "attr": None}],
            },
            status=status.HTTP_404_NOT_FOUND,
        )

    @staticmethod
    def one(dto: Optional[Any], http_status: int = status.HTTP_200_OK) -> Response:
        return Response(dto.model_dump(mode="json"), status=http_status)
