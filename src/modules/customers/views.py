"""Customer API views.

Exposes the ``CustomerService`` via HTTP using DRF ViewSets.  Domain
exceptions propagate to ``standard_exception_handler``, which maps them
to HTTP status codes.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from modules.core.viewsets import UnitOfWorkViewSet
from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
from modules.customers.filters import CustomerFilter
from modules.customers.models import CustomerModel
from modules.customers.serializers import CustomerSerializer, CustomerStatusSerializer
from modules.customers.services import CustomerService


class CustomerViewSet(UnitOfWorkViewSet):
    """ViewSet for Customer operations.

    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    service_class = CustomerService
    queryset = CustomerModel.objects.none()
    filterset_class = CustomerFilter
    filter_backends = [DjangoFilterBackend]

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/

        Filters: ``name`` (first or last name), ``email``, ``status``.
        """
        customers = self._service.list_customers(self.query_filters(request))
        return self.paginated(request, customers)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        customer = self._service.get_customer(pk)
        if customer is None:
            return self.not_found(f"Customer with ID {pk} not found")
        return self.one(customer)

    @action(detail=False, methods=["get"], url_path=r"email/(?P<email>[^/]+)")
    def by_email(self, request: Request, email: str) -> Response:
        """GET /api/v1/customers/email/{email}/"""
        customer = self._service.get_customer_by_email(email)
        if customer is None:
            return self.not_found(f"Customer with email {email} not found")
        return self.one(customer)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        serializer = CustomerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        customer = self._service.create_customer(
            CreateCustomerDTO(**serializer.validated_data)
        )
        return self.one(customer, status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/customers/{pk}/"""
        serializer = CustomerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        customer = self._service.update_customer(
            pk, UpdateCustomerDTO(**serializer.validated_data)
        )
        return self.one(customer)

    @action(detail=True, methods=["put"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/customers/{pk}/status/"""
        serializer = CustomerStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        customer = self._service.update_customer_status(
            pk, serializer.validated_data["status"]
        )
        return self.one(customer)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/"""
        if not self._service.delete_customer(pk):
            return self.not_found(f"Customer with ID {pk} not found")
        return Response(status=status.HTTP_204_NO_CONTENT)
