"""Django ORM implementation of the Customer repository.

Methods return ``None`` for missing customers instead of raising; the
Service Layer decides how to translate a missing entity.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog

from modules.core.repositories.django_repository import TrackedDjangoRepository
from modules.customers.domain import Customer
from modules.customers.filters import CustomerFilter
from modules.customers.models import CustomerModel
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(TrackedDjangoRepository[Customer], ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    model = CustomerModel
    kind = "customer"
    filterset_class = CustomerFilter

    def _to_entity(self, row: CustomerModel) -> Customer:
        return Customer.restore(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
            phone_number=row.phone_number,
            address=row.address,
            status=row.status,
            registration_date=row.registration_date,
            last_login_date=row.last_login_date,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _to_fields(self, entity: Customer) -> Dict[str, Any]:
        address = entity.address
        return {
            "first_name": entity.first_name,
            "last_name": entity.last_name,
            "email": entity.email,
            "phone_number": entity.phone_number,
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "zip_code": address.zip_code,
            "country": address.country,
            "status": entity.status,
            "registration_date": entity.registration_date,
            "last_login_date": entity.last_login_date,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    def _remove(self, id) -> int:
        deleted = super()._remove(id)
        logger.info("customer.deleted", customer_id=str(id), affected_rows=deleted)
        return deleted

    def get_by_email(self, email: str) -> Optional[Customer]:
        row = self._queryset().filter(email__iexact=email.strip()).first()
        return self._track_row(row) if row is not None else None

    def get_by_status(self, status: str) -> List[Customer]:
        return self._materialize(self._queryset().filter(status=status))

    def exists_by_email(self, email: str) -> bool:
        return self._queryset().filter(email__iexact=email.strip()).exists()
