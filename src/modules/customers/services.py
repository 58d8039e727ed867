"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate through the
injected ``IUnitOfWork``.

Business rules enforced here:
- Email must be unique across customers.
- Suspended and Banned both collapse onto ``Customer.deactivate()``.
- A customer with orders that are not Delivered or Cancelled cannot be
  deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog

from modules.customers.constants import DEACTIVATING_STATUSES, CustomerStatus
from modules.customers.domain import Customer
from modules.customers.dtos import CustomerOutputDTO
from modules.customers.exceptions import (
    CustomerAlreadyExists,
    CustomerHasActiveOrders,
    CustomerNotFound,
    InvalidCustomerStatus,
)

if TYPE_CHECKING:
    from modules.core.unit_of_work.interfaces import IUnitOfWork
    from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``IUnitOfWork`` via constructor injection (DIP).
    """

    def __init__(self, unit_of_work: IUnitOfWork) -> None:
        self._uow = unit_of_work

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_customer(self, dto: CreateCustomerDTO) -> CustomerOutputDTO:
        """Register a new customer.

        Raises:
            CustomerAlreadyExists: the email is already taken.
            ValidationError: a required field or address part is blank.
        """
        log = logger.bind(email=dto.email)

        if self._uow.customers.exists_by_email(dto.email):
            log.warning("customer.duplicate_email")
            raise CustomerAlreadyExists(
                f"Email {dto.email} is already taken by another customer"
            )

        customer = Customer(
            first_name=dto.first_name,
            last_name=dto.last_name,
            email=dto.email,
            phone_number=dto.phone_number,
            address=dto.address.to_value_object(),
        )
        self._uow.customers.add(customer)
        self._uow.save_changes()
        log.info("customer.created", customer_id=str(customer.id))
        return CustomerOutputDTO.from_entity(customer)

    def update_customer(
        self, customer_id: UUID | str, dto: UpdateCustomerDTO
    ) -> CustomerOutputDTO:
        """Replace a customer's name, contact info and address.

        Raises:
            CustomerNotFound: the customer does not exist.
            CustomerAlreadyExists: the new email belongs to another customer.
        """
        customer = self._uow.customers.get_by_id(customer_id)
        if customer is None:
            raise CustomerNotFound(f"Customer with ID {customer_id} not found")

        log = logger.bind(customer_id=str(customer.id))

        existing = self._uow.customers.get_by_email(dto.email)
        if existing is not None and existing.id != customer.id:
            log.warning("customer.duplicate_email")
            raise CustomerAlreadyExists(
                f"Email {dto.email} is already taken by another customer"
            )

        customer.update_name(dto.first_name, dto.last_name)
        customer.update_contact_info(dto.email, dto.phone_number)
        customer.update_address(dto.address.to_value_object())

        self._uow.customers.update(customer)
        self._uow.save_changes()
        log.info("customer.updated")
        return CustomerOutputDTO.from_entity(customer)

    def update_customer_status(
        self, customer_id: UUID | str, new_status: str
    ) -> CustomerOutputDTO:
        """Activate or deactivate a customer.

        Raises:
            CustomerNotFound: the customer does not exist.
            InvalidCustomerStatus: *new_status* is not a customer status.
        """
        customer = self._uow.customers.get_by_id(customer_id)
        if customer is None:
            raise CustomerNotFound(f"Customer with ID {customer_id} not found")

        if new_status == CustomerStatus.ACTIVE:
            customer.activate()
        elif new_status in DEACTIVATING_STATUSES:
            customer.deactivate()
        else:
            raise InvalidCustomerStatus(f"Invalid status transition to {new_status}")

        self._uow.customers.update(customer)
        self._uow.save_changes()
        logger.info(
            "customer.status_updated",
            customer_id=str(customer.id),
            requested_status=str(new_status),
            status=customer.status,
        )
        return CustomerOutputDTO.from_entity(customer)

    def delete_customer(self, customer_id: UUID | str) -> bool:
        """Delete a customer; returns ``False`` if it does not exist.

        Runs in a transaction so the active-order check and the delete
        see the same data.

        Raises:
            CustomerHasActiveOrders: some orders are not Delivered/Cancelled.
        """
        uow = self._uow
        uow.begin_transaction()
        try:
            customer = uow.customers.get_by_id(customer_id)
            if customer is None:
                uow.rollback_transaction()
                return False

            active = [o for o in uow.orders.get_by_customer_id(customer.id) if not o.is_terminal]
            if active:
                raise CustomerHasActiveOrders(
                    f"Cannot delete customer with ID {customer.id}. "
                    f"Customer has {len(active)} active orders."
                )

            uow.customers.delete(customer.id)
            uow.save_changes()
            uow.commit_transaction()
        except Exception:
            uow.rollback_transaction()
            raise

        logger.info("customer.deleted", customer_id=str(customer_id))
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_customer(self, customer_id: UUID | str) -> Optional[CustomerOutputDTO]:
        customer = self._uow.customers.get_by_id(customer_id)
        return CustomerOutputDTO.from_entity(customer) if customer is not None else None

    def get_customer_by_email(self, email: str) -> Optional[CustomerOutputDTO]:
        customer = self._uow.customers.get_by_email(email)
        return CustomerOutputDTO.from_entity(customer) if customer is not None else None

    def list_customers(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[CustomerOutputDTO]:
        """Return customers, optionally filtered by ``name``, ``email``, ``status``."""
        return [CustomerOutputDTO.from_entity(c) for c in self._uow.customers.list(filters)]
