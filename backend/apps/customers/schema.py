"""GraphQL schema for customers."""
import logging

import strawberry
from strawberry import auto
import strawberry_django

from apps.core.exceptions import InvalidInput, ServiceError
from apps.core.schema import DeleteResult, PaginationType
from apps.customers.services import CustomerService
from .models import Customer

logger = logging.getLogger(__name__)


# =============================================================================
# Type Definitions
# =============================================================================


@strawberry_django.type(Customer)
class CustomerType:
    id: auto
    name: auto
    address: auto
    gstin: auto
    state: auto
    state_code: auto
    phone: auto
    email: auto
    created_at: auto
    updated_at: auto


@strawberry.type
class CustomerConnection:
    """Paginated customer list."""

    items: list[CustomerType]
    pagination: PaginationType


# =============================================================================
# Input and Result Types
# =============================================================================


@strawberry.input
class CustomerInput:
    name: str
    address: str = ""
    gstin: str = ""
    state: str = ""
    state_code: str = ""
    phone: str = ""
    email: str = ""


@strawberry.type
class CustomerResult:
    """Result of customer create/update."""

    customer: CustomerType | None = None
    success: bool = False
    error: str | None = None
    errors: list[str] | None = None


def customer_input_to_dict(data: CustomerInput) -> dict:
    return strawberry.asdict(data)


# =============================================================================
# Queries
# =============================================================================


@strawberry.type
class CustomerQuery:
    @strawberry.field
    def customers(
        self,
        search: str | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> CustomerConnection:
        result = CustomerService().list_customers(search=search, page=page, limit=limit)
        return CustomerConnection(
            items=result.items,
            pagination=PaginationType(**result.meta()),
        )

    @strawberry.field
    def customer(self, id: strawberry.ID) -> CustomerType | None:
        return Customer.objects.filter(pk=id).first()

    @strawberry.field
    def search_customers(self, term: str) -> list[CustomerType]:
        return CustomerService().search(term.strip())


# =============================================================================
# Mutations
# =============================================================================


def _customer_error(e: ServiceError) -> CustomerResult:
    if isinstance(e, InvalidInput):
        return CustomerResult(error=e.message, errors=e.errors)
    return CustomerResult(error=e.message)


@strawberry.type
class CustomerMutation:
    @strawberry.mutation
    def create_customer(self, input: CustomerInput) -> CustomerResult:
        try:
            customer = CustomerService().create_customer(customer_input_to_dict(input))
        except ServiceError as e:
            return _customer_error(e)
        return CustomerResult(customer=customer, success=True)

    @strawberry.mutation
    def update_customer(self, id: strawberry.ID, input: CustomerInput) -> CustomerResult:
        try:
            customer = CustomerService().update_customer(id, customer_input_to_dict(input))
        except ServiceError as e:
            return _customer_error(e)
        return CustomerResult(customer=customer, success=True)

    @strawberry.mutation
    def delete_customer(self, id: strawberry.ID) -> DeleteResult:
        try:
            CustomerService().delete_customer(id)
        except ServiceError as e:
            return DeleteResult(error=e.message)
        return DeleteResult(success=True)
