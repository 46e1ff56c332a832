"""Customer repository: CRUD, search and upsert-by-name."""
import logging

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError, Q

from apps.core.exceptions import Conflict, InvalidInput, NotFound
from apps.core.pagination import Page, paginate
from apps.customers.models import Customer
from apps.customers.validation import clean_customer, validate_customer

logger = logging.getLogger(__name__)

AUTOCOMPLETE_LIMIT = 10


class CustomerService:
    """Reads and writes customers."""

    def list_customers(self, search: str | None = None, page=1, limit=None) -> Page:
        queryset = Customer.objects.all()
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search)
                | Q(gstin__icontains=search)
                | Q(phone__icontains=search)
            )
        return paginate(queryset.order_by("name"), page, limit)

    def search(self, term: str) -> list[Customer]:
        """Autocomplete lookup by name or GSTIN."""
        if not term:
            return []
        return list(
            Customer.objects
            .filter(Q(name__icontains=term) | Q(gstin__icontains=term))
            .order_by("name")[:AUTOCOMPLETE_LIMIT]
        )

    def get_customer(self, customer_id) -> Customer:
        customer = Customer.objects.filter(pk=customer_id).first()
        if customer is None:
            raise NotFound("Customer not found")
        return customer

    def create_customer(self, data: dict) -> Customer:
        errors = validate_customer(data)
        if errors:
            logger.warning("Rejected customer: %s", errors)
            raise InvalidInput(errors)
        try:
            with transaction.atomic():
                customer = Customer.objects.create(**clean_customer(data))
        except IntegrityError:
            raise Conflict("Customer with this name already exists")
        logger.info("Created customer %s (%s)", customer.pk, customer.name)
        return customer

    def update_customer(self, customer_id, data: dict) -> Customer:
        customer = self.get_customer(customer_id)
        errors = validate_customer(data)
        if errors:
            logger.warning("Rejected update of customer %s: %s", customer_id, errors)
            raise InvalidInput(errors)
        for name, value in clean_customer(data).items():
            setattr(customer, name, value)
        try:
            with transaction.atomic():
                customer.save()
        except IntegrityError:
            raise Conflict("Customer with this name already exists")
        logger.info("Updated customer %s", customer.pk)
        return customer

    def delete_customer(self, customer_id) -> None:
        customer = self.get_customer(customer_id)
        try:
            customer.delete()
        except ProtectedError:
            raise Conflict("Cannot delete customer with existing invoices")
        logger.info("Deleted customer %s", customer_id)

    def upsert_by_name(self, data: dict) -> Customer:
        """
        Find the customer with this name or create it.

        Non-empty details in ``data`` overwrite the stored ones, so editing the
        buyer block on an invoice keeps the customer record current.
        """
        errors = validate_customer(data)
        if errors:
            raise InvalidInput(errors)
        values = clean_customer(data)
        name = values.pop("name")
        customer, created = Customer.objects.get_or_create(name=name, defaults=values)
        if created:
            logger.info("Created customer %s (%s) from invoice", customer.pk, name)
            return customer

        changed = [k for k, v in values.items() if v and getattr(customer, k) != v]
        for key in changed:
            setattr(customer, key, values[key])
        if changed:
            customer.save(update_fields=[*changed, "updated_at"])
        return customer


def customer_to_dict(customer: Customer) -> dict:
    return {
        "id": customer.pk,
        **customer.to_snapshot(),
        "created_at": customer.created_at.isoformat() if customer.created_at else None,
        "updated_at": customer.updated_at.isoformat() if customer.updated_at else None,
    }
