"""Pytest configuration and fixtures."""
from decimal import Decimal
from unittest.mock import Mock

import pytest

from apps.company.models import CompanyProfile
from apps.core.context import Context
from apps.customers.models import Customer
from config.schema import schema


@pytest.fixture
def company(db):
    """Stored seller profile."""
    return CompanyProfile.objects.create(
        company_name="Meena Traders",
        tagline="Yarn & Warp Traders",
        address="56/8 Main Road\nSalem - 636 006",
        gstin="33ABCDE1234F1Z5",
        state="Tamilnadu",
        state_code="33",
        phone="63803 86768",
        bank_name="Federal Bank",
        bank_account_number="23580200000820",
        bank_ifsc="FDRL0002358",
        jurisdiction="Salem",
        terms=["Interest at 24% will be charged on bills unpaid after 30 days."],
        default_cgst_rate=Decimal("9.00"),
        default_sgst_rate=Decimal("9.00"),
    )


@pytest.fixture
def customer(db):
    return Customer.objects.create(
        name="Acme Textiles",
        address="12 Mill Street, Erode",
        gstin="33AAACA1234A1Z1",
        state="Tamilnadu",
        state_code="33",
        phone="98765 43210",
    )


@pytest.fixture
def invoice_payload():
    """A valid invoice request body: 2.5 x 3 x 10 = 75.00 before tax."""
    return {
        "invoice_number": "INV-0001",
        "invoice_date": "2026-04-01",
        "customer": {
            "name": "Acme Textiles",
            "address": "12 Mill Street, Erode",
            "gstin": "33AAACA1234A1Z1",
            "state": "Tamilnadu",
            "state_code": "33",
        },
        "cgst_rate": 9,
        "sgst_rate": 9,
        "items": [
            {
                "description": "Cotton yarn",
                "weight": "2.5",
                "hsn_code": "5205",
                "quantity": 3,
                "rate": 10,
            },
        ],
    }


@pytest.fixture
def graphql_context(db):
    return Context(request=Mock())


@pytest.fixture
def run_graphql(graphql_context):
    """Run a GraphQL operation synchronously against the root schema."""

    def run(query, variables=None):
        return schema.execute_sync(
            query, variable_values=variables, context_value=graphql_context
        )

    return run
