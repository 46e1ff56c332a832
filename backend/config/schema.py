"""Root GraphQL schema."""
import strawberry

from apps.core.schema import CoreQuery
from apps.company.schema import CompanyMutation, CompanyQuery
from apps.customers.schema import CustomerMutation, CustomerQuery
from apps.invoices.schema import InvoiceMutation, InvoiceQuery


@strawberry.type
class Query(CoreQuery, CompanyQuery, CustomerQuery, InvoiceQuery):
    pass


@strawberry.type
class Mutation(CompanyMutation, CustomerMutation, InvoiceMutation):
    pass


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)
