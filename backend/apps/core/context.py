"""Request context shared by GraphQL resolvers and REST views."""
from dataclasses import dataclass, field

from django.http import HttpRequest


@dataclass
class Context:
    """
    Explicit per-request application context.

    Holds the request and lazily loads the seller profile once per request,
    so resolvers never reach for module-level state.
    """

    request: HttpRequest
    _company: object = field(default=None, repr=False)

    @property
    def company(self):
        if self._company is None:
            from apps.company.services import CompanyService

            self._company = CompanyService().get_profile()
        return self._company


def get_context(request: HttpRequest) -> Context:
    """Build the context for an incoming request."""
    return Context(request=request)
