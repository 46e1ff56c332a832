"""URL configuration for the GST invoice manager."""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from django.views.decorators.csrf import csrf_exempt
from strawberry.django.views import GraphQLView

from apps.core.context import get_context
from apps.core.views import health_check
from .schema import schema


class ContextGraphQLView(GraphQLView):
    def get_context(self, request, response):
        return get_context(request)


urlpatterns = [
    path("admin/", admin.site.urls),
    path("graphql", csrf_exempt(ContextGraphQLView.as_view(schema=schema))),
    path("api/health", health_check),
    path("api/company/", include("apps.company.urls")),
    path("api/customers/", include("apps.customers.urls")),
    path("api/invoices/", include("apps.invoices.urls")),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
