"""REST views for customers."""
from django.http import HttpResponse, JsonResponse

from apps.core.views import JsonApiView
from apps.customers.services import CustomerService, customer_to_dict


class CustomerListView(JsonApiView):
    error_message = "Failed to fetch customers"

    def get(self, request):
        page = CustomerService().list_customers(
            search=request.GET.get("search", "").strip() or None,
            page=request.GET.get("page"),
            limit=request.GET.get("limit"),
        )
        return JsonResponse({
            "customers": [customer_to_dict(c) for c in page.items],
            "pagination": page.meta(),
        })

    def post(self, request):
        customer = CustomerService().create_customer(self.read_json(request))
        return JsonResponse(customer_to_dict(customer), status=201)


class CustomerDetailView(JsonApiView):
    error_message = "Failed to process customer"

    def get(self, request, customer_id):
        return JsonResponse(customer_to_dict(CustomerService().get_customer(customer_id)))

    def put(self, request, customer_id):
        customer = CustomerService().update_customer(customer_id, self.read_json(request))
        return JsonResponse(customer_to_dict(customer))

    def delete(self, request, customer_id):
        CustomerService().delete_customer(customer_id)
        return HttpResponse(status=204)


class CustomerSearchView(JsonApiView):
    """Autocomplete endpoint returning up to ten matches."""

    error_message = "Failed to search customers"

    def get(self, request, term):
        customers = CustomerService().search(term.strip())
        return JsonResponse(
            [
                {"id": c.pk, "name": c.name, "gstin": c.gstin, "state": c.state}
                for c in customers
            ],
            safe=False,
        )
