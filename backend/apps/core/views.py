"""Base class for the JSON REST endpoints."""
import json
import logging

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.core.exceptions import InvalidInput, ServiceError

logger = logging.getLogger(__name__)


def health_check(request):
    return JsonResponse({"status": "ok"})


@method_decorator(csrf_exempt, name="dispatch")
class JsonApiView(View):
    """
    Class-based view that maps service errors to JSON responses.

    ``InvalidInput`` becomes 400 ``{"errors": [...]}``, other service errors
    become ``{"error": "..."}`` with their status code, and anything else is
    logged and returned as a generic 500.
    """

    error_message = "Request failed"

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except InvalidInput as e:
            return JsonResponse({"errors": e.errors}, status=e.status_code)
        except ServiceError as e:
            return JsonResponse({"error": e.message}, status=e.status_code)
        except Exception:
            logger.exception("%s %s failed", request.method, request.path)
            return JsonResponse({"error": self.error_message}, status=500)

    @staticmethod
    def read_json(request) -> dict:
        """Decode a JSON object request body."""
        try:
            data = json.loads(request.body or b"{}")
        except (ValueError, UnicodeDecodeError):
            raise InvalidInput(["Request body must be valid JSON"])
        if not isinstance(data, dict):
            raise InvalidInput(["Request body must be a JSON object"])
        return data
