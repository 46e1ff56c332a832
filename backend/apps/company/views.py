"""REST views for the company profile."""
from django.http import JsonResponse

from apps.company.services import CompanyService, company_to_dict
from apps.core.exceptions import InvalidInput
from apps.core.views import JsonApiView


class CompanyProfileView(JsonApiView):
    error_message = "Failed to process company profile"

    def get(self, request):
        return JsonResponse(company_to_dict(CompanyService().get_profile()))

    def put(self, request):
        profile = CompanyService().save_profile(self.read_json(request))
        return JsonResponse(company_to_dict(profile))


class CompanyImageUploadView(JsonApiView):
    """Multipart upload of the logo or signature image (form field named after ``kind`` or ``file``)."""

    kind = "logo"
    error_message = "Failed to upload image"

    def post(self, request):
        upload = request.FILES.get(self.kind) or request.FILES.get("file")
        if upload is None:
            raise InvalidInput([f"No {self.kind} file provided"])
        service = CompanyService()
        if self.kind == "signature":
            profile = service.save_signature(upload.name, upload.read())
        else:
            profile = service.save_logo(upload.name, upload.read())
        return JsonResponse(company_to_dict(profile), status=201)
