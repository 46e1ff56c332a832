from django.urls import path

from .views import CompanyImageUploadView, CompanyProfileView

urlpatterns = [
    path("", CompanyProfileView.as_view(), name="company-profile"),
    path("logo/", CompanyImageUploadView.as_view(kind="logo"), name="company-logo"),
    path("signature/", CompanyImageUploadView.as_view(kind="signature"), name="company-signature"),
]
