from django.contrib import admin

from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ["name", "gstin", "state", "phone", "created_at"]
    list_filter = ["state"]
    search_fields = ["name", "gstin", "phone"]
