"""Offset pagination shared by list endpoints."""
import math
from dataclasses import dataclass

from django.conf import settings

MAX_PAGE_SIZE = 100


@dataclass
class Page:
    items: list
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0

    def meta(self) -> dict:
        return {"page": self.page, "limit": self.limit, "total": self.total, "pages": self.pages}


def paginate(queryset, page=None, limit=None) -> Page:
    """Slice a queryset; page is 1-based and limit is clamped to 1..MAX_PAGE_SIZE."""
    try:
        page = max(int(page), 1)
    except (TypeError, ValueError):
        page = 1
    try:
        limit = min(max(int(limit), 1), MAX_PAGE_SIZE)
    except (TypeError, ValueError):
        limit = settings.INVOICE_PAGE_SIZE

    total = queryset.count()
    offset = (page - 1) * limit
    return Page(items=list(queryset[offset : offset + limit]), page=page, limit=limit, total=total)
