"""Core GraphQL types shared by the app schemas."""
import strawberry


@strawberry.type
class DeleteResult:
    """Result of delete operations."""

    success: bool = False
    error: str | None = None


@strawberry.type
class PaginationType:
    page: int
    limit: int
    total: int
    pages: int


@strawberry.type
class CoreQuery:
    @strawberry.field
    def health(self) -> str:
        return "ok"
