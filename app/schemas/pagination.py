"""Pagination envelope returned by every listing endpoint."""

from typing import Generic, TypeVar

from pydantic import Field

from app.schemas.base import ApiModel

T = TypeVar("T")


class PaginationMeta(ApiModel):
    """Page position and totals; last_page is at least 1."""

    current_page: int = Field(..., ge=1)
    last_page: int = Field(..., ge=1)
    per_page: int = Field(..., ge=1)
    total: int = Field(..., ge=0)


class Paginated(ApiModel, Generic[T]):
    """{data: [...], pagination: {currentPage, lastPage, perPage, total}}."""

    data: list[T]
    pagination: PaginationMeta
