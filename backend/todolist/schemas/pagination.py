"""Pagination envelope shared by every paged listing."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of results plus the unpaged total."""
    items: list[T]
    total: int
    page: int
    page_size: int
