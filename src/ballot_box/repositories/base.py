"""Shared helpers and value types for repositories."""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

__all__ = ["Page", "Pagination", "normalize_paging", "parse_id"]


@dataclass(frozen=True)
class Pagination:
    """Paging metadata returned alongside a slice of results."""

    page: int
    size: int
    total: int
    last_page: int

    @classmethod
    def build(cls, page: int, size: int, total: int) -> Pagination:
        return cls(page=page, size=size, total=total, last_page=math.ceil(total / size))


@dataclass(frozen=True)
class Page(Generic[T]):
    """A slice of results plus its pagination metadata."""

    items: list[T] = field(default_factory=list)
    pagination: Pagination = field(default_factory=lambda: Pagination(1, DEFAULT_PAGE_SIZE, 0, 0))


def normalize_paging(page: int | None, size: int | None) -> tuple[int, int]:
    """Clamp paging arguments: page < 1 becomes 1 and size < 1 becomes the default."""
    if not page or page < 1:
        page = DEFAULT_PAGE
    if not size or size < 1:
        size = DEFAULT_PAGE_SIZE
    return page, size


def parse_id(value: object) -> str | None:
    """Return the canonical form of a record identifier, or None if malformed."""
    if isinstance(value, uuid.UUID):
        return str(value)
    if not isinstance(value, str):
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None
