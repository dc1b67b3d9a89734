"""Domain search repositories."""

from app.repositories.domains.search import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    DomainRepository,
    clamp_int,
    clamp_pagination,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "DomainRepository",
    "clamp_int",
    "clamp_pagination",
]
