"""Domain search API schemas."""

from typing import Any

from web.api.schemas import ApiModel


class SearchResponse(ApiModel):
    """One page of matching domains."""

    page: int
    page_size: int
    total: int
    total_pages: int
    items: list[dict[str, Any]]
