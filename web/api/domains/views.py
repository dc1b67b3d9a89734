"""Domain search API views - thin layer over services."""

from typing import Any

from app.container import container
from app.errors import InvalidCriteriaError, QueryError, SchemaError
from app.services.search import parse_criteria
from web.api.errors import ServiceError, ValidationError, validate_body

from .schemas import SearchResponse


def search_domains(body: Any = None) -> SearchResponse:
    """Search the domains table.

    Body: ``{"page": 1, "pageSize": 50, "criteria": {...}}``; pagination is
    clamped server-side.
    """
    body = validate_body(body)
    try:
        criteria = parse_criteria(body.get("criteria"))
    except InvalidCriteriaError as e:
        raise ValidationError(e.message) from e

    try:
        result = container.search.search(criteria, page=body.get("page"), page_size=body.get("pageSize"))
    except (SchemaError, QueryError) as e:
        raise ServiceError(e.message) from e

    return SearchResponse(
        page=result.page,
        page_size=result.page_size,
        total=result.total,
        total_pages=result.total_pages,
        items=result.items,
    )
