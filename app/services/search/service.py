"""Domain search service."""

from typing import Any

import pydantic
from loguru import logger

from app.errors import InvalidCriteriaError, QueryError, SchemaError
from app.models.search import SearchCriteria, SearchPage
from app.repositories.catalog import TableMetadataCache
from app.repositories.domains import DomainRepository
from app.repositories.sql import quote_table
from app.services.catalog.roles import resolve_roles
from app.services.search.compiler import compile_criteria


def parse_criteria(raw: Any) -> SearchCriteria:
    """Validate a raw criteria mapping (None means no filters)."""
    if raw is None:
        return SearchCriteria()
    if isinstance(raw, SearchCriteria):
        return raw
    if not isinstance(raw, dict):
        raise InvalidCriteriaError("criteria must be an object")
    try:
        return SearchCriteria.model_validate(raw)
    except pydantic.ValidationError as e:
        problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        raise InvalidCriteriaError(f"Invalid criteria: {problems}") from e


class SearchService:
    """Searches the domains table with criteria compiled against its live catalog."""

    def __init__(self, metadata_cache: TableMetadataCache, domain_repo: DomainRepository):
        self._metadata = metadata_cache
        self._domains = domain_repo

    def search(self, criteria: SearchCriteria, page: Any = None, page_size: Any = None) -> SearchPage:
        metadata = self._metadata.get_table_metadata()
        roles = resolve_roles(metadata)
        if not roles.domain:
            raise SchemaError(f"No domain column found in table {metadata.table_ref.qualified}")

        compiled = compile_criteria(criteria, roles, metadata)
        logger.debug("Compiled {} fragments, {} params", len(compiled.where_fragments), len(compiled.parameters))

        try:
            return self._domains.search(
                quote_table(metadata.table_ref),
                compiled,
                order_column=roles.domain,
                page=page,
                page_size=page_size,
            )
        except QueryError as e:
            logger.error("Search failed: {}", e)
            raise
