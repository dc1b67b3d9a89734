"""Search services - criteria compilation and execution."""

from app.services.search.compiler import build_select_columns, compile_criteria
from app.services.search.lifecycle import compile_lifecycle, deleted_fragment
from app.services.search.service import SearchService, parse_criteria

__all__ = [
    "SearchService",
    "build_select_columns",
    "compile_criteria",
    "compile_lifecycle",
    "deleted_fragment",
    "parse_criteria",
]
