"""Search models - criteria, compiled queries and result pages."""

from app.models.search.criteria import LifecycleState, SearchCriteria, normalize_text, split_list
from app.models.search.query import CompiledQuery, SearchPage

__all__ = [
    "CompiledQuery",
    "LifecycleState",
    "SearchCriteria",
    "SearchPage",
    "normalize_text",
    "split_list",
]
