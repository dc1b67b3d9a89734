"""Search criteria - the user-supplied filter object."""

import re
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_LIST_SPLIT = re.compile(r"[,\s]+")

TEXT_FIELDS = (
    "domain_starts_with",
    "domain_ends_with",
    "expiring_within_days",
    "creation_date_from",
    "creation_date_to",
    "age_years_from",
    "age_years_to",
    "country_by_ip",
    "registrar_contains",
    "technologies_contains",
    "response_status_contains",
    "detected_hosts_min",
    "detected_hosts_max",
    "expiration_from",
    "expiration_to",
    "wayback_min_snapshots",
)


class LifecycleState(str, Enum):
    """Lifecycle states derivable from the lifecycle-related columns."""

    ACTIVE = "active"
    EXPIRING = "expiring"
    DELETED = "deleted"


def normalize_text(value: Any) -> str | None:
    """Trimmed string, None for missing or blank values."""
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float, str)):
        text = str(value).strip()
        return text or None
    raise ValueError(f"expected a scalar value, got {type(value).__name__}")


def split_list(value: Any) -> list[str]:
    """Split "com, net org" or ["com", "net"] into trimmed non-empty terms."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = [normalize_text(v) for v in value]
        return [i for i in items if i]
    text = normalize_text(value)
    if not text:
        return []
    return [x for x in _LIST_SPLIT.split(text) if x]


class SearchCriteria(BaseModel):
    """Flat, independently optional filter fields, all AND-combined.

    Keys are accepted in camelCase (as sent by clients) or snake_case.
    Numeric-looking fields are kept as text and interpreted by the compiler.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True)

    domain_starts_with: str | None = None
    domain_ends_with: str | None = None
    tld: list[str] = Field(default_factory=list)

    lifecycle_state: LifecycleState | None = Field(
        default=None,
        validation_alias=AliasChoices("lifecycleState", "expiredState", "lifecycle_state", "expired_state"),
    )
    expiring_within_days: str | None = None

    creation_date_from: str | None = None
    creation_date_to: str | None = None
    age_years_from: str | None = None
    age_years_to: str | None = None

    country_by_ip: str | None = None
    registrar_contains: str | None = None
    technologies_contains: str | None = None
    response_status_contains: str | None = None

    detected_hosts_min: str | None = None
    detected_hosts_max: str | None = None

    expiration_from: str | None = None
    expiration_to: str | None = None

    wayback_min_snapshots: str | None = None
    safe_spamhaus_only: bool = False
    safe_views_total_only: bool = False

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return normalize_text(v)

    @field_validator("tld", mode="before")
    @classmethod
    def _tld(cls, v: Any) -> list[str]:
        return split_list(v)

    @field_validator("lifecycle_state", mode="before")
    @classmethod
    def _lifecycle(cls, v: Any) -> str | None:
        text = normalize_text(v)
        return text.lower() if text else None

    @field_validator("safe_spamhaus_only", "safe_views_total_only", mode="before")
    @classmethod
    def _only_true(cls, v: Any) -> bool:
        # only a literal JSON true switches a safety filter on
        return v is True
