"""Domain name normalization for verification requests."""

import re
from typing import Any

from app.errors import InvalidDomainError

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_VALID = re.compile(r"^[a-z0-9.-]+$")


def normalize_domain(value: Any) -> str:
    """Reduce input like "https://Shop.Example.com:8080/path?q" to "shop.example.com".

    Raises InvalidDomainError for anything that is not a dotted host name.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidDomainError(value)

    host = _SCHEME.sub("", value.strip())
    for sep in ("/", "?", "#", ":"):
        host = host.split(sep)[0]
    host = host.strip(".").lower()

    if not _VALID.match(host) or "." not in host:
        raise InvalidDomainError(value)
    return host
