"""Domain errors raised by services and repositories."""


class DomainExplorerError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidDomainError(DomainExplorerError):
    """Domain name failed normalization or validation."""

    def __init__(self, value: object):
        self.value = value
        super().__init__("Invalid domain")


class InvalidCriteriaError(DomainExplorerError):
    """Search criteria are malformed."""


class SchemaError(DomainExplorerError):
    """The domains table cannot serve a search (e.g. no domain column)."""


class QueryError(DomainExplorerError):
    """A database query failed; carries the underlying message."""


class PoolTimeoutError(QueryError):
    """No database connection became available before the deadline."""
