"""Dependency Injection container - initialized at app startup."""

from collections.abc import Callable

import httpx

from app.models.catalog import TableRef
from app.repositories.catalog import CatalogRepository, TableMetadataCache
from app.repositories.db import Database, get_db
from app.repositories.domains import DomainRepository
from app.services.catalog import CatalogService
from app.services.search import SearchService
from app.services.verification import CredentialManager, TTLCache, VerificationService
from intel_client import SpamhausClient, WaybackClient
from settings import (
    CHECK_TTL_SECONDS,
    DEFAULT_SCHEMA,
    DOMAINS_TABLE,
    SPAMHAUS_API_KEY,
    SPAMHAUS_BASE_URL,
    SPAMHAUS_PASSWORD,
    SPAMHAUS_TIMEOUT,
    SPAMHAUS_USERNAME,
    WAYBACK_AVAILABILITY_TIMEOUT,
    WAYBACK_AVAILABILITY_URL,
    WAYBACK_CDX_TIMEOUT,
    WAYBACK_CDX_URL,
)


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(
        self,
        db: Database | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        credentials: CredentialManager | None = None,
        table: str = DOMAINS_TABLE,
    ) -> None:
        """Initialize all dependencies. Call once at app startup.

        ``db``, ``transport`` and ``credentials`` replace the configured
        database, HTTP transport and Spamhaus credentials (tests, tooling).
        """
        if self._initialized:
            return

        # Repositories (singletons)
        self._db = db if db is not None else get_db()
        self._catalog_repo = CatalogRepository(self._db)
        self._domain_repo = DomainRepository(self._db)
        self.metadata = TableMetadataCache(self._catalog_repo, TableRef.parse(table, DEFAULT_SCHEMA))

        # Process-wide verification state
        self.credentials = credentials or CredentialManager(
            api_key=SPAMHAUS_API_KEY,
            username=SPAMHAUS_USERNAME,
            password=SPAMHAUS_PASSWORD,
        )
        self.check_cache = TTLCache(CHECK_TTL_SECONDS)

        # Services (with injected repos)
        self.catalog = CatalogService(
            catalog_repo=self._catalog_repo,
            metadata_cache=self.metadata,
            default_schema=DEFAULT_SCHEMA,
        )

        self.search = SearchService(
            metadata_cache=self.metadata,
            domain_repo=self._domain_repo,
        )

        self.verification = VerificationService(
            credentials=self.credentials,
            cache=self.check_cache,
            spamhaus_factory=self._spamhaus_factory(transport),
            wayback_factory=self._wayback_factory(transport),
        )

        self._initialized = True

    def reset(self) -> None:
        """Forget all instances; the next init() builds them again."""
        self._initialized = False

    @staticmethod
    def _spamhaus_factory(transport: httpx.AsyncBaseTransport | None) -> Callable[[], SpamhausClient]:
        return lambda: SpamhausClient(SPAMHAUS_BASE_URL, SPAMHAUS_TIMEOUT, transport=transport)

    @staticmethod
    def _wayback_factory(transport: httpx.AsyncBaseTransport | None) -> Callable[[], WaybackClient]:
        return lambda: WaybackClient(
            WAYBACK_AVAILABILITY_URL,
            WAYBACK_CDX_URL,
            WAYBACK_AVAILABILITY_TIMEOUT,
            WAYBACK_CDX_TIMEOUT,
            transport=transport,
        )


# Global container instance
container = Container()
