"""Schema metadata cache - the domains table catalog, loaded once per process."""

import threading

from loguru import logger

from app.models.catalog import TableMetadata, TableRef
from app.repositories.catalog.catalog import CatalogRepository


class TableMetadataCache:
    """Single-entry, lazily populated, single-flight metadata cache.

    Concurrent first calls issue the catalog query once. A failing catalog
    query is logged and memoized as an empty catalog, so role resolution
    degrades to "no roles found" instead of failing callers.
    """

    def __init__(self, catalog: CatalogRepository, table_ref: TableRef):
        self._catalog = catalog
        self._table_ref = table_ref
        self._metadata: TableMetadata | None = None
        self._lock = threading.Lock()

    @property
    def table_ref(self) -> TableRef:
        return self._table_ref

    def get_table_metadata(self) -> TableMetadata:
        metadata = self._metadata
        if metadata is not None:
            return metadata

        with self._lock:
            if self._metadata is None:
                self._metadata = self._load()
            return self._metadata

    def refresh(self) -> TableMetadata:
        """Drop the memoized catalog and load it again."""
        with self._lock:
            self._metadata = self._load()
            return self._metadata

    def _load(self) -> TableMetadata:
        try:
            columns = self._catalog.load_columns(self._table_ref)
        except Exception as e:
            logger.warning("Could not load table columns for {}: {}", self._table_ref.qualified, e)
            return TableMetadata(self._table_ref)

        if not columns:
            logger.warning("Table {} has no columns (missing table?)", self._table_ref.qualified)
        else:
            logger.info("Loaded {} columns for {}", len(columns), self._table_ref.qualified)
        return TableMetadata(self._table_ref, columns)
