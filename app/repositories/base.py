"""Base repository class."""

from collections.abc import Sequence
from typing import Any

from loguru import logger

from app.repositories.db import Database


class BaseRepository:
    """Base repository over an injected database collaborator."""

    def __init__(self, db: Database):
        self._db = db
        logger.debug("{} initialized", self.__class__.__name__)

    def fetchall(self, query: str, params: Sequence[Any] | None = None) -> list[dict[str, Any]]:
        """Execute and fetch all rows."""
        return self._db.query(query, params)

    def fetchone(self, query: str, params: Sequence[Any] | None = None) -> dict[str, Any] | None:
        """Execute and fetch the first row."""
        rows = self.fetchall(query, params)
        return rows[0] if rows else None
