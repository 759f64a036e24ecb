"""
MOVIEGRAPH GRAPH STORE - The Connection Manager

Owns the one neo4j async driver (and with it the connection pool) that lives
for the whole process, and hands out one short-lived session per request.

Usage:
    store = GraphStore.from_settings(settings.neo4j)

    async with store.session(READ) as session:
        result = await session.run("MATCH (n:Movie) RETURN n.title AS title")

    await store.close()

Sessions are always opened with an explicit access mode. The session is
closed when the `async with` block exits, whether the handler returned
normally or bailed out early.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from neo4j import AsyncGraphDatabase, READ_ACCESS, WRITE_ACCESS
from neo4j.exceptions import DriverError, Neo4jError

from infrastructure.config import Neo4jSettings


logger = logging.getLogger("moviegraph.store")

READ = READ_ACCESS
WRITE = WRITE_ACCESS


# =============================================================================
# CUSTOM EXCEPTIONS
# =============================================================================

class StoreError(Exception):
    """Base exception for graph store operations."""
    pass


class RowDecodeError(StoreError):
    """Raised when a result row does not have the expected column types."""
    def __init__(self, row_type: str, detail: str):
        self.row_type = row_type
        self.detail = detail
        super().__init__(f"Failed to decode {row_type} row: {detail}")


# Everything a handler turns into a 500
STORE_ERRORS = (Neo4jError, DriverError, StoreError)


# =============================================================================
# GRAPH STORE
# =============================================================================

class GraphStore:
    """
    Process-wide handle on the graph database.

    Wraps an AsyncDriver (or anything exposing the same `session`, `close`
    and `verify_connectivity` coroutines) so handlers never touch a global.

    Thread Safety:
        The driver's pool is safe for concurrent session checkout. A single
        session is not, so never share one across requests.
    """

    def __init__(self, driver: Any, database: Optional[str] = None):
        self._driver = driver
        self._database = database

    @classmethod
    def from_settings(cls, settings: Neo4jSettings) -> "GraphStore":
        """Build the driver from connection settings. Does not connect yet."""
        driver = AsyncGraphDatabase.driver(
            settings.uri,
            auth=(settings.user, settings.password),
        )
        logger.info(f"Created neo4j driver for {settings.uri}")
        return cls(driver, database=settings.database)

    @property
    def database(self) -> Optional[str]:
        return self._database

    @asynccontextmanager
    async def session(self, access_mode: str) -> AsyncIterator[Any]:
        """Open a session bound to `access_mode` (READ or WRITE)."""
        async with self._driver.session(
            database=self._database,
            default_access_mode=access_mode,
        ) as session:
            yield session

    async def verify_connectivity(self) -> None:
        await self._driver.verify_connectivity()

    async def close(self) -> None:
        """Close the driver and every pooled connection."""
        await self._driver.close()
        logger.info("Closed neo4j driver")
