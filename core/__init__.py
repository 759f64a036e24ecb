"""
MOVIEGRAPH CORE - Central exports for core functionality.

This module provides access to:
- The graph store connection manager (GraphStore)
- Row and request schemas (Movie, MovieCreate, MovieUpdate)
- Store errors
"""

from core.graph_store import (
    GraphStore,
    StoreError,
    RowDecodeError,
    STORE_ERRORS,
    READ,
    WRITE,
)
from core.schemas import (
    Movie,
    MovieCreate,
    MovieUpdate,
    InvalidMovieId,
    parse_movie_id,
)

__all__ = [
    # Store
    "GraphStore",
    "StoreError",
    "RowDecodeError",
    "STORE_ERRORS",
    "READ",
    "WRITE",
    # Schemas
    "Movie",
    "MovieCreate",
    "MovieUpdate",
    "InvalidMovieId",
    "parse_movie_id",
]
