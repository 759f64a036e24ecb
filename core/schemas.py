"""
MOVIEGRAPH SCHEMAS - The Shapes on the Wire and in the Store

This module defines the data structures that cross the two boundaries of the
service:
- Movie / PersonName: rows coming back from the graph store
- MovieCreate / MovieUpdate: request bodies coming in over HTTP
- Decoding helpers for both sides, plus path-parameter parsing

Design Principles:
1. STRICT TYPING: msgspec.Struct, no silent type coercion
2. DECODE ONCE: a row is validated at the store boundary, never re-checked
3. KW_ONLY: Enforce keyword arguments to prevent positional mix-ups
"""
import re
from typing import Annotated, Any, Type, TypeVar

import msgspec

from core.graph_store import RowDecodeError


T = TypeVar("T")

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Neo4j integers are signed 64-bit
Int64 = Annotated[int, msgspec.Meta(ge=INT64_MIN, le=INT64_MAX)]

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


# =============================================================================
# STORE ROWS
# =============================================================================

class Movie(msgspec.Struct, kw_only=True):
    """A Movie node as returned to clients. `id` is the store identity."""
    id: int
    released: int
    tagline: str
    title: str


class MovieProperties(msgspec.Struct, kw_only=True):
    """The mutable properties of a Movie, read before an update."""
    title: str
    tagline: str
    released: int


class PersonName(msgspec.Struct, kw_only=True):
    name: str


def decode_record(record: Any, row_type: Type[T]) -> T:
    """
    Validate one result record against `row_type`.

    The query must alias its columns to the struct's field names. A missing
    property comes back as null and fails like any other type mismatch.

    Raises:
        RowDecodeError: if any column has the wrong type
    """
    try:
        return msgspec.convert(record.data(), type=row_type)
    except msgspec.ValidationError as e:
        raise RowDecodeError(row_type.__name__, str(e)) from e


# =============================================================================
# REQUEST BODIES
# =============================================================================

class MovieCreate(msgspec.Struct, kw_only=True):
    """Body of POST /movies. Absent fields are written as their zero value."""
    title: str = ""
    tagline: str = ""
    released: Int64 = 0


class MovieUpdate(msgspec.Struct, kw_only=True):
    """
    Body of POST /moviesUpdate.

    Empty strings and 0 mean "leave unchanged", see core.queries.UPDATABLE_FIELDS.
    """
    id: Int64
    title: str = ""
    tagline: str = ""
    released: Int64 = 0


def decode_body(body: bytes, body_type: Type[T]) -> T:
    """
    Decode a JSON request body into `body_type`.

    Raises:
        msgspec.DecodeError: malformed JSON (ValidationError for wrong shapes)
    """
    return msgspec.json.decode(body, type=body_type)


# =============================================================================
# PATH PARAMETERS
# =============================================================================

class InvalidMovieId(ValueError):
    """Raised when a path segment is not a decimal 64-bit integer."""
    def __init__(self, raw: str):
        self.raw = raw
        super().__init__("Invalid movie ID")


def parse_movie_id(raw: str) -> int:
    """
    Parse a movie id path segment.

    Accepts an optional sign followed by ASCII digits, nothing else (no
    whitespace, no underscores), within the signed 64-bit range.
    """
    if not _ID_PATTERN.fullmatch(raw):
        raise InvalidMovieId(raw)

    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidMovieId(raw)
    return value
