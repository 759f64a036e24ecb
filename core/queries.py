"""
MOVIEGRAPH QUERIES - Cypher for Every Endpoint

All queries are parameterized; values never get spliced into query text.
Columns are aliased to the field names of the structs in core.schemas so a
row can be decoded in one step.

The update query is the only one assembled at runtime. It is built from
UPDATABLE_FIELDS, the single place that decides what counts as "not set".
"""
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from core.schemas import MovieProperties, MovieUpdate


# =============================================================================
# FIXED QUERIES
# =============================================================================

LIST_MOVIES = (
    "MATCH (n:Movie) "
    "RETURN id(n) AS id, n.released AS released, n.tagline AS tagline, n.title AS title"
)

GET_MOVIE = (
    "MATCH (n:Movie) WHERE id(n) = $id "
    "RETURN id(n) AS id, n.released AS released, n.tagline AS tagline, n.title AS title"
)

LIST_PEOPLE = "MATCH (n:Person) RETURN n.name AS name"

CREATE_MOVIE = "CREATE (n:Movie {title: $title, tagline: $tagline, released: $released})"

MOVIE_PROPERTIES = (
    "MATCH (n:Movie) WHERE id(n) = $id "
    "RETURN n.title AS title, n.tagline AS tagline, n.released AS released"
)

DELETE_MOVIE = "MATCH (n:Movie) WHERE id(n) = $id DELETE n"

UPDATE_MOVIE_PREFIX = "MATCH (n:Movie) WHERE id(n) = $id SET "


# =============================================================================
# UPDATE BUILDER
# =============================================================================

class OptionalField(NamedTuple):
    """One property the update endpoint may change."""
    name: str                       # MovieUpdate attribute and node property
    param: str                      # query parameter carrying the new value
    label: str                      # how the change message names it
    is_set: Callable[[Any], bool]   # False means "leave the property alone"


# The zero value of each field means "not supplied". This makes it impossible
# to blank a title or reset a year to 0 through this endpoint.
UPDATABLE_FIELDS: Tuple[OptionalField, ...] = (
    OptionalField("title", "newTitle", "Title", lambda value: value != ""),
    OptionalField("tagline", "newTagline", "Tagline", lambda value: value != ""),
    OptionalField("released", "newReleased", "Released year", lambda value: value != 0),
)


class UpdatePlan(NamedTuple):
    query: Optional[str]            # None when there is nothing to change
    parameters: Dict[str, Any]
    fields: List[OptionalField]


def build_update(update: MovieUpdate) -> UpdatePlan:
    """
    Fold the supplied fields of `update` into one parameterized SET query.

    Example:
        MovieUpdate(id=7, tagline="New") ->
            "MATCH (n:Movie) WHERE id(n) = $id SET n.tagline = $newTagline"
            {"id": 7, "newTagline": "New"}
    """
    parameters: Dict[str, Any] = {"id": update.id}
    fields = [f for f in UPDATABLE_FIELDS if f.is_set(getattr(update, f.name))]
    if not fields:
        return UpdatePlan(query=None, parameters=parameters, fields=[])

    assignments = []
    for field in fields:
        assignments.append(f"n.{field.name} = ${field.param}")
        parameters[field.param] = getattr(update, field.name)

    return UpdatePlan(
        query=UPDATE_MOVIE_PREFIX + ", ".join(assignments),
        parameters=parameters,
        fields=fields,
    )


def describe_changes(
    old: MovieProperties,
    update: MovieUpdate,
    fields: List[OptionalField],
) -> str:
    """Human-readable summary of an update, one line per changed field."""
    lines = [f"Movie details updated for ID {update.id}:"]
    for field in fields:
        lines.append(
            f'- {field.label} changed from "{getattr(old, field.name)}" '
            f'to "{getattr(update, field.name)}"'
        )
    return "\n".join(lines)
