"""
MOVIEGRAPH MOVIES - Operations Against an Open Session

One coroutine per endpoint. Each takes a session the caller has already
opened with the right access mode, runs its query, and returns plain typed
values. Errors from the driver propagate untouched; a row with the wrong
column types raises RowDecodeError.
"""
import logging
from typing import Any, List, Optional

from core.queries import (
    CREATE_MOVIE,
    DELETE_MOVIE,
    GET_MOVIE,
    LIST_MOVIES,
    LIST_PEOPLE,
    MOVIE_PROPERTIES,
    build_update,
    describe_changes,
)
from core.schemas import (
    Movie,
    MovieCreate,
    MovieProperties,
    MovieUpdate,
    PersonName,
    decode_record,
)


logger = logging.getLogger("moviegraph.store")


async def list_movies(session: Any) -> List[Movie]:
    """All Movie nodes, in whatever order the store yields them."""
    result = await session.run(LIST_MOVIES)
    return [decode_record(record, Movie) async for record in result]


async def get_movie(session: Any, movie_id: int) -> Optional[Movie]:
    """The Movie with identity `movie_id`, or None."""
    result = await session.run(GET_MOVIE, {"id": movie_id})
    record = await result.single()
    if record is None:
        return None
    return decode_record(record, Movie)


async def list_people(session: Any) -> List[str]:
    result = await session.run(LIST_PEOPLE)
    return [decode_record(record, PersonName).name async for record in result]


async def create_movie(session: Any, movie: MovieCreate) -> None:
    result = await session.run(CREATE_MOVIE, {
        "title": movie.title,
        "tagline": movie.tagline,
        "released": movie.released,
    })
    await result.consume()
    logger.debug(f"Created movie {movie.title!r}")


async def update_movie(session: Any, update: MovieUpdate) -> Optional[str]:
    """
    Patch the supplied fields of a Movie and describe what changed.

    The lookup and the write are two separate auto-commit queries. A delete
    that lands between them leaves the write matching nothing.

    Returns:
        The change message, or None if no Movie has identity `update.id`.
    """
    result = await session.run(MOVIE_PROPERTIES, {"id": update.id})
    record = await result.single()
    if record is None:
        return None
    old = decode_record(record, MovieProperties)

    plan = build_update(update)
    if plan.query is not None:
        result = await session.run(plan.query, plan.parameters)
        await result.consume()
        logger.debug(f"Updated movie {update.id}: {[f.name for f in plan.fields]}")

    return describe_changes(old, update, plan.fields)


async def delete_movie(session: Any, movie_id: int) -> bool:
    """Delete a Movie. False means nothing matched `movie_id`."""
    result = await session.run(DELETE_MOVIE, {"id": movie_id})
    summary = await result.consume()
    return summary.counters.nodes_deleted > 0
