"""
MOVIEGRAPH API ROUTES - The HTTP Interface

RESTful API over the Movie and Person nodes of a Neo4j graph, using Starlette.

Endpoints:
- GET  /health            - Health check
- GET  /movies            - List all movies
- GET  /movies/{id}       - Get movie by store identity
- GET  /persons           - List person names
- POST /movies            - Create a movie
- POST /deleteMovie/{id}  - Delete a movie
- POST /moviesUpdate      - Patch title/tagline/released of a movie

Design:
- Starlette routes for ASGI compatibility with Granian
- msgspec for request decoding and JSON encoding
- One neo4j session per request, opened with the access mode the handler needs
- The GraphStore is injected through create_app() and lives on app.state
"""
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional
import logging

import msgspec
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from core import movies
from core.graph_store import GraphStore, READ, WRITE, STORE_ERRORS
from core.schemas import (
    MovieCreate,
    MovieUpdate,
    InvalidMovieId,
    decode_body,
    parse_movie_id,
)
from infrastructure.config import Settings, load_settings
from infrastructure.logging_setup import configure_logging


# =============================================================================
# LOGGING
# =============================================================================

logger = logging.getLogger("moviegraph.api")

SERVICE_NAME = "moviegraph"
VERSION = "0.1.0"

MOVIE_NOT_FOUND = "Movie not found"


# =============================================================================
# RESPONSE HELPERS
# =============================================================================

# Pre-compiled msgspec encoder for fast JSON serialization
_json_encoder = msgspec.json.Encoder()


def json_response(data: Any, status_code: int = 200) -> Response:
    """Create JSON response using msgspec (handles Structs natively)."""
    return Response(
        content=_json_encoder.encode(data),
        status_code=status_code,
        media_type="application/json"
    )


def error_response(message: str, status_code: int = 400) -> JSONResponse:
    """Create error response."""
    return JSONResponse(
        {"error": message},
        status_code=status_code
    )


def store_failure(handler: str, exc: BaseException) -> JSONResponse:
    """Log a store/driver failure and surface its message as a 500."""
    logger.error(f"Error in {handler}: {exc}", exc_info=exc)
    return error_response(str(exc), status_code=500)


def get_store(request: Request) -> GraphStore:
    """The GraphStore bound to the running app."""
    return request.app.state.store


# =============================================================================
# HEALTH
# =============================================================================

async def health(request: Request) -> JSONResponse:
    """Health check endpoint. Does not touch the store."""
    return JSONResponse({
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": VERSION,
    })


# =============================================================================
# MOVIE OPERATIONS
# =============================================================================

async def list_movies(request: Request) -> Response:
    """
    List every Movie node.

    Response:
        {"movies": [{"id": 0, "released": 1999, "tagline": "...", "title": "..."}]}
    """
    try:
        async with get_store(request).session(READ) as session:
            found = await movies.list_movies(session)
    except STORE_ERRORS as e:
        return store_failure("list_movies", e)

    return json_response({"movies": found})


async def get_movie(request: Request) -> Response:
    """Get movie by store identity."""
    try:
        movie_id = parse_movie_id(request.path_params["movie_id"])
    except InvalidMovieId as e:
        return error_response(str(e), status_code=400)

    try:
        async with get_store(request).session(READ) as session:
            movie = await movies.get_movie(session, movie_id)
    except STORE_ERRORS as e:
        return store_failure("get_movie", e)

    if movie is None:
        return error_response(MOVIE_NOT_FOUND, status_code=404)
    return json_response({"movie": movie})


async def create_movie(request: Request) -> Response:
    """
    Create a Movie node.

    Body:
        {"title": "...", "tagline": "...", "released": 2010}

    Missing fields are stored as "" / 0. The new identity is not returned.
    """
    try:
        body = decode_body(await request.body(), MovieCreate)
    except msgspec.DecodeError as e:
        return error_response(f"Invalid request body: {e}")

    try:
        async with get_store(request).session(WRITE) as session:
            await movies.create_movie(session, body)
    except STORE_ERRORS as e:
        return store_failure("create_movie", e)

    return json_response({"status": "created"}, status_code=201)


async def update_movie(request: Request) -> Response:
    """
    Patch the non-empty fields of a movie.

    Body:
        {"id": 12, "title": "...", "tagline": "...", "released": 2010}

    Empty strings and 0 leave the property unchanged. The response message
    lists each changed field with its old and new value.
    """
    try:
        body = decode_body(await request.body(), MovieUpdate)
    except msgspec.DecodeError as e:
        return error_response(f"Invalid request body: {e}")

    try:
        async with get_store(request).session(WRITE) as session:
            message = await movies.update_movie(session, body)
    except STORE_ERRORS as e:
        return store_failure("update_movie", e)

    if message is None:
        return error_response(MOVIE_NOT_FOUND, status_code=404)
    return json_response({"message": message})


async def delete_movie(request: Request) -> Response:
    """Delete movie by store identity."""
    try:
        movie_id = parse_movie_id(request.path_params["movie_id"])
    except InvalidMovieId as e:
        return error_response(str(e), status_code=400)

    try:
        async with get_store(request).session(WRITE) as session:
            deleted = await movies.delete_movie(session, movie_id)
    except STORE_ERRORS as e:
        return store_failure("delete_movie", e)

    if not deleted:
        return error_response(MOVIE_NOT_FOUND, status_code=404)
    return json_response({"status": "deleted"})


# =============================================================================
# PERSON OPERATIONS
# =============================================================================

async def list_people(request: Request) -> Response:
    """List the name of every Person node under the "humuus" key."""
    try:
        async with get_store(request).session(READ) as session:
            names = await movies.list_people(session)
    except STORE_ERRORS as e:
        return store_failure("list_people", e)

    return json_response({"humuus": names})


# =============================================================================
# APP FACTORY
# =============================================================================

def create_routes() -> List[Route]:
    """Create all API routes."""
    return [
        # Health
        Route("/health", health, methods=["GET"]),

        # Movie operations
        Route("/movies", list_movies, methods=["GET"]),
        Route("/movies", create_movie, methods=["POST"]),
        Route("/movies/{movie_id}", get_movie, methods=["GET"]),
        Route("/moviesUpdate", update_movie, methods=["POST"]),
        Route("/deleteMovie/{movie_id}", delete_movie, methods=["POST"]),

        # Person operations
        Route("/persons", list_people, methods=["GET"]),
    ]


def create_app(
    store: Optional[GraphStore] = None,
    settings: Optional[Settings] = None,
) -> Starlette:
    """
    Create the Starlette application.

    Args:
        store: An already-built GraphStore. The caller keeps ownership and
               closes it. When None, the lifespan builds one from settings
               on start up and closes it on shut down.
        settings: Used only when the app builds its own store. Loaded from
                  config/environment when None.
    """

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        if store is not None:
            yield
            return

        config = settings if settings is not None else load_settings()
        configure_logging(config.server.log_level)
        owned = GraphStore.from_settings(config.neo4j)
        app.state.store = owned
        try:
            yield
        finally:
            await owned.close()
            app.state.store = None

    app = Starlette(
        routes=create_routes(),
        lifespan=lifespan,
        debug=False,
    )
    app.state.store = store
    return app


# Application instance for ASGI servers
app = create_app()
