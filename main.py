"""
MOVIEGRAPH MAIN - Entry Point and CLI

Commands:
    serve    - Start the API server (default when no command is given)
    check    - Verify that the configured Neo4j server is reachable

Usage:
    # Development server with auto-reload
    python main.py serve

    # Production server
    python main.py serve --prod --workers 4 --host 0.0.0.0

    # Check the store connection
    python main.py check

Configuration comes from config/moviegraph.toml and MOVIEGRAPH_* environment
variables; command-line flags win over both.
"""
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from infrastructure.config import ConfigError, Settings, load_settings
from infrastructure.logging_setup import configure_logging


logger = logging.getLogger("moviegraph.main")

APP_TARGET = "api.routes:app"


def run_dev_server(host: str, port: int):
    """Run development server with Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    print(f"Starting MovieGraph API server on {host}:{port}")
    print("Press Ctrl+C to stop")

    granian = Granian(
        target=APP_TARGET,
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        workers=1,
        reload=True,
        log_access=True,
    )

    granian.serve()


def run_prod_server(host: str, port: int, workers: int):
    """Run production server with Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    print(f"Starting MovieGraph API server on {host}:{port} with {workers} workers")

    granian = Granian(
        target=APP_TARGET,
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        workers=workers,
        reload=False,
        log_access=True,
    )

    granian.serve()


def _load(args) -> Settings:
    """Load settings or exit with the config error."""
    try:
        return load_settings(Path(args.config) if args.config else None)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_serve(args):
    """Handle serve command."""
    settings = _load(args)
    configure_logging(settings.server.log_level)

    host = args.host or settings.server.host
    port = args.port or settings.server.port
    workers = args.workers or settings.server.workers

    logger.info(f"Serving against neo4j at {settings.neo4j.uri}")
    if args.prod:
        run_prod_server(host, port, workers)
    else:
        run_dev_server(host, port)


async def check_store(settings: Settings) -> None:
    """Open a driver, verify connectivity, always close it."""
    from core.graph_store import GraphStore

    store = GraphStore.from_settings(settings.neo4j)
    try:
        await store.verify_connectivity()
    finally:
        await store.close()


def cmd_check(args):
    """Handle check command - verify the Neo4j connection."""
    from core.graph_store import STORE_ERRORS

    settings = _load(args)
    configure_logging(settings.server.log_level)

    print("=" * 50)
    print("MOVIEGRAPH STORE CHECK")
    print("=" * 50)
    print(f"URI:             {settings.neo4j.uri}")
    print(f"User:            {settings.neo4j.user}")
    print(f"Database:        {settings.neo4j.database or '(server default)'}")

    try:
        asyncio.run(check_store(settings))
    except STORE_ERRORS as e:
        print(f"Status:          UNREACHABLE ({e})")
        print("=" * 50)
        sys.exit(1)

    print("Status:          OK")
    print("=" * 50)


def main(argv: Optional[List[str]] = None):
    """Main entry point with subcommands."""
    import argparse

    parser = argparse.ArgumentParser(
        description="MovieGraph - REST API over a Neo4j movie graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", help="Path to a TOML config file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, help="Port to bind to")
    serve_parser.add_argument("--workers", type=int, help="Number of workers (prod)")
    serve_parser.add_argument("--prod", action="store_true", help="Run in production mode")
    serve_parser.set_defaults(func=cmd_serve)

    # check command
    check_parser = subparsers.add_parser("check", help="Verify the Neo4j connection")
    check_parser.set_defaults(func=cmd_check)

    args = parser.parse_args(argv)

    if args.command is None:
        # Default to serve
        args.command = "serve"
        args.host = None
        args.port = None
        args.workers = None
        args.prod = False
        args.func = cmd_serve

    args.func(args)


if __name__ == "__main__":
    main()
