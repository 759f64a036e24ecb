"""MOVIEGRAPH API - Starlette routes and app factory."""
