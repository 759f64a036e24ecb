"""
Pytest configuration and shared fixtures for the MovieGraph test suite.
"""
import sys
from pathlib import Path

import pytest
from starlette.testclient import TestClient

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def graph():
    """An empty in-memory graph."""
    from tests.fakes import FakeGraph
    return FakeGraph()


@pytest.fixture
def driver(graph):
    """A fake neo4j driver over `graph`."""
    from tests.fakes import FakeDriver
    return FakeDriver(graph)


@pytest.fixture
def store(driver):
    """A GraphStore wrapping the fake driver."""
    from core.graph_store import GraphStore
    return GraphStore(driver)


@pytest.fixture
def client(store):
    """Create a test client for the Starlette app with the fake store injected."""
    from api.routes import create_app
    return TestClient(create_app(store=store))


@pytest.fixture
def graph_with_movies(graph):
    """A graph holding two movies and two people."""
    ids = {
        "matrix": graph.add_movie(title="The Matrix", tagline="Welcome to the Real World", released=1999),
        "inception": graph.add_movie(title="Inception", tagline="Dreams within dreams", released=2010),
    }
    graph.add_person(name="Keanu Reeves")
    graph.add_person(name="Carrie-Anne Moss")
    return graph, ids
