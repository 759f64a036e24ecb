"""
Tests for core/queries.py - the update builder and change message.
"""
from core.queries import (
    UPDATABLE_FIELDS,
    UPDATE_MOVIE_PREFIX,
    build_update,
    describe_changes,
)
from core.schemas import MovieProperties, MovieUpdate


OLD = MovieProperties(title="Inception", tagline="Dreams within dreams", released=2010)


def test_build_update_single_field():
    plan = build_update(MovieUpdate(id=7, tagline="New tagline"))

    assert plan.query == UPDATE_MOVIE_PREFIX + "n.tagline = $newTagline"
    assert plan.parameters == {"id": 7, "newTagline": "New tagline"}
    assert [f.name for f in plan.fields] == ["tagline"]


def test_build_update_all_fields_in_fixed_order():
    plan = build_update(MovieUpdate(id=1, released=2011, title="T", tagline="G"))

    assert plan.query == (
        "MATCH (n:Movie) WHERE id(n) = $id SET "
        "n.title = $newTitle, n.tagline = $newTagline, n.released = $newReleased"
    )
    assert plan.parameters == {"id": 1, "newTitle": "T", "newTagline": "G", "newReleased": 2011}


def test_build_update_nothing_to_change():
    plan = build_update(MovieUpdate(id=3))

    assert plan.query is None
    assert plan.parameters == {"id": 3}
    assert plan.fields == []


def test_zero_values_count_as_unset():
    by_name = {f.name: f for f in UPDATABLE_FIELDS}

    assert not by_name["title"].is_set("")
    assert not by_name["tagline"].is_set("")
    assert not by_name["released"].is_set(0)
    assert by_name["released"].is_set(-1)
    assert by_name["title"].is_set(" ")


def test_build_update_never_inlines_values():
    """Values always travel as parameters, even ones that look like Cypher."""
    hostile = 'x", n.title = "pwned'
    plan = build_update(MovieUpdate(id=1, title=hostile))

    assert hostile not in plan.query
    assert plan.parameters["newTitle"] == hostile


def test_describe_changes_tagline_only():
    update = MovieUpdate(id=9, tagline="New tagline")
    plan = build_update(update)

    assert describe_changes(OLD, update, plan.fields) == (
        "Movie details updated for ID 9:\n"
        '- Tagline changed from "Dreams within dreams" to "New tagline"'
    )


def test_describe_changes_released_year():
    update = MovieUpdate(id=9, released=2012)
    plan = build_update(update)

    assert describe_changes(OLD, update, plan.fields).endswith(
        '- Released year changed from "2010" to "2012"'
    )


def test_describe_changes_no_fields():
    update = MovieUpdate(id=9)

    assert describe_changes(OLD, update, []) == "Movie details updated for ID 9:"
