"""
Shared fixtures for the reports API tests.

Supabase query builders are chainable, so the fake builder returns itself
from every filter call and only ``execute`` yields a result.
"""

from unittest.mock import Mock
import pytest
from fastapi.testclient import TestClient

from app.dependencies.auth import user_supabase_client
from app.main import app
from app.schemas.auth import Actor, Role

BUILDER_METHODS = ("select", "eq", "is_", "lte", "gte", "lt", "order", "range", "insert")


def make_query(data=None, count=None):
    """Return a chainable query builder whose ``execute`` yields data/count."""
    query = Mock()
    for name in BUILDER_METHODS:
        getattr(query, name).return_value = query
    query.execute.return_value = Mock(data=data if data is not None else [], count=count)
    return query


def make_supabase(**tables):
    """Supabase client whose ``table(name)`` returns the builder given for ``name``."""
    supabase = Mock()
    supabase.table.side_effect = lambda name: tables[name]
    return supabase


def report_row(report_id, student_id, classroom_id, day, description="Late to class"):
    return {
        "id": report_id,
        "student_id": student_id,
        "description": description,
        "date": day,
        "student": {
            "id": student_id,
            "classroom_id": classroom_id,
            "name": f"Student {student_id}",
            "classroom": {"id": classroom_id, "name": f"Class {classroom_id}"},
        },
    }


@pytest.fixture
def admin():
    return Actor(id="admin-1", role=Role.ADMIN, classroom_id=None)


@pytest.fixture
def teacher():
    return Actor(id="teacher-1", role=Role.TEACHER, classroom_id="7")


@pytest.fixture
def api():
    """TestClient factory that authenticates every request as ``actor``."""
    def _client(supabase, actor):
        app.dependency_overrides[user_supabase_client] = lambda: {
            "supabase": supabase,
            "user_id": actor.id,
            "user": None,
            "actor": actor,
        }
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()
