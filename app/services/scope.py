"""Classroom scope resolution for report queries.

``scope_for`` decides which classroom an actor is confined to; it knows
nothing about Supabase. ``apply_scope`` turns that decision into PostgREST
filters on the embedded ``student`` relation.
"""
from dataclasses import dataclass
from typing import Optional, Union

from app.schemas.auth import Actor, Role

STUDENT_CLASSROOM_COLUMN = "student.classroom_id"


@dataclass(frozen=True)
class Unrestricted:
    """The actor may see reports from every classroom."""


@dataclass(frozen=True)
class Fixed:
    """The actor is confined to a single classroom (``None`` means no classroom)."""

    classroom_id: Optional[str]


ClassroomScope = Union[Unrestricted, Fixed]


def scope_for(actor: Actor) -> ClassroomScope:
    if actor.role == Role.TEACHER:
        return Fixed(actor.classroom_id)
    return Unrestricted()


def restrict_to_classroom(query, classroom_id: Optional[str]):
    if classroom_id is None:
        return query.is_(STUDENT_CLASSROOM_COLUMN, "null")
    return query.eq(STUDENT_CLASSROOM_COLUMN, classroom_id)


def apply_scope(query, scope: ClassroomScope):
    if isinstance(scope, Fixed):
        return restrict_to_classroom(query, scope.classroom_id)
    return query
