"""Conversions between the public `StudentPayload` and the `Student` row."""

from . import models
from .schemas import StudentPayload


def to_payload(student: models.Student) -> StudentPayload:
    """Public view of a stored student (the id is dropped)."""
    return StudentPayload(name=student.name, email=student.email)


def to_entity(payload: StudentPayload) -> models.Student:
    """Build an unsaved `Student`; the store assigns the id on insert."""
    return models.Student(name=payload.name, email=payload.email)
