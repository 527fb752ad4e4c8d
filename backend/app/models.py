"""SQLModel data models.

This module defines the application's database table. The table itself
is created by the versioned SQL migrations in `migrations/`, so the
column definitions here must stay in step with those files.
"""

from typing import Optional
from sqlmodel import SQLModel, Field


class Student(SQLModel, table=True):
    """A stored student record.

    `id` is assigned by the database on insert and never changes
    afterwards; `name` and `email` are free text (no uniqueness).
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    email: str = Field(nullable=False)
