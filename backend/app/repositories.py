"""Repository classes encapsulating database operations.

Repositories return SQLModel objects and perform commits/refreshes
where appropriate. Database errors are not caught here; they propagate
to the caller and the request session is rolled back when it closes.
"""

from typing import List, Optional
from sqlmodel import Session, select
from . import models


class StudentRepository:
    """CRUD operations for `Student` rows keyed by their surrogate id."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, student: models.Student) -> models.Student:
        """Persist a new student and return it with its generated id."""
        self.session.add(student)
        self.session.commit()
        self.session.refresh(student)
        return student

    def find_all(self) -> List[models.Student]:
        """Return every student in insertion order."""
        stmt = select(models.Student).order_by(models.Student.id)
        return self.session.exec(stmt).all()

    def find_by_id(self, student_id: int) -> Optional[models.Student]:
        """Get a `Student` by primary key or `None` if not found."""
        return self.session.get(models.Student, student_id)

    def update(self, student_id: int, student: models.Student) -> Optional[models.Student]:
        """Overwrite name/email of an existing row.

        Returns the updated row, or `None` when no row has `student_id`.
        The stored id is kept regardless of `student.id`.
        """
        existing = self.find_by_id(student_id)
        if existing is None:
            return None
        existing.name = student.name
        existing.email = student.email
        self.session.add(existing)
        self.session.commit()
        self.session.refresh(existing)
        return existing

    def delete_by_id(self, student_id: int) -> bool:
        """Delete a row; return False if there was nothing to delete."""
        existing = self.find_by_id(student_id)
        if existing is None:
            return False
        self.session.delete(existing)
        self.session.commit()
        return True
