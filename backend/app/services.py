"""Business logic services used by HTTP controllers.

Services are intentionally thin: each operation makes one repository
call and one mapping step. There is no cross-record logic.
"""

import logging
from typing import List
from sqlmodel import Session
from . import models, repositories
from .mappers import to_entity, to_payload
from .schemas import StudentPayload

logger = logging.getLogger("app.services")


class StudentNotFound(LookupError):
    """Raised when no student exists for the requested id."""
    def __init__(self, student_id: int):
        super().__init__(f"student {student_id} not found")
        self.student_id = student_id


class StudentService:
    """Create, read, update and delete student records."""
    def __init__(self, session: Session):
        self.session = session
        self.student_repo = repositories.StudentRepository(session)

    def save(self, payload: StudentPayload) -> models.Student:
        """Store a new student and return the entity including its id."""
        student = self.student_repo.create(to_entity(payload))
        logger.info("student created id=%s", student.id)
        return student

    def list_all(self) -> List[StudentPayload]:
        """Return the public view of every student, in store order."""
        return [to_payload(s) for s in self.student_repo.find_all()]

    def get_by_id(self, student_id: int) -> StudentPayload:
        student = self.student_repo.find_by_id(student_id)
        if student is None:
            raise StudentNotFound(student_id)
        return to_payload(student)

    def update(self, student_id: int, payload: StudentPayload) -> models.Student:
        """Replace name/email of an existing student.

        Raises `StudentNotFound` if `student_id` was never issued or has
        been deleted.
        """
        student = self.student_repo.update(student_id, to_entity(payload))
        if student is None:
            raise StudentNotFound(student_id)
        logger.info("student updated id=%s", student_id)
        return student

    def delete_by_id(self, student_id: int) -> None:
        if not self.student_repo.delete_by_id(student_id):
            raise StudentNotFound(student_id)
        logger.info("student deleted id=%s", student_id)
