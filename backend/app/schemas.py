"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests.
"""

from pydantic import BaseModel


class StudentPayload(BaseModel):
    """Public shape of a student: used for create/update bodies and reads.

    Carries no identifier; the id only appears on the entity returned by
    create and update.
    """
    name: str
    email: str
