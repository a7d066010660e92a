"""
Document SQLModel

Uploaded student documents. Only type and review status matter to the
workflow rules; file storage lives elsewhere.
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field

from app.domain.workflow.documents import DocumentStatus
from app.infrastructure.db.models.base import BaseModel


class Document(BaseModel, table=True):
    """A student's document record."""

    __tablename__ = "documents"

    student_id: UUID = Field(..., foreign_key="students.id", index=True)
    type: str = Field(..., max_length=64, index=True)
    status: str = Field(default=DocumentStatus.PENDING.value, max_length=20)

    file_name: Optional[str] = Field(default=None, max_length=255)
    reviewed_by: Optional[UUID] = Field(default=None)
    remarks: Optional[str] = Field(default=None)
