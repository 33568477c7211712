"""
Generated kitchen projects (gallery entries).
"""

from sqlalchemy import Column, Text, TIMESTAMP, Boolean, UUID, Index
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class Project(Base):
    """A generated image owned by a user.

    The image bytes live in object storage under ``image_path``; the row is
    created once the upload succeeded and is never edited afterwards except
    for the ``favorite`` flag.
    """

    __tablename__ = "projects"

    project_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), nullable=False)
    prompt = Column(Text, nullable=False)
    image_path = Column(Text, nullable=False)
    aspect_ratio = Column(Text)
    favorite = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    __table_args__ = (Index("ix_projects_user_created", "user_id", "created_at"),)
