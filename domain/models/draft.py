"""
Per-user generation draft.
"""

from sqlalchemy import Column, Text, TIMESTAMP, UUID
from sqlalchemy.sql import func

from domain.models.database import Base


class Draft(Base):
    """Last used aspect ratio and the prompt being written, one row per user"""

    __tablename__ = "drafts"

    user_id = Column(UUID(as_uuid=True), primary_key=True)
    aspect_ratio = Column(Text)
    prompt_draft = Column(Text)
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )
