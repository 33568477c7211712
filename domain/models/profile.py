"""
User profile model.
"""

from sqlalchemy import Column, Text, TIMESTAMP, UUID
from sqlalchemy.sql import func

from domain.models.database import Base


class Profile(Base):
    """Nickname and postal code of an authenticated user"""

    __tablename__ = "profiles"

    user_id = Column(UUID(as_uuid=True), primary_key=True)
    nick = Column(Text, nullable=False, default="")
    postal_code = Column(Text, nullable=False, default="")
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )
