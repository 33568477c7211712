"""
Per-user "Moja kuchnia" brief.
"""

from sqlalchemy import Column, Text, TIMESTAMP, UUID
from sqlalchemy.sql import func

from domain.models.database import Base


class KitchenBrief(Base):
    """Questionnaire choices, notes and room sketch of one user"""

    __tablename__ = "kitchen_briefs"

    user_id = Column(UUID(as_uuid=True), primary_key=True)
    selections = Column(Text, nullable=False, default="{}")  # JSON object stored as text
    notes = Column(Text, nullable=False, default="")
    sketch = Column(Text, nullable=False, default='{"operations": []}')  # JSON stored as text
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )
