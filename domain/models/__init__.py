"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.project import Project
from domain.models.profile import Profile
from domain.models.draft import Draft
from domain.models.kitchen_brief import KitchenBrief

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Models
    "Project",
    "Profile",
    "Draft",
    "KitchenBrief",
]
