"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.project_repository import ProjectRepository
from repositories.profile_repository import ProfileRepository
from repositories.draft_repository import DraftRepository
from repositories.kitchen_brief_repository import KitchenBriefRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "ProfileRepository",
    "DraftRepository",
    "KitchenBriefRepository",
]
