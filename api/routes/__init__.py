"""API routes package"""

from . import (
    generate,
    projects,
    profiles,
    features,
    drafts,
    companies,
    planner,
    sketches,
    my_kitchen,
    health,
)

__all__ = [
    "generate",
    "projects",
    "profiles",
    "features",
    "drafts",
    "companies",
    "planner",
    "sketches",
    "my_kitchen",
    "health",
]
