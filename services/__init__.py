"""Services package - Business logic layer"""

from services.generation_service import GenerationService
from services.image_proxy_service import ImageProxyService
from services.project_service import ProjectService
from services.profile_service import ProfileService
from services.draft_service import DraftService
from services.company_service import CompanyService
from services.planner_service import PlannerService
from services.sketch_service import SketchService

__all__ = [
    "GenerationService",
    "ImageProxyService",
    "ProjectService",
    "ProfileService",
    "DraftService",
    "CompanyService",
    "PlannerService",
    "SketchService",
]
