from pydantic import BaseModel
from typing import Any, Dict, List, Optional, Tuple


class CompanyDetail(BaseModel):
    key: str
    label: str
    value: str


class CompanyColumnResponse(BaseModel):
    key: str
    label: str


class CompanyResponse(BaseModel):
    id: str
    name: str
    city: Optional[str] = None
    lat: float
    lng: float
    url: Optional[str] = None
    fields: Dict[str, Any] = {}
    details: List[CompanyDetail] = []


class CityGroupResponse(BaseModel):
    city: str
    coordinates: Tuple[float, float]
    radius: float
    selected: bool
    companies: List[CompanyResponse]


class CompanyMapResponse(BaseModel):
    center: Tuple[float, float]
    zoom: int
    selected_city: Optional[str] = None
    visible_city_count: int
    groups: List[CityGroupResponse]
