"""Partner company directory routes"""

from fastapi import APIRouter, Query
from typing import List, Optional

from domain.schemas import CompanyColumnResponse, CompanyMapResponse, CompanyResponse
from services.company_service import CompanyService

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("", response_model=List[CompanyResponse])
def list_companies(city: Optional[str] = Query(default=None)):
    return CompanyService.list_companies(city)


# Declared before /{company_id} so "columns" and "map" are not taken for an id
@router.get("/columns", response_model=List[CompanyColumnResponse])
def company_columns():
    """Column labels of the directory table."""
    return CompanyService.columns()


@router.get("/map", response_model=CompanyMapResponse)
def company_map(city: Optional[str] = Query(default=None)):
    """Companies grouped by city, with marker sizes and the map focus."""
    return CompanyService.build_map(city)


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company(company_id: str):
    return CompanyService.get_company(company_id)
