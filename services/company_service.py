from typing import Any, Dict, List, Optional
import logging

from app.exceptions import NotFoundError
from domain.companies import (
    CITY_COORDINATES,
    DEFAULT_CENTER,
    COMPANY_COLUMNS,
    DEFAULT_ZOOM,
    EXCLUDED_FIELDS,
    FALLBACK_COMPANIES,
    FOCUS_ZOOM,
    MARKER_RADIUS_RANGE,
    MIN_MARKER_RADIUS,
    company_details,
)
from domain.schemas import (
    CityGroupResponse,
    CompanyColumnResponse,
    CompanyDetail,
    CompanyMapResponse,
    CompanyResponse,
)

logger = logging.getLogger("kuchnie.companies")

# Marker of the selected city is drawn this much larger
SELECTED_RADIUS_BONUS = 2


def _rating(company: Dict[str, Any]) -> float:
    try:
        return float(company.get("rating") or 0)
    except (TypeError, ValueError):
        return 0.0


def _to_response(company: Dict[str, Any]) -> CompanyResponse:
    fields = {
        key: value
        for key, value in company.items()
        if key not in EXCLUDED_FIELDS
    }
    return CompanyResponse(
        id=str(company["id"]),
        name=company["name"],
        city=company.get("city"),
        lat=company["lat"],
        lng=company["lng"],
        url=company.get("url"),
        fields=fields,
        details=[CompanyDetail(**detail) for detail in company_details(company)],
    )


class CompanyService:
    """Read-only company directory and its map grouping"""

    @staticmethod
    def _source(companies: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        return FALLBACK_COMPANIES if companies is None else companies

    @staticmethod
    def list_companies(
        city: Optional[str] = None, companies: Optional[List[Dict[str, Any]]] = None
    ) -> List[CompanyResponse]:
        source = CompanyService._source(companies)
        if city:
            source = [company for company in source if company.get("city") == city]
        return [_to_response(company) for company in source]

    @staticmethod
    def get_company(
        company_id: str, companies: Optional[List[Dict[str, Any]]] = None
    ) -> CompanyResponse:
        for company in CompanyService._source(companies):
            if str(company["id"]) == company_id:
                return _to_response(company)
        logger.warning(f"company_not_found company_id={company_id}")
        raise NotFoundError(f"Company {company_id} not found")

    @staticmethod
    def build_map(
        selected_city: Optional[str] = None,
        companies: Optional[List[Dict[str, Any]]] = None,
    ) -> CompanyMapResponse:
        """
        Group companies by city for the map view.

        Only cities with known coordinates get a marker. Within a group
        companies are ordered by rating (highest first), then by name. Marker
        radius grows with the group size relative to the largest group.
        """
        if selected_city not in CITY_COORDINATES:
            selected_city = None

        grouped: Dict[str, List[Dict[str, Any]]] = {}
        for company in CompanyService._source(companies):
            city = company.get("city")
            if city not in CITY_COORDINATES:
                continue
            grouped.setdefault(city, []).append(company)

        max_group_size = max((len(group) for group in grouped.values()), default=0)

        groups = []
        for city, members in grouped.items():
            ordered = sorted(members, key=lambda c: (-_rating(c), c["name"]))
            radius = MIN_MARKER_RADIUS
            if max_group_size:
                radius = MIN_MARKER_RADIUS + len(members) / max_group_size * MARKER_RADIUS_RANGE
            selected = city == selected_city
            if selected:
                radius += SELECTED_RADIUS_BONUS
            groups.append(
                CityGroupResponse(
                    city=city,
                    coordinates=CITY_COORDINATES[city],
                    radius=radius,
                    selected=selected,
                    companies=[_to_response(company) for company in ordered],
                )
            )

        if selected_city:
            center, zoom = CITY_COORDINATES[selected_city], FOCUS_ZOOM
        else:
            center, zoom = DEFAULT_CENTER, DEFAULT_ZOOM

        return CompanyMapResponse(
            center=center,
            zoom=zoom,
            selected_city=selected_city,
            visible_city_count=len(groups),
            groups=groups,
        )

    @staticmethod
    def columns() -> List[CompanyColumnResponse]:
        """Column labels of the directory table, in display order."""
        return [CompanyColumnResponse(key=key, label=label) for key, label in COMPANY_COLUMNS]
