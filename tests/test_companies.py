"""
Tests for the partner company directory and its map grouping.
"""

import pytest

from test_fixtures import client
from app.exceptions import NotFoundError
from domain.companies import (
    CITY_COORDINATES,
    COMPANY_COLUMNS,
    DEFAULT_CENTER,
    DEFAULT_ZOOM,
    EXCLUDED_FIELDS,
    FALLBACK_COMPANIES,
    FOCUS_ZOOM,
    company_details,
    format_value,
    humanize_key,
)
from services.company_service import CompanyService

DIRECTORY = [
    {"id": "a", "name": "Zeta Meble", "city": "Kraków", "lat": 50.06, "lng": 19.94, "rating": 4.5},
    {"id": "b", "name": "Alfa Kuchnie", "city": "Kraków", "lat": 50.07, "lng": 19.95, "rating": 4.5},
    {"id": "c", "name": "Beta Studio", "city": "Kraków", "lat": 50.05, "lng": 19.93, "rating": 4.9},
    {"id": "d", "name": "Gdańskie Fronty", "city": "Gdańsk", "lat": 54.35, "lng": 18.64, "rating": 4.0},
    {"id": "e", "name": "Nowhere Ltd", "city": "Zakopane", "lat": 49.29, "lng": 19.95},
]


# =============================================================================
# DISPLAY HELPERS
# =============================================================================


def test_humanize_key():
    assert humanize_key("leadTime") == "Lead Time"
    assert humanize_key("postal_code") == "Postal code"
    assert humanize_key("phone") == "Phone"


def test_format_value():
    assert format_value(None) == ""
    assert format_value(["AGD", "montaż"]) == "AGD, montaż"
    assert format_value(True) == "true"
    assert format_value(4.5) == "4.5"


def test_company_details_skip_identity_and_empty_fields():
    details = company_details(
        {"id": "x", "name": "X", "city": "Gdańsk", "lat": 1, "lng": 2, "url": "u",
         "phone": "+48 500", "leadTime": "", "budget": None}
    )
    assert details == [{"key": "phone", "label": "Phone", "value": "+48 500"}]


# =============================================================================
# SERVICE TESTS
# =============================================================================


def test_list_and_filter():
    assert len(CompanyService.list_companies(companies=DIRECTORY)) == 5
    krakow = CompanyService.list_companies("Kraków", companies=DIRECTORY)
    assert {c.id for c in krakow} == {"a", "b", "c"}


def test_get_company():
    company = CompanyService.get_company("d", companies=DIRECTORY)
    assert company.name == "Gdańskie Fronty"
    assert company.fields == {"rating": 4.0}
    assert company.details[0].key == "rating"

    with pytest.raises(NotFoundError):
        CompanyService.get_company("missing", companies=DIRECTORY)


def test_map_groups_sort_and_radius():
    """
    Verifies:
    1. Cities without coordinates are left out
    2. Companies are ordered by rating desc, then name
    3. The largest group gets the full radius range
    """
    result = CompanyService.build_map(companies=DIRECTORY)
    groups = {g.city: g for g in result.groups}

    assert set(groups) == {"Kraków", "Gdańsk"}
    assert result.visible_city_count == 2
    assert [c.id for c in groups["Kraków"].companies] == ["c", "b", "a"]
    assert groups["Kraków"].radius == pytest.approx(14)
    assert groups["Gdańsk"].radius == pytest.approx(8 + 1 / 3 * 6)
    assert tuple(result.center) == DEFAULT_CENTER
    assert result.zoom == DEFAULT_ZOOM
    assert result.selected_city is None


def test_map_focus_on_selected_city():
    result = CompanyService.build_map("Gdańsk", companies=DIRECTORY)
    groups = {g.city: g for g in result.groups}

    assert tuple(result.center) == CITY_COORDINATES["Gdańsk"]
    assert result.zoom == FOCUS_ZOOM
    assert groups["Gdańsk"].selected is True
    assert groups["Gdańsk"].radius == pytest.approx(8 + 1 / 3 * 6 + 2)


def test_map_unknown_selected_city_falls_back():
    result = CompanyService.build_map("Zakopane", companies=DIRECTORY)
    assert result.selected_city is None
    assert result.zoom == DEFAULT_ZOOM


def test_map_empty_directory():
    result = CompanyService.build_map(companies=[])
    assert result.groups == []
    assert result.visible_city_count == 0


# =============================================================================
# ROUTE TESTS
# =============================================================================


def test_company_routes():
    r = client.get("/companies")
    assert r.status_code == 200
    assert len(r.json()) == len(FALLBACK_COMPANIES)

    first = FALLBACK_COMPANIES[0]
    r2 = client.get(f"/companies/{first['id']}")
    assert r2.status_code == 200
    assert r2.json()["name"] == first["name"]
    assert all(d["key"] not in ("id", "lat", "lng") for d in r2.json()["details"])

    r3 = client.get("/companies/map", params={"city": "Gdańsk"})
    assert r3.status_code == 200
    assert r3.json()["zoom"] == FOCUS_ZOOM
    assert r3.json()["groups"][0]["city"] == "Gdańsk"

    r4 = client.get("/companies/unknown-company")
    assert r4.status_code == 404
    assert r4.json()["error"]["code"] == "not_found"


def test_company_columns():
    r = client.get("/companies/columns")
    assert r.status_code == 200
    assert [c["key"] for c in r.json()] == [key for key, _ in COMPANY_COLUMNS]
    assert r.json()[0] == {"key": "specialization", "label": "Specjalizacja"}


def test_fields_skip_identity_keys():
    company = CompanyService.get_company("a", companies=DIRECTORY)
    assert not EXCLUDED_FIELDS & set(company.fields)
