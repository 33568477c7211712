"""
Partner company directory (read-only reference data).
"""

import json
import re
from typing import Any, Dict, List, Tuple

CITY_COORDINATES: Dict[str, Tuple[float, float]] = {
    "Bydgoszcz": (53.1235, 18.0084),
    "Gdańsk": (54.352, 18.6466),
    "Katowice": (50.2649, 19.0238),
    "Kraków": (50.0647, 19.945),
    "Lublin": (51.2465, 22.5684),
    "Poznań": (52.4064, 16.9252),
    "Szczecin": (53.4285, 14.5528),
    "Warszawa": (52.2297, 21.0122),
    "Wrocław": (51.1079, 17.0385),
    "Łódź": (51.7592, 19.455),
}

DEFAULT_CENTER = (52.237049, 19.015164)
DEFAULT_ZOOM = 6
FOCUS_ZOOM = 11
MIN_MARKER_RADIUS = 8
MARKER_RADIUS_RANGE = 6

EXCLUDED_FIELDS = frozenset({"id", "name", "city", "lat", "lng", "url"})

# Table columns of the directory listing: (field key, Polish label)
COMPANY_COLUMNS: List[Tuple[str, str]] = [
    ("specialization", "Specjalizacja"),
    ("rating", "Ocena"),
    ("distance", "Dystans"),
    ("city", "Miasto"),
    ("promotion", "Promocja"),
    ("expires", "Ważność"),
    ("budget", "Budżet"),
    ("leadTime", "Realizacja"),
    ("type", "Typ"),
    ("modules", "Moduły"),
    ("installation", "Montaż"),
    ("guarantee", "Gwarancja"),
    ("appliances", "AGD"),
    ("project", "Projekt"),
    ("measurement", "Pomiar"),
    ("contact", "Akcje"),
]

FALLBACK_COMPANIES: List[Dict[str, Any]] = [
    {
        "id": "izi-kuchnie",
        "name": "IZI KUCHNIE",
        "city": "Gdańsk",
        "lat": 54.3589297,
        "lng": 18.6057662,
        "url": "https://www.izikuchnie.pl/",
        "address": "ul. Franciszka Schuberta 1A/2, 80-171 Gdańsk",
        "phone": "+48 500 100 990",
        "description": (
            "Meble kuchnie na zamówienie na terenie całego kraju - przygotujemy dla "
            "Ciebie bezpłatny projekt. Wejdź i zamów online z dostawą do domu!"
        ),
    },
    {
        "id": "kuchnie-piechocki",
        "name": "Kuchnie Piechocki",
        "city": "Gdańsk",
        "lat": 54.3078964,
        "lng": 18.5856069,
        "url": "https://kuchniepiechocki.pl/",
        "address": "ul. Wielkopolska 66, 80-180 Gdańsk",
        "phone": "+48 796 626 711",
        "description": (
            "Naszą ofertę kierujemy do klientów poszukujących trwałych i funkcjonalnych "
            "mebli oraz oryginalnych rozwiązań."
        ),
    },
    {
        "id": "gdanskie-kuchnie",
        "name": "Gdańskie Kuchnie",
        "city": "Gdańsk",
        "lat": 54.3464898,
        "lng": 18.601955,
        "url": "https://gdanskiekuchnie.pl/",
        "address": "ul. Kartuska 218, 80-122 Gdańsk",
        "phone": "+48 500 600 058",
        "description": (
            "Od 13 lat projektujemy, produkujemy i montujemy kuchnie na wymiar dla firm "
            "i osób prywatnych w Trójmieście."
        ),
    },
    {
        "id": "ikea-gdansk",
        "name": "IKEA Gdańsk",
        "city": "Gdańsk",
        "lat": 54.3725813,
        "lng": 18.5208388,
        "url": "https://www.ikea.com/pl/pl/stores/gdansk/",
        "address": "ul. Złota Karczma 26, 80-298 Gdańsk",
        "phone": "+48 22 275 01 23",
        "description": (
            "Tu znajdziesz adres, godziny otwarcia sklepu, oferty specjalne oraz wiele "
            "lokalnych informacji o sklepie IKEA Gdańsk."
        ),
    },
    {
        "id": "halupczok-gdansk",
        "name": "Halupczok Gdańsk",
        "city": "Gdańsk",
        "lat": 54.3885215,
        "lng": 18.5905665,
        "url": "https://meble-halupczok.pl/salony-sprzedazy/kuchnie-gdansk/",
        "address": "al. Grunwaldzka 211 (City Meble), 80-266 Gdańsk",
        "phone": "+48 58 666 00 66",
        "description": (
            "Salon Halupczok w Gdańsku to przestrzeń z najnowszymi kolekcjami mebli "
            "kuchennych przygotowanymi dla miłośników dobrego designu."
        ),
    },
    {
        "id": "mhm-studio",
        "name": "MHM Studio Mebli Kuchennych",
        "city": "Gdańsk",
        "lat": 54.4072984,
        "lng": 18.5701781,
        "url": "https://mhmkuchnie.eu/",
        "address": "al. Grunwaldzka 489, 80-309 Gdańsk",
        "phone": "+48 669 001 778",
        "description": (
            "Studio Mebli Kuchennych MHM oferuje nowoczesne meble kuchenne na wymiar "
            "dla klientów z Gdańska i całego Trójmiasta."
        ),
    },
    {
        "id": "p3-studio",
        "name": "P3 Studio",
        "city": "Gdańsk",
        "lat": 54.3885215,
        "lng": 18.5905665,
        "url": "https://p3studio.pl/",
        "address": "al. Grunwaldzka 211 lok. 0.16, 80-266 Gdańsk",
        "phone": "+48 733 655 037",
        "description": (
            "Piękne kuchnie na wymiar dla Gdańska, Gdyni i Sopotu – zespół P3 Studio "
            "projektuje i realizuje nowoczesne kuchnie na zamówienie."
        ),
    },
]


def humanize_key(key: str) -> str:
    """``leadTime`` -> ``Lead Time``, ``postal_code`` -> ``Postal code``"""
    spaced = re.sub(r"([A-Z])", r" \1", key).replace("_", " ")
    return spaced[:1].upper() + spaced[1:]


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def company_details(company: Dict[str, Any]) -> List[Dict[str, str]]:
    """Descriptive fields of a company in display form, skipping empty values."""
    details = []
    for key, value in company.items():
        if key in EXCLUDED_FIELDS:
            continue
        formatted = format_value(value)
        if not formatted:
            continue
        details.append({"key": key, "label": humanize_key(key), "value": formatted})
    return details
