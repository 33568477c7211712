"""
"Moja kuchnia" brief: the room, layout, appliance and colour choices a user
collects before talking to a designer.

Selections map a category id to the chosen option values. Single-choice
categories hold at most one value; in multi-choice categories values keep
the order in which they were picked.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class BriefOption:
    value: str
    label: str
    description: Optional[str] = None


@dataclass(frozen=True)
class BriefCategory:
    id: str
    title: str
    description: str
    multiple: bool
    options: Tuple[BriefOption, ...]

    def option(self, value: str) -> Optional[BriefOption]:
        for option in self.options:
            if option.value == value:
                return option
        return None


ROOM_FEATURE_OPTIONS = (
    BriefOption("open-plan", "Otwarta na salon", "Strefa dzienna płynnie łączy się z kuchnią."),
    BriefOption("separate-room", "Oddzielne pomieszczenie", "Zamknięta kuchnia z własnym wejściem."),
    BriefOption("large-window", "Duże okno", "Dużo naturalnego światła i widok na zewnątrz."),
    BriefOption(
        "dining-area", "Miejsce na stół", "Przestrzeń na rodzinne posiłki lub wyspę z hokerami."
    ),
    BriefOption("pantry", "Spiżarnia lub schowek", "Dodatkowe miejsce na przechowywanie zapasów."),
    BriefOption(
        "high-ceiling", "Wysoki sufit", "Możliwość wyższej zabudowy i dekoracyjnego oświetlenia."
    ),
    BriefOption("sloped-ceiling", "Skosy", "Adaptacja poddasza lub skośnych ścian."),
)

LAYOUT_OPTIONS = (
    BriefOption("single-wall", "Jedna linia", "Szafki ustawione wzdłuż jednej ściany."),
    BriefOption("l-shaped", "Litera L", "Wygodny układ na dwie sąsiadujące ściany."),
    BriefOption("u-shaped", "Litera U", "Maksimum blatu i miejsce na gotowanie w centrum."),
    BriefOption("galley", "Dwurzędowa", "Dwie równoległe linie zabudowy."),
    BriefOption("island", "Z wyspą", "Oddzielona strefa robocza lub miejsce spotkań."),
    BriefOption("peninsula", "Z półwyspem", "Blat wysunięty z zabudowy jako dodatkowa strefa."),
)

APPLIANCE_OPTIONS = (
    BriefOption("built-in-fridge", "Lodówka w zabudowie", "Front ukryty w zabudowie meblowej."),
    BriefOption(
        "freestanding-fridge",
        "Lodówka wolnostojąca",
        "Wyeksponowana lodówka solo lub side-by-side.",
    ),
    BriefOption(
        "column-oven", "Piekarnik w słupku", "Wygodne ustawienie z mikrofalą na wysokości wzroku."
    ),
    BriefOption(
        "cooktop-oven", "Piekarnik pod płytą", "Klasyczne rozwiązanie z płytą nad piekarnikiem."
    ),
    BriefOption("dishwasher-60", "Zmywarka 60 cm", "Pełnowymiarowa zmywarka do większej rodziny."),
    BriefOption("dishwasher-45", "Zmywarka 45 cm", "Wąska zmywarka idealna do mniejszego wnętrza."),
    BriefOption("island-hood", "Okap wyspowy", "Dekoracyjny okap zawieszony nad wyspą."),
    BriefOption("laundry", "Pralka w zabudowie", "Ukryta pralka w ciągu meblowym kuchni."),
)

COLOR_OPTIONS = (
    BriefOption("white-wood", "Biel i jasne drewno", "Lekka i przytulna baza skandynawskiego stylu."),
    BriefOption("warm-beige", "Ciepłe beże", "Naturalne odcienie piasku i kawy z mlekiem."),
    BriefOption("cool-grey", "Chłodne szarości", "Nowoczesne, stonowane tonacje."),
    BriefOption("black-wood", "Czerń z drewnem", "Kontrastowa elegancja z drewnianymi akcentami."),
    BriefOption("green-accents", "Zielone akcenty", "Natura w kuchni: szałwia, oliwka, rośliny."),
    BriefOption("navy-gold", "Granat i mosiądz", "Głębia koloru ze złotymi detalami."),
)

CATEGORIES = (
    BriefCategory(
        "room",
        "Cechy pomieszczenia",
        "Zaznacz elementy, które opisują Twoją przestrzeń.",
        True,
        ROOM_FEATURE_OPTIONS,
    ),
    BriefCategory(
        "layout",
        "Układ kuchni",
        "Wybierz układ, który najlepiej pasuje do pomieszczenia.",
        False,
        LAYOUT_OPTIONS,
    ),
    BriefCategory(
        "appliances",
        "Sprzęt AGD",
        "Określ, jakie urządzenia muszą się znaleźć w kuchni.",
        True,
        APPLIANCE_OPTIONS,
    ),
    BriefCategory(
        "colors",
        "Kolor przewodni",
        "Jakie barwy mają budować klimat Twojej kuchni?",
        False,
        COLOR_OPTIONS,
    ),
)

_CATEGORIES_BY_ID = {category.id: category for category in CATEGORIES}

Selections = Dict[str, List[str]]


def get_category(category_id: str) -> BriefCategory:
    category = _CATEGORIES_BY_ID.get(category_id)
    if category is None:
        raise ValueError(f"Unknown category: {category_id}")
    return category


def empty_selections() -> Selections:
    return {category.id: [] for category in CATEGORIES}


def toggle(selections: Selections, category_id: str, value: str) -> Selections:
    """Pick or unpick ``value``; picking in a single-choice category replaces the old pick."""
    category = get_category(category_id)
    if category.option(value) is None:
        raise ValueError(f"Unknown option {value} in category {category_id}")

    current = selections.get(category_id, [])
    if value in current:
        chosen = [item for item in current if item != value]
    elif category.multiple:
        chosen = current + [value]
    else:
        chosen = [value]
    return {**selections, category_id: chosen}


def select_all(selections: Selections, category_id: str) -> Selections:
    category = get_category(category_id)
    if not category.multiple:
        raise ValueError(f"Category {category_id} allows a single choice")
    return {**selections, category_id: [option.value for option in category.options]}


def clear_category(selections: Selections, category_id: str) -> Selections:
    get_category(category_id)
    return {**selections, category_id: []}


def sanitize_selections(raw: Any) -> Selections:
    """Known options of known categories from stored data; anything else is dropped."""
    selections = empty_selections()
    if not isinstance(raw, dict):
        return selections
    for category in CATEGORIES:
        values = raw.get(category.id)
        if not isinstance(values, list):
            continue
        chosen = []
        for value in values:
            if isinstance(value, str) and category.option(value) and value not in chosen:
                chosen.append(value)
        selections[category.id] = chosen if category.multiple else chosen[:1]
    return selections


def summary(selections: Selections) -> List[Tuple[BriefCategory, List[BriefOption]]]:
    """Picked options per category, in catalog category order; empty categories are skipped."""
    entries = []
    for category in CATEGORIES:
        options = [category.option(value) for value in selections.get(category.id, [])]
        options = [option for option in options if option is not None]
        if options:
            entries.append((category, options))
    return entries
