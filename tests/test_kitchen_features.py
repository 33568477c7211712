"""
Tests for kitchen feature options and prompt merging.
"""

import pytest

from test_fixtures import client
from domain.kitchen_features import (
    FEATURE_CATEGORIES,
    FEATURE_OPTIONS,
    compose_generation_prompt,
    extract_option_labels_from_prompt,
    is_option_prompt_text,
    merge_prompt_with_selected_options,
    option_prompt_by_label,
    toggle_option,
)

SCANDI = "Kuchnia w stylu skandynawskim"
ISLAND = "Kuchnia z wyspą"


def test_catalog_has_four_categories_with_unique_labels():
    assert len(FEATURE_CATEGORIES) == 4
    labels = [o.label for o in FEATURE_OPTIONS]
    assert len(labels) == len(set(labels))


def test_lookup_helpers():
    assert option_prompt_by_label("Skandynawska") == SCANDI
    assert option_prompt_by_label("Nieznana") is None
    assert is_option_prompt_text(ISLAND)
    assert not is_option_prompt_text("Jasne fronty")


def test_extract_labels_in_catalog_order():
    prompt = f"Jasne fronty, {ISLAND} ,{SCANDI}"
    assert extract_option_labels_from_prompt(prompt) == ["Skandynawska", "Wyspa"]


def test_merge_keeps_user_text_first():
    merged = merge_prompt_with_selected_options(f"{ISLAND}, Jasne fronty", ["Skandynawska"])
    assert merged == f"Jasne fronty, {SCANDI}"


def test_merge_ignores_unknown_labels():
    assert merge_prompt_with_selected_options("", ["Nieznana", "Wyspa"]) == ISLAND


@pytest.mark.parametrize(
    "prompt",
    [
        "",
        "Jasne fronty",
        f"Jasne fronty, {SCANDI}",
        f"Drewniany blat, {SCANDI}, {ISLAND}",
    ],
)
@pytest.mark.parametrize("label", ["Skandynawska", "Wyspa", "Japandi"])
def test_toggle_twice_restores_prompt(prompt, label):
    """Toggling the same option twice gives back a normalized prompt unchanged."""
    assert toggle_option(toggle_option(prompt, label), label) == prompt


def test_toggle_adds_then_removes():
    added = toggle_option("Jasne fronty", "Wyspa")
    assert added == f"Jasne fronty, {ISLAND}"
    assert toggle_option(added, "Wyspa") == "Jasne fronty"


def test_compose_generation_prompt():
    assert compose_generation_prompt(f"Jasne fronty, {ISLAND}", ["Wyspa", "Retro"]) == (
        f"Jasne fronty, {ISLAND}, Kuchnia retro"
    )
    assert compose_generation_prompt("Jasne fronty", ["dużo światła"]) == (
        "Jasne fronty, dużo światła"
    )


def test_feature_routes():
    r = client.get("/features")
    assert r.status_code == 200
    assert [c["name"] for c in r.json()] == [c.name for c in FEATURE_CATEGORIES]

    r2 = client.post("/features/toggle", json={"prompt": "Jasne fronty", "label": "Wyspa"})
    assert r2.status_code == 200
    assert r2.json() == {"prompt": f"Jasne fronty, {ISLAND}", "selected": ["Wyspa"]}

    r3 = client.post(
        "/features/merge", json={"prompt": r2.json()["prompt"], "selected": ["Skandynawska"]}
    )
    assert r3.json() == {"prompt": f"Jasne fronty, {SCANDI}", "selected": ["Skandynawska"]}
