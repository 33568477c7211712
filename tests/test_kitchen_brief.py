"""
Tests for the "Moja kuchnia" brief: option catalog, selection rules,
stored sketch handling and the /my-kitchen routes.
"""

import json
import uuid

import pytest
from sqlalchemy.orm import Session

from test_fixtures import AUTH_HEADERS, client, db_session, login_as, make_auth_user, use_db
from app.exceptions import ServiceValidationError
from domain import kitchen_brief
from domain.models import KitchenBrief
from services.kitchen_brief_service import KitchenBriefService
from services.sketch_service import pads


# =============================================================================
# DOMAIN TESTS
# =============================================================================


def test_catalog():
    assert [(c.id, c.multiple) for c in kitchen_brief.CATEGORIES] == [
        ("room", True),
        ("layout", False),
        ("appliances", True),
        ("colors", False),
    ]
    assert len(kitchen_brief.ROOM_FEATURE_OPTIONS) == 7
    assert len(kitchen_brief.LAYOUT_OPTIONS) == 6
    assert len(kitchen_brief.APPLIANCE_OPTIONS) == 8
    assert len(kitchen_brief.COLOR_OPTIONS) == 6
    assert kitchen_brief.get_category("layout").option("l-shaped").label == "Litera L"


def test_toggle_single_choice_replaces_and_clears():
    selections = kitchen_brief.empty_selections()
    selections = kitchen_brief.toggle(selections, "layout", "l-shaped")
    assert selections["layout"] == ["l-shaped"]

    selections = kitchen_brief.toggle(selections, "layout", "island")
    assert selections["layout"] == ["island"]

    selections = kitchen_brief.toggle(selections, "layout", "island")
    assert selections["layout"] == []


def test_toggle_multi_choice_keeps_pick_order():
    selections = kitchen_brief.empty_selections()
    for value in ("pantry", "open-plan", "large-window"):
        selections = kitchen_brief.toggle(selections, "room", value)
    assert selections["room"] == ["pantry", "open-plan", "large-window"]

    selections = kitchen_brief.toggle(selections, "room", "open-plan")
    assert selections["room"] == ["pantry", "large-window"]


def test_toggle_does_not_mutate_input():
    before = kitchen_brief.empty_selections()
    kitchen_brief.toggle(before, "colors", "navy-gold")
    assert before["colors"] == []


@pytest.mark.parametrize(
    "category, value",
    [("kitchen", "pantry"), ("room", "l-shaped"), ("colors", "")],
)
def test_toggle_rejects_unknown_choices(category, value):
    with pytest.raises(ValueError):
        kitchen_brief.toggle(kitchen_brief.empty_selections(), category, value)


def test_select_all_and_clear():
    selections = kitchen_brief.select_all(kitchen_brief.empty_selections(), "appliances")
    assert selections["appliances"] == [o.value for o in kitchen_brief.APPLIANCE_OPTIONS]
    assert kitchen_brief.clear_category(selections, "appliances")["appliances"] == []

    with pytest.raises(ValueError):
        kitchen_brief.select_all(selections, "layout")
    with pytest.raises(ValueError):
        kitchen_brief.clear_category(selections, "kitchen")


def test_sanitize_selections():
    raw = {
        "room": ["pantry", "pantry", "fireplace", 3, "skosy", "sloped-ceiling"],
        "layout": ["galley", "island"],
        "colors": "white-wood",
        "extra": ["x"],
    }
    assert kitchen_brief.sanitize_selections(raw) == {
        "room": ["pantry", "sloped-ceiling"],
        "layout": ["galley"],
        "appliances": [],
        "colors": [],
    }
    assert kitchen_brief.sanitize_selections(None) == kitchen_brief.empty_selections()


def test_summary_skips_empty_categories():
    selections = kitchen_brief.toggle(kitchen_brief.empty_selections(), "colors", "cool-grey")
    selections = kitchen_brief.toggle(selections, "room", "dining-area")
    entries = kitchen_brief.summary(selections)
    assert [(c.id, [o.label for o in options]) for c, options in entries] == [
        ("room", ["Miejsce na stół"]),
        ("colors", ["Chłodne szarości"]),
    ]


# =============================================================================
# SERVICE TESTS
# =============================================================================


def test_missing_brief_is_empty(db_session: Session):
    brief = KitchenBriefService.get(db_session, uuid.uuid4())
    assert brief.selections == kitchen_brief.empty_selections()
    assert (brief.has_summary, brief.has_notes, brief.has_sketch) == (False, False, False)
    assert brief.sketch == {"operations": []}


def test_changes_persist_in_one_row(db_session: Session):
    user_id = uuid.uuid4()
    KitchenBriefService.toggle(db_session, user_id, "layout", "u-shaped")
    KitchenBriefService.toggle(db_session, user_id, "appliances", "dishwasher-45")
    brief = KitchenBriefService.set_notes(db_session, user_id, "  Blat z konglomeratu ")

    assert brief.selections["layout"] == ["u-shaped"]
    assert brief.selections["appliances"] == ["dishwasher-45"]
    assert brief.notes == "  Blat z konglomeratu "
    assert brief.has_summary and brief.has_notes
    assert [entry.category for entry in brief.summary] == ["layout", "appliances"]

    row = db_session.query(KitchenBrief).filter(KitchenBrief.user_id == user_id).one()
    assert json.loads(row.selections)["layout"] == ["u-shaped"]
    assert db_session.query(KitchenBrief).count() == 1


def test_invalid_selection_is_rejected_without_writing(db_session: Session):
    user_id = uuid.uuid4()
    with pytest.raises(ServiceValidationError) as exc:
        KitchenBriefService.toggle(db_session, user_id, "layout", "circle")
    assert exc.value.code == "invalid_selection"
    assert db_session.query(KitchenBrief).count() == 0


def test_blank_notes_do_not_count(db_session: Session):
    brief = KitchenBriefService.set_notes(db_session, uuid.uuid4(), "   ")
    assert brief.has_notes is False


def test_unreadable_stored_columns_load_as_empty(db_session: Session):
    user_id = uuid.uuid4()
    db_session.add(
        KitchenBrief(user_id=user_id, selections="{not json", notes="ok", sketch="[1, 2")
    )
    db_session.commit()

    brief = KitchenBriefService.get(db_session, user_id)
    assert brief.selections == kitchen_brief.empty_selections()
    assert brief.sketch == {"operations": []}
    assert brief.notes == "ok"


def test_sketch_is_sanitized_and_renumbered(db_session: Session):
    user_id = uuid.uuid4()
    brief = KitchenBriefService.save_sketch(
        db_session,
        user_id,
        [
            {"id": "w2", "type": "dimension", "start": {"x": 0, "y": 0}, "end": {"x": 1, "y": 0}, "label": 5},
            {"id": "bad", "type": "line", "start": {"x": 0, "y": 0}},
            {"id": "t", "type": "text", "position": {"x": 0.2, "y": 0.2}, "text": "Okno"},
        ],
    )
    operations = brief.sketch["operations"]
    assert [op["id"] for op in operations] == ["w2", "t"]
    assert operations[0]["label"] == 1
    assert operations[1]["size"] == 16
    assert brief.has_sketch


def test_reset_deletes_brief(db_session: Session):
    user_id = uuid.uuid4()
    KitchenBriefService.toggle(db_session, user_id, "room", "pantry")
    KitchenBriefService.reset(db_session, user_id)
    KitchenBriefService.reset(db_session, user_id)
    assert db_session.query(KitchenBrief).count() == 0


# =============================================================================
# ROUTE TESTS
# =============================================================================


def test_categories_route():
    r = client.get("/my-kitchen/categories")
    assert r.status_code == 200
    body = r.json()
    assert [c["id"] for c in body] == ["room", "layout", "appliances", "colors"]
    assert body[1]["type"] == "single" and body[0]["type"] == "multi"
    assert body[3]["options"][0] == {
        "value": "white-wood",
        "label": "Biel i jasne drewno",
        "description": "Lekka i przytulna baza skandynawskiego stylu.",
    }


def test_brief_routes(db_session: Session):
    use_db(db_session)
    login_as(make_auth_user())

    r = client.get("/my-kitchen", headers=AUTH_HEADERS)
    assert r.status_code == 200
    assert r.json()["has_summary"] is False

    r2 = client.post(
        "/my-kitchen/selections/toggle",
        json={"category": "colors", "value": "green-accents"},
        headers=AUTH_HEADERS,
    )
    assert r2.json()["selections"]["colors"] == ["green-accents"]
    assert r2.json()["summary"][0]["items"][0]["label"] == "Zielone akcenty"

    r3 = client.post("/my-kitchen/selections/room/all", headers=AUTH_HEADERS)
    assert len(r3.json()["selections"]["room"]) == 7
    r4 = client.delete("/my-kitchen/selections/room", headers=AUTH_HEADERS)
    assert r4.json()["selections"]["room"] == []

    r5 = client.put("/my-kitchen/notes", json={"notes": "Uchwyty złote"}, headers=AUTH_HEADERS)
    assert r5.json()["has_notes"] is True

    bad = client.post(
        "/my-kitchen/selections/toggle",
        json={"category": "colors", "value": "pink"},
        headers=AUTH_HEADERS,
    )
    assert bad.status_code == 400
    assert bad.json()["error"]["code"] == "invalid_selection"
    assert client.post("/my-kitchen/selections/layout/all", headers=AUTH_HEADERS).status_code == 400

    r6 = client.delete("/my-kitchen", headers=AUTH_HEADERS)
    assert r6.status_code == 204
    after = client.get("/my-kitchen", headers=AUTH_HEADERS).json()
    assert after["notes"] == "" and after["selections"]["colors"] == []


def test_sketch_round_trip_through_session(db_session: Session):
    use_db(db_session)
    login_as(make_auth_user())

    sid = client.post("/sketches").json()["session_id"]
    client.post(
        f"/sketches/{sid}/strokes",
        json={"type": "dimension", "start": {"x": 0.1, "y": 0.1}, "end": {"x": 0.9, "y": 0.1}},
    )
    saved = client.post(f"/my-kitchen/sketch/from-session/{sid}", headers=AUTH_HEADERS)
    assert saved.status_code == 200
    assert saved.json()["has_sketch"] is True

    opened = client.post("/my-kitchen/sketch/session", headers=AUTH_HEADERS)
    assert opened.status_code == 201
    body = opened.json()
    assert body["session_id"] != sid
    assert [(op["type"], op["label"]) for op in body["operations"]] == [("dimension", 1)]
    assert len(pads) == 2

    missing = client.post("/my-kitchen/sketch/from-session/nope", headers=AUTH_HEADERS)
    assert missing.status_code == 404


def test_put_sketch_route(db_session: Session):
    use_db(db_session)
    login_as(make_auth_user())
    r = client.put(
        "/my-kitchen/sketch",
        json={"operations": [{"id": "l", "type": "line", "start": {"x": 0, "y": 0}, "end": {"x": 1, "y": 1}}]},
        headers=AUTH_HEADERS,
    )
    assert r.status_code == 200
    assert r.json()["sketch"]["operations"][0]["thickness"] == 2


def test_brief_requires_login():
    assert client.get("/my-kitchen").status_code == 401
