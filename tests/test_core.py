from datetime import datetime

import pytest

from fetchdemo.core import (
    FALLBACK_RADIO,
    SubmissionStore,
    checkbox_message,
    iso_now,
    load_tables,
    radio_response,
    select_message,
)
from fetchdemo.server import DATA_PATH


def test_checkbox_message_branches_on_count():
    assert checkbox_message([]) == "Nothing selected"
    assert checkbox_message(["Apple"]) == "Apple was selected"
    assert checkbox_message(["Apple", "Banana"]) == "Apple and Banana were selected"
    assert checkbox_message(["Apple", "Banana", "Cherry"]) == "All selected: Apple, Banana, Cherry"


def test_checkbox_message_four_items_still_comma_joined():
    assert checkbox_message(["a", "b", "c", "d"]) == "All selected: a, b, c, d"


def test_tables_are_read_only():
    radio, users = load_tables(DATA_PATH)
    assert set(radio) == {"rdobtn01", "rdobtn02", "rdobtn03"}
    assert set(users) == {"1", "2", "3"}

    with pytest.raises(TypeError):
        users["4"] = {"name": "x"}
    with pytest.raises(TypeError):
        radio["rdobtn01"]["color"] = "#000"


def test_radio_response_known_and_fallback():
    radio, _ = load_tables(DATA_PATH)
    assert radio_response("rdobtn02", radio) == {
        "message": "Option 2 was chosen!",
        "color": "#4ecdc4",
        "emoji": "✨",
    }
    assert radio_response("nope", radio) == dict(FALLBACK_RADIO)
    assert radio_response(None, radio) == dict(FALLBACK_RADIO)


def test_select_message():
    assert select_message("cat") == "cat was selected"


def test_iso_now_shape():
    ts = iso_now()
    assert ts.endswith("Z")
    assert len(ts) == len("2026-01-01T00:00:00.000Z")
    datetime.fromisoformat(ts.replace("Z", "+00:00"))


def test_store_assigns_sequential_ids():
    store = SubmissionStore()
    first = store.add({"name": "a"})
    second = store.add({"name": "b"})

    assert first["id"] == 1
    assert second["id"] == 2
    assert len(store) == 2
    assert [s["name"] for s in store.all()] == ["a", "b"]


def test_store_assigned_fields_win():
    store = SubmissionStore()
    sub = store.add({"id": 99, "submittedAt": "yesterday", "email": "x@example.com"})

    assert sub["id"] == 1
    assert sub["submittedAt"] != "yesterday"
    assert sub["email"] == "x@example.com"
    assert list(sub) == ["id", "email", "submittedAt"]


def test_store_returns_copies():
    store = SubmissionStore()
    store.add({"name": "a"})
    store.all()[0]["name"] = "changed"
    assert store.all()[0]["name"] == "a"


def test_store_clear():
    store = SubmissionStore()
    store.add({})
    store.clear()
    assert len(store) == 0
    assert store.add({})["id"] == 1


def test_checkbox_message_coerces_items_to_text():
    assert checkbox_message([1, 2]) == "1 and 2 were selected"
    assert checkbox_message([1, None, 3.5]) == "All selected: 1, None, 3.5"


def test_radio_response_non_string_is_unknown():
    radio, _ = load_tables(DATA_PATH)
    assert radio_response(["rdobtn01"], radio) == dict(FALLBACK_RADIO)
    assert radio_response({"id": "rdobtn01"}, radio) == dict(FALLBACK_RADIO)
