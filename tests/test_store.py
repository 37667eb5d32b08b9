# tests/test_store.py
from __future__ import annotations

import json
import threading

import pytest

from services.store import InMemoryMealStore, JsonFileMealStore, parse_json

MEALS = [
    {"id": 1, "name": "Oatmeal", "type": "Breakfast", "tags": ["warm"]},
    {"id": 2, "name": "Crème brûlée", "type": "Dessert", "calories": 410.5},
    {"id": 3, "name": "Chicken Salad", "type": "Lunch", "extra": None},
]


# ── file store ──────────────────────────────────────────────────────
def test_save_then_load_keeps_order_and_values(tmp_path):
    store = JsonFileMealStore(tmp_path / "meals.json")
    assert store.save(MEALS).ok

    loaded = JsonFileMealStore(tmp_path / "meals.json").load()
    assert loaded.ok
    assert loaded.meals == MEALS


def test_save_pretty_prints_with_two_spaces(tmp_path):
    path = tmp_path / "meals.json"
    JsonFileMealStore(path).save(MEALS[:1])
    text = path.read_text(encoding="utf-8")
    assert text == json.dumps(MEALS[:1], indent=2, ensure_ascii=False)
    assert '\n  {\n    "id": 1,' in text


def test_missing_file_loads_empty_with_error(tmp_path):
    result = JsonFileMealStore(tmp_path / "nope.json").load()
    assert result.meals == []
    assert not result.ok
    assert isinstance(result.error, OSError)


def test_corrupt_file_loads_empty_with_error(tmp_path):
    path = tmp_path / "meals.json"
    path.write_text("{not json", encoding="utf-8")
    result = JsonFileMealStore(path).load()
    assert result.meals == []
    assert isinstance(result.error, ValueError)


def test_non_array_document_is_an_error(tmp_path):
    path = tmp_path / "meals.json"
    path.write_text('{"id": 1}', encoding="utf-8")
    result = JsonFileMealStore(path).load()
    assert result.meals == []
    assert not result.ok


def test_save_failure_is_reported_not_raised(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file where a directory should be", encoding="utf-8")
    result = JsonFileMealStore(blocker / "meals.json").save(MEALS)
    assert not result.ok
    assert isinstance(result.error, OSError)


def test_append_adds_to_the_end(tmp_path):
    store = JsonFileMealStore(tmp_path / "meals.json")
    store.save(MEALS)
    store.append({"id": 4, "name": "Tacos", "type": "Dinner"})
    assert [m["id"] for m in store.load().meals] == [1, 2, 3, 4]


def test_append_to_missing_file_starts_a_new_collection(tmp_path):
    store = JsonFileMealStore(tmp_path / "data" / "meals.json")
    assert store.append({"id": 1}).ok
    assert store.load().meals == [{"id": 1}]


def test_concurrent_appends_do_not_lose_updates(tmp_path):
    store = JsonFileMealStore(tmp_path / "meals.json")
    store.save([])

    threads = [
        threading.Thread(target=store.append, args=({"id": i},)) for i in range(20)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(m["id"] for m in store.load().meals) == list(range(20))


# ── in-memory store ─────────────────────────────────────────────────
def test_in_memory_store_copies_data():
    store = InMemoryMealStore(MEALS)
    store.load().meals[0]["name"] = "changed"
    assert store.load().meals[0]["name"] == "Oatmeal"


def test_in_memory_append():
    store = InMemoryMealStore()
    store.append({"id": 9})
    assert store.load().meals == [{"id": 9}]


# ── non-standard JSON constants ─────────────────────────────────────
def test_nan_in_file_is_a_parse_error(tmp_path):
    path = tmp_path / "meals.json"
    path.write_text('[{"id": 1, "kcal": NaN}]', encoding="utf-8")
    result = JsonFileMealStore(path).load()
    assert result.meals == []
    assert isinstance(result.error, ValueError)


def test_parse_json_rejects_infinity():
    with pytest.raises(ValueError):
        parse_json('{"kcal": -Infinity}')
    assert parse_json('{"kcal": 1.5}') == {"kcal": 1.5}


def test_save_refuses_nan(tmp_path):
    path = tmp_path / "meals.json"
    result = JsonFileMealStore(path).save([{"id": 1, "kcal": float("nan")}])
    assert isinstance(result.error, ValueError)
    assert not path.exists()
