"""
Append a few demo meals to the meal store.

Usage
-----

    # default hard-coded trio of meals
    python -m scripts.seed_meals

    # custom list (same schema) in a JSON file
    python -m scripts.seed_meals --file path/to/meals.json

    # seed a store other than the configured one
    python -m scripts.seed_meals --data-file /tmp/meals.json
"""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, List

from config import get_settings
from services.store import JsonFileMealStore, MealStore

# ────────────────────────────────────────────────────────────────────
_DEFAULT_MEALS: List[dict[str, Any]] = [
    {"id": 101, "name": "Banana Pancakes", "type": "Breakfast"},
    {"id": 102, "name": "Chicken Tikka Wrap", "type": "Lunch"},
    {"id": 103, "name": "Mushroom Risotto", "type": "Dinner"},
]


def seed(store: MealStore, meals: list[dict[str, Any]]) -> int:
    """Append `meals` in order; returns how many were persisted."""
    written = 0
    for m in meals:
        if store.append(m).ok:
            written += 1
    return written


def _load_json(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("JSON file must contain a list of meal dictionaries")
    return data


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--file",
        type=Path,
        help="optional JSON file with meals to seed (overrides defaults)",
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="meal store to append to (defaults to the configured one)",
    )
    args = parser.parse_args(argv)

    meals = _load_json(args.file) if args.file else _DEFAULT_MEALS
    store = JsonFileMealStore(args.data_file or get_settings().data_file)
    written = seed(store, meals)
    print(f"✓ inserted {written}/{len(meals)} meals into {store.path}")


if __name__ == "__main__":
    main()
