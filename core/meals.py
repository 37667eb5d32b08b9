"""
core/meals.py
────────────────────────────────────────────────────────────────────────
Pure filtering helpers over a list of meal records.

Responsibilities
----------------
1.   `filter_by_type()` / `search_by_name()` – case-insensitive matches
     on the `type` and `name` fields.
2.   `parse_meal_id()` / `find_by_id()` – id lookup from a raw path
     segment.
3.   `pick_random()` – uniform draw from a (possibly filtered) list.

Records are plain dicts straight out of the JSON document.  Nothing here
guards against malformed records: a meal without a `type` makes
`filter_by_type()` raise, and the route layer turns that into a 500.
"""

from __future__ import annotations

import random
import re
from typing import Any

Meal = dict[str, Any]

_PREFIX = re.compile(r"\s*([+-]?)(0[xX])?")
_DIGITS = {10: re.compile(r"[0-9]+"), 16: re.compile(r"[0-9a-fA-F]+")}


# ─────────────────────────────── filters ──────────────────────────── #
def filter_by_type(meals: list[Meal], meal_type: str) -> list[Meal]:
    wanted = meal_type.lower()
    return [m for m in meals if m["type"].lower() == wanted]


def search_by_name(meals: list[Meal], query: str) -> list[Meal]:
    needle = query.lower()
    return [m for m in meals if needle in m["name"].lower()]


# ─────────────────────────────── lookup ───────────────────────────── #
def parse_meal_id(raw: str) -> int | None:
    """
    Parse the leading integer of a path segment, JavaScript `parseInt` style.

    ``"42"`` and ``"42abc"`` both give 42, ``"0x2a"`` is read as hex (42),
    and only ASCII digits count.  ``"abc"`` gives None, which never
    matches any meal.
    """
    head = _PREFIX.match(raw)
    radix = 16 if head.group(2) else 10
    digits = _DIGITS[radix].match(raw, head.end())
    if digits is None:
        return None
    value = int(digits.group(0), radix)
    return -value if head.group(1) == "-" else value


def find_by_id(meals: list[Meal], meal_id: int | None) -> Meal | None:
    if meal_id is None:
        return None
    for m in meals:
        if m is None:
            raise TypeError("meal record is null")
        # arrays and scalars carry no id
        ident = m.get("id") if isinstance(m, dict) else None
        # strict equality: "42" and True are not 42
        if isinstance(ident, (int, float)) and not isinstance(ident, bool) and ident == meal_id:
            return m
    return None


# ─────────────────────────────── random ───────────────────────────── #
def pick_random(meals: list[Meal], rng: random.Random | None = None) -> Meal | None:
    if not meals:
        return None
    return (rng or random).choice(meals)
