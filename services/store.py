"""
Meal persistence.

The whole collection lives in one JSON array.  Every call reads or writes
the complete document; there is no cache and no index.

Failures never raise out of a store: they are logged and handed back as
``StoreResult.error`` so callers decide what to do with them.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from fastapi import Request

_LOG = logging.getLogger(__name__)

Meal = Any  # records are passed through untouched, whatever their shape


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text: str | bytes) -> Any:
    """`json.loads` minus the NaN / Infinity / -Infinity extensions."""
    return json.loads(text, parse_constant=_reject_constant)


@dataclass
class StoreResult:
    meals: list[Meal] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MealStore(Protocol):
    """Interface every meal store implements."""

    def load(self) -> StoreResult:
        """Return the full collection, or an empty one plus the error."""
        ...

    def save(self, meals: list[Meal]) -> StoreResult:
        """Replace the full collection."""
        ...

    def append(self, meal: Meal) -> StoreResult:
        """Add one record at the end of the collection."""
        ...


# ───────────────────────── file backed ──────────────────────────────
class JsonFileMealStore:
    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._write_lock = threading.Lock()

    def load(self) -> StoreResult:
        try:
            data = parse_json(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array in {self.path}")
        except (OSError, ValueError) as exc:
            _LOG.error("Error reading JSON file %s: %s", self.path, exc)
            return StoreResult(meals=[], error=exc)
        return StoreResult(meals=data)

    def save(self, meals: list[Meal]) -> StoreResult:
        try:
            payload = json.dumps(meals, indent=2, ensure_ascii=False, allow_nan=False)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            _LOG.error("Error saving JSON file %s: %s", self.path, exc)
            return StoreResult(meals=meals, error=exc)
        return StoreResult(meals=meals)

    def append(self, meal: Meal) -> StoreResult:
        # load + save as one step so concurrent appends can't drop each other
        with self._write_lock:
            meals = self.load().meals
            meals.append(meal)
            return self.save(meals)


# ───────────────────────── in memory ────────────────────────────────
class InMemoryMealStore:
    """
    List-backed store used by the tests.

    Stores deep copies so callers can't mutate the collection behind
    its back.
    """

    def __init__(self, meals: list[Meal] | None = None) -> None:
        self._meals: list[Meal] = deepcopy(meals or [])
        self._lock = threading.Lock()

    def load(self) -> StoreResult:
        return StoreResult(meals=deepcopy(self._meals))

    def save(self, meals: list[Meal]) -> StoreResult:
        self._meals = deepcopy(meals)
        return StoreResult(meals=meals)

    def append(self, meal: Meal) -> StoreResult:
        with self._lock:
            meals = self.load().meals
            meals.append(meal)
            return self.save(meals)


# ───────── dependency helper ────────────────────────────────────────

def get_store(request: Request) -> MealStore:
    return request.app.state.store
