# api/meals.py
from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.errors import GuardedRoute
from api.schemas import ErrorOut, MealCreated
from core.meals import (
    filter_by_type,
    find_by_id,
    parse_meal_id,
    pick_random,
    search_by_name,
)
from services.store import MealStore, get_store, parse_json

_LOG = logging.getLogger(__name__)

router = APIRouter(route_class=GuardedRoute)

_NOT_FOUND = {404: {"model": ErrorOut}}

_BRACKETS = re.compile(r"\[([^\[\]]*)\]")


def _key_path(key: str) -> list[str]:
    """``"a[b][]"`` → ``["a", "b", ""]``; anything irregular stays literal."""
    head, bracket, rest = key.partition("[")
    if not head or not bracket:
        return [key]
    parts = _BRACKETS.findall(bracket + rest)
    # only a trailing "[]" may be empty, and the brackets must cover the rest
    if "".join(f"[{p}]" for p in parts) != bracket + rest or "" in parts[:-1]:
        return [key]
    return [head, *parts]


def _form_to_object(pairs: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """
    Fold urlencoded pairs into an object.

    Repeated keys and ``key[]`` collect into lists, ``a[b]=1`` nests as
    ``{"a": {"b": "1"}}``.
    """
    body: dict[str, Any] = {}
    for key, value in pairs:
        path = _key_path(key)
        collect = path[-1] == ""
        if collect:
            path = path[:-1]

        node = body
        for part in path[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child

        leaf = path[-1]
        current = node.get(leaf)
        if leaf not in node:
            node[leaf] = [value] if collect else value
        elif isinstance(current, list):
            current.append(value)
        else:
            node[leaf] = [current, value]
    return body


async def _read_meal(request: Request) -> Any:
    """
    Body of a POST, taken as-is.

    JSON (object or array) and urlencoded forms are understood; an empty
    body or any other content type yields ``{}``.
    """
    raw = await request.body()
    if not raw:
        return {}
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith("application/x-www-form-urlencoded"):
        form = await request.form()
        return _form_to_object(form.multi_items())
    if "json" in content_type:
        try:
            body = parse_json(raw)
        except ValueError:
            raise HTTPException(status_code=400, detail="Malformed JSON body")
        if not isinstance(body, (dict, list)):
            raise HTTPException(
                status_code=400, detail="JSON body must be an object or an array"
            )
        return body
    return {}


# ───────────────────────── list / create ───────────────────────────
@router.get("", response_model=None, summary="List every meal")
async def list_meals(store: MealStore = Depends(get_store)) -> list[Any]:
    return store.load().meals


@router.post(
    "",
    response_model=MealCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Append a meal to the collection",
)
async def add_meal(
    request: Request,
    store: MealStore = Depends(get_store),
) -> MealCreated:
    meal = await _read_meal(request)
    result = store.append(meal)
    if not result.ok:
        # the client has always been told 201 regardless
        _LOG.warning("Meal was not persisted: %s", result.error)
    return MealCreated()


# ───────────────────────── random ──────────────────────────────────
# registered ahead of /{meal_id} so "random" is never read as an id
@router.get("/random", response_model=None, responses=_NOT_FOUND)
async def random_meal(store: MealStore = Depends(get_store)) -> Any:
    meal = pick_random(store.load().meals)
    if meal is None:
        raise HTTPException(status_code=404, detail="No meals available")
    return meal


@router.get("/random/{meal_type}", response_model=None, responses=_NOT_FOUND)
async def random_meal_of_type(
    meal_type: str,
    store: MealStore = Depends(get_store),
) -> Any:
    meal = pick_random(filter_by_type(store.load().meals, meal_type))
    if meal is None:
        raise HTTPException(
            status_code=404, detail=f"No {meal_type.lower()} meals found"
        )
    return meal


# ───────────────────────── filters ─────────────────────────────────
@router.get("/type/{meal_type}", response_model=None, responses=_NOT_FOUND)
async def meals_by_type(
    meal_type: str,
    store: MealStore = Depends(get_store),
) -> list[Any]:
    matches = filter_by_type(store.load().meals, meal_type)
    if not matches:
        raise HTTPException(status_code=404, detail="No matching meals found")
    return matches


@router.get("/search/{name}", response_model=None, responses=_NOT_FOUND)
async def search_meals(
    name: str,
    store: MealStore = Depends(get_store),
) -> list[Any]:
    matches = search_by_name(store.load().meals, name)
    if not matches:
        raise HTTPException(status_code=404, detail="No matching meals found")
    return matches


# ───────────────────────── by id ───────────────────────────────────
@router.get("/{meal_id}", response_model=None, responses=_NOT_FOUND)
async def fetch_meal(
    meal_id: str,
    store: MealStore = Depends(get_store),
) -> Any:
    meal = find_by_id(store.load().meals, parse_meal_id(meal_id))
    if meal is None:
        raise HTTPException(status_code=404, detail="Meal not found")
    return meal
