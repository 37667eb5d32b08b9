# api/home.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from api.errors import GuardedRoute
from services.store import MealStore, get_store

router = APIRouter(route_class=GuardedRoute)


@router.get("/", response_model=None, summary="Home: every meal as JSON")
async def home(store: MealStore = Depends(get_store)) -> list[Any]:
    return store.load().meals
