# api/router.py
from fastapi import APIRouter

from . import home, meals

api_router = APIRouter()

api_router.include_router(home.router, tags=["Meta"])
api_router.include_router(meals.router, prefix="/meals", tags=["Meals"])
