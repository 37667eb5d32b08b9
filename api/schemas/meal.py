from __future__ import annotations
from pydantic import BaseModel


class MealCreated(BaseModel):
    message: str = "Meal added successfully"


class ErrorOut(BaseModel):
    error: str
