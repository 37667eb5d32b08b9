"""Re-export individual schema modules for easy imports."""

from .meal import ErrorOut, MealCreated

__all__ = [
    "ErrorOut",
    "MealCreated",
]
