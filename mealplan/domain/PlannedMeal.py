"""PlannedMeal domain entity: a recipe placed into a (date, meal type) slot."""
from datetime import date
from enum import Enum
from typing import Optional
from uuid import uuid4

from mealplan.domain.Recipe import RecipeId
from mealplan.domain.errors import InvalidInputError
from mealplan.logic.scheduling.week_window import DateLike, format_iso_date, parse_iso_date
from mealplan.utilities.constants import MEAL_TYPES


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @classmethod
    def parse(cls, value) -> "MealType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(MEAL_TYPES)
            raise InvalidInputError(f"Unknown meal type {value!r} (expected one of: {allowed})") from None


class PlannedMeal:
    __slots__ = ("id", "recipe_id", "date", "meal_type")

    def __init__(self, recipe_id: RecipeId, date: DateLike, meal_type, id: Optional[str] = None):
        if isinstance(recipe_id, bool) or not isinstance(recipe_id, (int, str)):
            raise InvalidInputError(f"Recipe id must be an int or a string, got {recipe_id!r}")
        _set = object.__setattr__
        _set(self, "id", id or uuid4().hex)
        _set(self, "recipe_id", recipe_id)
        _set(self, "date", parse_iso_date(date))
        _set(self, "meal_type", MealType.parse(meal_type))

    def __setattr__(self, key, value):
        # replace by remove-then-add, never edit in place
        raise AttributeError(f"PlannedMeal is read-only (tried to set '{key}')")

    def __eq__(self, other) -> bool:
        if not isinstance(other, PlannedMeal):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{format_iso_date(self.date)} {self.meal_type.value}: recipe {self.recipe_id} ({self.id})"

    __repr__ = __str__

    def is_on(self, day: date) -> bool:
        return self.date == day

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict):
            raise InvalidInputError(f"Planned meal entry must be a mapping, got {data!r}")
        return PlannedMeal(
            recipe_id=data.get("recipeId", data.get("recipe_id")),
            date=data.get("date"),
            meal_type=data.get("mealType", data.get("meal_type")),
            id=data.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "recipeId": self.recipe_id,
            "date": format_iso_date(self.date),
            "mealType": self.meal_type.value,
        }
