"""
Input validation schemas using Pydantic for the HTTP layer.
"""
from typing import Union
from datetime import date as _date

from pydantic import BaseModel, Field, StrictInt, field_validator

from mealplan.domain.PlannedMeal import MealType
from mealplan.logic.scheduling.week_window import parse_iso_date


class _DateField(BaseModel):
    @field_validator('date', mode='before', check_fields=False)
    @classmethod
    def parse_date(cls, v):
        """Accept only strict YYYY-MM-DD strings (or date objects)."""
        return parse_iso_date(v)


class AddMealInput(_DateField):
    """Schema for planning a recipe into a meal slot."""
    recipe_id: Union[StrictInt, str] = Field(..., alias='recipeId')
    date: _date
    meal_type: MealType = Field(..., alias='mealType')

    model_config = {'populate_by_name': True}

    @field_validator('recipe_id')
    @classmethod
    def strip_recipe_id(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError('Recipe id cannot be empty')
            # numeric ids sent as text resolve like /api/recipes/{id}
            if v.isdecimal():
                return int(v)
        return v


class WeekStartInput(_DateField):
    """Schema for moving the week cursor."""
    date: _date
