"""Ingredient line of a recipe: name, quantity, unit."""
from typing import Union
from mealplan.domain.errors import InvalidInputError

Quantity = Union[int, float]


class Ingredient:
    __slots__ = ("name", "quantity", "unit")

    def __init__(self, name: str, quantity: Quantity, unit: str = ""):
        if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
            raise InvalidInputError(f"Ingredient quantity must be a number, got {quantity!r}")
        if not quantity > 0:
            raise InvalidInputError(f"Ingredient quantity must be positive: {name} {quantity}")
        object.__setattr__(self, "name", name or "")
        object.__setattr__(self, "quantity", quantity)
        object.__setattr__(self, "unit", unit or "")

    def __setattr__(self, key, value):
        raise AttributeError(f"Ingredient is read-only (tried to set '{key}')")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.name, self.quantity, self.unit) == (other.name, other.quantity, other.unit)

    def __hash__(self) -> int:
        return hash((self.name, self.quantity, self.unit))

    def __str__(self) -> str:
        return f"{self.name} - {self.quantity} {self.unit}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient from a dictionary. Ignores unknown keys.'''
        if not isinstance(data, dict):
            raise InvalidInputError(f"Ingredient entry must be a mapping, got {data!r}")
        return Ingredient(data.get("name", ""), data.get("quantity"), data.get("unit", ""))

    def to_dict(self):
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
        }
