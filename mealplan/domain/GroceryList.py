"""Derived grocery list: merged ingredient items plus the meals that could not be resolved."""
from collections.abc import Sequence
from typing import Iterable, List, Optional

from mealplan.domain.Ingredient import Quantity


class GroceryListItem:
    def __init__(self, name: str, quantity: Quantity, unit: str,
                 checked: bool = False, from_recipes: Optional[List[str]] = None):
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.checked = checked
        self.from_recipes = from_recipes[:] if from_recipes else []

    @property
    def merge_key(self):
        return self.name.lower(), self.unit

    def add(self, quantity: Quantity, recipe_name: str):
        '''Adds a contributing ingredient line to this merged item.'''
        self.quantity += quantity
        if recipe_name not in self.from_recipes:
            self.from_recipes.append(recipe_name)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GroceryListItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return f"{self.name} - {self.quantity} {self.unit} (from: {', '.join(self.from_recipes)})"

    __repr__ = __str__

    def to_dict(self):
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "checked": self.checked,
            "fromRecipes": list(self.from_recipes),
        }


class GroceryList(Sequence):
    """Sorted grocery items, plus ids of planned meals skipped for an unknown recipe."""

    def __init__(self, items: Iterable[GroceryListItem] = (), skipped_meal_ids: Iterable[str] = ()):
        self._items = tuple(items)
        self.skipped_meal_ids = tuple(skipped_meal_ids)

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GroceryList):
            return NotImplemented
        return self._items == other._items and self.skipped_meal_ids == other.skipped_meal_ids

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self._items)
        return f"Grocery List:\n\t{items_str}"

    __repr__ = __str__

    @property
    def items(self) -> List[GroceryListItem]:
        return list(self._items)

    def to_dict(self):
        return {
            "items": [item.to_dict() for item in self._items],
            "count": len(self._items),
            "skipped_meal_ids": list(self.skipped_meal_ids),
        }
