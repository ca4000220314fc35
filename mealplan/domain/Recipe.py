"""Recipe domain entity: id, name, servings, tags and ingredient lines. Read-only once built."""
from typing import Iterable, Optional, Union
from mealplan.domain.Ingredient import Ingredient
from mealplan.domain.errors import InvalidInputError

RecipeId = Union[int, str]


class Recipe:
    __slots__ = ("id", "name", "servings", "tags", "ingredients", "image", "time", "saved")

    def __init__(self, id: RecipeId, name: str, servings: int = 1,
                 ingredients: Optional[Iterable[Ingredient]] = None,
                 tags: Optional[Iterable[str]] = None,
                 image: str = "", time: str = "", saved: bool = False):
        if isinstance(servings, bool) or not isinstance(servings, int) or servings <= 0:
            raise InvalidInputError(f"Recipe '{name}' must have a positive integer servings count, got {servings!r}")
        _set = object.__setattr__
        _set(self, "id", id)
        _set(self, "name", name)
        _set(self, "servings", servings)
        _set(self, "ingredients", tuple(ingredients or ()))
        # dict.fromkeys keeps first-seen order while dropping duplicates
        _set(self, "tags", tuple(dict.fromkeys(tags or ())))
        _set(self, "image", image)
        _set(self, "time", time)
        _set(self, "saved", bool(saved))

    def __setattr__(self, key, value):
        raise AttributeError(f"Recipe is read-only (tried to set '{key}')")

    def __str__(self) -> str:
        return f"{self.name} - {self.servings} servings - Tags: {', '.join(self.tags)} - Ingredients: {len(self.ingredients)}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict):
            raise InvalidInputError(f"Recipe entry must be a mapping, got {data!r}")
        if "id" not in data:
            raise InvalidInputError(f"Recipe entry is missing an id: {data.get('name', '?')}")
        return Recipe(
            id=data["id"],
            name=data.get("name", ""),
            servings=data.get("servings", 1),
            ingredients=[Ingredient.from_dict(ing) for ing in data.get("ingredients", [])],
            tags=data.get("tags", []),
            image=data.get("image", ""),
            time=data.get("time", ""),
            saved=data.get("saved", False),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "time": self.time,
            "servings": self.servings,
            "tags": list(self.tags),
            "saved": self.saved,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
        }
