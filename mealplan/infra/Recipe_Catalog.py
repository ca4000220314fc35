import json
import logging
from functools import lru_cache
from typing import Dict, Iterable, Iterator, Optional, Tuple

from mealplan.domain.Recipe import Recipe, RecipeId
from mealplan.domain.errors import InvalidInputError
from mealplan.infra.paths import RECIPES_FILE

logger = logging.getLogger(__name__)


class RecipeCatalog:
    """Read-only collection of recipes, looked up by id."""

    def __init__(self, recipes: Iterable[Recipe], version: Optional[int] = None):
        index: Dict[RecipeId, Recipe] = {}
        for recipe in recipes:
            if recipe.id in index:
                raise InvalidInputError(f"Duplicate recipe id in catalog: {recipe.id!r}")
            index[recipe.id] = recipe
        self._index = index
        self._recipes: Tuple[Recipe, ...] = tuple(index.values())
        self.version = version

    def get_by_id(self, recipe_id: RecipeId) -> Optional[Recipe]:
        '''Returns the recipe, or None when the id is unknown.'''
        try:
            return self._index.get(recipe_id)
        except TypeError:  # unhashable id
            return None

    def all(self) -> Tuple[Recipe, ...]:
        return self._recipes

    def search(self, query: Optional[str]) -> Tuple[Recipe, ...]:
        """Recipes whose name or one of whose tags contains query, ignoring case.

        A blank or missing query matches every recipe. Dataset order is kept.
        """
        needle = (query or "").strip().lower()
        if not needle:
            return self._recipes
        return tuple(
            r for r in self._recipes
            if needle in r.name.lower() or any(needle in tag.lower() for tag in r.tags)
        )

    def __len__(self) -> int:
        return len(self._recipes)

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._recipes)

    def __contains__(self, recipe_id) -> bool:
        return self.get_by_id(recipe_id) is not None

    def __repr__(self) -> str:
        return f"RecipeCatalog(version={self.version}, recipes={len(self)})"

    @classmethod
    def from_dict(cls, data):
        '''Builds a catalog from {"version": int, "recipes": [...]} or a bare list of recipes.'''
        if isinstance(data, list):
            return cls((Recipe.from_dict(r) for r in data))
        if not isinstance(data, dict):
            raise InvalidInputError("Recipe dataset must be a list or an object with 'recipes'")
        return cls((Recipe.from_dict(r) for r in data.get("recipes", [])), version=data.get("version"))

    def to_dict(self):
        return {
            "version": self.version,
            "recipes": [r.to_dict() for r in self._recipes],
        }


def reading_from_recipes(path=RECIPES_FILE) -> RecipeCatalog:
    """Read the recipe dataset from a JSON file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            recipes_data = json.load(f)
    except FileNotFoundError:
        logger.error(f"Recipes file not found: {path}")
        raise
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in recipes file {path}: {e}")
        raise
    catalog = RecipeCatalog.from_dict(recipes_data)
    logger.info("Loaded recipe catalog v%s with %d recipes", catalog.version, len(catalog))
    return catalog


@lru_cache(maxsize=1)
def load_default_catalog() -> RecipeCatalog:
    """The packaged seed catalog, read once per process."""
    return reading_from_recipes(RECIPES_FILE)
