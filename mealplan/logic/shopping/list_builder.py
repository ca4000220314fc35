"""Grocery list builder.

Provides build_grocery_list(planned_meals, catalog): merges the ingredient lines
of every planned meal into one shopping list.
"""
from typing import Dict, Iterable, List, Tuple

from mealplan.domain.GroceryList import GroceryList, GroceryListItem
from mealplan.domain.PlannedMeal import PlannedMeal


def _key(name: str, unit: str) -> Tuple[str, str]:
    return (name or '').lower(), unit


def build_grocery_list(planned_meals: Iterable[PlannedMeal], catalog) -> GroceryList:
    """Aggregate the ingredients of all planned meals.

    Args:
        planned_meals: meals in store order.
        catalog: anything exposing get_by_id(recipe_id) -> Recipe | None.

    Returns:
        GroceryList sorted by name (case-insensitive, stable). Lines merge when
        their lowercased name and unit both match; quantities are summed and
        contributing recipe names collected once each. Meals whose recipe does
        not resolve add nothing and are listed in skipped_meal_ids.
    """
    merged: Dict[Tuple[str, str], GroceryListItem] = {}
    skipped: List[str] = []

    for meal in planned_meals:
        recipe = catalog.get_by_id(meal.recipe_id)
        if recipe is None:
            skipped.append(meal.id)
            continue
        for ing in recipe.ingredients:
            k = _key(ing.name, ing.unit)
            existing = merged.get(k)
            if existing is not None:
                existing.add(ing.quantity, recipe.name)
            else:
                merged[k] = GroceryListItem(ing.name, ing.quantity, ing.unit,
                                            checked=False, from_recipes=[recipe.name])

    # sorted() is stable, so equal names keep first-seen order
    items = sorted(merged.values(), key=lambda x: x.name.lower())
    return GroceryList(items, skipped)

__all__ = ['build_grocery_list']
