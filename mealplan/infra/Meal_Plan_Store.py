import logging
from abc import ABC, abstractmethod
from datetime import date
from threading import RLock
from typing import Iterable, List, Optional, Tuple

from mealplan.domain.GroceryList import GroceryList
from mealplan.domain.PlannedMeal import MealType, PlannedMeal
from mealplan.domain.Recipe import Recipe, RecipeId
from mealplan.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from mealplan.events.event_helpers import (
    publish_meal_added, publish_meal_removed, publish_week_cleared, publish_unresolved_recipes
)
from mealplan.infra.Recipe_Catalog import RecipeCatalog
from mealplan.logic.scheduling.week_window import (
    DateLike, add_days, end_of_week, format_iso_date, is_in_week, parse_iso_date,
    start_of_week, validate_week_starts_on, week_days
)
from mealplan.logic.shopping.list_builder import build_grocery_list
from mealplan.utilities import config
from mealplan.utilities.constants import DAYS_PER_WEEK

logger = logging.getLogger(__name__)


def default_meals(week_start: DateLike) -> List[PlannedMeal]:
    """Sample plan for a fresh store: eight meals over the first three days of the week."""
    start = parse_iso_date(week_start)
    layout = [
        (6, 0, MealType.BREAKFAST), (1, 0, MealType.LUNCH), (5, 0, MealType.DINNER),
        (6, 1, MealType.BREAKFAST), (7, 1, MealType.LUNCH), (2, 1, MealType.DINNER),
        (4, 2, MealType.BREAKFAST), (3, 2, MealType.DINNER),
    ]
    return [PlannedMeal(recipe_id, add_days(start, offset), meal_type, id=str(i))
            for i, (recipe_id, offset, meal_type) in enumerate(layout, start=1)]


class MealPlanStore(ABC):
    """Owns the planned meals and the week cursor; derives the grocery list.

    Implementations only decide where planned meals live. Grocery aggregation
    is shared and always runs over every planned meal, whatever week the
    cursor points at.
    """

    def __init__(self, catalog: RecipeCatalog, *, week_starts_on: Optional[int] = None,
                 current_week_start: Optional[DateLike] = None, event_bus: Optional[EventBus] = None):
        self.catalog = catalog
        self.week_starts_on = validate_week_starts_on(
            config.WEEK_STARTS_ON if week_starts_on is None else week_starts_on)
        self._current_week_start = self._week_start_for(
            current_week_start if current_week_start is not None else date.today())
        self._event_bus = event_bus if event_bus is not None else GLOBAL_EVENT_BUS

    # --- Storage primitives -------------------------------------------------
    @property
    @abstractmethod
    def planned_meals(self) -> Tuple[PlannedMeal, ...]:
        '''Snapshot of all planned meals in insertion order.'''

    @abstractmethod
    def add_meal_to_plan(self, recipe_id: RecipeId, date: DateLike, meal_type) -> PlannedMeal:
        ...

    @abstractmethod
    def remove_meal_from_plan(self, meal_id: str) -> bool:
        ...

    @abstractmethod
    def clear_week_plan(self) -> int:
        ...

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    # --- Week cursor ----------------------------------------------------------
    @property
    def current_week_start(self) -> date:
        return self._current_week_start

    def set_current_week_start(self, value: DateLike) -> date:
        '''Moves the cursor to the week containing value. Planned meals are untouched.'''
        self._current_week_start = self._week_start_for(value)
        return self._current_week_start

    def _week_start_for(self, value: DateLike) -> date:
        start = start_of_week(value, self.week_starts_on)
        end_of_week(start, self.week_starts_on)  # raises when the window runs past date.max
        return start

    def next_week(self) -> date:
        return self.set_current_week_start(add_days(self._current_week_start, DAYS_PER_WEEK))

    def previous_week(self) -> date:
        return self.set_current_week_start(add_days(self._current_week_start, -DAYS_PER_WEEK))

    def week_days(self) -> List[date]:
        return week_days(self._current_week_start)

    # --- Reads ----------------------------------------------------------------
    def get_recipe_by_id(self, recipe_id: RecipeId) -> Optional[Recipe]:
        return self.catalog.get_by_id(recipe_id)

    def get_meals_for_day(self, day: DateLike) -> List[PlannedMeal]:
        d = parse_iso_date(day)
        return [m for m in self.planned_meals if m.is_on(d)]

    def get_meal_for_slot(self, day: DateLike, meal_type) -> Optional[PlannedMeal]:
        '''First meal planned in the slot, or None. A slot may hold several meals.'''
        d = parse_iso_date(day)
        mt = MealType.parse(meal_type)
        for meal in self.planned_meals:
            if meal.is_on(d) and meal.meal_type is mt:
                return meal
        return None

    def get_meals_for_week(self) -> List[PlannedMeal]:
        start = self._current_week_start
        in_week = [m for m in self.planned_meals if is_in_week(m.date, start)]
        return sorted(in_week, key=lambda m: m.date)

    # --- Derivation -----------------------------------------------------------
    def generate_grocery_list(self) -> GroceryList:
        """Build the shopping list from every planned meal.

        Meals referencing a recipe missing from the catalog contribute nothing;
        their ids are reported on the result and published as an event.
        """
        meals = self.planned_meals
        grocery_list = build_grocery_list(meals, self.catalog)
        if grocery_list.skipped_meal_ids:
            skipped = set(grocery_list.skipped_meal_ids)
            recipe_ids = [m.recipe_id for m in meals if m.id in skipped]
            logger.warning("Grocery list skipped %d planned meal(s) with unknown recipes: %s",
                           len(skipped), recipe_ids)
            publish_unresolved_recipes(grocery_list.skipped_meal_ids, recipe_ids, bus=self._event_bus)
        return grocery_list

    def to_dict(self):
        return {
            "current_week_start": format_iso_date(self._current_week_start),
            "week_starts_on": self.week_starts_on,
            "meals": [m.to_dict() for m in self.planned_meals],
        }


class InMemoryMealPlanStore(MealPlanStore):
    """Meal plan kept in process memory. All operations serialize on one lock."""

    def __init__(self, catalog: RecipeCatalog, *, week_starts_on: Optional[int] = None,
                 current_week_start: Optional[DateLike] = None,
                 meals: Optional[Iterable[PlannedMeal]] = None, event_bus: Optional[EventBus] = None):
        super().__init__(catalog, week_starts_on=week_starts_on,
                         current_week_start=current_week_start, event_bus=event_bus)
        self._lock = RLock()
        self._meals: List[PlannedMeal] = list(meals or [])

    @property
    def planned_meals(self) -> Tuple[PlannedMeal, ...]:
        with self._lock:
            return tuple(self._meals)

    def set_current_week_start(self, value: DateLike) -> date:
        with self._lock:
            return super().set_current_week_start(value)

    def next_week(self) -> date:
        with self._lock:
            return super().next_week()

    def previous_week(self) -> date:
        with self._lock:
            return super().previous_week()

    def add_meal_to_plan(self, recipe_id: RecipeId, date: DateLike, meal_type) -> PlannedMeal:
        '''Appends a new planned meal. The recipe id is not checked against the catalog.'''
        meal = PlannedMeal(recipe_id, date, meal_type)
        with self._lock:
            self._meals.append(meal)
        logger.debug("Planned %s", meal)
        publish_meal_added(meal, bus=self._event_bus)
        return meal

    def remove_meal_from_plan(self, meal_id: str) -> bool:
        '''Removes the meal with this id. Unknown ids are a no-op (returns False).'''
        with self._lock:
            for i, meal in enumerate(self._meals):
                if meal.id == meal_id:
                    del self._meals[i]
                    break
            else:
                return False
        logger.debug("Removed %s", meal)
        publish_meal_removed(meal, bus=self._event_bus)
        return True

    def clear_week_plan(self) -> int:
        """Remove every meal dated within the current week window (inclusive).

        Meals outside [current_week_start, current_week_start + 6] are kept.
        Returns the number of meals removed.
        """
        with self._lock:
            start = self._current_week_start
            kept = [m for m in self._meals if not is_in_week(m.date, start)]
            removed = len(self._meals) - len(kept)
            self._meals = kept
        logger.info("Cleared week starting %s (%d meal(s) removed)", format_iso_date(start), removed)
        publish_week_cleared(start, removed, bus=self._event_bus)
        return removed

    def generate_grocery_list(self) -> GroceryList:
        with self._lock:
            return super().generate_grocery_list()
