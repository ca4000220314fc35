from fastapi import FastAPI, Request, Query, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from typing import Optional
import logging

from mealplan.api.routes import recipes
from mealplan.domain.errors import InvalidInputError
from mealplan.events.web_observers import start as start_event_observers, get_events as get_web_events
from mealplan.infra.Meal_Plan_Store import InMemoryMealPlanStore, MealPlanStore, default_meals
from mealplan.infra.Recipe_Catalog import load_default_catalog
from mealplan.logic.scheduling.week_window import format_iso_date, month_grid
from mealplan.utilities import config
from mealplan.utilities.constants import MEAL_TYPES
from mealplan.utilities.validators import AddMealInput, WeekStartInput

# Logging
logger = logging.getLogger("meal_app")


def build_default_store() -> MealPlanStore:
    catalog = load_default_catalog()
    store = InMemoryMealPlanStore(catalog)
    if config.SEED_DEFAULT_MEALS:
        for meal in default_meals(store.current_week_start):
            store.add_meal_to_plan(meal.recipe_id, meal.date, meal.meal_type)
    return store


def get_store(request: Request) -> MealPlanStore:
    return request.app.state.store


def _week_payload(store: MealPlanStore):
    return {
        "week_start": format_iso_date(store.current_week_start),
        "week_starts_on": store.week_starts_on,
        "days": [format_iso_date(d) for d in store.week_days()],
        "meal_types": list(MEAL_TYPES),
        "meals": [m.to_dict() for m in store.get_meals_for_week()],
    }


def create_app(store: Optional[MealPlanStore] = None) -> FastAPI:
    app = FastAPI(title="Household Meal Planner API")
    app.state.store = store if store is not None else build_default_store()
    start_event_observers(app.state.store.event_bus)
    app.include_router(recipes.router)

    @app.exception_handler(InvalidInputError)
    async def _invalid_input(request: Request, exc: InvalidInputError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        details = [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()]
        logger.info("Rejected %s %s: %s", request.method, request.url.path, details)
        return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})

    # -------------------- API: Meal plan --------------------
    @app.get('/api/meal-plan')
    def api_meal_plan(store: MealPlanStore = Depends(get_store)):
        return store.to_dict()

    @app.post('/api/meal-plan/meals', status_code=201)
    def api_add_meal(payload: AddMealInput, store: MealPlanStore = Depends(get_store)):
        meal = store.add_meal_to_plan(payload.recipe_id, payload.date, payload.meal_type)
        if store.get_recipe_by_id(meal.recipe_id) is None:
            logger.warning("Planned meal %s references unknown recipe %r", meal.id, meal.recipe_id)
        return meal.to_dict()

    @app.delete('/api/meal-plan/meals/{meal_id}')
    def api_remove_meal(meal_id: str, store: MealPlanStore = Depends(get_store)):
        removed = store.remove_meal_from_plan(meal_id)
        return {"id": meal_id, "removed": removed}

    @app.get('/api/meal-plan/day/{day}')
    def api_meals_for_day(day: str, store: MealPlanStore = Depends(get_store)):
        meals = store.get_meals_for_day(day)
        return {"date": day, "count": len(meals), "meals": [m.to_dict() for m in meals]}

    @app.get('/api/meal-plan/week')
    def api_week(store: MealPlanStore = Depends(get_store)):
        return _week_payload(store)

    @app.put('/api/meal-plan/week')
    def api_set_week(payload: WeekStartInput, store: MealPlanStore = Depends(get_store)):
        store.set_current_week_start(payload.date)
        return _week_payload(store)

    @app.post('/api/meal-plan/week/next')
    def api_next_week(store: MealPlanStore = Depends(get_store)):
        store.next_week()
        return _week_payload(store)

    @app.post('/api/meal-plan/week/previous')
    def api_previous_week(store: MealPlanStore = Depends(get_store)):
        store.previous_week()
        return _week_payload(store)

    @app.post('/api/meal-plan/week/clear')
    def api_clear_week(store: MealPlanStore = Depends(get_store)):
        removed = store.clear_week_plan()
        return {"week_start": format_iso_date(store.current_week_start), "removed": removed}

    @app.get('/api/meal-plan/month')
    def api_month(year: int = Query(...), month: int = Query(...), store: MealPlanStore = Depends(get_store)):
        grid = month_grid(year, month, store.week_starts_on)
        days = []
        for d in grid:
            days.append({
                "date": format_iso_date(d),
                "in_month": d.month == month,
                "meals": [m.to_dict() for m in store.get_meals_for_day(d)],
            })
        return {"year": year, "month": month, "weeks": len(grid) // 7, "days": days}

    @app.get('/api/meal-plan/events')
    def api_events(since: Optional[int] = Query(default=None)):
        return get_web_events(since)

    # -------------------- API: Grocery list --------------------
    @app.get('/api/grocery-list')
    def api_grocery_list(store: MealPlanStore = Depends(get_store)):
        return store.generate_grocery_list().to_dict()

    logger.info("Meal planner API ready (week starts on %d, week of %s)",
                app.state.store.week_starts_on, format_iso_date(app.state.store.current_week_start))
    return app


app = create_app()
