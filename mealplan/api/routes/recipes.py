from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from mealplan.infra.Recipe_Catalog import RecipeCatalog

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def get_catalog(request: Request) -> RecipeCatalog:
    return request.app.state.store.catalog


@router.get("")
@router.get("/")
def list_recipes(q: Optional[str] = Query(default=None), catalog: RecipeCatalog = Depends(get_catalog)):
    """Return the recipes of the catalog, filtered by name or tag when q is given."""
    recipes = [r.to_dict() for r in catalog.search(q)]
    return {"version": catalog.version, "count": len(recipes), "recipes": recipes}


@router.get("/{recipe_id}")
def get_recipe(recipe_id: str, catalog: RecipeCatalog = Depends(get_catalog)):
    # path params arrive as text; the packaged catalog uses integer ids
    recipe = catalog.get_by_id(int(recipe_id)) if recipe_id.isdecimal() else None
    if recipe is None:
        recipe = catalog.get_by_id(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail=f"Recipe {recipe_id} not found")
    return recipe.to_dict()
