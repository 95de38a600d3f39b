from fastapi import APIRouter, HTTPException

from wwfm.schemas.category import CategoryInfo, CategoryOption
from wwfm.services.categories import category_registry

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=dict[str, list[CategoryOption]])
def list_categories():
    """All categories grouped for pickers."""
    return category_registry.get_by_group()


@router.get("/{category}", response_model=CategoryInfo)
def get_category(category: str):
    """Display name and description for one category."""
    if category_registry.parse(category) is None:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
    return category_registry.get_info(category)
