"""Inventory API endpoints."""

import base64
import binascii
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from foodkeeper.config import get_settings
from foodkeeper.database import get_db
from foodkeeper.models.food_group import FoodGroup
from foodkeeper.models.food_item import FoodItem
from foodkeeper.schemas.food import (
    DiscardExpiredResponse,
    FoodGroupResponse,
    FoodGroupUpdate,
    FoodItemCreate,
    FoodItemResponse,
    FoodItemUpdate,
    QuantityAdjustment,
)
from foodkeeper.schemas.recipe import ConsumedIngredientResponse, ConsumeRequest, ConsumeResponse
from foodkeeper.services.consumption_service import ConsumptionService
from foodkeeper.services.inventory_service import InventoryService
from foodkeeper.services.recipe_parser import (
    CookingStep,
    Dish,
    IngredientGroup,
    RecipeIngredient,
    RecipeResponse,
)

router = APIRouter(prefix="/api/v1/inventory", tags=["inventory"])


def get_item_or_404(service: InventoryService, item_id: int) -> FoodItem:
    item = service.get_item(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Food item not found")
    return item


def get_group_or_404(service: InventoryService, group_id: int) -> FoodGroup:
    group = service.get_group(group_id)
    if not group:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Food group not found")
    return group


@router.get("/items", response_model=list[FoodItemResponse])
def list_items(db: Annotated[Session, Depends(get_db)]):
    """List every item, earliest expiry first."""
    return InventoryService(db).list_items()


@router.post("/items", response_model=FoodItemResponse, status_code=status.HTTP_201_CREATED)
def add_item(data: FoodItemCreate, db: Annotated[Session, Depends(get_db)]):
    """Add a purchase; it joins the group of matching items."""
    fields = data.model_dump(exclude={"image_base64"})
    if data.image_base64:
        try:
            fields["image_data"] = base64.b64decode(data.image_base64, validate=True)
        except binascii.Error:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Invalid image data"
            ) from None
    try:
        return InventoryService(db).add_item(**fields)
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Could not save the food item"
        ) from None


@router.get("/items/expiring", response_model=list[FoodItemResponse])
def list_expiring_items(
    db: Annotated[Session, Depends(get_db)],
    days: Annotated[int, Query(ge=0, le=365)] = 3,
):
    return InventoryService(db).expiring_items(days)


@router.get("/items/expired", response_model=list[FoodItemResponse])
def list_expired_items(db: Annotated[Session, Depends(get_db)]):
    return InventoryService(db).expired_items()


@router.get("/items/{item_id}", response_model=FoodItemResponse)
def get_item(item_id: int, db: Annotated[Session, Depends(get_db)]):
    return get_item_or_404(InventoryService(db), item_id)


@router.patch("/items/{item_id}", response_model=FoodItemResponse)
def update_item(item_id: int, data: FoodItemUpdate, db: Annotated[Session, Depends(get_db)]):
    service = InventoryService(db)
    item = get_item_or_404(service, item_id)
    return service.update_item(item, **data.model_dump(exclude_unset=True))


@router.post("/items/{item_id}/quantity", response_model=FoodItemResponse | None)
def adjust_quantity(item_id: int, data: QuantityAdjustment, db: Annotated[Session, Depends(get_db)]):
    """Set a new quantity. Returns null when the item was used up and removed."""
    service = InventoryService(db)
    item = get_item_or_404(service, item_id)
    return service.adjust_quantity(item, data.quantity)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: int, db: Annotated[Session, Depends(get_db)]):
    service = InventoryService(db)
    service.delete_item(get_item_or_404(service, item_id))


@router.post("/discard-expired", response_model=DiscardExpiredResponse)
def discard_expired(db: Annotated[Session, Depends(get_db)]):
    """Move every expired item into history and remove it."""
    return DiscardExpiredResponse(removed=InventoryService(db).discard_expired())


@router.get("/groups", response_model=list[FoodGroupResponse])
def list_groups(db: Annotated[Session, Depends(get_db)]):
    return InventoryService(db).list_groups()


@router.get("/groups/{group_id}", response_model=FoodGroupResponse)
def get_group(group_id: int, db: Annotated[Session, Depends(get_db)]):
    return get_group_or_404(InventoryService(db), group_id)


@router.patch("/groups/{group_id}", response_model=FoodGroupResponse)
def update_group(group_id: int, data: FoodGroupUpdate, db: Annotated[Session, Depends(get_db)]):
    service = InventoryService(db)
    group = get_group_or_404(service, group_id)
    return service.update_group(group, **data.model_dump(exclude_unset=True))


@router.delete("/groups/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_group(group_id: int, db: Annotated[Session, Depends(get_db)]):
    service = InventoryService(db)
    service.delete_group(get_group_or_404(service, group_id))


def _recipe_from_schema(data: ConsumeRequest) -> RecipeResponse:
    dishes = [
        Dish(
            name=dish.name,
            cuisine=dish.cuisine,
            nutrition_highlight=dish.nutrition_highlight,
            ingredients=[
                IngredientGroup(
                    type=group.type,
                    items=[RecipeIngredient(i.name, i.quantity, i.unit, i.status) for i in group.items],
                )
                for group in dish.ingredients
            ],
            steps=[CookingStep(step.index, step.description) for step in dish.steps],
            healthy_tip=dish.healthy_tip,
            pairing_suggestion=dish.pairing_suggestion,
        )
        for dish in data.recipe.dishes
    ]
    return RecipeResponse.success(dishes)


@router.post("/consume", response_model=ConsumeResponse)
def consume_recipe(data: ConsumeRequest, db: Annotated[Session, Depends(get_db)]):
    """Take the ingredients of a cooked recipe out of the inventory."""
    language = data.language or get_settings().language
    result = ConsumptionService(db).consume_recipe(_recipe_from_schema(data), language)
    return ConsumeResponse(
        recipe_name=result.recipe_name,
        consumed=[ConsumedIngredientResponse.model_validate(c) for c in result.consumed],
        warnings=result.warnings,
        restock_needed=[shortage.item.name for shortage in result.restock_needed],
    )
