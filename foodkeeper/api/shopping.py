"""Shopping list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from foodkeeper.config import get_settings
from foodkeeper.database import get_db
from foodkeeper.i18n import translate
from foodkeeper.models.shopping_list_item import ShoppingListItem
from foodkeeper.schemas.shopping import (
    ShoppingItemCreate,
    ShoppingItemResponse,
    ShoppingItemUpdate,
    ShortageResponse,
)
from foodkeeper.services.shopping_service import ShoppingService
from foodkeeper.services.unit_display import format_quantity_with_unit

router = APIRouter(prefix="/api/v1/shopping", tags=["shopping"])


def get_item_or_404(service: ShoppingService, item_id: int) -> ShoppingListItem:
    item = service.get_item(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shopping item not found")
    return item


@router.get("/items", response_model=list[ShoppingItemResponse])
def list_items(db: Annotated[Session, Depends(get_db)]):
    return ShoppingService(db).list_items()


@router.post("/items", response_model=ShoppingItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(data: ShoppingItemCreate, db: Annotated[Session, Depends(get_db)]):
    return ShoppingService(db).create_item(**data.model_dump())


@router.get("/shortages", response_model=list[ShortageResponse])
def list_shortages(db: Annotated[Session, Depends(get_db)]):
    """Alert-enabled items whose stock at home is below the minimum."""
    language = get_settings().language
    return [
        ShortageResponse(
            item=ShoppingItemResponse.model_validate(shortage.item),
            current_stock=shortage.current_stock,
            missing_quantity=shortage.missing_quantity,
            warning=translate(
                "restock.warning",
                language,
                name=shortage.item.name,
                current=format_quantity_with_unit(shortage.current_stock, shortage.item.unit, language),
                minimum=format_quantity_with_unit(shortage.item.min_quantity, shortage.item.unit, language),
            ),
        )
        for shortage in ShoppingService(db).shortages()
    ]


@router.get("/items/{item_id}", response_model=ShoppingItemResponse)
def get_item(item_id: int, db: Annotated[Session, Depends(get_db)]):
    return get_item_or_404(ShoppingService(db), item_id)


@router.patch("/items/{item_id}", response_model=ShoppingItemResponse)
def update_item(item_id: int, data: ShoppingItemUpdate, db: Annotated[Session, Depends(get_db)]):
    service = ShoppingService(db)
    item = get_item_or_404(service, item_id)
    return service.update_item(item, **data.model_dump(exclude_unset=True))


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: int, db: Annotated[Session, Depends(get_db)]):
    service = ShoppingService(db)
    service.delete_item(get_item_or_404(service, item_id))
