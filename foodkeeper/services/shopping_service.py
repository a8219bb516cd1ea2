"""Shopping list service: restock thresholds checked against inventory."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from foodkeeper.models.food_item import FoodItem
from foodkeeper.models.shopping_list_item import ShoppingListItem
from foodkeeper.services.food_grouping import should_group

logger = logging.getLogger(__name__)


@dataclass
class RestockShortage:
    item: ShoppingListItem
    current_stock: float

    @property
    def missing_quantity(self) -> float:
        return max(self.item.min_quantity - self.current_stock, 0)


class ShoppingService:
    """Service for shopping list items."""

    def __init__(self, db: Session):
        self.db = db

    def list_items(self) -> list[ShoppingListItem]:
        return self.db.query(ShoppingListItem).order_by(ShoppingListItem.created_date.desc()).all()

    def get_item(self, item_id: int) -> ShoppingListItem | None:
        return self.db.query(ShoppingListItem).filter(ShoppingListItem.id == item_id).first()

    def create_item(self, **fields: Any) -> ShoppingListItem:
        item = ShoppingListItem(**fields)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"Added '{item.name}' to the shopping list (min {item.min_quantity}{item.unit})")
        return item

    def update_item(self, item: ShoppingListItem, **changes: Any) -> ShoppingListItem:
        for field, value in changes.items():
            setattr(item, field, value)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, item: ShoppingListItem) -> None:
        self.db.delete(item)
        self.db.commit()

    def current_stock(self, item: ShoppingListItem, food_items: list[FoodItem] | None = None) -> float:
        """Total quantity of inventory items that group with the shopping item's name."""
        if food_items is None:
            food_items = self.db.query(FoodItem).all()
        return sum(food.quantity for food in food_items if should_group(item.name, food.name))

    def shortages(self, names: list[str] | None = None) -> list[RestockShortage]:
        """Alert-enabled items whose stock is below their minimum.

        With names given, only shopping items grouping with one of them are checked.
        """
        food_items = self.db.query(FoodItem).all()
        candidates = self.list_items()
        if names is not None:
            candidates = [item for item in candidates if any(should_group(name, item.name) for name in names)]

        result = []
        for item in candidates:
            if not item.alert_enabled:
                continue
            stock = self.current_stock(item, food_items)
            if stock < item.min_quantity:
                result.append(RestockShortage(item=item, current_stock=stock))
        if result:
            logger.info(f"{len(result)} shopping items need restocking: {[s.item.name for s in result]}")
        return result
