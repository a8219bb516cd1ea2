"""Inventory service for food items and their groups."""

import logging
from datetime import date, timedelta
from typing import Any

from sqlalchemy.orm import Session

from foodkeeper.models.enums import FoodCategory, StorageLocation
from foodkeeper.models.food_group import FoodGroup
from foodkeeper.models.food_item import FoodItem
from foodkeeper.services.food_grouping import FoodGroupManager, get_base_food_name
from foodkeeper.services.history_service import HistoryService
from foodkeeper.services.ingredient_parser import guess_ingredient_category
from foodkeeper.services.storage_recommendation import (
    estimate_expiration_date,
    recommend_storage_location,
)
from foodkeeper.services.unit_display import DEFAULT_UNIT

logger = logging.getLogger(__name__)

EXPIRING_SOON_DAYS = 3


class InventoryService:
    """Service for adding, changing and removing inventory."""

    def __init__(self, db: Session, history: HistoryService | None = None):
        self.db = db
        self.history = history or HistoryService(db)
        self.groups = FoodGroupManager(db)

    def list_items(self) -> list[FoodItem]:
        items = self.db.query(FoodItem).all()
        # Items without an expiration date go last
        return sorted(items, key=lambda i: (i.expiration_date is None, i.expiration_date or date.max, i.id))

    def get_item(self, item_id: int) -> FoodItem | None:
        return self.db.query(FoodItem).filter(FoodItem.id == item_id).first()

    def list_groups(self) -> list[FoodGroup]:
        return self.groups.list_groups()

    def get_group(self, group_id: int) -> FoodGroup | None:
        return self.db.query(FoodGroup).filter(FoodGroup.id == group_id).first()

    def add_item(
        self,
        name: str,
        quantity: float = 1,
        unit: str = DEFAULT_UNIT,
        category: FoodCategory | None = None,
        purchase_date: date | None = None,
        expiration_date: date | None = None,
        storage_location: StorageLocation | None = None,
        **extra: Any,
    ) -> FoodItem:
        """Add a purchase, filling in category, storage location and expiry when missing.

        The item joins an existing group that accepts it, or a new one.
        """
        name = name.strip()
        category = FoodCategory(category) if category else guess_ingredient_category(name)
        purchase_date = purchase_date or date.today()
        if storage_location is None:
            storage_location = recommend_storage_location(name, category)
        if expiration_date is None:
            expiration_date = estimate_expiration_date(name, category, storage_location, purchase_date)

        item = FoodItem(
            name=name,
            quantity=quantity,
            unit=unit or DEFAULT_UNIT,
            category=category,
            purchase_date=purchase_date,
            expiration_date=expiration_date,
            storage_location=storage_location,
            **extra,
        )
        self.db.add(item)
        group = self.groups.find_or_create_group(item)
        group.add_item(item)

        self.history.record_purchase(
            name, quantity, item.unit, category, purchase_date=purchase_date, commit=False
        )
        self.db.commit()
        self.db.refresh(item)
        logger.info(
            f"Added {name} ({quantity}{item.unit}, {category.value}) to {storage_location.value}, "
            f"expires {expiration_date.isoformat()}, group {group.id}"
        )
        return item

    def update_item(self, item: FoodItem, **changes: Any) -> FoodItem:
        """Apply field changes; a new name may move the item to another group."""
        old_name = item.name
        old_purchase_date = item.purchase_date
        old_quantity = item.quantity

        for field, value in changes.items():
            setattr(item, field, value)

        if "quantity" in changes and changes["quantity"] != old_quantity:
            self.history.record_quantity_adjustment(
                item.name, old_quantity, item.quantity, item.unit, item.category, commit=False
            )

        if item.name != old_name and get_base_food_name(item.name) != get_base_food_name(old_name):
            self._regroup(item)

        self.db.commit()
        self.db.refresh(item)

        if "purchase_date" in changes and item.purchase_date != old_purchase_date:
            self.history.update_purchase_record_date(item.name, old_purchase_date, item.purchase_date)
        return item

    def _regroup(self, item: FoodItem) -> None:
        old_group = item.group
        if old_group is not None and old_group.can_accept(item):
            return
        new_group = self.groups.find_or_create_group(item)
        if old_group is not None:
            old_group.items.remove(item)
        new_group.add_item(item)
        if old_group is not None and not old_group.items:
            self.db.delete(old_group)
        logger.info(f"Moved '{item.name}' to group '{new_group.base_name}'")

    def adjust_quantity(self, item: FoodItem, new_quantity: float) -> FoodItem | None:
        """Set a new quantity and record the change; zero or less removes the item."""
        self.history.record_quantity_adjustment(
            item.name, item.quantity, new_quantity, item.unit, item.category, commit=False
        )
        if new_quantity <= 0:
            self._delete(item)
            self.db.commit()
            return None
        item.quantity = new_quantity
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, item: FoodItem) -> None:
        self._delete(item)
        self.db.commit()

    def _delete(self, item: FoodItem) -> None:
        group = item.group
        if group is not None:
            group.remove_item(item)
            if not group.items:
                self.db.delete(group)
                logger.info(f"Deleted empty group '{group.base_name}'")
        self.db.delete(item)

    def update_group(self, group: FoodGroup, **changes: Any) -> FoodGroup:
        for field, value in changes.items():
            setattr(group, field, value)
        self.db.commit()
        self.db.refresh(group)
        return group

    def delete_group(self, group: FoodGroup) -> None:
        """Delete a group with every item in it."""
        for item in list(group.items):
            self.db.delete(item)
        self.db.delete(group)
        self.db.commit()

    def expired_items(self) -> list[FoodItem]:
        return (
            self.db.query(FoodItem)
            .filter(FoodItem.expiration_date.isnot(None), FoodItem.expiration_date < date.today())
            .all()
        )

    def expiring_items(self, within_days: int = EXPIRING_SOON_DAYS) -> list[FoodItem]:
        """Items not yet expired that expire within the given number of days."""
        today = date.today()
        return (
            self.db.query(FoodItem)
            .filter(
                FoodItem.expiration_date.isnot(None),
                FoodItem.expiration_date >= today,
                FoodItem.expiration_date <= today + timedelta(days=within_days),
            )
            .order_by(FoodItem.expiration_date)
            .all()
        )

    def discard_expired(self) -> list[str]:
        """Record every expired item in history, remove it, and return the removed names."""
        expired = self.expired_items()
        if not expired:
            return []
        self.history.record_batch_expiration(expired, commit=False)
        names = [item.name for item in expired]
        for item in expired:
            self._delete(item)
        self.db.commit()
        logger.info(f"Discarded {len(names)} expired items")
        return names
