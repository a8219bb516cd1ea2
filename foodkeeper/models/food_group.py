"""Food group model aggregating items that share a base name."""

from collections import Counter
from datetime import UTC, date, datetime

from sqlalchemy import Column, DateTime, Enum, Integer, String
from sqlalchemy.orm import relationship

from foodkeeper.database import Base
from foodkeeper.i18n import ENGLISH
from foodkeeper.models.enums import FoodCategory
from foodkeeper.models.mixins import enum_values
from foodkeeper.services import unit_display


class FoodGroup(Base):
    """A cluster of inventory entries sharing a normalized base name (e.g. every "apple")."""

    __tablename__ = "food_groups"

    id = Column(Integer, primary_key=True, index=True)
    base_name = Column(String(255), nullable=False, index=True)
    display_name = Column(String(255), nullable=False)
    category = Column(
        Enum(FoodCategory, name="foodcategory", values_callable=enum_values),
        default=FoodCategory.OTHER,
        nullable=False,
    )
    created_date = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
    last_updated = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
    custom_emoji = Column(String(16), nullable=True)

    # Relationships
    items = relationship(
        "FoodItem",
        back_populates="group",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="FoodItem.id",
    )

    @property
    def total_quantity(self) -> float:
        """Plain sum for a single unit; mixed units are summed in grams / mL / pieces."""
        if len({item.unit for item in self.items}) <= 1:
            return sum(item.quantity for item in self.items)
        return sum(unit_display.to_base_quantity(item.quantity, item.unit) for item in self.items)

    @property
    def primary_unit(self) -> str:
        if not self.items:
            return unit_display.DEFAULT_UNIT
        return Counter(item.unit for item in self.items).most_common(1)[0][0]

    def display_unit(self, language: str = ENGLISH) -> str:
        return unit_display.display_unit(self.primary_unit, language)

    @property
    def total_unit(self) -> str:
        """Unit that total_quantity is expressed in."""
        unit = self.primary_unit
        if len({item.unit for item in self.items}) <= 1:
            return unit
        unit_type = unit_display.get_unit_type(unit)
        if unit_type == unit_display.UnitType.VOLUME:
            return "ml"
        if unit_type == unit_display.UnitType.WEIGHT:
            return "g"
        if unit.strip() == unit_display.DOZEN:
            return unit_display.DEFAULT_UNIT
        return unit

    @property
    def formatted_total_quantity_with_unit(self) -> str:
        return unit_display.format_quantity_with_unit(self.total_quantity, self.total_unit)

    @property
    def has_items_needing_unit_guidance(self) -> bool:
        return any(item.needs_unit_guidance for item in self.items)

    @property
    def earliest_expiration_date(self) -> date | None:
        dates = [item.expiration_date for item in self.items if item.expiration_date is not None]
        return min(dates) if dates else None

    @property
    def earliest_purchase_date(self) -> date:
        dates = [item.purchase_date for item in self.items if item.purchase_date is not None]
        return min(dates) if dates else date.today()

    @property
    def is_expired(self) -> bool:
        expiration = self.earliest_expiration_date
        return expiration is not None and date.today() > expiration

    @property
    def days_until_expiration(self) -> int | None:
        expiration = self.earliest_expiration_date
        if expiration is None:
            return None
        return (expiration - date.today()).days

    @property
    def display_icon(self) -> str:
        if self.custom_emoji:
            return self.custom_emoji
        for item in self.items:
            if item.specific_emoji:
                return item.specific_emoji
        return FoodCategory(self.category).icon

    def add_item(self, item) -> None:
        """Attach an item once; re-adding the same item is a no-op."""
        if any(existing is item or (item.id is not None and existing.id == item.id) for existing in self.items):
            return
        self.items.append(item)
        self.last_updated = datetime.now(UTC)
        self._update_display_name()

    def remove_item(self, item) -> None:
        """Detach an item. An emptied group is left for the caller to delete."""
        self.items = [
            existing
            for existing in self.items
            if existing is not item and (item.id is None or existing.id != item.id)
        ]
        self.last_updated = datetime.now(UTC)
        if self.items:
            self._update_display_name()

    def _update_display_name(self) -> None:
        from foodkeeper.services.food_grouping import generate_group_display_name

        self.display_name = generate_group_display_name(item.name for item in self.items)

    def can_accept(self, item) -> bool:
        from foodkeeper.services.food_grouping import get_base_food_name, should_group

        return (
            get_base_food_name(item.name).lower() == self.base_name.lower()
            or should_group(self.base_name, item.name)
        )
