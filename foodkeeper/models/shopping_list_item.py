"""Shopping list (restock) item model."""

from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, Float, Integer, String

from foodkeeper.database import Base
from foodkeeper.models.enums import FoodCategory
from foodkeeper.models.mixins import enum_values
from foodkeeper.services import unit_display


class ShoppingListItem(Base):
    """A staple to keep in stock, with the minimum quantity that triggers a restock alert."""

    __tablename__ = "shopping_list_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    category = Column(
        Enum(FoodCategory, name="foodcategory", values_callable=enum_values),
        default=FoodCategory.OTHER,
        nullable=False,
    )
    unit = Column(String(20), nullable=False, default=unit_display.DEFAULT_UNIT)
    min_quantity = Column(Float, nullable=False, default=1)
    alert_enabled = Column(Boolean, nullable=False, default=True)
    created_date = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
    estimated_price = Column(Float, nullable=True)

    @property
    def is_urgent(self) -> bool:
        return bool(self.alert_enabled) and (self.min_quantity or 0) > 0

    @property
    def formatted_quantity_with_unit(self) -> str:
        return unit_display.format_quantity_with_unit(self.min_quantity, self.unit)
