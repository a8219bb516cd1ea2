"""Food item model."""

from datetime import date

from sqlalchemy import Boolean, Column, Date, Enum, Float, ForeignKey, Integer, LargeBinary, String
from sqlalchemy.orm import relationship

from foodkeeper.database import Base
from foodkeeper.models.enums import FoodCategory, StorageLocation
from foodkeeper.models.mixins import TimestampMixin, enum_values
from foodkeeper.services import storage_recommendation, unit_display


class FoodItem(Base, TimestampMixin):
    """A single purchase of a food kept at home."""

    __tablename__ = "food_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    barcode = Column(String(64), nullable=True)
    purchase_date = Column(Date, nullable=False, default=date.today)
    expiration_date = Column(Date, nullable=True, index=True)
    category = Column(
        Enum(FoodCategory, name="foodcategory", values_callable=enum_values),
        default=FoodCategory.OTHER,
        nullable=False,
    )
    quantity = Column(Float, nullable=False, default=1)
    unit = Column(String(20), nullable=False, default=unit_display.DEFAULT_UNIT)
    image_data = Column(LargeBinary, nullable=True)
    stock_alert_enabled = Column(Boolean, default=False, nullable=False)
    specific_emoji = Column(String(16), nullable=True)
    storage_location = Column(
        Enum(StorageLocation, name="storagelocation", values_callable=enum_values),
        nullable=True,
    )
    group_id = Column(Integer, ForeignKey("food_groups.id", ondelete="CASCADE"), nullable=True, index=True)

    # Relationships
    group = relationship("FoodGroup", back_populates="items")

    @property
    def is_expired(self) -> bool:
        if self.expiration_date is None:
            return False
        return date.today() > self.expiration_date

    @property
    def days_until_expiration(self) -> int | None:
        if self.expiration_date is None:
            return None
        return (self.expiration_date - date.today()).days

    @property
    def display_icon(self) -> str:
        return self.specific_emoji or FoodCategory(self.category).icon

    @property
    def safe_storage_location(self) -> StorageLocation:
        """Stored location, or the recommendation when unset. Never writes to the row."""
        if self.storage_location is not None:
            return self.storage_location
        return storage_recommendation.recommend_storage_location(self.name, self.category)

    @property
    def formatted_quantity_with_unit(self) -> str:
        return unit_display.format_quantity_with_unit(self.quantity, self.unit)

    @property
    def needs_unit_guidance(self) -> bool:
        return unit_display.needs_unit_guidance(self.name, self.unit)

    @property
    def suggested_units(self) -> list[str]:
        return unit_display.get_suggested_units(self.name)
