"""Inventory history record model."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Enum, Float, Integer, String, Text

from foodkeeper.database import Base
from foodkeeper.i18n import ENGLISH, translate
from foodkeeper.models.enums import FoodCategory, HistoryRecordType
from foodkeeper.models.mixins import enum_values
from foodkeeper.services import unit_display


class FoodHistoryRecord(Base):
    """One purchase, consumption, discard, adjustment or recipe trial."""

    __tablename__ = "food_history_records"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False, index=True)
    type = Column(
        Enum(HistoryRecordType, name="historyrecordtype", values_callable=enum_values),
        nullable=False,
        index=True,
    )
    item_name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False, default=0)
    unit = Column(String(20), nullable=False, default=unit_display.DEFAULT_UNIT)
    category = Column(
        Enum(FoodCategory, name="foodcategory", values_callable=enum_values),
        default=FoodCategory.OTHER,
        nullable=False,
    )
    recipe_name = Column(String(255), nullable=True)  # consumption only
    notes = Column(Text, nullable=True)

    @property
    def formatted_quantity(self) -> str:
        """Quantity with at most one decimal, e.g. "2 个" or "1.5 kg"."""
        rounded = round(self.quantity or 0, 1)
        return f"{unit_display.format_plain_quantity(rounded)} {self.unit}"

    @property
    def display_icon(self) -> str:
        return FoodCategory(self.category).icon

    def describe(self, language: str = ENGLISH) -> str:
        record_type = HistoryRecordType(self.type)
        if record_type == HistoryRecordType.RECIPE_TRIAL:
            return translate("history.recipeTrial", language, item=self.recipe_name or self.item_name)
        text = translate(
            f"history.{record_type.value}",
            language,
            quantity=self.formatted_quantity,
            item=self.item_name,
        )
        if record_type == HistoryRecordType.CONSUMPTION and self.recipe_name:
            text = f"{text} {translate('history.consumption.recipe', language, recipe=self.recipe_name)}"
        return text

    @property
    def description(self) -> str:
        return self.describe()
