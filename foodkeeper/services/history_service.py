"""History service for recording and summarizing inventory activity."""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta

from sqlalchemy.orm import Session

from foodkeeper.config import get_settings
from foodkeeper.database import commit_or_log
from foodkeeper.models.enums import FoodCategory, HistoryRecordType
from foodkeeper.models.food_item import FoodItem
from foodkeeper.models.history_record import FoodHistoryRecord
from foodkeeper.services.unit_display import format_plain_quantity

logger = logging.getLogger(__name__)

# Consumption records of one recipe closer together than this are one cooking session
COOKING_SESSION_GAP = timedelta(minutes=5)
TOP_CATEGORY_COUNT = 5
RECENT_ACTIVITY_COUNT = 10


@dataclass
class ConsumedIngredient:
    """An amount taken out of inventory for a recipe."""

    name: str
    consumed_amount: float
    unit: str
    original_requirement: str = ""


@dataclass
class CategoryStatistic:
    category: FoodCategory
    count: int
    total_quantity: float


@dataclass
class HistoryStatistics:
    """Activity summary for a date range."""

    total_purchase_count: int = 0
    total_consumption_count: int = 0
    total_expiration_count: int = 0
    total_adjustment_count: int = 0
    unique_recipes_count: int = 0
    top_categories: list[CategoryStatistic] = field(default_factory=list)
    recent_activity: list[FoodHistoryRecord] = field(default_factory=list)


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day, tzinfo=UTC)


def count_cooking_instances(consumption_records: list[FoodHistoryRecord]) -> int:
    """Count cooking sessions: same-recipe records within five minutes of each other are one session.

    Consumption without a recipe name counts as its own session.
    """
    by_recipe: dict[str, list[datetime]] = defaultdict(list)
    instances = 0
    for record in consumption_records:
        if record.recipe_name:
            by_recipe[record.recipe_name].append(record.date)
        else:
            instances += 1

    for dates in by_recipe.values():
        dates.sort()
        instances += 1
        for previous, current in zip(dates, dates[1:]):
            if current - previous > COOKING_SESSION_GAP:
                instances += 1
    return instances


class HistoryService:
    """Service for history records."""

    def __init__(self, db: Session):
        self.db = db

    def _record(
        self,
        record_type: HistoryRecordType,
        item_name: str,
        quantity: float,
        unit: str,
        category: FoodCategory,
        recipe_name: str | None = None,
        notes: str | None = None,
        record_date: date | datetime | None = None,
        commit: bool = True,
    ) -> FoodHistoryRecord:
        record = FoodHistoryRecord(
            date=_as_datetime(record_date) if record_date else datetime.now(UTC),
            type=record_type,
            item_name=item_name,
            quantity=quantity,
            unit=unit,
            category=category,
            recipe_name=recipe_name,
            notes=notes,
        )
        self.db.add(record)
        if commit:
            commit_or_log(self.db, f"{record_type.value} record for '{item_name}'")
        return record

    def record_purchase(
        self,
        item_name: str,
        quantity: float,
        unit: str,
        category: FoodCategory,
        purchase_date: date | None = None,
        notes: str | None = None,
        commit: bool = True,
    ) -> FoodHistoryRecord:
        logger.info(f"Recording purchase: {item_name} {format_plain_quantity(quantity)}{unit}")
        return self._record(
            HistoryRecordType.PURCHASE,
            item_name,
            quantity,
            unit,
            category,
            notes=notes,
            record_date=purchase_date,
            commit=commit,
        )

    def record_consumption(
        self,
        item_name: str,
        quantity: float,
        unit: str,
        category: FoodCategory,
        recipe_name: str | None = None,
        notes: str | None = None,
        commit: bool = True,
    ) -> FoodHistoryRecord:
        logger.info(
            f"Recording consumption: {item_name} {format_plain_quantity(quantity)}{unit} "
            f"for {recipe_name or 'unknown recipe'}"
        )
        return self._record(
            HistoryRecordType.CONSUMPTION,
            item_name,
            quantity,
            unit,
            category,
            recipe_name=recipe_name,
            notes=notes,
            commit=commit,
        )

    def record_expiration(
        self,
        item_name: str,
        quantity: float,
        unit: str,
        category: FoodCategory,
        notes: str | None = None,
        commit: bool = True,
    ) -> FoodHistoryRecord:
        return self._record(
            HistoryRecordType.EXPIRATION, item_name, quantity, unit, category, notes=notes, commit=commit
        )

    def record_quantity_adjustment(
        self,
        item_name: str,
        old_quantity: float,
        new_quantity: float,
        unit: str,
        category: FoodCategory,
        notes: str | None = None,
        commit: bool = True,
    ) -> FoodHistoryRecord:
        """Record the signed change between two quantities."""
        change = new_quantity - old_quantity
        notes = notes or f"{format_plain_quantity(old_quantity)} -> {format_plain_quantity(new_quantity)}"
        logger.info(f"Recording adjustment: {item_name} {'+' if change > 0 else ''}{format_plain_quantity(change)}{unit}")
        return self._record(
            HistoryRecordType.ADJUSTMENT, item_name, change, unit, category, notes=notes, commit=commit
        )

    def record_recipe_trial(self, recipe_name: str, notes: str | None = None) -> FoodHistoryRecord:
        return self._record(
            HistoryRecordType.RECIPE_TRIAL,
            recipe_name,
            0,
            "",
            FoodCategory.OTHER,
            recipe_name=recipe_name,
            notes=notes,
        )

    def record_batch_expiration(self, items: list[FoodItem], commit: bool = True) -> list[FoodHistoryRecord]:
        records = [
            self._record(
                HistoryRecordType.EXPIRATION,
                item.name,
                item.quantity,
                item.unit,
                item.category,
                notes=f"expired on {item.expiration_date.isoformat()}" if item.expiration_date else None,
                commit=False,
            )
            for item in items
        ]
        if commit:
            commit_or_log(self.db, f"{len(records)} expiration records")
        logger.info(f"Recorded {len(records)} expired items")
        return records

    def record_batch_consumption(
        self,
        consumed: list[ConsumedIngredient],
        recipe_name: str | None,
        commit: bool = True,
    ) -> list[FoodHistoryRecord]:
        categories = self._find_categories([ingredient.name for ingredient in consumed])
        records = [
            self._record(
                HistoryRecordType.CONSUMPTION,
                ingredient.name,
                ingredient.consumed_amount,
                ingredient.unit,
                categories[ingredient.name],
                recipe_name=recipe_name,
                commit=False,
            )
            for ingredient in consumed
        ]
        if commit:
            commit_or_log(self.db, f"{len(records)} consumption records")
        logger.info(f"Recorded consumption of {len(records)} ingredients for {recipe_name or 'unknown recipe'}")
        return records

    def _find_categories(self, names: list[str]) -> dict[str, FoodCategory]:
        """Category of the first inventory item whose name contains, or is contained in, each name."""
        items = self.db.query(FoodItem).all()
        categories = {}
        for name in names:
            match = next((item for item in items if name in item.name or item.name in name), None)
            categories[name] = match.category if match else FoodCategory.OTHER
        return categories

    def update_purchase_record_date(self, item_name: str, old_date: date, new_date: date) -> bool:
        """Move the purchase record closest to old_date; False when the item has none."""
        records = (
            self.db.query(FoodHistoryRecord)
            .filter(
                FoodHistoryRecord.item_name == item_name,
                FoodHistoryRecord.type == HistoryRecordType.PURCHASE,
            )
            .all()
        )
        if not records:
            return False
        closest = min(records, key=lambda r: abs((r.date.date() - old_date).days))
        closest.date = _as_datetime(new_date)
        return commit_or_log(self.db, f"purchase date for '{item_name}'")

    def get_records(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
        record_type: HistoryRecordType | None = None,
    ) -> list[FoodHistoryRecord]:
        """Records in [start, end], newest first."""
        query = self.db.query(FoodHistoryRecord)
        if start is not None:
            query = query.filter(FoodHistoryRecord.date >= _as_datetime(start))
        if isinstance(end, datetime):
            query = query.filter(FoodHistoryRecord.date <= end)
        elif end is not None:
            # A plain date end includes that whole day
            query = query.filter(FoodHistoryRecord.date < _as_datetime(end) + timedelta(days=1))
        if record_type is not None:
            query = query.filter(FoodHistoryRecord.type == record_type)
        return query.order_by(FoodHistoryRecord.date.desc(), FoodHistoryRecord.id.desc()).all()

    def get_statistics(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
    ) -> HistoryStatistics:
        records = self.get_records(start, end)
        by_type = Counter(HistoryRecordType(record.type) for record in records)
        consumption = [r for r in records if r.type == HistoryRecordType.CONSUMPTION]

        return HistoryStatistics(
            total_purchase_count=by_type[HistoryRecordType.PURCHASE],
            total_consumption_count=count_cooking_instances(consumption),
            total_expiration_count=by_type[HistoryRecordType.EXPIRATION],
            total_adjustment_count=by_type[HistoryRecordType.ADJUSTMENT],
            unique_recipes_count=len({r.recipe_name for r in consumption if r.recipe_name}),
            top_categories=self._top_categories(records),
            recent_activity=records[:RECENT_ACTIVITY_COUNT],
        )

    @staticmethod
    def _top_categories(records: list[FoodHistoryRecord]) -> list[CategoryStatistic]:
        counts: Counter = Counter()
        totals: dict[FoodCategory, float] = defaultdict(float)
        for record in records:
            category = FoodCategory(record.category)
            counts[category] += 1
            totals[category] += record.quantity or 0
        return [
            CategoryStatistic(category=category, count=count, total_quantity=totals[category])
            for category, count in counts.most_common(TOP_CATEGORY_COUNT)
        ]

    def clear_all_records(self) -> int:
        deleted = self.db.query(FoodHistoryRecord).delete()
        commit_or_log(self.db, "history clean-up")
        logger.info(f"Cleared all {deleted} history records")
        return deleted

    def clear_records_before(self, cutoff: date | datetime) -> int:
        deleted = (
            self.db.query(FoodHistoryRecord)
            .filter(FoodHistoryRecord.date < _as_datetime(cutoff))
            .delete(synchronize_session=False)
        )
        commit_or_log(self.db, "history clean-up")
        logger.info(f"Cleared {deleted} history records before {cutoff}")
        return deleted

    def perform_auto_cleanup(self, retention_days: int | None = None) -> int:
        """Drop records older than the retention window (30 days unless configured)."""
        days = retention_days if retention_days is not None else get_settings().history_retention_days
        return self.clear_records_before(datetime.now(UTC) - timedelta(days=days))
