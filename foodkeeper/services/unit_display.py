"""Unit normalization and human-readable quantity formatting."""

from enum import Enum

from foodkeeper.i18n import CHINESE, translate

# Switch to the large unit (L, kg) at this many base units
DISPLAY_THRESHOLD = 1000.0

DEFAULT_UNIT = "个"

VOLUME_TO_ML: dict[str, float] = {
    "ml": 1.0,
    "毫升": 1.0,
    "l": 1000.0,
    "升": 1000.0,
    "gal": 3785.0,
    "gallon": 3785.0,
    "加仑": 3785.0,
    "cup": 240.0,
    "cups": 240.0,
    "杯": 240.0,
}

WEIGHT_TO_G: dict[str, float] = {
    "g": 1.0,
    "克": 1.0,
    "kg": 1000.0,
    "千克": 1000.0,
    "公斤": 1000.0,
    "lb": 453.592,
    "lbs": 453.592,
    "磅": 453.592,
    "oz": 28.3495,
    "盎司": 28.3495,
    "斤": 500.0,
    "两": 50.0,
}

COUNT_UNITS = {"个", "pcs", "item", "items", "打", "只", "瓶", "罐", "盒", "袋", "container"}

# Count units shown as "pcs" / "个"
GENERIC_COUNT_UNITS = {"个", "pcs", "item"}

DOZEN = "打"

LIQUID_KEYWORDS = [
    "牛奶", "酸奶", "果汁", "饮料", "水", "汽水", "啤酒", "红酒", "白酒",
    "milk", "juice", "drink", "water", "soda", "beer", "wine", "yogurt",
]


class UnitType(str, Enum):
    VOLUME = "volume"
    WEIGHT = "weight"
    COUNT = "count"
    UNKNOWN = "unknown"


def _normalize(unit: str) -> str:
    return unit.strip().lower()


def get_unit_type(unit: str) -> UnitType:
    """Classify a unit string as volume, weight, count or unknown."""
    normalized = _normalize(unit)
    if normalized in VOLUME_TO_ML:
        return UnitType.VOLUME
    if normalized in WEIGHT_TO_G:
        return UnitType.WEIGHT
    if normalized in COUNT_UNITS:
        return UnitType.COUNT
    return UnitType.UNKNOWN


def to_base_quantity(quantity: float, unit: str) -> float:
    """Convert to mL for volumes and grams for weights; other units pass through."""
    normalized = _normalize(unit)
    if normalized in VOLUME_TO_ML:
        return quantity * VOLUME_TO_ML[normalized]
    if normalized in WEIGHT_TO_G:
        return quantity * WEIGHT_TO_G[normalized]
    if normalized == DOZEN:
        return quantity * 12
    return quantity


def convert_quantity(quantity: float, from_unit: str, to_unit: str) -> float | None:
    """Convert between two units of the same kind, or None when they are incompatible."""
    if _normalize(from_unit) == _normalize(to_unit):
        return quantity
    from_type = get_unit_type(from_unit)
    if from_type != get_unit_type(to_unit) or from_type == UnitType.UNKNOWN:
        return None
    if from_type == UnitType.COUNT:
        # Container units (瓶, 盒...) are not interchangeable with pieces
        generic = GENERIC_COUNT_UNITS | {"items", DOZEN}
        if _normalize(from_unit) not in generic or _normalize(to_unit) not in generic:
            return None
    base = to_base_quantity(quantity, from_unit)
    return base / to_base_quantity(1.0, to_unit)


def _format_scaled(base_quantity: float, small: str, large: str) -> str:
    small_text = f"{base_quantity:.0f}"
    # Decide on the rounded value so re-formatting the output is stable
    if float(small_text) >= DISPLAY_THRESHOLD:
        return f"{base_quantity / 1000:.2f} {large}"
    return f"{small_text} {small}"


def format_quantity_with_unit(quantity: float, unit: str, language: str = "en") -> str:
    """Render a quantity in the most readable unit.

    Volumes and weights are normalized to mL/g and shown as L/kg from 1000 upward.
    Count units print whole numbers, and unknown units keep one decimal place.
    """
    chinese = language == CHINESE
    unit_type = get_unit_type(unit)

    if unit_type == UnitType.VOLUME:
        return _format_scaled(
            to_base_quantity(quantity, unit),
            "毫升" if chinese else "mL",
            "升" if chinese else "L",
        )
    if unit_type == UnitType.WEIGHT:
        return _format_scaled(
            to_base_quantity(quantity, unit),
            "克" if chinese else "g",
            "千克" if chinese else "kg",
        )
    if unit_type == UnitType.COUNT:
        count = int(quantity)
        if unit.strip() == DOZEN:
            return f"{count * 12} {'个' if chinese else 'items'}"
        if _normalize(unit) in GENERIC_COUNT_UNITS:
            return f"{count} {'个' if chinese else 'pcs'}"
        return f"{count} {unit}"
    return f"{quantity:.1f} {unit}"


def display_unit(unit: str, language: str = "en") -> str:
    """Show the internal default unit as "pcs" in English."""
    if unit == DEFAULT_UNIT and language != CHINESE:
        return "pcs"
    return unit


def needs_unit_guidance(name: str, unit: str) -> bool:
    """True when an item counted in pieces would be better measured by volume or weight."""
    from foodkeeper.services.ingredient_parser import needs_weight_unit

    if get_unit_type(unit) != UnitType.COUNT:
        return False
    food_name = name.lower()
    if any(liquid in food_name for liquid in LIQUID_KEYWORDS):
        return True
    return needs_weight_unit(food_name)


def get_suggested_units(name: str, language: str = "en") -> list[str]:
    from foodkeeper.services.ingredient_parser import needs_weight_unit

    chinese = language == CHINESE
    food_name = name.lower()

    if "酸奶" in food_name or "yogurt" in food_name:
        return ["毫升", "升"] if chinese else ["mL", "L"]
    if any(liquid in food_name for liquid in LIQUID_KEYWORDS):
        return ["毫升", "升", "杯", "加仑"] if chinese else ["mL", "L", "cups", "gal"]
    if needs_weight_unit(food_name):
        return ["克", "千克", "盎司", "磅"] if chinese else ["g", "kg", "oz", "lb"]
    return ["个"] if chinese else ["pcs"]


def get_conversion_explanation(quantity: float, unit: str, language: str = "en") -> str | None:
    """Explain what a non-base unit amounts to, e.g. "≈ 1500 g" for 1.5 kg."""
    normalized = _normalize(unit)
    unit_type = get_unit_type(unit)

    if unit_type == UnitType.WEIGHT and normalized not in ("g", "克"):
        grams = int(quantity * WEIGHT_TO_G[normalized])
        return translate("unit.conversion.weight.to.g", language, value=grams)
    if unit_type == UnitType.VOLUME and normalized not in ("ml", "毫升"):
        ml = int(quantity * VOLUME_TO_ML[normalized])
        return translate("unit.conversion.volume.to.ml", language, value=ml)
    if unit_type == UnitType.COUNT and normalized not in GENERIC_COUNT_UNITS:
        return translate("unit.conversion.count", language, value=int(to_base_quantity(quantity, unit)))
    return None


def format_plain_quantity(quantity: float) -> str:
    """Drop a trailing ".0" so whole quantities read like integers."""
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:g}"
