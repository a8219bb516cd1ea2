"""Tests for unit conversion and quantity formatting."""

import pytest

from foodkeeper.services.unit_display import (
    COUNT_UNITS,
    VOLUME_TO_ML,
    WEIGHT_TO_G,
    UnitType,
    convert_quantity,
    display_unit,
    format_plain_quantity,
    format_quantity_with_unit,
    get_suggested_units,
    get_unit_type,
    needs_unit_guidance,
)


@pytest.mark.parametrize(
    "unit, expected",
    [
        ("ml", UnitType.VOLUME),
        ("L", UnitType.VOLUME),
        ("kg", UnitType.WEIGHT),
        ("斤", UnitType.WEIGHT),
        ("个", UnitType.COUNT),
        ("瓶", UnitType.COUNT),
        ("widgets", UnitType.UNKNOWN),
    ],
)
def test_get_unit_type(unit, expected):
    assert get_unit_type(unit) == expected


def test_volume_switches_to_liters_at_threshold():
    assert format_quantity_with_unit(1500, "ml") == "1.50 L"
    assert format_quantity_with_unit(500, "ml") == "500 mL"


def test_rounded_value_decides_large_unit():
    """999.6 g rounds to 1000 g, so it is shown in kilograms."""
    assert format_quantity_with_unit(999.6, "g") == "1.00 kg"


def test_weight_units_normalize_to_grams():
    assert format_quantity_with_unit(500, "g") == "500 g"
    assert format_quantity_with_unit(1, "斤") == "500 g"


def test_chinese_unit_labels():
    assert format_quantity_with_unit(3, "个", "zh-Hans") == "3 个"
    assert format_quantity_with_unit(2, "kg", "zh-Hans") == "2.00 千克"


def test_count_units():
    assert format_quantity_with_unit(3, "个") == "3 pcs"
    assert format_quantity_with_unit(1, "打") == "12 items"
    assert format_quantity_with_unit(2, "瓶") == "2 瓶"


def test_unknown_unit_keeps_one_decimal():
    assert format_quantity_with_unit(2.5, "widgets") == "2.5 widgets"


def test_convert_quantity():
    assert convert_quantity(1, "kg", "g") == 1000
    assert convert_quantity(1, "打", "个") == 12
    assert convert_quantity(3, "g", "g") == 3


def test_convert_quantity_incompatible():
    assert convert_quantity(1, "kg", "ml") is None
    assert convert_quantity(2, "瓶", "个") is None
    assert convert_quantity(1, "widgets", "g") is None


def test_display_unit():
    assert display_unit("个", "en") == "pcs"
    assert display_unit("个", "zh-Hans") == "个"
    assert display_unit("g", "en") == "g"


def test_needs_unit_guidance():
    assert needs_unit_guidance("牛奶", "个") is True
    assert needs_unit_guidance("牛肉", "个") is True
    assert needs_unit_guidance("苹果", "个") is False
    assert needs_unit_guidance("牛奶", "ml") is False


def test_suggested_units():
    assert get_suggested_units("yogurt") == ["mL", "L"]
    assert get_suggested_units("苹果", "zh-Hans") == ["个"]


def test_format_plain_quantity():
    assert format_plain_quantity(2.0) == "2"
    assert format_plain_quantity(1.5) == "1.5"


@pytest.mark.parametrize("language", ["en", "zh-Hans"])
@pytest.mark.parametrize("unit", sorted(VOLUME_TO_ML) + sorted(WEIGHT_TO_G) + sorted(COUNT_UNITS))
@pytest.mark.parametrize("quantity", [0.5, 1, 2.5, 3, 999.6, 1500])
def test_formatting_its_own_output_is_stable(quantity, unit, language):
    formatted = format_quantity_with_unit(quantity, unit, language)
    number, shown_unit = formatted.split(" ", 1)

    assert format_quantity_with_unit(float(number), shown_unit, language) == formatted
