"""Parse AI recipe output into dishes.

The model is asked for an XML ``<RecipeResponse>`` (or an ``<Error>`` rejection).
Output that is not valid XML falls back to the older line-based format::

    [Dish Name] Tomato Egg Stir-fry
    [Cuisine] Home style
    - Main: egg 3个, tomato 2个
"""

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum

from foodkeeper.i18n import ENGLISH, translate

logger = logging.getLogger(__name__)

PARSE_ERROR_CODE = "PARSE_ERROR"

CODE_FENCE = re.compile(r"```(?:xml)?")
ROOT_TAG = re.compile(r"<(RecipeResponse|Error)\b[^>]*>")

LEGACY_DISH_PREFIXES = ("[菜名]", "[Dish Name]")
LEGACY_FIELD_PREFIXES = {
    "cuisine": ("[菜系]", "[Cuisine]"),
    "nutrition_highlight": ("[营养亮点]", "[Nutrition]"),
}


class IngredientGroupType(str, Enum):
    MAIN = "Main"
    SIDE = "Side"
    SEASONING = "Seasoning"


class IngredientStatus(str, Enum):
    AVAILABLE = "available"  # already in the inventory
    NEW = "new"  # needs buying


LEGACY_GROUP_PREFIXES = {
    IngredientGroupType.MAIN: ("- 主料:", "- Main:"),
    IngredientGroupType.SIDE: ("- 配料:", "- Side:"),
    IngredientGroupType.SEASONING: ("- 调料:", "- Seasoning:"),
}


@dataclass
class RecipeIngredient:
    name: str
    quantity: str
    unit: str
    status: IngredientStatus = IngredientStatus.AVAILABLE


@dataclass
class IngredientGroup:
    type: IngredientGroupType
    items: list[RecipeIngredient] = field(default_factory=list)


@dataclass
class CookingStep:
    index: int
    description: str


@dataclass
class Dish:
    name: str
    cuisine: str = ""
    nutrition_highlight: str = ""
    ingredients: list[IngredientGroup] = field(default_factory=list)
    steps: list[CookingStep] = field(default_factory=list)
    healthy_tip: str = ""
    pairing_suggestion: str = ""


@dataclass
class RecipeResponse:
    dishes: list[Dish] = field(default_factory=list)
    is_error: bool = False
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def error(cls, code: str, message: str) -> "RecipeResponse":
        return cls(is_error=True, error_code=code, error_message=message)

    @classmethod
    def success(cls, dishes: list[Dish]) -> "RecipeResponse":
        return cls(dishes=dishes)


def parse_recipe_response(text: str, language: str = ENGLISH) -> RecipeResponse:
    """Parse AI output. Never raises; unreadable output becomes an error response."""
    response = _parse_xml(text)
    if response is None:
        response = _parse_legacy(text)
    if not response.is_error and not response.dishes:
        logger.warning(f"No dishes found in AI response: {text[:200]!r}")
        return RecipeResponse.error(PARSE_ERROR_CODE, translate("recipe.parse.error", language))
    return response


def _clean_xml(text: str) -> str:
    cleaned = CODE_FENCE.sub("", text).strip()
    for tag in ("RecipeResponse", "Error"):
        opening = re.search(rf"<{tag}\b[^>]*>", cleaned)
        end = cleaned.rfind(f"</{tag}>")
        if opening and end > opening.start():
            return cleaned[opening.start() : end + len(tag) + 3]
    return cleaned


def _text(element: ET.Element | None) -> str:
    if element is None or element.text is None:
        return ""
    return element.text.strip()


def _parse_xml(text: str) -> RecipeResponse | None:
    if not ROOT_TAG.search(text):
        return None
    cleaned = _clean_xml(text)
    try:
        root = ET.fromstring(cleaned)
    except ET.ParseError as e:
        logger.warning(f"XML parsing failed ({e}), falling back to legacy parser: {cleaned[:500]!r}")
        return None

    error = root if root.tag == "Error" else root.find(".//Error")
    if error is not None:
        return RecipeResponse.error(_text(error.find("Code")), _text(error.find("Message")))

    dishes = []
    for dish_element in root.iter("Dish"):
        dish = _dish_from_xml(dish_element)
        if dish is not None:
            dishes.append(dish)
    return RecipeResponse.success(dishes)


def _dish_from_xml(element: ET.Element) -> Dish | None:
    name = _text(element.find(".//Name"))
    if not name:
        logger.warning("Skipping dish without a name")
        return None

    groups = []
    for group_element in element.iter("Group"):
        try:
            group_type = IngredientGroupType(group_element.get("type", ""))
        except ValueError:
            logger.warning(f"Skipping ingredient group of unknown type {group_element.attrib}")
            continue
        items = []
        for item in group_element.iter("Item"):
            try:
                items.append(
                    RecipeIngredient(
                        name=item.attrib["name"],
                        quantity=item.attrib["quantity"],
                        unit=item.attrib["unit"],
                        status=IngredientStatus(item.attrib["status"]),
                    )
                )
            except (KeyError, ValueError):
                logger.warning(f"Skipping ingredient with bad attributes {item.attrib}")
        groups.append(IngredientGroup(type=group_type, items=items))

    steps = []
    for step in element.iter("Step"):
        index = step.get("index", "")
        if index.isdigit():
            steps.append(CookingStep(index=int(index), description=_text(step)))

    return Dish(
        name=name,
        cuisine=_text(element.find(".//Cuisine")),
        nutrition_highlight=_text(element.find(".//NutritionHighlight")),
        ingredients=groups,
        steps=steps,
        healthy_tip=_text(element.find(".//HealthyTip")),
        pairing_suggestion=_text(element.find(".//PairingSuggestion")),
    )


def _strip_prefixes(line: str, prefixes: tuple[str, ...]) -> str:
    for prefix in prefixes:
        line = line.replace(prefix, "")
    return line.strip()


def _parse_legacy_ingredients(text: str) -> list[RecipeIngredient]:
    """Parse "egg 3个, tomato: 2个" style lists."""
    ingredients = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        pieces = part.replace(":", "").split(" ")
        if len(pieces) < 2:
            ingredients.append(RecipeIngredient(name=part, quantity="", unit=""))
            continue
        amount = pieces[1]
        ingredients.append(
            RecipeIngredient(
                name=pieces[0],
                quantity="".join(c for c in amount if c.isdigit()),
                unit="".join(c for c in amount if not c.isdigit()),
            )
        )
    return ingredients


def _parse_legacy(text: str) -> RecipeResponse:
    dishes: list[Dish] = []
    current: Dish | None = None
    ingredients: list[RecipeIngredient] = []

    def finish() -> None:
        if current is not None:
            # Legacy output has no status, so everything lands in one main group
            current.ingredients = [IngredientGroup(IngredientGroupType.MAIN, list(ingredients))]
            dishes.append(current)

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith(LEGACY_DISH_PREFIXES):
            finish()
            current = Dish(name=_strip_prefixes(line, LEGACY_DISH_PREFIXES))
            ingredients = []
            continue
        if current is None:
            continue
        for attribute, prefixes in LEGACY_FIELD_PREFIXES.items():
            if line.startswith(prefixes):
                setattr(current, attribute, _strip_prefixes(line, prefixes))
        for prefixes in LEGACY_GROUP_PREFIXES.values():
            if line.startswith(prefixes):
                ingredients.extend(_parse_legacy_ingredients(_strip_prefixes(line, prefixes)))
    finish()
    return RecipeResponse.success(dishes)
