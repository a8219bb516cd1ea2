"""Take the ingredients of a chosen AI recipe out of the inventory."""

import logging
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy.orm import Session

from foodkeeper.i18n import ENGLISH, translate
from foodkeeper.models.food_group import FoodGroup
from foodkeeper.models.food_item import FoodItem
from foodkeeper.services.food_grouping import should_group
from foodkeeper.services.history_service import ConsumedIngredient, HistoryService
from foodkeeper.services.recipe_parser import RecipeResponse
from foodkeeper.services.shopping_service import RestockShortage, ShoppingService
from foodkeeper.services.unit_display import convert_quantity, format_plain_quantity

logger = logging.getLogger(__name__)


@dataclass
class IngredientRequirement:
    name: str
    quantity: float
    unit: str

    @property
    def original_text(self) -> str:
        return f"{self.name} {format_plain_quantity(self.quantity)}{self.unit}"


@dataclass
class ConsumptionResult:
    consumed: list[ConsumedIngredient] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    restock_needed: list[RestockShortage] = field(default_factory=list)
    recipe_name: str | None = None


def ingredient_requirements(recipe: RecipeResponse) -> list[IngredientRequirement]:
    """Every ingredient of every dish with a positive numeric quantity."""
    requirements = []
    for dish in recipe.dishes:
        for group in dish.ingredients:
            for ingredient in group.items:
                try:
                    quantity = float(ingredient.quantity)
                except ValueError:
                    continue
                if quantity > 0:
                    requirements.append(IngredientRequirement(ingredient.name, quantity, ingredient.unit))
    return requirements


def recipe_name_for(recipe: RecipeResponse, language: str = ENGLISH) -> str:
    if recipe.dishes:
        name = recipe.dishes[0].name.strip()
        if name:
            return name
    if len(recipe.dishes) > 1:
        return " + ".join(dish.name for dish in recipe.dishes[:2])
    return translate("recipe.default.name", language)


class ConsumptionService:
    """Consume recipe ingredients, earliest-expiring items first."""

    def __init__(
        self,
        db: Session,
        history: HistoryService | None = None,
        shopping: ShoppingService | None = None,
    ):
        self.db = db
        self.history = history or HistoryService(db)
        self.shopping = shopping or ShoppingService(db)

    def consume_recipe(self, recipe: RecipeResponse, language: str = ENGLISH) -> ConsumptionResult:
        if not recipe.dishes:
            return ConsumptionResult(warnings=[translate("consumption.no.dishes", language)])

        result = ConsumptionResult()
        food_items = self.db.query(FoodItem).all()
        touched_groups: set[FoodGroup] = set()

        for requirement in ingredient_requirements(recipe):
            matches = [item for item in food_items if should_group(requirement.name, item.name)]
            if not matches:
                result.warnings.append(translate("consumption.not.found", language, name=requirement.name))
                continue
            consumed = self._consume(requirement, matches, food_items, touched_groups)
            if consumed is not None:
                result.consumed.append(consumed)
                if consumed.consumed_amount < requirement.quantity:
                    result.warnings.append(
                        translate(
                            "consumption.insufficient",
                            language,
                            name=requirement.name,
                            needed=format_plain_quantity(requirement.quantity),
                            used=format_plain_quantity(round(consumed.consumed_amount, 2)),
                        )
                    )

        for group in touched_groups:
            if not group.items:
                logger.info(f"Deleting empty food group '{group.display_name}'")
                self.db.delete(group)

        if result.consumed:
            result.recipe_name = recipe_name_for(recipe, language)
            self.history.record_batch_consumption(result.consumed, result.recipe_name, commit=False)
        self.db.commit()

        if result.consumed:
            result.restock_needed = self.shopping.shortages([c.name for c in result.consumed])
        return result

    def _consume(
        self,
        requirement: IngredientRequirement,
        matches: list[FoodItem],
        food_items: list[FoodItem],
        touched_groups: set[FoodGroup],
    ) -> ConsumedIngredient | None:
        # Earliest expiration first, undated items last
        ordered = sorted(matches, key=lambda i: (i.expiration_date is None, i.expiration_date or date.max))
        remaining = requirement.quantity
        total = 0.0

        for item in ordered:
            if remaining <= 0:
                break
            # Express the requirement in the item's unit when the two are convertible
            needed = convert_quantity(remaining, requirement.unit, item.unit) if requirement.unit else None
            if needed is None:
                needed = remaining
            if item.quantity <= 0 or needed <= 0:
                continue
            if needed <= item.quantity:
                item.quantity -= needed
                total += remaining
                remaining = 0
            else:
                used = remaining * item.quantity / needed
                item.quantity = 0
                total += used
                remaining -= used

            if item.quantity <= 0:
                group = item.group
                if group is not None:
                    group.remove_item(item)
                    touched_groups.add(group)
                food_items.remove(item)
                self.db.delete(item)

        if total <= 0:
            return None
        logger.info(f"Consumed {format_plain_quantity(round(total, 2))}{requirement.unit} of '{requirement.name}'")
        return ConsumedIngredient(
            name=requirement.name,
            consumed_amount=total,
            unit=requirement.unit,
            original_requirement=requirement.original_text,
        )
