"""Assemble the recipe request sent to the AI from household and inventory state."""

import random
import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from foodkeeper.i18n import ENGLISH, is_english
from foodkeeper.models.enums import AgeCategory, DietaryRestriction
from foodkeeper.services.unit_display import format_plain_quantity

BABY_KEYWORDS = ("baby", "婴", "辅食", "宝宝", "幼儿", "儿童", "练习咀嚼", "chewing", "puree")
# Chewing-practice and puree requests still get one dish but keep calorie info
BABY_SPECIAL_KEYWORDS = ("baby", "婴", "辅食", "宝宝", "幼儿", "儿童")
SEASON_KEYWORDS = ("spring", "summer", "autumn", "winter", "春季", "夏日", "秋季", "冬日", "时令", "季节")
COOLING_KEYWORDS = ("清凉", "cool")
ELDERLY_KEYWORDS = ("elderly", "digest", "老年", "长者", "消化")
BREAKFAST_KEYWORDS = ("breakfast", "早餐")
WEIGHT_LOSS_KEYWORDS = ("weight", "减肥", "低热量", "low-calorie")
DIET_KEYWORDS = ("diet", "diabetic", "糖尿病")

URGENT_DAYS = 2
EXPIRING_DAYS = 7

CREATIVE_FOCUS = {
    "en": [
        "Nutritional Balance",
        "Umami Layering",
        "Seasonal Focus",
        "Easy Scaling",
        "Color Harmony",
        "Texture Contrast",
        "Regional Authenticity",
        "Quick Preparation",
        "Flavor Balance",
        "Aromatic Complexity",
        "Temperature Contrast",
        "Digestive Wellness",
        "Energy Boosting",
        "Immune Support",
        "Anti-inflammatory",
    ],
    "zh-Hans": [
        "营养均衡",
        "鲜味层次",
        "时令食材",
        "易于调节",
        "色彩和谐",
        "口感对比",
        "地道风味",
        "快速便捷",
        "味道平衡",
        "香味层次",
        "温度对比",
        "养胃护肠",
        "提神醒脑",
        "增强免疫",
        "消炎降火",
    ],
}

COOKING_STYLES = {
    "en": [
        "Balanced & Harmonious: Well-rounded flavors with complementary textures and tastes.",
        "Simple & Satisfying: Straightforward cooking methods that highlight natural flavors.",
        "Fresh & Vibrant: Emphasis on bright, clean tastes and colorful presentation.",
        "Warm & Comforting: Cozy, homestyle approach with familiar cooking techniques.",
        "Light & Refreshing: Emphasis on digestibility and clean, crisp flavors.",
        "Rich & Savory: Deep, complex flavors with satisfying umami elements.",
        "Quick & Efficient: Fast cooking methods without compromising taste quality.",
        "Traditional & Reliable: Time-tested cooking approaches with proven combinations.",
    ],
    "zh-Hans": [
        "均衡和谐：口味搭配合理，质地层次互补，营养全面。",
        "简单朴实：烹饪方法简单，突出食材本味，易于掌握。",
        "清新明快：味道清爽干净，色彩搭配丰富，口感清淡。",
        "温馨暖心：家常烹饪手法，味道温和亲切，老少皆宜。",
        "清淡养生：注重消化吸收，口味清爽不腥腻，健康为主。",
        "浓郁香醇：味道层次丰富，鲜味突出，口感饱满。",
        "快手便捷：制作快速高效，不失美味品质，适合快节奏。",
        "传统可靠：经典搭配组合，烹饪方法成熟，口味稳定。",
    ],
}

DISH_NAME_TAGS = ("菜名", "Dish Name")
XML_NAME = re.compile(r"<Name>\s*(.*?)\s*</Name>", re.DOTALL)


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


@dataclass
class HouseholdMember:
    """What the prompt needs to know about one family member."""

    name: str
    age: int
    daily_calorie_target: float
    dietary_restrictions: list[DietaryRestriction] = field(default_factory=list)
    custom_allergies: list[str] = field(default_factory=list)

    @property
    def age_category(self) -> AgeCategory:
        return AgeCategory.for_age(self.age)

    @classmethod
    def from_model(cls, member) -> "HouseholdMember":
        return cls(
            name=member.name,
            age=member.age or 0,
            daily_calorie_target=member.daily_calorie_target,
            dietary_restrictions=list(member.dietary_restrictions),
            custom_allergies=[a for a in (member.custom_allergies or []) if a],
        )


@dataclass
class PantryEntry:
    """One inventory item as offered to the AI."""

    name: str
    quantity: float
    unit: str
    expiration_date: date | None = None

    def days_until_expiration(self, today: date | None = None) -> int | None:
        if self.expiration_date is None:
            return None
        return (self.expiration_date - (today or date.today())).days

    @property
    def amount(self) -> str:
        return f"{format_plain_quantity(self.quantity)}{self.unit}"

    @classmethod
    def from_model(cls, item) -> "PantryEntry":
        return cls(name=item.name, quantity=item.quantity, unit=item.unit, expiration_date=item.expiration_date)


def _contains_any(message: str, keywords: tuple[str, ...]) -> bool:
    lowered = message.lower()
    return any(keyword in lowered for keyword in keywords)


def current_season(today: date | None = None) -> Season:
    month = (today or date.today()).month
    if month in (3, 4, 5):
        return Season.SPRING
    if month in (6, 7, 8):
        return Season.SUMMER
    if month in (9, 10, 11):
        return Season.AUTUMN
    return Season.WINTER


def recommended_dish_count(members: list[HouseholdMember]) -> int:
    if not members:
        return 0
    if len(members) <= 2:
        return 2
    if len(members) <= 4:
        return 3
    return 4


def dish_count_for_request(message: str, members: list[HouseholdMember]) -> int:
    """How many dishes to ask for, by request type and family size."""
    small_family_count = 2 if len(members) <= 3 else 3
    if _contains_any(message, BABY_KEYWORDS):
        return 1
    if _contains_any(message, SEASON_KEYWORDS + COOLING_KEYWORDS):
        return small_family_count
    if _contains_any(message, ELDERLY_KEYWORDS):
        return small_family_count
    if _contains_any(message, BREAKFAST_KEYWORDS):
        return small_family_count
    if _contains_any(message, WEIGHT_LOSS_KEYWORDS):
        return 1
    return recommended_dish_count(members)


def is_baby_food_request(message: str) -> bool:
    return _contains_any(message, BABY_KEYWORDS)


def is_special_recommendation(message: str) -> bool:
    """Requests with their own portion logic, which skip the family calorie target."""
    return (
        _contains_any(message, BABY_SPECIAL_KEYWORDS)
        or _contains_any(message, WEIGHT_LOSS_KEYWORDS + ("瘦身",))
        or _contains_any(message, BREAKFAST_KEYWORDS)
        or _contains_any(message, SEASON_KEYWORDS)
        or _contains_any(message, DIET_KEYWORDS)
    )


def total_calorie_target(members: list[HouseholdMember]) -> int:
    return int(sum(member.daily_calorie_target for member in members))


def calorie_info(message: str, members: list[HouseholdMember], language: str = ENGLISH) -> str:
    if not members or is_special_recommendation(message):
        return ""
    total = total_calorie_target(members)
    if is_english(language):
        return f" Total family daily calorie target: {total} kcal for {len(members)} members."
    return f" 家庭日均总卡路里需求：{total}千卡（{len(members)}人）。"


def dietary_restrictions_info(message: str, members: list[HouseholdMember], language: str = ENGLISH) -> str:
    """Restrictions of the members a request is for: babies only for baby food, everyone else otherwise."""
    baby_request = is_baby_food_request(message)
    relevant = [m for m in members if (m.age_category == AgeCategory.BABY) == baby_request]

    restrictions = [r.localized_name(language) for m in relevant for r in m.dietary_restrictions]
    prefix = "Allergy: " if is_english(language) else "过敏: "
    allergies = [f"{prefix}{a}" for m in relevant for a in m.custom_allergies if a]
    combined = [r for r in restrictions if r] + allergies
    return f" ({', '.join(combined)})" if combined else ""


def _format_date(value: date, language: str) -> str:
    if is_english(language):
        return f"{value:%b} {value.day}, {value.year}"
    return f"{value.year}年{value.month}月{value.day}日"


def _expiry_note(entry: PantryEntry, language: str, today: date | None) -> str:
    days = entry.days_until_expiration(today)
    if days is None or days > EXPIRING_DAYS:
        return ""
    english = is_english(language)
    when = _format_date(entry.expiration_date, language)
    if days <= 0:
        return f" (expired on {when})" if english else f"（已于{when}过期）"
    if days <= 3:
        return f" (expires in {days} day{'' if days == 1 else 's'})" if english else f"（{days}天后过期）"
    return f" (expires {when})" if english else f"（{when}过期）"


def available_ingredients(entries: list[PantryEntry], language: str = ENGLISH, today: date | None = None) -> str:
    """"name: amount" for every item, with an expiry note for anything due within a week."""
    return ", ".join(
        f"{entry.name}: {entry.amount}{_expiry_note(entry, language, today)}" for entry in entries
    )


def expiring_ingredients_info(entries: list[PantryEntry], language: str = ENGLISH, today: date | None = None) -> str:
    """Urgent (two days or less) and soon-expiring sections; empty when nothing expires within a week."""
    expiring = sorted(
        (e for e in entries if e.days_until_expiration(today) is not None and 0 <= e.days_until_expiration(today) <= EXPIRING_DAYS),
        key=lambda e: e.days_until_expiration(today),
    )
    if not expiring:
        return ""

    english = is_english(language)
    urgent = [e for e in expiring if e.days_until_expiration(today) <= URGENT_DAYS]
    soon = [e for e in expiring if e.days_until_expiration(today) > URGENT_DAYS]

    lines = ["[🚨 URGENT PRIORITY INGREDIENTS]:\n" if english else "[🚨 紧急优先食材]:\n"]
    for entry in urgent:
        days = entry.days_until_expiration(today)
        if english:
            status = "EXPIRED" if days <= 0 else ("expires TOMORROW" if days == 1 else f"expires in {days} days")
        else:
            status = "已过期" if days <= 0 else ("明天过期" if days == 1 else f"{days}天后过期")
        lines.append(f"- {entry.name}: {entry.amount} ({status})\n")

    if soon:
        lines.append("\n[⚠️ SOON EXPIRING]:\n" if english else "\n[⚠️ 即将过期]:\n")
        for entry in soon:
            days = entry.days_until_expiration(today)
            status = f"expires in {days} days" if english else f"{days}天后过期"
            lines.append(f"- {entry.name}: {entry.amount} ({status})\n")

    if english:
        lines.append(
            "\n**IMPORTANT**: Please PRIORITIZE using ingredients from the URGENT list in your recipes "
            "to minimize food waste. Try to create dishes that can utilize multiple expiring ingredients together.\n\n"
        )
    else:
        lines.append("\n**重要提醒**: 请优先使用「紧急优先食材」列表中的食材，尽量创作能同时利用多种即将过期食材的菜品，减少食物浪费。\n\n")
    return "".join(lines)


def _options(table: dict[str, list[str]], language: str) -> list[str]:
    return table[ENGLISH] if is_english(language) else table["zh-Hans"]


def creative_focus(language: str = ENGLISH, rng: random.Random | None = None) -> str:
    return (rng or random).choice(_options(CREATIVE_FOCUS, language))


def random_cooking_style(language: str = ENGLISH, rng: random.Random | None = None) -> str:
    return (rng or random).choice(_options(COOKING_STYLES, language))


def extract_dish_names(content: str) -> str:
    """Dish names from "[Dish Name] ..." lines, or from <Name> tags of XML output."""
    names = []
    for line in content.splitlines():
        line = line.strip()
        if not line.startswith("[") or "]" not in line:
            continue
        tag, _, rest = line[1:].partition("]")
        if tag in DISH_NAME_TAGS and rest.strip():
            names.append(rest.strip())
    if not names:
        names = [name for name in XML_NAME.findall(content) if name]
    return ", ".join(names)


def family_info(members: list[HouseholdMember], language: str = ENGLISH) -> str:
    """One-line household summary, e.g. "Family: 3 members (2 adults, 1 children)"."""
    adults = sum(1 for m in members if m.age >= 18)
    children = len(members) - adults
    restrictions = [r.value for m in members for r in m.dietary_restrictions]

    if is_english(language):
        parts = ([f"{adults} adults"] if adults else []) + ([f"{children} children"] if children else [])
        info = f"Family: {len(members)} members"
        if parts:
            info += f" ({', '.join(parts)})"
        if restrictions:
            info += f", Dietary restrictions: {', '.join(restrictions)}"
        return info

    parts = ([f"{adults}位成人"] if adults else []) + ([f"{children}位儿童"] if children else [])
    info = f"家庭成员：{len(members)}人"
    if parts:
        info += f"（{'，'.join(parts)}）"
    if restrictions:
        info += f"，饮食限制：{'、'.join(restrictions)}"
    return info


def build_prompt(
    message: str,
    members: list[HouseholdMember],
    entries: list[PantryEntry],
    language: str,
    focus: str,
    style: str,
    previous_dishes: str | None = None,
    previous_requirement: str = "",
    previous_button_id: str = "",
    button_id: str | None = None,
    today: date | None = None,
) -> str:
    """Full request text. previous_dishes is set when adjusting an earlier recommendation."""
    english = is_english(language)
    restrictions = dietary_restrictions_info(message, members, language)
    calories = calorie_info(message, members, language)
    ingredients = available_ingredients(entries, language, today)
    expiring = expiring_ingredients_info(entries, language, today)
    dish_count = dish_count_for_request(message, members)

    if english:
        base = (
            f"[DISH_COUNT]: {dish_count}\n"
            f"[Dietary Restrictions]: {restrictions or 'None'}\n"
            f"[CALORIE_INFO]: {calories or 'Standard portions'}\n"
            f"[Creative Focus]: {focus}\n"
            f"[Cooking Style]: {style}\n\n"
            f"[Available Ingredients]:\n{ingredients}\n\n{expiring}"
        )
    else:
        base = (
            f"[DISH_COUNT]: {dish_count}\n"
            f"[饮食限制]: {restrictions or '无'}\n"
            f"[CALORIE_INFO]: {calories or '标准分量'}\n"
            f"[创意焦点]: {focus}\n"
            f"[烹饪风格]: {style}\n\n"
            f"[现有食材]:\n{ingredients}\n\n{expiring}"
        )

    if previous_dishes is None:
        return base + (f"[Other Requests]:\n{message}" if english else f"[其他需求]:\n{message}")

    dishes = "[Previous Dishes]" if english else "[之前的菜]"
    if previous_button_id and previous_button_id == (button_id or ""):
        # Same button pressed again: regenerate rather than adjust
        label = "[Regenerate Request]" if english else "[重新生成要求]"
        return base + f"{dishes}: {previous_dishes}\n\n{label}:\n{message}"
    label = "[Adjustment Request]" if english else "[调整要求]"
    if previous_requirement and previous_button_id:
        requirement = "[Previous Requirement]" if english else "[之前的要求]"
        return base + f"{dishes}: {previous_dishes}\n\n{requirement}:\n{previous_requirement}\n\n{label}:\n{message}"
    return base + f"{dishes}: {previous_dishes}\n\n{label}:\n{message}"
