"""Fuzzy grouping of food items by normalized base name."""

import logging
import re
from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime
from functools import lru_cache

from sqlalchemy.orm import Session

from foodkeeper.models.food_group import FoodGroup
from foodkeeper.models.food_item import FoodItem
from foodkeeper.services.classification_data import load_table

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.8

HAN_PATTERN = re.compile(r"[㐀-鿿豈-﫿]")
TOKEN_PATTERN = re.compile(r"[^\W_]+(?:['-][^\W_]+)*")


@lru_cache
def _variant_index() -> dict[str, str]:
    """Map every known variant spelling to its base food; first family listed wins."""
    index: dict[str, str] = {}
    for base, variants in load_table("food_variants")["variants"].items():
        for variant in variants:
            index.setdefault(variant.lower(), base)
    return index


@lru_cache
def _families() -> list[set[str]]:
    return [
        {variant.lower() for variant in variants}
        for variants in load_table("food_variants")["variants"].values()
    ]


@lru_cache
def _filler_words() -> frozenset[str]:
    table = load_table("food_variants")
    return frozenset(table["adjectives"]) | frozenset(table["quantifiers"])


def _has_han(text: str) -> bool:
    return HAN_PATTERN.search(text) is not None


def _remove_spaces_in_chinese(text: str) -> str:
    return text.replace(" ", "") if _has_han(text) else text


def _longest_contained_variant(text: str) -> str | None:
    index = _variant_index()
    chinese = _has_han(text)
    best = None
    for variant in index:
        if chinese:
            found = variant in text
        else:
            found = re.search(rf"\b{re.escape(variant)}\b", text) is not None
        if found and (best is None or len(variant) > len(best)):
            best = variant
    return index[best] if best else None


def _strip_chinese_fillers(text: str) -> str:
    fillers = sorted(_filler_words(), key=len, reverse=True)
    changed = True
    while changed and text:
        changed = False
        for word in fillers:
            if text.startswith(word) and len(text) > len(word):
                text = text[len(word):]
                changed = True
            elif text.endswith(word) and len(text) > len(word):
                text = text[: -len(word)]
                changed = True
    return text


def _extract_core_food_name(text: str) -> str:
    index = _variant_index()
    fillers = _filler_words()
    tokens = TOKEN_PATTERN.findall(text)

    for token in tokens:
        base = index.get(token)
        if base:
            return base

    contained = _longest_contained_variant(text)
    if contained:
        return contained

    if _has_han(text):
        return _strip_chinese_fillers(text)

    remaining = [token for token in tokens if token not in fillers]
    if not remaining:
        return text
    return max(remaining, key=len)


def get_base_food_name(food_name: str) -> str:
    """Reduce a food name to its base food, e.g. "Organic Eggs" -> "egg", "红苹果" -> "苹果"."""
    normalized = _remove_spaces_in_chinese(food_name.lower().strip())
    base = _variant_index().get(normalized)
    if base:
        return base
    return _extract_core_food_name(normalized)


def levenshtein_distance(a: str, b: str) -> int:
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j], current[j - 1], previous[j - 1]) + 1)
        previous = current
    return previous[-1]


def calculate_similarity(name1: str, name2: str) -> float:
    """Similarity in [0, 1]; anything under 0.8 is reported as 0."""
    base1 = get_base_food_name(name1).lower()
    base2 = get_base_food_name(name2).lower()

    if base1 == base2:
        return 1.0
    for family in _families():
        if base1 in family and base2 in family:
            return 1.0

    max_length = max(len(base1), len(base2))
    if max_length == 0:
        return 1.0
    similarity = 1.0 - levenshtein_distance(base1, base2) / max_length
    return similarity if similarity >= SIMILARITY_THRESHOLD else 0.0


def should_group(name1: str, name2: str) -> bool:
    return calculate_similarity(name1, name2) >= SIMILARITY_THRESHOLD


def generate_group_display_name(names: Iterable[str]) -> str:
    """Most common base name among the given food names."""
    base_names = [get_base_food_name(name) for name in names]
    if not base_names:
        return ""
    # Counter keeps first-seen order on ties
    return Counter(base_names).most_common(1)[0][0]


class FoodGroupManager:
    """Find, create and list food groups."""

    def __init__(self, db: Session):
        self.db = db

    def find_or_create_group(self, item: FoodItem) -> FoodGroup:
        base_name = get_base_food_name(item.name)
        candidates = self.db.query(FoodGroup).filter(FoodGroup.base_name == base_name).all()
        for group in candidates:
            if group.can_accept(item):
                return group

        group = FoodGroup(
            base_name=base_name,
            display_name=generate_group_display_name([item.name]),
            category=item.category,
            created_date=datetime.now(UTC),
            last_updated=datetime.now(UTC),
        )
        self.db.add(group)
        logger.info(
            f"Created food group base_name='{base_name}' category={group.category.value} "
            f"for '{item.name}'"
        )
        return group

    def list_groups(self) -> list[FoodGroup]:
        """All groups, earliest expiration first; groups without dates go last."""
        groups = self.db.query(FoodGroup).order_by(FoodGroup.last_updated.desc()).all()
        return sorted(
            groups,
            key=lambda g: (g.earliest_expiration_date is None, g.earliest_expiration_date or datetime.max.date()),
        )
