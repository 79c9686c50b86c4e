"""Shopping list derived from items that fell below their minimum stock."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, cast

import inflect
from inflect import Word

from smartpantry_backend.config.catalog import (
    CATEGORIES,
    DEFAULT_CATEGORY_ID,
    get_category,
    get_category_label,
)
from smartpantry_backend.models import Category, InventoryRecord, Unit
from smartpantry_backend.services.normalization import normalize_text

_INFLECT_ENGINE = inflect.engine()

# Symbols are never pluralized; nouns are pluralized with inflect for English.
_UNIT_SYMBOLS = {
    Unit.KILOGRAM.value: "kg",
    Unit.LITER.value: "L",
    Unit.GRAM.value: "g",
    Unit.MILLILITER.value: "ml",
}
_EN_UNIT_NOUNS = {
    Unit.UNIT.value: "unit",
    Unit.PACKAGE.value: "package",
    Unit.BOX.value: "box",
}
_PT_UNIT_NOUNS = {
    Unit.UNIT.value: ("unidade", "unidades"),
    Unit.PACKAGE.value: ("pacote", "pacotes"),
    Unit.BOX.value: ("caixa", "caixas"),
}


@dataclass(frozen=True)
class ShoppingItem:
    record: InventoryRecord
    needed_quantity: float

    def to_dict(self, lang: str = "pt") -> dict[str, object]:
        payload = self.record.to_dict()
        payload["neededQuantity"] = self.needed_quantity
        payload["neededLabel"] = format_quantity(
            self.needed_quantity, self.record.unit, lang
        )
        return payload


@dataclass(frozen=True)
class ShoppingCategoryGroup:
    category_id: str
    category_label: str
    category_icon: str
    items: tuple[ShoppingItem, ...]

    def to_dict(self, lang: str = "pt") -> dict[str, object]:
        return {
            "categoryId": self.category_id,
            "categoryLabel": self.category_label,
            "categoryIcon": self.category_icon,
            "items": [item.to_dict(lang) for item in self.items],
        }


def _format_number(quantity: float, lang: str) -> str:
    text = f"{quantity:.3f}".rstrip("0").rstrip(".")
    return text if lang == "en" else text.replace(".", ",")


def format_quantity(quantity: float, unit: str, lang: str = "pt") -> str:
    """Render ``quantity`` with a unit label in the requested language."""

    number = _format_number(quantity, lang)
    symbol = _UNIT_SYMBOLS.get(unit)
    if symbol is not None:
        return f"{number} {symbol}"

    if lang == "en":
        noun = _EN_UNIT_NOUNS.get(unit, unit)
        if not noun:
            return number
        count = 1 if quantity == 1 else 2
        label = _INFLECT_ENGINE.plural_noun(cast(Word, noun), count)
        return f"{number} {label}"

    singular, plural = _PT_UNIT_NOUNS.get(unit, (unit, unit))
    label = singular if quantity == 1 else plural
    return f"{number} {label}".strip()


def build_shopping_list(items: Iterable[InventoryRecord]) -> list[ShoppingItem]:
    """Return the items whose stock is below their minimum quantity."""

    return [
        ShoppingItem(
            record=item,
            needed_quantity=max(0.0, item.min_quantity - item.current_quantity),
        )
        for item in items
        if item.current_quantity < item.min_quantity
    ]


def group_shopping_list(
    items: Iterable[ShoppingItem],
    lang: str = "pt",
    *,
    categories: Sequence[Category] = CATEGORIES,
) -> list[ShoppingCategoryGroup]:
    """Group shopping items by category, sorted by label and then item name."""

    grouped: dict[str, list[ShoppingItem]] = {}
    for item in items:
        category_id = item.record.category or DEFAULT_CATEGORY_ID
        grouped.setdefault(category_id, []).append(item)

    groups = []
    for category_id, entries in grouped.items():
        category = get_category(category_id, categories)
        groups.append(
            ShoppingCategoryGroup(
                category_id=category_id,
                category_label=get_category_label(category_id, lang, categories),
                category_icon=category.icon if category else "📦",
                items=tuple(
                    sorted(
                        entries,
                        key=lambda entry: (
                            normalize_text(entry.record.name),
                            entry.record.name,
                        ),
                    )
                ),
            )
        )

    groups.sort(key=lambda group: (normalize_text(group.category_label), group.category_id))
    return groups
