"""Category registry and unit list shipped with the codebase."""

from __future__ import annotations

from typing import Sequence

from smartpantry_backend.models import Category, Unit

DEFAULT_CATEGORY_ID = "others"
DEFAULT_UNIT = Unit.UNIT

# Order matches the unit picker in the web client.
UNITS: tuple[str, ...] = tuple(entry.value for entry in Unit)

CATEGORIES: tuple[Category, ...] = (
    Category("cereals_grains", "Grãos e Cereais", "Grains & Cereals", "🌾"),
    Category("fruits_vegetables", "Frutas e Legumes", "Fruits & Vegetables", "🥕"),
    Category("canned_goods", "Enlatados", "Canned Goods", "🥫"),
    Category("meat_fish", "Carnes e Peixes", "Meat & Fish", "🥩"),
    Category("bakery", "Padaria", "Bakery", "🥖"),
    Category("cooking_baking", "Culinária e Confeitaria", "Cooking & Baking", "🧂"),
    Category("sweets_savory_snacks", "Doces e Salgados", "Sweets & Snacks", "🍫"),
    Category("dairy", "Laticínios", "Dairy", "🥛"),
    Category("cleaning", "Limpeza", "Cleaning", "🧼"),
    Category("hygiene", "Higiene", "Hygiene", "🪥"),
    Category("beverages", "Bebidas", "Beverages", "🥤"),
    Category("frozen", "Congelados", "Frozen", "❄️"),
    Category(DEFAULT_CATEGORY_ID, "Outros", "Others", "📦"),
)


def get_category(
    category_id: str | None, categories: Sequence[Category] = CATEGORIES
) -> Category | None:
    """Return the registry entry with the given id, if any."""

    for category in categories:
        if category.id == category_id:
            return category
    return None


def get_category_label(
    category_id: str | None,
    lang: str = "pt",
    categories: Sequence[Category] = CATEGORIES,
) -> str:
    """Return the display label for a category, falling back to "others"."""

    category = get_category(category_id, categories) or get_category(
        DEFAULT_CATEGORY_ID, categories
    )
    if category is None:
        return category_id or DEFAULT_CATEGORY_ID
    return category.label(lang)
