"""Map free-form voice action fields onto the pantry's closed vocabularies."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from smartpantry_backend.config.catalog import (
    CATEGORIES,
    DEFAULT_CATEGORY_ID,
    DEFAULT_UNIT,
)
from smartpantry_backend.models import Category, Unit, VoiceIntent
from smartpantry_backend.services.normalization import normalize_text

_CONSUME_ALIASES = frozenset(
    {"consume", "consumir", "consumi", "remove", "retirar", "usar", "used"}
)
_ADD_ALIASES = frozenset(
    {"add", "adicionar", "adicionei", "inserir", "insert", "comprar", "bought"}
)

UNIT_ALIASES: Mapping[str, Unit] = MappingProxyType(
    {
        "unidade": Unit.UNIT,
        "unidades": Unit.UNIT,
        "unit": Unit.UNIT,
        "units": Unit.UNIT,
        "litro": Unit.LITER,
        "litros": Unit.LITER,
        "lt": Unit.LITER,
        "kilo": Unit.KILOGRAM,
        "kilos": Unit.KILOGRAM,
        "quilo": Unit.KILOGRAM,
        "quilos": Unit.KILOGRAM,
        "grama": Unit.GRAM,
        "gramas": Unit.GRAM,
        "mililitro": Unit.MILLILITER,
        "mililitros": Unit.MILLILITER,
        "pack": Unit.PACKAGE,
        "package": Unit.PACKAGE,
        "pacote": Unit.PACKAGE,
        "pacotes": Unit.PACKAGE,
        "box": Unit.BOX,
        "caixa": Unit.BOX,
        "caixas": Unit.BOX,
    }
)

CATEGORY_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "cereal": "cereals_grains",
        "cereais": "cereals_grains",
        "grao": "cereals_grains",
        "graos": "cereals_grains",
        "graos e cereais": "cereals_grains",
        "fruta": "fruits_vegetables",
        "frutas": "fruits_vegetables",
        "legume": "fruits_vegetables",
        "legumes": "fruits_vegetables",
        "frutas e legumes": "fruits_vegetables",
        "fruit": "fruits_vegetables",
        "fruits": "fruits_vegetables",
        "vegetable": "fruits_vegetables",
        "vegetables": "fruits_vegetables",
        "enlatado": "canned_goods",
        "enlatados": "canned_goods",
        "carne": "meat_fish",
        "carnes": "meat_fish",
        "peixe": "meat_fish",
        "peixes": "meat_fish",
        "carnes e peixes": "meat_fish",
        "meat": "meat_fish",
        "fish": "meat_fish",
        "padaria": "bakery",
        "bakery": "bakery",
        "culinaria": "cooking_baking",
        "confeitaria": "cooking_baking",
        "culinaria e confeitaria": "cooking_baking",
        "doce": "sweets_savory_snacks",
        "doces": "sweets_savory_snacks",
        "salgado": "sweets_savory_snacks",
        "salgados": "sweets_savory_snacks",
        "doces e salgados": "sweets_savory_snacks",
        "laticinio": "dairy",
        "laticinios": "dairy",
        "dairy": "dairy",
        "bebida": "beverages",
        "bebidas": "beverages",
        "drink": "beverages",
        "drinks": "beverages",
        "limpeza": "cleaning",
        "cleaning": "cleaning",
        "hygiene": "hygiene",
        "higiene": "hygiene",
        "congelado": "frozen",
        "congelados": "frozen",
        "frozen": "frozen",
        "outros": DEFAULT_CATEGORY_ID,
        "outro": DEFAULT_CATEGORY_ID,
        "other": DEFAULT_CATEGORY_ID,
        "others": DEFAULT_CATEGORY_ID,
    }
)


def infer_voice_intent(args: Any) -> Optional[VoiceIntent]:
    """Classify the ``intent`` (or ``action``) field of a voice tool call.

    Returns ``None`` for anything outside the alias lists; callers must
    reject such commands.
    """

    if isinstance(args, Mapping):
        raw = args.get("intent") or args.get("action")
    else:
        raw = getattr(args, "intent", None) or getattr(args, "action", None)

    raw_intent = str(raw or "").strip().lower()
    if raw_intent in _CONSUME_ALIASES:
        return VoiceIntent.CONSUME
    if raw_intent in _ADD_ALIASES:
        return VoiceIntent.ADD
    return None


def normalize_voice_unit(raw_unit: object) -> Unit:
    """Return the canonical unit for a spoken unit word, defaulting to ``un``."""

    normalized = normalize_text(raw_unit or "")
    alias = UNIT_ALIASES.get(normalized)
    if alias is not None:
        return alias
    if normalized in Unit.values():
        return Unit(normalized)
    return DEFAULT_UNIT


def normalize_voice_category(
    raw_category: object, *, categories: Sequence[Category] = CATEGORIES
) -> str:
    """Return the canonical category id for a spoken category.

    Aliases are checked first, then the ids and pt/en display names of the
    registry; anything else lands in ``others``.
    """

    normalized = normalize_text(raw_category or "")
    if not normalized:
        return DEFAULT_CATEGORY_ID

    alias = CATEGORY_ALIASES.get(normalized)
    if alias is not None:
        return alias

    for category in categories:
        candidates = (category.id, category.name, category.name_en)
        if any(normalize_text(candidate) == normalized for candidate in candidates):
            return category.id

    return DEFAULT_CATEGORY_ID
