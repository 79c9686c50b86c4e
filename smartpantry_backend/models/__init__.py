"""Domain records for SmartPantry inventory and voice commands."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional


class Unit(str, Enum):
    """Canonical stock units understood by the pantry."""

    UNIT = "un"
    KILOGRAM = "kg"
    LITER = "l"
    GRAM = "g"
    MILLILITER = "ml"
    PACKAGE = "package"
    BOX = "box"

    @classmethod
    def values(cls) -> set[str]:
        return {entry.value for entry in cls}


class VoiceIntent(str, Enum):
    """Stock changes a voice command can request."""

    CONSUME = "consume"
    ADD = "add"


@dataclass(frozen=True)
class Category:
    """Entry of the category registry."""

    id: str
    name: str
    name_en: str
    icon: str = "📦"

    def label(self, lang: str = "pt") -> str:
        return self.name_en if lang == "en" else self.name


def _pick(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None and value != "":
            return value
    return None


def _parse_number(value: object, *, field: str, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field} must be a number") from exc
    if not math.isfinite(number):
        raise ValueError(f"{field} must be finite")
    return number


def _parse_timestamp(value: object) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Browser clients send epoch milliseconds.
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError("updatedAt is out of range") from exc
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError("updatedAt must be an ISO timestamp") from exc
    raise ValueError("updatedAt must be an ISO timestamp or epoch millis")


@dataclass(frozen=True)
class InventoryRecord:
    """A pantry item as owned by the client or persistence layer."""

    id: str
    name: str
    category: str = "others"
    current_quantity: float = 0.0
    min_quantity: float = 0.0
    unit: str = Unit.UNIT.value
    updated_at: Optional[datetime] = None

    @classmethod
    def from_payload(cls, payload: object) -> "InventoryRecord":
        """Build a record from the JSON shape used by the web client."""

        if not isinstance(payload, Mapping):
            raise ValueError("inventory item must be a JSON object")

        raw_id = payload.get("id")
        if raw_id is None or str(raw_id).strip() == "":
            raise ValueError("inventory item is missing an id")

        return cls(
            id=str(raw_id),
            name=str(payload.get("name") or ""),
            category=str(payload.get("category") or "others"),
            current_quantity=_parse_number(
                _pick(payload, "currentQuantity", "current_quantity"),
                field="currentQuantity",
            ),
            min_quantity=_parse_number(
                _pick(payload, "minQuantity", "min_quantity"),
                field="minQuantity",
            ),
            unit=str(payload.get("unit") or Unit.UNIT.value),
            updated_at=_parse_timestamp(_pick(payload, "updatedAt", "updated_at")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "currentQuantity": self.current_quantity,
            "minQuantity": self.min_quantity,
            "unit": self.unit,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class CandidateAction:
    """Stock change extracted upstream from a spoken utterance."""

    intent: str
    product_name: str
    amount: float
    unit: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: object) -> "CandidateAction":
        """Accept the argument shapes emitted by the voice tool call and extractor."""

        if not isinstance(payload, Mapping):
            raise ValueError("action must be a JSON object")

        raw_amount = _pick(payload, "amount", "quantity")
        try:
            amount = float(raw_amount) if raw_amount is not None else math.nan
        except (TypeError, ValueError):
            amount = math.nan

        unit = payload.get("unit")
        category = payload.get("category")
        return cls(
            intent=str(_pick(payload, "intent", "action") or ""),
            product_name=str(_pick(payload, "productName", "product_name") or ""),
            amount=amount,
            unit=str(unit) if unit else None,
            category=str(category) if category else None,
        )


def parse_inventory_records(payload: object) -> list[InventoryRecord]:
    """Parse a JSON list of inventory items, raising ``ValueError`` if malformed."""

    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError("items must be a list")
    return [InventoryRecord.from_payload(entry) for entry in payload]
