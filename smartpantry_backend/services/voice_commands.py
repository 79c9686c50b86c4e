"""Turn a candidate voice action into a stock decision for the caller to apply."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Literal, Optional, Sequence

from smartpantry_backend.config.catalog import CATEGORIES
from smartpantry_backend.models import (
    CandidateAction,
    Category,
    InventoryRecord,
    VoiceIntent,
)
from smartpantry_backend.services.matching import (
    DEFAULT_MATCH_WEIGHTS,
    MatchWeights,
    find_best_pantry_item_by_name,
)
from smartpantry_backend.services.voice import (
    infer_voice_intent,
    normalize_voice_category,
    normalize_voice_unit,
)

logger = logging.getLogger(__name__)

NEW_ITEM_MIN_QUANTITY = 1.0

DecisionStatus = Literal["update", "create", "reject"]
RejectReason = Literal["invalid_command", "not_found"]


@dataclass(frozen=True)
class VoiceDecision:
    """Outcome of resolving a voice command against the pantry."""

    status: DecisionStatus
    intent: Optional[VoiceIntent] = None
    item: Optional[InventoryRecord] = None
    name: Optional[str] = None
    quantity: Optional[float] = None
    min_quantity: Optional[float] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    reason: Optional[RejectReason] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status,
            "intent": self.intent.value if self.intent else None,
            "itemId": self.item.id if self.item else None,
            "name": self.name,
            "quantity": self.quantity,
            "minQuantity": self.min_quantity,
            "unit": self.unit,
            "category": self.category,
            "reason": self.reason,
        }


def _reject(
    reason: RejectReason,
    *,
    intent: Optional[VoiceIntent] = None,
    name: Optional[str] = None,
) -> VoiceDecision:
    return VoiceDecision(status="reject", intent=intent, name=name, reason=reason)


def resolve_voice_command(
    items: Sequence[InventoryRecord],
    action: CandidateAction,
    *,
    categories: Sequence[Category] = CATEGORIES,
    weights: MatchWeights = DEFAULT_MATCH_WEIGHTS,
) -> VoiceDecision:
    """Decide whether a voice action updates an item, creates one, or is rejected.

    The records are never modified; an ``update`` decision carries the new
    quantity and a ``create`` decision carries the fields of the new item.
    """

    product_name = (action.product_name or "").strip()
    amount = action.amount
    intent = infer_voice_intent(action)
    unit = normalize_voice_unit(action.unit)
    category = normalize_voice_category(action.category, categories=categories)

    if not product_name or not math.isfinite(amount) or amount <= 0 or intent is None:
        logger.info(
            "rejecting invalid voice command",
            extra={"intent": action.intent, "amount": amount},
        )
        return _reject("invalid_command", intent=intent, name=product_name or None)

    existing = find_best_pantry_item_by_name(items, product_name, weights=weights)

    if existing is None:
        if intent is VoiceIntent.CONSUME:
            return _reject("not_found", intent=intent, name=product_name)
        return VoiceDecision(
            status="create",
            intent=intent,
            name=product_name,
            quantity=amount,
            min_quantity=NEW_ITEM_MIN_QUANTITY,
            unit=unit.value,
            category=category,
        )

    if intent is VoiceIntent.CONSUME:
        new_quantity = max(0.0, existing.current_quantity - amount)
    else:
        new_quantity = existing.current_quantity + amount

    return VoiceDecision(
        status="update",
        intent=intent,
        item=existing,
        name=existing.name,
        quantity=new_quantity,
        min_quantity=existing.min_quantity,
        unit=existing.unit,
        category=existing.category,
    )
