"""Fuzzy lookup of pantry items by the product name heard in a voice command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, TypeVar

from smartpantry_backend.models import InventoryRecord
from smartpantry_backend.services.normalization import normalize_text, tokenize_name

_RecordT = TypeVar("_RecordT", bound=InventoryRecord)


@dataclass(frozen=True)
class MatchWeights:
    """Scores for each matching layer and the acceptance floor.

    The values were tuned by hand against spoken pantry commands; they are
    configuration, not derived quantities.
    """

    exact: float = 1.0
    prefix: float = 0.9
    substring: float = 0.8
    overlap: float = 0.75
    coverage: float = 0.70
    min_score: float = 0.45


DEFAULT_MATCH_WEIGHTS = MatchWeights()


def _token_overlap(item_tokens: Sequence[str], query_tokens: Sequence[str]) -> float:
    """Jaccard similarity of the two token sets."""

    if not item_tokens or not query_tokens:
        return 0.0
    item_set = set(item_tokens)
    query_set = set(query_tokens)
    union = item_set | query_set
    return len(item_set & query_set) / len(union)


def _token_coverage(item_tokens: Sequence[str], query_tokens: Sequence[str]) -> float:
    """Share of the query's tokens that appear in the item name."""

    if not item_tokens or not query_tokens:
        return 0.0
    query_set = set(query_tokens)
    return len(query_set & set(item_tokens)) / len(query_set)


def _score_normalized(
    item_name: str, query: str, weights: MatchWeights
) -> float:
    if item_name == query:
        return weights.exact
    if item_name.startswith(query) or query.startswith(item_name):
        return weights.prefix
    if query in item_name or item_name in query:
        return weights.substring

    item_tokens = tokenize_name(item_name)
    query_tokens = tokenize_name(query)
    return max(
        _token_overlap(item_tokens, query_tokens) * weights.overlap,
        _token_coverage(item_tokens, query_tokens) * weights.coverage,
    )


def score_pantry_item_name(
    item_name: str,
    query: str,
    *,
    weights: MatchWeights = DEFAULT_MATCH_WEIGHTS,
) -> float:
    """Return how well ``query`` matches ``item_name`` on a 0-1 scale."""

    normalized_item = normalize_text(item_name)
    normalized_query = normalize_text(query)
    if not normalized_item or not normalized_query:
        return 0.0
    return _score_normalized(normalized_item, normalized_query, weights)


def find_best_pantry_item_by_name(
    items: Iterable[_RecordT],
    product_name: str,
    *,
    weights: MatchWeights = DEFAULT_MATCH_WEIGHTS,
) -> Optional[_RecordT]:
    """Return the single pantry item that best matches the spoken name.

    Candidates are scored by exact, prefix, then substring equality of the
    normalized names, falling back to singularized token overlap. On equal
    scores the earlier item wins. Returns ``None`` when the best score is
    below ``weights.min_score``.
    """

    query = normalize_text(product_name)
    if not query:
        return None

    best_item: Optional[_RecordT] = None
    best_score = 0.0
    for item in items:
        item_name = normalize_text(item.name)
        if not item_name:
            continue

        score = _score_normalized(item_name, query, weights)
        if best_item is None or score > best_score:
            best_item = item
            best_score = score

    if best_item is None or best_score < weights.min_score:
        return None
    return best_item
