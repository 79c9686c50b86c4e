"""Shopping list endpoint."""

from __future__ import annotations

from flask import Blueprint, jsonify

from smartpantry_backend.api.deps import (
    get_inventory_records,
    get_json_payload,
    get_request_lang,
)
from smartpantry_backend.services.shopping import (
    build_shopping_list,
    group_shopping_list,
)

bp = Blueprint("shopping", __name__, url_prefix="/api")


@bp.post("/shopping-list")
def shopping_list():
    """Return the items below their minimum stock, grouped by category."""

    payload = get_json_payload()
    lang = get_request_lang(payload)

    try:
        items = get_inventory_records(payload)
    except ValueError as exc:
        return jsonify(error=str(exc)), 400

    shopping_items = build_shopping_list(items)
    groups = group_shopping_list(shopping_items, lang)
    return jsonify(
        groups=[group.to_dict(lang) for group in groups],
        itemCount=len(shopping_items),
    )
