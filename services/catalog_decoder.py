"""JSON <-> CatalogResponse.

Body shape:
  {"cards": [{"name": ..., "manaCost": ..., "type": ..., "set": ...,
              "setName": ..., "text": ...}, ...]}

'cards' may be missing or null (zero matches). Each card may carry any
subset of the known fields; unknown fields are ignored. A known field that
is present but not a string (or null) makes the body incompatible.
"""

from __future__ import annotations

import json
from typing import Any, Union

from domain.types import CardRecord, CatalogResponse


# attribute name -> wire name
_CARD_FIELDS: tuple[tuple[str, str], ...] = (
    ("name", "name"),
    ("mana_cost", "manaCost"),
    ("type", "type"),
    ("card_set", "set"),
    ("set_name", "setName"),
    ("text", "text"),
)


class CatalogDecodeError(ValueError):
    """Body is not structurally a catalog response."""


def decode_catalog_response(body: Union[bytes, str, None]) -> CatalogResponse:
    if body is None or len(body) == 0:
        raise CatalogDecodeError("no data received")

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CatalogDecodeError(f"body is not valid UTF-8: {e}") from e

    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized integer literals, pathological nesting
        raise CatalogDecodeError(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise CatalogDecodeError("top-level JSON value must be an object")

    raw_cards = data.get("cards")
    if raw_cards is None:
        return CatalogResponse(cards=None)
    if not isinstance(raw_cards, list):
        raise CatalogDecodeError("'cards' must be an array")

    return CatalogResponse(cards=tuple(_decode_card(c, i) for i, c in enumerate(raw_cards)))


def _decode_card(raw: Any, index: int) -> CardRecord:
    if not isinstance(raw, dict):
        raise CatalogDecodeError(f"cards[{index}] must be an object")

    values: dict[str, Any] = {}
    for attr, wire in _CARD_FIELDS:
        v = raw.get(wire)
        if v is not None and not isinstance(v, str):
            raise CatalogDecodeError(f"cards[{index}].{wire} must be a string, got {type(v).__name__}")
        values[attr] = v
    return CardRecord(**values)


def encode_card(card: CardRecord) -> dict[str, Any]:
    """Wire-named dict. Absent fields are emitted as null."""
    return {wire: getattr(card, attr) for attr, wire in _CARD_FIELDS}

