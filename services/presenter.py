"""Human-readable rendering of cards and failures."""

from __future__ import annotations

from typing import Optional

from domain.types import CardRecord, FetchError


UNKNOWN = "Unknown"
SEPARATOR = "-" * 42


def format_card(card: CardRecord) -> str:
    """One block per card; absent fields read 'Unknown'."""
    return "\n".join(
        [
            "",
            f"Card Name: {_or_unknown(card.name)}",
            f"Type: {_or_unknown(card.type)}",
            f"Mana Cost: {_or_unknown(card.mana_cost)}",
            f"Set: {_or_unknown(card.card_set)}",
            f"Set Name: {_or_unknown(card.set_name)}",
            f"Text: {_or_unknown(card.text)}",
            SEPARATOR,
        ]
    )


def format_failure(error: FetchError) -> str:
    line = f"Request failed with error: {error.kind.value}"
    if error.status_code is not None:
        line += f" (status {error.status_code})"
    if error.detail:
        line += f": {error.detail}"
    return line


def _or_unknown(value: Optional[str]) -> str:
    return UNKNOWN if value is None else value
