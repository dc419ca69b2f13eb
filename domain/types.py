"""
Card Catalog Domain Types

These types define the data structures passed between the URL builder,
the fetch orchestrator, the decoder and the presenter.

All types are transient: they are built per fetch and discarded once the
completion callback consuming them returns.
"""

from dataclasses import dataclass, asdict
from typing import Optional
from enum import Enum


class ErrorKind(str, Enum):
    """
    Machine-readable failure kinds for a single fetch.

    The first six come from the HTTP status classifier. The remaining
    three cover failures that happen before a status code is available.
    """
    # Classified HTTP errors
    BAD_REQUEST = "BAD_REQUEST"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    UNEXPECTED = "UNEXPECTED"

    # Failures without a classified status
    MISSING_REQUEST = "MISSING_REQUEST"
    TRANSPORT = "TRANSPORT"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"


@dataclass(frozen=True)
class QueryParameter:
    """One key/value pair of the query string. Duplicates are allowed."""

    key: str
    value: str


@dataclass(frozen=True)
class CardRecord:
    """
    One catalog entry.

    Every field is optional: the API omits or nulls fields freely and a
    missing field is never an error.
    """

    name: Optional[str] = None
    mana_cost: Optional[str] = None
    type: Optional[str] = None

    card_set: Optional[str] = None
    """Set code, sent as 'set' on the wire (e.g., 'MMQ')."""

    set_name: Optional[str] = None
    text: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to JSON-serialisable dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class CatalogResponse:
    """
    Decoded body of GET /v1/cards.

    cards is None when the body has no 'cards' field (or it is null).
    Either way there are zero matches, which is not an error.
    """

    cards: Optional[tuple[CardRecord, ...]] = None

    def records(self) -> tuple[CardRecord, ...]:
        """Cards in response order, empty when absent."""
        return self.cards or ()

    def to_dict(self) -> dict:
        """Convert to JSON-serialisable dictionary."""
        return {
            'cards': [c.to_dict() for c in self.cards] if self.cards is not None else None,
        }


@dataclass(frozen=True)
class CatalogRequest:
    """A GET request descriptor. Carries no body and no custom headers."""

    url: str
    method: str = "GET"


@dataclass(frozen=True)
class FetchError:
    """
    A terminal failure for one fetch. No retry state is kept.

    status_code is set for every classified HTTP error, and always for
    UNEXPECTED. detail holds a human-readable cause where one exists.
    """

    kind: ErrorKind
    status_code: Optional[int] = None
    detail: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to JSON-serialisable dictionary."""
        return {
            'kind': self.kind.value,
            'status_code': self.status_code,
            'detail': self.detail,
        }


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of one fetch: exactly one of response or error is set.

    Every failure class, including a missing request and transport
    errors, is delivered through this type.
    """

    response: Optional[CatalogResponse] = None
    error: Optional[FetchError] = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of response or error")

    @classmethod
    def success(cls, response: CatalogResponse) -> "FetchResult":
        return cls(response=response)

    @classmethod
    def failure(cls, error: FetchError) -> "FetchResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Convert to JSON-serialisable dictionary."""
        return {
            'ok': self.ok,
            'response': self.response.to_dict() if self.response else None,
            'error': self.error.to_dict() if self.error else None,
        }
