"""URL builder and request factory for the MTG card catalog.

Endpoint:
  GET https://api.magicthegathering.io/v1/cards?name=<value>

Docs:
- https://docs.magicthegathering.io/#api_v1cards_list
"""

from __future__ import annotations

import urllib.parse
from typing import Iterable, Optional

from domain.types import CatalogRequest, QueryParameter


API_SCHEME = "https"
API_HOST = "api.magicthegathering.io"
CARDS_PATH = "/v1/cards"

NAME_QUERY_KEY = "name"


def build_url(
    query: Optional[Iterable[QueryParameter]] = None,
    scheme: str = API_SCHEME,
    host: str = API_HOST,
    path: str = CARDS_PATH,
) -> Optional[str]:
    """Build an absolute URL, or None if the components cannot form one.

    Query pairs keep their order and duplicates. Spaces are encoded as %20,
    not '+'. With query=None the URL has no '?' at all.
    """
    if not scheme or not host:
        return None
    # A path relative to an authority is not a valid URL.
    if path and not path.startswith("/"):
        return None

    qs = ""
    if query is not None:
        qs = urllib.parse.urlencode(
            [(p.key, p.value) for p in query],
            quote_via=urllib.parse.quote,
        )

    return urllib.parse.urlunsplit((scheme, host, urllib.parse.quote(path), qs, ""))


def name_query(name: str) -> list[QueryParameter]:
    return [QueryParameter(key=NAME_QUERY_KEY, value=name)]


def create_request(url: Optional[str]) -> Optional[CatalogRequest]:
    """Wrap a URL in a GET descriptor. An absent URL yields no request."""
    if url is None:
        return None
    return CatalogRequest(url=url, method="GET")
