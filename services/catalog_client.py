"""MTG card catalog client (fetch orchestration).

Each fetch is one GET round trip dispatched on a shared thread pool,
against one shared requests.Session. The result is delivered as a
FetchResult through the returned future and, optionally, a completion
callback.

Outcomes:
- no request            -> MISSING_REQUEST (no network activity)
- transport exception   -> TRANSPORT
- response w/o status   -> MALFORMED_RESPONSE
- 200 + decodable body  -> success
- 200 + bad/empty body  -> UNEXPECTED(200)
- any other status      -> classified error, body not decoded

There is no retry, no ordering across fetches, no cancellation and no
deadline at this layer.

Config (env):
- MTG_API_MAX_WORKERS: thread-pool size (default 4)
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

import requests

from domain.types import CatalogRequest, ErrorKind, FetchError, FetchResult
from services.catalog_decoder import CatalogDecodeError, decode_catalog_response
from services.catalog_urls import build_url, create_request, name_query
from services.status import STATUS_OK, classify_status


logger = logging.getLogger(__name__)

_DEFAULT_MAX_WORKERS = 4

OnComplete = Callable[[FetchResult], Any]


def configured_max_workers() -> int:
    raw = os.environ.get("MTG_API_MAX_WORKERS", "").strip()
    if not raw:
        return _DEFAULT_MAX_WORKERS
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring invalid MTG_API_MAX_WORKERS=%r", raw)
        return _DEFAULT_MAX_WORKERS
    if value < 1:
        logger.warning("Ignoring non-positive MTG_API_MAX_WORKERS=%r", raw)
        return _DEFAULT_MAX_WORKERS
    return value


class CatalogClient:
    """Fires independent catalog requests without blocking the caller."""

    def __init__(self, session: Optional[requests.Session] = None, max_workers: Optional[int] = None):
        self.session = session if session is not None else requests.Session()
        self._owns_session = session is None
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers if max_workers is not None else configured_max_workers(),
            thread_name_prefix="catalog-fetch",
        )

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self, wait: bool = True) -> None:
        """Shut down the pool; pending fetches still complete when wait=True."""
        self._executor.shutdown(wait=wait)
        if self._owns_session:
            self.session.close()

    def fetch(self, request: Optional[CatalogRequest], on_complete: Optional[OnComplete] = None) -> Future:
        """Dispatch one request. The future resolves to a FetchResult.

        on_complete is called exactly once with the same result, on
        whichever thread completes the future.
        """
        if request is None:
            logger.warning("fetch called without a request; nothing sent")
            future: Future = Future()
            future.set_result(FetchResult.failure(FetchError(kind=ErrorKind.MISSING_REQUEST)))
        else:
            logger.debug("dispatching %s %s", request.method, request.url)
            future = self._executor.submit(self._perform, request)

        if on_complete is not None:
            future.add_done_callback(lambda f: on_complete(f.result()))
        return future

    def fetch_cards_by_name(self, name: str, on_complete: Optional[OnComplete] = None) -> Future:
        return self.fetch(create_request(build_url(name_query(name))), on_complete)

    def _perform(self, request: CatalogRequest) -> FetchResult:
        try:
            resp = self.session.request(request.method, request.url)
        except requests.RequestException as e:
            logger.warning("Network error for %s: %s", request.url, e)
            return FetchResult.failure(FetchError(kind=ErrorKind.TRANSPORT, detail=str(e)))

        status_code = getattr(resp, "status_code", None)
        if not isinstance(status_code, int) or isinstance(status_code, bool):
            logger.warning("Unexpected response format for %s: %r", request.url, resp)
            return FetchResult.failure(
                FetchError(kind=ErrorKind.MALFORMED_RESPONSE, detail=f"response has no HTTP status: {type(resp).__name__}")
            )

        error = classify_status(status_code)
        if error is not None:
            return FetchResult.failure(error)

        try:
            catalog = decode_catalog_response(getattr(resp, "content", None))
        except CatalogDecodeError as e:
            logger.warning("Error decoding JSON from %s: %s", request.url, e)
            return FetchResult.failure(FetchError(kind=ErrorKind.UNEXPECTED, status_code=STATUS_OK, detail=str(e)))

        return FetchResult.success(catalog)
