#!/usr/bin/env python3
"""Look up cards by name and print them.

Every name is fetched concurrently; results are printed as they arrive,
so output order need not match argument order. With --json each result
is printed as one JSON object per line instead of text blocks.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import threading
from concurrent.futures import wait
from typing import Callable, Optional, Sequence

from domain.types import FetchResult
from services.catalog_client import CatalogClient
from services.presenter import format_card, format_failure


DEFAULT_NAMES = ("Opt", "Black Lotus")

# Callbacks run on worker threads; one write per result keeps blocks whole.
_OUTPUT_LOCK = threading.Lock()


def render_result(result: FetchResult) -> str:
    """Text for one fetch: a block per card, or a failure line."""
    if result.error is not None:
        return format_failure(result.error)
    return "\n".join(format_card(card) for card in result.response.records())


def render_result_json(result: FetchResult) -> str:
    return json.dumps(result.to_dict(), sort_keys=True, separators=(",", ":"))


def _emit(text: str) -> None:
    # Empty result lists print nothing.
    if not text:
        return
    with _OUTPUT_LOCK:
        sys.stdout.write(text + "\n")
        sys.stdout.flush()


def _printer(render: Callable[[FetchResult], str]) -> Callable[[FetchResult], None]:
    def on_complete(result: FetchResult) -> None:
        _emit(render(result))

    return on_complete


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def main(argv: Optional[Sequence[str]] = None, client: Optional[CatalogClient] = None) -> int:
    parser = argparse.ArgumentParser(description="Search the MTG card catalog by card name")
    parser.add_argument("names", nargs="*", default=list(DEFAULT_NAMES), help="Card names (default: Opt, 'Black Lotus')")
    parser.add_argument("--max-workers", type=_positive_int, default=None, help="Concurrent fetches (env: MTG_API_MAX_WORKERS)")
    parser.add_argument("--json", action="store_true", help="Print one JSON object per fetch result")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("MTG_LOG_LEVEL", "WARNING"),
        help="Logging level (env: MTG_LOG_LEVEL, default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if client is None:
        client = CatalogClient(max_workers=args.max_workers)

    on_complete = _printer(render_result_json if args.json else render_result)

    # close() joins the workers, so every callback has printed before we return.
    with client:
        futures = [client.fetch_cards_by_name(name, on_complete) for name in args.names]
        wait(futures)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
