"""In-process stand-ins for requests.Session / requests.Response."""

import threading
from typing import Any, Optional


class FakeResponse:
    def __init__(self, status_code: int, content: bytes = b""):
        self.status_code = status_code
        self.content = content


class FakeSession:
    """Serves canned responses keyed by URL.

    A value may be a FakeResponse, an exception instance (raised from
    request()), or any other object (returned as-is). If a gate is set for a
    URL, request() blocks until the gate is released.
    """

    def __init__(self, routes: Optional[dict[str, Any]] = None, default: Any = None):
        self.routes = dict(routes or {})
        self.default = default
        self.gates: dict[str, threading.Event] = {}
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def request(self, method: str, url: str, **kwargs: Any) -> Any:
        with self._lock:
            self.calls.append((method, url))
        gate = self.gates.get(url)
        if gate is not None:
            assert gate.wait(timeout=5), f"gate for {url} never released"
        outcome = self.routes.get(url, self.default)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def close(self) -> None:
        pass
