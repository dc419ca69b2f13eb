import json
import sys

import pytest

from domain.types import CatalogResponse, CardRecord, ErrorKind, FetchError, FetchResult
from scripts.search_cards import main, render_result, render_result_json
from services.catalog_client import CatalogClient
from services.catalog_urls import build_url, name_query

from fakes import FakeResponse, FakeSession


def test_render_empty_result_prints_nothing():
    assert render_result(FetchResult.success(CatalogResponse(cards=None))) == ""


def test_render_failure():
    result = FetchResult.failure(FetchError(kind=ErrorKind.FORBIDDEN, status_code=403))
    assert render_result(result) == "Request failed with error: FORBIDDEN (status 403)"


def test_render_one_block_per_card():
    text = render_result(FetchResult.success(CatalogResponse(cards=(CardRecord(name="A"), CardRecord(name="B")))))
    assert text.count("Card Name: ") == 2


def test_main_default_queries(capsys):
    session = FakeSession(
        {
            build_url(name_query("Opt")): FakeResponse(200, b'{"cards":[{"name":"Opt","type":"Instant"}]}'),
            build_url(name_query("Black Lotus")): FakeResponse(404),
        }
    )

    code = main([], client=CatalogClient(session=session, max_workers=2))

    assert code == 0
    out = capsys.readouterr().out
    assert "Card Name: Opt" in out
    assert "Type: Instant" in out
    assert "Mana Cost: Unknown" in out
    assert "Request failed with error: NOT_FOUND (status 404)" in out
    assert sorted(url for _, url in session.calls) == sorted(
        [build_url(name_query("Opt")), build_url(name_query("Black Lotus"))]
    )


def test_main_failures_are_not_fatal(capsys):
    session = FakeSession(default=FakeResponse(500))
    code = main(["Shock"], client=CatalogClient(session=session, max_workers=1))
    assert code == 0
    assert "INTERNAL_SERVER_ERROR" in capsys.readouterr().out


class _WriteLog:
    """Stands in for sys.stdout and records each write separately."""

    def __init__(self):
        self.writes = []

    def write(self, text):
        self.writes.append(text)
        return len(text)

    def flush(self):
        pass


def test_each_result_is_written_once(monkeypatch):
    two_cards = b'{"cards":[{"name":"Opt"},{"name":"Shock"}]}'
    session = FakeSession(default=FakeResponse(200, two_cards))
    out = _WriteLog()
    monkeypatch.setattr(sys, "stdout", out)

    main(["Opt", "Shock", "Lightning Bolt"], client=CatalogClient(session=session, max_workers=3))

    assert len(out.writes) == 3
    for chunk in out.writes:
        assert chunk.count("Card Name: ") == 2
        assert chunk.endswith("-" * 42 + "\n")


@pytest.mark.parametrize("value", ["0", "-2", "many"])
def test_max_workers_must_be_positive(value, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--max-workers", value, "Opt"], client=CatalogClient(session=FakeSession(), max_workers=1))
    assert exc.value.code == 2
    assert "--max-workers" in capsys.readouterr().err


def test_json_output(capsys):
    session = FakeSession(
        {
            build_url(name_query("Opt")): FakeResponse(200, b'{"cards":[{"name":"Opt","set":"MMQ"}]}'),
            build_url(name_query("Black Lotus")): FakeResponse(503),
        }
    )

    main(["--json"], client=CatalogClient(session=session, max_workers=2))

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert len(lines) == 2
    ok = next(line for line in lines if line["ok"])
    failed = next(line for line in lines if not line["ok"])
    assert ok["response"]["cards"][0]["name"] == "Opt"
    assert ok["response"]["cards"][0]["card_set"] == "MMQ"
    assert failed["error"] == {"kind": "SERVICE_UNAVAILABLE", "status_code": 503, "detail": None}


def test_render_json_absent_cards():
    assert json.loads(render_result_json(FetchResult.success(CatalogResponse()))) == {
        "ok": True,
        "response": {"cards": None},
        "error": None,
    }
