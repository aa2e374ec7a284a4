from __future__ import annotations

import pytest

from botrecon.domain.delivery import RunStats
from botrecon.domain.model import NOT_A_BOT, Classification
from botrecon.ui import cli


def test_reconcile_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(**kwargs: object) -> RunStats:
        captured.update(kwargs)
        return RunStats()

    monkeypatch.setattr(cli, "reconcile_persons", fake_reconcile)

    cli.main(["reconcile"])

    assert captured == {"dry_run": False, "page_size": None, "batch_size": None}


def test_reconcile_with_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(**kwargs: object) -> RunStats:
        captured.update(kwargs)
        return RunStats()

    monkeypatch.setattr(cli, "reconcile_persons", fake_reconcile)

    cli.main(["reconcile", "--dry-run", "--page-size", "50", "--batch-size", "10"])

    assert captured == {"dry_run": True, "page_size": 50, "batch_size": 10}


def test_aborted_run_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "reconcile_persons", lambda **_: RunStats(aborted=True))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile"])

    assert excinfo.value.code == 1


def test_invalid_page_size(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "reconcile_persons", lambda **_: RunStats())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile", "--page-size", "0"])

    assert excinfo.value.code == 2


def test_fatal_error_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(**_: object) -> RunStats:
        raise RuntimeError("no config")

    monkeypatch.setattr(cli, "reconcile_persons", broken)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile"])

    assert excinfo.value.code == 1


def test_classify_command(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str | None]] = []

    def fake_classify(address: str, user_agent: str | None = None) -> Classification:
        calls.append((address, user_agent))
        return NOT_A_BOT

    monkeypatch.setattr(cli, "classify_address", fake_classify)

    cli.main(["classify", "192.0.2.1", "--user-agent", "curl/8.0"])

    assert calls == [("192.0.2.1", "curl/8.0")]
