from __future__ import annotations

import pytest

from smscatalog.config import MissingConfigurationError
from smscatalog.domain.catalog_sync import SyncReport
from smscatalog.domain.ports import StoreConnectionError
from smscatalog.ui import cli


def test_main_exits_zero_after_publish(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "sync_catalog", lambda: SyncReport(published=True))

    cli.main()


def test_main_exits_zero_when_nothing_published(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(cli, "sync_catalog", lambda: SyncReport(published=False))

    cli.main()

    assert "previous catalog stays live" in caplog.text


def test_main_exits_one_when_store_unreachable(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_sync() -> SyncReport:
        raise StoreConnectionError("connection refused")

    monkeypatch.setattr(cli, "sync_catalog", fake_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli.main()

    assert excinfo.value.code == 1


def test_main_exits_one_on_missing_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_sync() -> SyncReport:
        raise MissingConfigurationError(["SMS_ACTIVATE_API_KEY"])

    monkeypatch.setattr(cli, "sync_catalog", fake_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli.main()

    assert excinfo.value.code == 1
