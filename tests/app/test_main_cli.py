from __future__ import annotations

import argparse

import pytest

from dexsync import main as main_module
from dexsync.config import MissingConfigurationError
from dexsync.domain.errors import SessionExpiredError
from dexsync.domain.model import OwnershipRecord


def _capture_run(monkeypatch: pytest.MonkeyPatch) -> list[argparse.Namespace]:
    captured: list[argparse.Namespace] = []

    async def fake_run(args: argparse.Namespace) -> None:
        captured.append(args)

    monkeypatch.setattr(main_module, "_run", fake_run)
    return captured


def test_not_owned_command_parses_item(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture_run(monkeypatch)

    main_module.main(["not-owned", "C7"])

    assert captured[0].command == "not-owned"
    assert captured[0].item_id == "C7"
    assert captured[0].clear is False


def test_tradeable_clear_and_show_all(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture_run(monkeypatch)

    main_module.main(["-v", "tradeable", "C7", "--clear"])
    main_module.main(["show", "--all"])

    assert captured[0].clear is True
    assert captured[0].verbose is True
    assert captured[1].all is True


def test_missing_command_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main([])

    assert excinfo.value.code == 2


def test_configuration_error_exits_with_code_2(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    async def fake_run(_: argparse.Namespace) -> None:
        raise MissingConfigurationError("Missing configuration for: DEXSYNC_SPREADSHEET_ID")

    monkeypatch.setattr(main_module, "_run", fake_run)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["sign-in"])

    assert excinfo.value.code == 2
    assert "DEXSYNC_SPREADSHEET_ID" in capsys.readouterr().err


def test_runtime_error_exits_with_code_1(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_run(_: argparse.Namespace) -> None:
        raise SessionExpiredError("credential rejected twice")

    monkeypatch.setattr(main_module, "_run", fake_run)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["show"])

    assert excinfo.value.code == 1


def test_describe_formats_flags() -> None:
    record = OwnershipRecord(item_id="C1", user_id="user1", not_owned=True, tradeable=True)

    assert main_module._describe(record) == "C1\tuser1\tnot owned, tradeable"
    assert main_module._describe(OwnershipRecord.default("C2", "user1")) == "C2\tuser1\towned"
