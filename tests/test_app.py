"""Tests covering the application bootstrap helpers."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from metatags import app
from metatags.services.settings import Settings, SettingsStore


def test_coerce_cli_overrides_types() -> None:
    overrides = app._coerce_cli_overrides(
        [
            "default_tag_name=note",
            "autosave_timeout_ms=2500",
            "draft_snapshot_interval=1.5",
            "debug_logging=on",
            "autosave_path=none",
            'palette=["#FF000000"]',
        ]
    )

    assert overrides == {
        "default_tag_name": "note",
        "autosave_timeout_ms": 2500,
        "draft_snapshot_interval": 1.5,
        "debug_logging": True,
        "autosave_path": None,
        "palette": ["#FF000000"],
    }


def test_optional_string_keeps_value() -> None:
    assert app._coerce_cli_overrides(["autosave_path=~/notes.txt"]) == {"autosave_path": "~/notes.txt"}


@pytest.mark.parametrize(
    "entry, message",
    [
        ("default_tag_name", "KEY=VALUE"),
        ("=value", "missing a field name"),
        ("nonexistent=1", "Unknown setting"),
        ("debug_logging=maybe", "Cannot coerce"),
        ("palette=not-json", "valid JSON arrays"),
    ],
)
def test_coerce_cli_overrides_rejects_bad_entries(entry: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        app._coerce_cli_overrides([entry])


def test_parse_cli_args_keeps_passthrough() -> None:
    args, passthrough = app._parse_cli_args(["--dump-settings", "--set", "font_size=14", "--qt-flag"])

    assert args.dump_settings
    assert args.overrides == ["font_size=14"]
    assert passthrough == ["--qt-flag"]


def test_dump_settings_writes_payload(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METATAGS_DEFAULT_TAG", "env")
    store = SettingsStore(tmp_path / "settings.json")
    stream = io.StringIO()

    app._dump_settings(store.load(), store, overrides={"font_size": 14}, stream=stream)

    output = json.loads(stream.getvalue())
    assert output["settings"]["default_tag_name"] == "env"
    assert output["meta"] == {
        "path": str(tmp_path / "settings.json"),
        "cli_overrides": ["font_size"],
        "environment_variables": ["METATAGS_DEFAULT_TAG"],
    }


def test_main_dump_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    configured: list[bool] = []
    monkeypatch.setattr(app, "configure_logging", lambda debug=False, settings=None, force=False: configured.append(debug))
    monkeypatch.setattr("sys.argv", ["metatags"])
    settings_path = tmp_path / "settings.json"

    result = app.main(["--dump-settings", "--settings-path", str(settings_path), "--set", "default_tag_name=cli"])

    assert result == 0
    assert configured == [False]
    output = json.loads(capsys.readouterr().out)
    assert output["settings"]["default_tag_name"] == "cli"
    assert output["meta"]["path"] == str(settings_path)


def test_main_rejects_invalid_override(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(app, "configure_logging", lambda debug=False, settings=None, force=False: None)
    monkeypatch.setattr("sys.argv", ["metatags"])

    with pytest.raises(SystemExit) as excinfo:
        app.main(["--set", "bogus"])

    assert excinfo.value.code == 2
    assert "Invalid --set override" in capsys.readouterr().err


def test_load_settings_falls_back_on_error(tmp_path: Path) -> None:
    class BrokenStore(SettingsStore):
        def load(self, *, overrides=None):  # type: ignore[no-untyped-def, override]
            raise OSError("disk unavailable")

    settings = app.load_settings(store=BrokenStore(tmp_path / "settings.json"))

    assert settings == Settings()


def test_env_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METATAGS_DEBUG", "Yes")

    assert app._env_flag("METATAGS_DEBUG")
    assert not app._env_flag("METATAGS_UNSET_FLAG")


def test_configure_logging_honours_settings_debug_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    levels: list[tuple[int, bool]] = []
    monkeypatch.setattr(app.logging_utils, "setup_logging", lambda level, force=False: levels.append((level, force)))

    app.configure_logging(settings=Settings(debug_logging=True), force=True)
    app.configure_logging(settings=Settings())

    assert levels == [(10, True), (20, False)]
