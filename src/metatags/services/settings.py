"""Settings dataclass and JSON persistence helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

__all__ = ["Settings", "SettingsStore", "SETTINGS_DIR"]

LOGGER = logging.getLogger(__name__)
SETTINGS_DIR = Path.home() / ".metatags"
_DEFAULT_SETTINGS_PATH = SETTINGS_DIR / "settings.json"
_SETTINGS_VERSION = 1
_ENV_OVERRIDES: Mapping[str, str] = {
    "METATAGS_DEFAULT_TAG": "default_tag_name",
    "METATAGS_HIGHLIGHT_COLOR": "highlight_color",
    "METATAGS_AUTOSAVE_PATH": "autosave_path",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "METATAGS_DEBUG_LOGGING": "debug_logging",
    "METATAGS_DRAFT_SNAPSHOTS": "draft_snapshots_enabled",
}
_INT_ENV_OVERRIDES: Mapping[str, str] = {
    "METATAGS_AUTOSAVE_TIMEOUT_MS": "autosave_timeout_ms",
}
_FLOAT_ENV_OVERRIDES: Mapping[str, str] = {
    "METATAGS_DRAFT_INTERVAL": "draft_snapshot_interval",
}
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}


def _default_palette() -> list[str]:
    return ["#FFFF0000", "#FF008000", "#FF0000FF", "#FFDAA520"]


def _default_palette_checked() -> list[bool]:
    return [True, False, True, False]


@dataclass(slots=True)
class Settings:
    """User-configurable settings persisted between sessions."""

    default_tag_name: str = "sample"
    highlight_color: str = "yellow"
    autosave_timeout_ms: int = 10_000
    autosave_path: str | None = None
    draft_snapshots_enabled: bool = True
    draft_snapshot_interval: float = 10.0
    palette: list[str] = field(default_factory=_default_palette)
    palette_checked: list[bool] = field(default_factory=_default_palette_checked)
    font_family: str = "Segoe UI"
    font_size: int = 12
    window_geometry: str | None = None
    debug_logging: bool = False


class SettingsStore:
    """Persistence adapter for :class:`Settings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or _DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> Settings:
        """Load settings from disk, applying CLI/environment overrides when present."""

        payload = self._read_payload()
        settings = Settings()
        if payload:
            data = _filter_fields(payload)
            try:
                settings = Settings(**data)
            except TypeError as exc:
                LOGGER.warning("Settings payload contained unexpected data: %s", exc)
                settings = Settings()
            if len(settings.palette) != len(settings.palette_checked):
                LOGGER.warning(
                    "Settings palette has %d colours but %d checked flags; using defaults",
                    len(settings.palette),
                    len(settings.palette_checked),
                )
                settings = replace(
                    settings, palette=_default_palette(), palette_checked=_default_palette_checked()
                )

        if overrides:
            settings = self._apply_overrides(settings, overrides, source="CLI")

        return self._apply_env_overrides(settings)

    def save(self, settings: Settings) -> Path:
        """Persist settings to disk with atomic file writes."""

        data = asdict(settings)
        data["version"] = _SETTINGS_VERSION
        body = json.dumps(data, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
            data = json.loads(text)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(data, Mapping):
            LOGGER.warning("Settings file %s does not contain an object", self._path)
            return {}
        return dict(data)

    def _apply_overrides(
        self,
        settings: Settings,
        overrides: Mapping[str, Any],
        *,
        source: str = "runtime",
    ) -> Settings:
        allowed = {field.name for field in fields(Settings)}
        filtered = {key: value for key, value in overrides.items() if key in allowed and value is not None}
        if filtered:
            LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
            settings = replace(settings, **filtered)
        return settings

    def _apply_env_overrides(self, settings: Settings) -> Settings:
        overrides: Dict[str, Any] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value
        for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value.strip().lower() in _TRUE_VALUES
        for env_name, field_name in _INT_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None:
                continue
            try:
                overrides[field_name] = int(value, 10)
            except ValueError:
                LOGGER.warning("Environment override %s=%s is not a valid integer", env_name, value)
        for env_name, field_name in _FLOAT_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None:
                continue
            try:
                overrides[field_name] = float(value)
            except ValueError:
                LOGGER.warning("Environment override %s=%s is not a valid float", env_name, value)
        if overrides:
            settings = self._apply_overrides(settings, overrides, source="environment")
        return settings


def _filter_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    allowed = {field.name for field in fields(Settings)}
    return {key: value for key, value in payload.items() if key in allowed}
