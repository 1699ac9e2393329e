"""Periodic snapshots of editor drafts for crash recovery.

Editors are attached under a key. Each timer tick captures the current text
of every attached editor; the latest capture per key survives detaching so
it can still be shown in the recovered-drafts view.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping

from .settings import SETTINGS_DIR

__all__ = ["DraftSnapshotRecorder", "DraftSnapshotStore", "NO_DRAFTS_MESSAGE"]

LOGGER = logging.getLogger(__name__)
NO_DRAFTS_MESSAGE = "No drafts captured yet."
DEFAULT_INTERVAL = 10.0
_CACHE_FILENAME = "draft_snapshots.json"
_CACHE_VERSION = 1

TextSource = Callable[[], str]


@dataclass(slots=True)
class _Attachment:
    key: str
    source: TextSource


class DraftSnapshotStore:
    """JSON persistence for captured drafts."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (SETTINGS_DIR / _CACHE_FILENAME)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Draft snapshot cache %s is not valid JSON: %s", self._path, exc)
            return {}
        snapshots = data.get("snapshots") if isinstance(data, Mapping) else None
        if not isinstance(snapshots, Mapping):
            return {}
        return {key: value for key, value in snapshots.items() if isinstance(key, str) and isinstance(value, str)}

    def save(self, snapshots: Mapping[str, str]) -> Path:
        payload = {"version": _CACHE_VERSION, "snapshots": dict(snapshots)}
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        return self._path


class DraftSnapshotRecorder:
    """Capture the text of attached editors on every tick."""

    def __init__(self, *, interval: float = DEFAULT_INTERVAL, store: DraftSnapshotStore | None = None) -> None:
        if interval <= 0:
            raise ValueError("Snapshot interval must be greater than zero.")
        self._interval = float(interval)
        self._store = store
        self._attachments: dict[str, _Attachment] = {}
        self._snapshots: dict[str, str] = {}

    @property
    def interval(self) -> float:
        return self._interval

    def attach(self, source: TextSource, *, key: str | None = None, name: str | None = None) -> str:
        """Start tracking ``source`` and capture it immediately.

        The key is ``key`` when given, else ``name``, else a fresh random
        hex id. Attaching the same source twice returns its existing key.
        """

        for attachment in self._attachments.values():
            if attachment.source == source:
                return attachment.key
        resolved = self._resolve_key(key, name)
        self._attachments[resolved] = _Attachment(key=resolved, source=source)
        LOGGER.debug("Draft snapshots attached for key=%s", resolved)
        self.capture(resolved)
        return resolved

    def detach(self, key: str) -> bool:
        removed = self._attachments.pop(key, None)
        if removed is not None:
            LOGGER.debug("Draft snapshots detached for key=%s", key)
        return removed is not None

    def is_attached(self, key: str) -> bool:
        return key in self._attachments

    def attached_keys(self) -> tuple[str, ...]:
        return tuple(sorted(self._attachments))

    def capture(self, key: str) -> None:
        attachment = self._attachments.get(key)
        if attachment is None:
            raise KeyError(key)
        self._snapshots[key] = attachment.source()

    def capture_all(self) -> int:
        """Capture every attached editor; return how many were captured."""

        for key in list(self._attachments):
            self.capture(key)
        return len(self._attachments)

    def snapshots(self) -> dict[str, str]:
        return dict(self._snapshots)

    def combined_text(self) -> str:
        """Render all drafts as ``=== key ===`` sections sorted by key."""

        if not self._snapshots:
            return NO_DRAFTS_MESSAGE
        sections = [f"=== {key} ===\n{text}" for key, text in sorted(self._snapshots.items())]
        return "\n\n".join(sections)

    def persist(self) -> Path | None:
        if self._store is None:
            return None
        return self._store.save(self._snapshots)

    def restore(self) -> int:
        """Merge drafts saved by a previous session; live captures win."""

        if self._store is None:
            return 0
        loaded = self._store.load()
        restored = 0
        for key, text in loaded.items():
            if key not in self._snapshots:
                self._snapshots[key] = text
                restored += 1
        return restored

    @staticmethod
    def _resolve_key(key: str | None, name: str | None) -> str:
        if key and key.strip():
            return key
        if name and name.strip():
            return name
        return uuid.uuid4().hex

