"""JSON file storage adapter.

Each collection lives in ``<base_dir>/<namespace>/<user_id>/<kind>.json``.
Storage failures never propagate: writes that cannot reach the disk are kept
in an in-memory fallback for the rest of the process, and reads that find
nothing usable return the default.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

from todoo_cli.repositories import DEFAULT_NAMESPACE, UserDataRepository
from todoo_cli.utils.logger import get_logger


def _dumps(data: Any) -> str | None:
    try:
        return json.dumps(data, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        get_logger().warning("cannot serialize data: %s", e)
        return None


def _loads(raw: str | None) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        get_logger().warning("ignoring corrupt data file: %s", e)
        return None


class JsonFileRepository(UserDataRepository):
    """Stores each user collection as a JSON file."""

    def __init__(self, base_dir: str | Path, namespace: str = DEFAULT_NAMESPACE):
        super().__init__(namespace)
        self.base_dir = Path(base_dir)
        self._fallback: dict[str, str] = {}

    def _user_dir(self, user_id: str) -> Path:
        return self.base_dir / self.namespace / user_id

    def _path(self, user_id: str, kind: str) -> Path:
        return self._user_dir(user_id) / f"{kind}.json"

    def load(self, user_id: str, kind: str, default: Any = None) -> Any:
        # A pending fallback entry is newer than whatever is on disk
        raw = self._fallback.get(self.key(user_id, kind))
        if raw is None:
            try:
                raw = self._path(user_id, kind).read_text(encoding="utf-8")
            except FileNotFoundError:
                raw = None
            except OSError as e:
                get_logger().warning("cannot read %s/%s: %s", user_id, kind, e)
                raw = None

        parsed = _loads(raw)
        if parsed is None:
            return [] if default is None else copy.deepcopy(default)
        return parsed

    def save(self, user_id: str, kind: str, data: Any) -> None:
        payload = _dumps(data)
        if payload is None:
            return

        key = self.key(user_id, kind)
        path = self._path(user_id, kind)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".json.tmp")
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            get_logger().warning(
                "cannot write %s, keeping it in memory: %s", key, e
            )
            self._fallback[key] = payload
            return
        self._fallback.pop(key, None)

    def remove(self, user_id: str, kind: str) -> None:
        self._fallback.pop(self.key(user_id, kind), None)
        try:
            self._path(user_id, kind).unlink(missing_ok=True)
        except OSError as e:
            get_logger().warning("cannot remove %s/%s: %s", user_id, kind, e)

    def list_kinds(self, user_id: str) -> list[str]:
        kinds: set[str] = set()
        try:
            kinds.update(p.stem for p in self._user_dir(user_id).glob("*.json"))
        except OSError as e:
            get_logger().warning("cannot list data of %s: %s", user_id, e)
        prefix = self.key(user_id, "")
        kinds.update(k[len(prefix) :] for k in self._fallback if k.startswith(prefix))
        return sorted(kinds)
