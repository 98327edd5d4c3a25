"""In-process storage adapter."""

from __future__ import annotations

import copy
import json
from typing import Any

from todoo_cli.repositories import DEFAULT_NAMESPACE, UserDataRepository


class MemoryRepository(UserDataRepository):
    """Keeps serialized collections in a dict.

    Data is stored as JSON text, so callers never share references with the
    repository.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE):
        super().__init__(namespace)
        self._store: dict[str, str] = {}

    def load(self, user_id: str, kind: str, default: Any = None) -> Any:
        raw = self._store.get(self.key(user_id, kind))
        if raw is None:
            return [] if default is None else copy.deepcopy(default)
        return json.loads(raw)

    def save(self, user_id: str, kind: str, data: Any) -> None:
        self._store[self.key(user_id, kind)] = json.dumps(data)

    def remove(self, user_id: str, kind: str) -> None:
        self._store.pop(self.key(user_id, kind), None)

    def list_kinds(self, user_id: str) -> list[str]:
        prefix = self.key(user_id, "")
        return sorted(k[len(prefix) :] for k in self._store if k.startswith(prefix))
