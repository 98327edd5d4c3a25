"""Repository abstraction layer for Todoo CLI.

The planner core never talks to a storage medium directly. It hands whole,
JSON-shaped collections to a ``UserDataRepository`` keyed by user id and
collection kind ("tasks", "projects", "templates", "dayTemplates").
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

DEFAULT_NAMESPACE = "todoapp"


def build_key(namespace: str, user_id: str, kind: str) -> str:
    """Namespaced storage key, ``<namespace>:<userId>:<kind>``."""
    return f"{namespace}:{user_id}:{kind}"


class UserDataRepository(ABC):
    """Abstract base class for per-user collection storage.

    Implementations must not raise on write failures; they degrade to an
    in-memory fallback instead. Reads of missing data return the caller's
    default, or an empty list.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE):
        self.namespace = namespace

    def key(self, user_id: str, kind: str) -> str:
        return build_key(self.namespace, user_id, kind)

    @abstractmethod
    def load(self, user_id: str, kind: str, default: Any = None) -> Any:
        """Load a collection.

        Args:
            user_id: Owner of the data
            kind: Collection name
            default: Returned when nothing is stored (defaults to ``[]``)

        Returns:
            A deep copy of the stored JSON data, or the default

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "UserDataRepository.load() must be implemented by adapter"
        )

    @abstractmethod
    def save(self, user_id: str, kind: str, data: Any) -> None:
        """Store a collection, replacing what was there.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "UserDataRepository.save() must be implemented by adapter"
        )

    @abstractmethod
    def remove(self, user_id: str, kind: str) -> None:
        """Delete one collection.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "UserDataRepository.remove() must be implemented by adapter"
        )

    @abstractmethod
    def list_kinds(self, user_id: str) -> list[str]:
        """Names of the collections stored for a user.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "UserDataRepository.list_kinds() must be implemented by adapter"
        )

    def clear_user(self, user_id: str) -> None:
        """Delete every collection of a user."""
        for kind in self.list_kinds(user_id):
            self.remove(user_id, kind)
