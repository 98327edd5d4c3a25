"""Application state store.

All mutations go through ``TaskStore.dispatch`` with a pure
``(TaskState) -> TaskState`` transform. Listeners are notified after every
transform that changed the state; ``PersistenceHook`` is the listener that
writes collections back to a repository.
"""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, ValidationError

from todoo_cli.models import DayTemplate, Project, Task, TaskState, Template
from todoo_cli.repositories import UserDataRepository
from todoo_cli.services.ordering_service import normalize_orders
from todoo_cli.utils.logger import get_logger

Transform = Callable[[TaskState], TaskState]
Listener = Callable[[TaskState], None]

# Storage kind -> (state attribute, model)
STATE_KINDS: dict[str, tuple[str, type[BaseModel]]] = {
    "tasks": ("tasks", Task),
    "projects": ("projects", Project),
    "templates": ("templates", Template),
    "dayTemplates": ("day_templates", DayTemplate),
}


class TaskStore:
    """Holds the current TaskState and notifies subscribers of changes."""

    def __init__(self, state: TaskState | None = None):
        self._state = state or TaskState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> TaskState:
        return self._state

    def dispatch(self, transform: Transform) -> TaskState:
        """Apply *transform* and notify listeners if the state changed."""
        new_state = transform(self._state)
        if new_state == self._state:
            return self._state
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


class PersistenceHook:
    """Store listener saving changed collections for one user."""

    def __init__(
        self,
        repository: UserDataRepository,
        user_id: str,
        initial: TaskState | None = None,
    ):
        self.repository = repository
        self.user_id = user_id
        self._last = initial

    def __call__(self, state: TaskState) -> None:
        for kind, (attr, _model) in STATE_KINDS.items():
            items = getattr(state, attr)
            if self._last is not None and getattr(self._last, attr) == items:
                continue
            self.repository.save(
                self.user_id,
                kind,
                [item.model_dump(by_alias=True, exclude_none=True) for item in items],
            )
        self._last = state


def _load_items(
    repository: UserDataRepository, user_id: str, kind: str, model: type[BaseModel]
) -> list:
    raw = repository.load(user_id, kind, [])
    if not isinstance(raw, list):
        get_logger().warning("ignoring %s of %s: expected a list", kind, user_id)
        return []
    items = []
    for entry in raw:
        try:
            items.append(model.model_validate(entry))
        except ValidationError as e:
            get_logger().warning("skipping invalid %s entry: %s", kind, e)
    return items


def load_state(repository: UserDataRepository, user_id: str) -> TaskState:
    """Build a TaskState from a user's stored collections.

    Invalid entries are skipped. Tasks are order-normalized per date.
    """
    loaded = {
        attr: _load_items(repository, user_id, kind, model)
        for kind, (attr, model) in STATE_KINDS.items()
    }
    loaded["tasks"] = normalize_orders(loaded["tasks"])
    return TaskState(**loaded)


def update_collection(attr: str, fn: Callable[[list], list]) -> Transform:
    """Lift a collection transform (e.g. ``tasks -> tasks``) to a state transform."""

    def transform(state: TaskState) -> TaskState:
        return state.model_copy(update={attr: fn(getattr(state, attr))})

    return transform
