from __future__ import annotations

import json
import logging
import threading
import time
import uuid
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

from billminder.config import DEFAULT_STORAGE_KEY
from billminder.models import Category, Priority, Task, TaskDraft, TaskValidationError, validate_title
from billminder.storage import LocalStorage

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _now_ms() -> int:
    return int(time.time() * 1000)


def seed_tasks(today: Optional[date] = None, now_ms: Optional[int] = None) -> List[Task]:
    """The fixed example set used when nothing has been persisted yet."""
    today = today or date.today()
    created = now_ms if now_ms is not None else _now_ms()
    return [
        Task(
            id="1",
            title="Quarterly BIR Filing",
            description="Submit quarterly income tax returns for Q1.",
            category=Category.TAXES,
            sub_category="BIR deadlines",
            priority=Priority.HIGH,
            due_date=today,
            is_completed=False,
            created_at=created,
        ),
        Task(
            id="2",
            title="Electricity Bill",
            description="Meralco account ending in 4522.",
            category=Category.BILLS,
            sub_category="Electricity",
            priority=Priority.MEDIUM,
            due_date=today + timedelta(days=3),
            is_completed=False,
            created_at=created,
        ),
        Task(
            id="3",
            title="Weekly Team Sync",
            description="Review performance metrics with marketing team.",
            category=Category.BUSINESS,
            priority=Priority.MEDIUM,
            due_date=today,
            is_completed=True,
            created_at=created,
        ),
    ]


def dump_tasks(tasks: List[Task]) -> str:
    return json.dumps({"schema_version": SCHEMA_VERSION, "tasks": [t.to_dict() for t in tasks]})


def parse_tasks(raw_json: str) -> List[Task]:
    """Parse a persisted blob.

    Raises ValueError when the blob itself is unusable. Malformed records
    inside a usable blob are skipped.
    """
    raw: Any = json.loads(raw_json)
    if isinstance(raw, dict):
        version = raw.get("schema_version", SCHEMA_VERSION)
        if isinstance(version, int) and version > SCHEMA_VERSION:
            logger.warning("Task blob schema_version=%s is newer than supported %s", version, SCHEMA_VERSION)
        records = raw.get("tasks")
    else:
        # Bare array: the legacy localStorage layout.
        records = raw
    if not isinstance(records, list):
        raise ValueError(f"expected a list of tasks, got {type(records).__name__}")

    tasks: List[Task] = []
    seen = set()
    for i, record in enumerate(records):
        try:
            task = Task.from_dict(record)
        except TaskValidationError as exc:
            logger.warning("Skipping stored task #%d: %s", i, exc)
            continue
        if task.id in seen:
            logger.warning("Skipping stored task #%d: duplicate id %r", i, task.id)
            continue
        seen.add(task.id)
        tasks.append(task)
    return tasks


class TaskStore:
    """Owns the ordered task collection and is its only writer to storage.

    Every mutation persists the full collection. A mutation and its save run
    under one lock so concurrent sessions sharing a store cannot lose updates.
    """

    def __init__(
        self,
        storage: LocalStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        today: Optional[Callable[[], date]] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._today = today or date.today
        self._clock = clock or _now_ms
        self._tasks: List[Task] = []
        self._lock = threading.RLock()

    # ---- queries ----

    @property
    def tasks(self) -> List[Task]:
        with self._lock:
            return list(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        with self._lock:
            idx = self._index_of(task_id)
            return self._tasks[idx] if idx is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def _index_of(self, task_id: str) -> Optional[int]:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    # ---- persistence ----

    def load(self) -> List[Task]:
        with self._lock:
            raw = self._storage.get_item(self._key)
            if not raw:
                logger.info("No stored tasks under key=%s; seeding example tasks", self._key)
                self._tasks = seed_tasks(self._today(), self._clock())
                self.save()
                return list(self._tasks)

            try:
                self._tasks = parse_tasks(raw)
            except ValueError as exc:
                # json.JSONDecodeError is a ValueError too.
                logger.warning("Stored tasks under key=%s are unreadable (%s); falling back to example tasks", self._key, exc)
                self._tasks = seed_tasks(self._today(), self._clock())
            logger.info("TaskStore loaded key=%s total=%d", self._key, len(self._tasks))
            return list(self._tasks)

    def save(self) -> None:
        with self._lock:
            self._storage.set_item(self._key, dump_tasks(self._tasks))

    def export_json(self) -> str:
        with self._lock:
            return dump_tasks(self._tasks)

    # ---- mutations ----

    def _new_id(self) -> str:
        existing = {t.id for t in self._tasks}
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in existing:
                return candidate

    def add(self, draft: TaskDraft) -> Task:
        with self._lock:
            task = Task.from_draft(draft, task_id=self._new_id(), created_at=self._clock())
            self._tasks.insert(0, task)
            self.save()
            logger.debug("Added task id=%s title=%r", task.id, task.title)
            return task

    def update(self, task: Task) -> Optional[Task]:
        validate_title(task.title)
        with self._lock:
            idx = self._index_of(task.id)
            if idx is None:
                logger.debug("update: no task with id=%s", task.id)
                return None
            self._tasks[idx] = task
            self.save()
            logger.debug("Updated task id=%s", task.id)
            return task

    def toggle_completion(self, task_id: str) -> Optional[Task]:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                logger.debug("toggle: no task with id=%s", task_id)
                return None
            task = self._tasks[idx].toggled()
            self._tasks[idx] = task
            self.save()
            logger.debug("Toggled task id=%s completed=%s", task_id, task.is_completed)
            return task

    def remove(self, task_id: str) -> bool:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                logger.debug("remove: no task with id=%s", task_id)
                return False
            del self._tasks[idx]
            self.save()
            logger.debug("Removed task id=%s", task_id)
            return True

    def reset(self) -> List[Task]:
        with self._lock:
            self._tasks = seed_tasks(self._today(), self._clock())
            self.save()
            logger.info("Task collection reset to example tasks")
            return list(self._tasks)


_STORES: Dict[Tuple[str, str], TaskStore] = {}


def get_task_store(storage: LocalStorage, key: str = DEFAULT_STORAGE_KEY) -> TaskStore:
    """Process-wide loaded store per storage and key, shared by all sessions."""
    cache_key = (storage.database_url, key)
    store = _STORES.get(cache_key)
    if store is None:
        store = TaskStore(storage, key=key)
        store.load()
        _STORES[cache_key] = store
    return store
