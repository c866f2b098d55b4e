from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

import pytest

from billminder.models import Category, Priority, Task, TaskDraft
from billminder.storage import LocalStorage
from billminder.task_store import TaskStore

TODAY = date(2026, 3, 16)
NOW_MS = 1_773_000_000_000


def make_task(task_id: str, *, due: date = TODAY, done: bool = False, **kw) -> Task:
    return Task(
        id=task_id,
        title=kw.pop("title", f"Task {task_id}"),
        description=kw.pop("description", ""),
        category=kw.pop("category", Category.PERSONAL),
        priority=kw.pop("priority", Priority.MEDIUM),
        due_date=due,
        is_completed=done,
        created_at=kw.pop("created_at", NOW_MS),
        **kw,
    )


def make_draft(title: str = "Pay water bill", **kw) -> TaskDraft:
    kw.setdefault("category", Category.BILLS)
    kw.setdefault("sub_category", "Water")
    kw.setdefault("due_date", TODAY + timedelta(days=5))
    return TaskDraft(title=title, **kw)


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{(tmp_path / 'billminder.db').as_posix()}"


@pytest.fixture()
def storage(db_url: str):
    s = LocalStorage(db_url)
    yield s
    s.dispose()


@pytest.fixture()
def store(storage: LocalStorage) -> TaskStore:
    """Loaded store over an empty storage, i.e. holding the seed set."""
    s = TaskStore(storage, today=lambda: TODAY, clock=lambda: NOW_MS)
    s.load()
    return s
