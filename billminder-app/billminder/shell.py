"""App shell: which view is active, which editor is open, and intent routing.

Presentation code never touches the task store. It emits an ``Intent`` and
``Shell.dispatch`` applies it to the store and the shell state.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from billminder.models import Task, TaskDraft
from billminder.task_store import TaskStore

logger = logging.getLogger(__name__)


class View(str, Enum):
    DASHBOARD = "dashboard"
    TASKS = "tasks"
    CALENDAR = "calendar"
    SETTINGS = "settings"


# (view, tab label, icon)
NAV_ITEMS: List[Tuple[View, str, str]] = [
    (View.DASHBOARD, "Summary", "▦"),
    (View.TASKS, "Tasks", "☰"),
    (View.CALENDAR, "Events", "📅"),
    (View.SETTINGS, "Settings", "⚙"),
]


class EditorMode(str, Enum):
    CLOSED = "closed"
    ADDING = "adding"
    EDITING = "editing"


class IntentKind(str, Enum):
    ADD_TASK = "add_task"
    UPDATE_TASK = "update_task"
    TOGGLE_TASK = "toggle_task"
    DELETE_TASK = "delete_task"
    CHANGE_VIEW = "change_view"
    OPEN_EDITOR = "open_editor"
    CLOSE_EDITOR = "close_editor"
    REVEAL_DELETE = "reveal_delete"
    RESET_TASKS = "reset_tasks"


@dataclass(frozen=True)
class Intent:
    kind: IntentKind
    payload: Any = None


@dataclass
class ShellState:
    active_view: View = View.DASHBOARD
    editor_mode: EditorMode = EditorMode.CLOSED
    editing_id: Optional[str] = None
    # Row whose delete action is revealed (swipe, click or key); at most one.
    revealed_row: Optional[str] = None

    @property
    def editor_open(self) -> bool:
        return self.editor_mode != EditorMode.CLOSED

    def navigate(self, view: View) -> None:
        self.active_view = View(view)
        self.revealed_row = None

    def open_add(self) -> None:
        # Last intent wins: opening replaces whatever editor was open.
        self.editor_mode = EditorMode.ADDING
        self.editing_id = None

    def open_edit(self, task_id: str) -> None:
        self.editor_mode = EditorMode.EDITING
        self.editing_id = task_id

    def close_editor(self) -> None:
        self.editor_mode = EditorMode.CLOSED
        self.editing_id = None

    def reveal_delete(self, task_id: Optional[str]) -> None:
        self.revealed_row = None if task_id == self.revealed_row else task_id

    def hide_delete(self) -> None:
        self.revealed_row = None

    def is_revealed(self, task_id: str) -> bool:
        return self.revealed_row == task_id


class Shell:
    def __init__(self, store: TaskStore, state: Optional[ShellState] = None) -> None:
        self.store = store
        self.state = state or ShellState()

    def editing_task(self) -> Optional[Task]:
        if self.state.editor_mode != EditorMode.EDITING or not self.state.editing_id:
            return None
        return self.store.get(self.state.editing_id)

    def dispatch(self, intent: Intent) -> None:
        kind = IntentKind(intent.kind)
        payload = intent.payload
        logger.debug("dispatch %s", kind.value)

        if kind == IntentKind.ADD_TASK:
            if not isinstance(payload, TaskDraft):
                raise ValueError("add_task expects a TaskDraft")
            self.store.add(payload)
            self.state.close_editor()
        elif kind == IntentKind.UPDATE_TASK:
            if not isinstance(payload, Task):
                raise ValueError("update_task expects a Task")
            self.store.update(payload)
            self.state.close_editor()
        elif kind == IntentKind.TOGGLE_TASK:
            self.store.toggle_completion(str(payload))
        elif kind == IntentKind.DELETE_TASK:
            task_id = str(payload)
            self.store.remove(task_id)
            if self.state.revealed_row == task_id:
                self.state.hide_delete()
            if self.state.editing_id == task_id:
                self.state.close_editor()
        elif kind == IntentKind.CHANGE_VIEW:
            self.state.navigate(View(payload))
        elif kind == IntentKind.OPEN_EDITOR:
            if payload is None:
                self.state.open_add()
            elif self.store.get(str(payload)) is None:
                logger.debug("open_editor: no task with id=%s", payload)
                self.state.close_editor()
            else:
                self.state.open_edit(str(payload))
        elif kind == IntentKind.CLOSE_EDITOR:
            self.state.close_editor()
        elif kind == IntentKind.REVEAL_DELETE:
            self.state.reveal_delete(payload)
        elif kind == IntentKind.RESET_TASKS:
            self.store.reset()
            self.state.close_editor()
            self.state.hide_delete()
        else:  # pragma: no cover - IntentKind() already rejects unknown kinds
            raise ValueError(f"Unhandled intent: {kind}")
