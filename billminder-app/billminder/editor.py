"""Modal task editor.

``EditorForm`` holds the in-progress values and the submission rules; the
Streamlit dialog only maps it to widgets. Cancel drops the form without
touching the store.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, MutableMapping, Optional

import streamlit as st

from billminder.models import (
    SUBCATEGORY_SUGGESTIONS,
    Category,
    Priority,
    Task,
    TaskDraft,
    first_suggestion,
    validate_title,
)
from billminder.shell import EditorMode, Intent, IntentKind, Shell

KEY_TITLE = "editor-title"
KEY_DESCRIPTION = "editor-description"
KEY_CATEGORY = "editor-category"
KEY_SUBCATEGORY = "editor-subcategory"
KEY_SUBCATEGORY_CUSTOM = "editor-subcategory-custom"
KEY_PRIORITY = "editor-priority"
KEY_DUE = "editor-due"
# Which editor the widget keys were seeded for ("add" or "edit:<id>").
KEY_TOKEN = "editor-for"


@dataclass
class EditorForm:
    title: str = ""
    description: str = ""
    category: Category = Category.PERSONAL
    sub_category: str = ""
    priority: Priority = Priority.MEDIUM
    due_date: date = field(default_factory=date.today)
    editing_id: Optional[str] = None

    @classmethod
    def blank(cls, today: Optional[date] = None) -> "EditorForm":
        return cls(
            category=Category.PERSONAL,
            sub_category=first_suggestion(Category.PERSONAL),
            due_date=today or date.today(),
        )

    @classmethod
    def from_task(cls, task: Task) -> "EditorForm":
        return cls(
            title=task.title,
            description=task.description,
            category=task.category,
            sub_category=task.sub_category or "",
            priority=task.priority,
            due_date=task.due_date,
            editing_id=task.id,
        )

    @property
    def is_edit(self) -> bool:
        return self.editing_id is not None

    @property
    def heading(self) -> str:
        return "Edit Task" if self.is_edit else "New Task"

    @property
    def submit_label(self) -> str:
        return "Update" if self.is_edit else "Add"

    def change_category(self, category: Category) -> None:
        self.category = Category(category)
        self.sub_category = first_suggestion(self.category)

    def sub_category_options(self) -> List[str]:
        options = list(SUBCATEGORY_SUGGESTIONS.get(self.category, []))
        if options and self.sub_category and self.sub_category not in options:
            # Keep a stored value that is not (or no longer) a suggestion.
            options.insert(0, self.sub_category)
        if options and self.is_edit:
            # An edited task may have no sub-category; "" keeps that choice.
            options.insert(0, "")
        return options

    def can_submit(self) -> bool:
        return bool(self.title.strip())

    def to_draft(self) -> TaskDraft:
        return TaskDraft(
            title=validate_title(self.title),
            description=self.description.strip(),
            category=self.category,
            sub_category=self.sub_category.strip() or None,
            priority=self.priority,
            due_date=self.due_date,
        )


def submit_editor(shell: Shell, form: EditorForm) -> bool:
    """Emit the form to the shell; returns False when submission is blocked."""
    if not form.can_submit():
        return False
    draft = form.to_draft()
    if form.is_edit:
        existing = shell.store.get(form.editing_id)
        if existing is None:
            shell.dispatch(Intent(IntentKind.CLOSE_EDITOR))
            return False
        shell.dispatch(Intent(IntentKind.UPDATE_TASK, existing.with_draft(draft)))
    else:
        shell.dispatch(Intent(IntentKind.ADD_TASK, draft))
    return True


def seed_widget_state(state: MutableMapping[str, Any], form: EditorForm) -> None:
    state[KEY_TITLE] = form.title
    state[KEY_DESCRIPTION] = form.description
    state[KEY_CATEGORY] = form.category.value
    state[KEY_PRIORITY] = form.priority.value
    state[KEY_DUE] = form.due_date
    write_sub_category(state, form)


def write_sub_category(state: MutableMapping[str, Any], form: EditorForm) -> None:
    if SUBCATEGORY_SUGGESTIONS.get(form.category):
        state[KEY_SUBCATEGORY] = form.sub_category
        state[KEY_SUBCATEGORY_CUSTOM] = ""
    else:
        state[KEY_SUBCATEGORY] = ""
        state[KEY_SUBCATEGORY_CUSTOM] = form.sub_category


def read_widget_state(state: MutableMapping[str, Any], editing_id: Optional[str] = None) -> EditorForm:
    category = Category(state.get(KEY_CATEGORY) or Category.PERSONAL.value)
    if SUBCATEGORY_SUGGESTIONS.get(category):
        sub_category = state.get(KEY_SUBCATEGORY) or ""
    else:
        sub_category = state.get(KEY_SUBCATEGORY_CUSTOM) or ""
    due = state.get(KEY_DUE)
    return EditorForm(
        title=state.get(KEY_TITLE) or "",
        description=state.get(KEY_DESCRIPTION) or "",
        category=category,
        sub_category=sub_category,
        priority=Priority(state.get(KEY_PRIORITY) or Priority.MEDIUM.value),
        due_date=due if isinstance(due, date) else date.today(),
        editing_id=editing_id,
    )


def _on_category_change() -> None:
    form = read_widget_state(st.session_state)
    form.change_category(form.category)
    write_sub_category(st.session_state, form)


def _editor_body(shell: Shell, editing_id: Optional[str]) -> None:
    form = read_widget_state(st.session_state, editing_id)

    st.text_input(
        "Title",
        key=KEY_TITLE,
        placeholder="What needs to be done?",
        label_visibility="collapsed",
    )
    st.text_area(
        "Notes",
        key=KEY_DESCRIPTION,
        placeholder="Add notes or descriptions...",
        label_visibility="collapsed",
        height=90,
    )
    st.divider()

    st.selectbox(
        "Category",
        options=[c.value for c in Category],
        key=KEY_CATEGORY,
        on_change=_on_category_change,
    )
    options = form.sub_category_options()
    if options:
        st.selectbox(
            "Sub-category",
            options=options,
            key=KEY_SUBCATEGORY,
            format_func=lambda v: v or "None",
        )
    else:
        st.text_input("Sub-category", key=KEY_SUBCATEGORY_CUSTOM, placeholder="Optional")
    st.date_input("Due Date", key=KEY_DUE)
    st.radio(
        "Priority",
        options=[p.value for p in Priority],
        key=KEY_PRIORITY,
        horizontal=True,
    )

    # Re-read so the submit control reflects this run's widget values.
    form = read_widget_state(st.session_state, editing_id)
    c_cancel, c_submit = st.columns(2)
    with c_cancel:
        if st.button("Cancel", key="editor-cancel", width="stretch"):
            shell.dispatch(Intent(IntentKind.CLOSE_EDITOR))
            st.rerun()
    with c_submit:
        if st.button(
            form.submit_label,
            key="editor-submit",
            type="primary",
            disabled=not form.can_submit(),
            width="stretch",
        ):
            submit_editor(shell, form)
            st.rerun()


def render_editor(shell: Shell) -> None:
    """Open the editor dialog when the shell says one is open."""
    state = shell.state
    if not state.editor_open:
        st.session_state.pop(KEY_TOKEN, None)
        return

    task = shell.editing_task()
    if state.editor_mode == EditorMode.EDITING and task is None:
        state.close_editor()
        st.session_state.pop(KEY_TOKEN, None)
        return

    token = f"edit:{task.id}" if task is not None else "add"
    if st.session_state.get(KEY_TOKEN) != token:
        form = EditorForm.from_task(task) if task is not None else EditorForm.blank()
        seed_widget_state(st.session_state, form)
        st.session_state[KEY_TOKEN] = token

    heading = "Edit Task" if task is not None else "New Task"
    dialog = st.dialog(heading, dismissible=False)(_editor_body)
    dialog(shell, task.id if task is not None else None)
