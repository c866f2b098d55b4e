from __future__ import annotations

import html
from typing import Callable, List

import streamlit as st

from billminder.models import Category, Task
from billminder.shell import Intent, IntentKind, ShellState
from billminder.theme import PRIORITY_COLORS
from billminder.views import ALL_CATEGORIES, filter_tasks, group_by_completion

Emit = Callable[[Intent], None]

KEY_SEARCH = "tasks-search"
KEY_FILTER = "tasks-filter"
FILTER_OPTIONS = [ALL_CATEGORIES] + [c.value for c in Category]


def row_html(task: Task) -> str:
    title_cls = "bm-task-title bm-task-done" if task.is_completed else "bm-task-title"
    color = PRIORITY_COLORS.get(task.priority, "#3b82f6")
    label = task.sub_category or task.category.value
    return (
        f"<span class='bm-priority' style='color:{color}'>{task.priority.value}</span>"
        f"<p class='{title_cls}'>{html.escape(task.title)}</p>"
        f"<p class='bm-task-desc'>{html.escape(task.description)}</p>"
        f"<div class='bm-task-meta'>{task.due_date.isoformat()} &middot; <b>{html.escape(label)}</b></div>"
    )


def _task_row(task: Task, state: ShellState, emit: Emit) -> None:
    revealed = state.is_revealed(task.id)
    with st.container(border=True):
        if revealed:
            c_check, c_body, c_more, c_del = st.columns([0.13, 0.55, 0.12, 0.2], vertical_alignment="center")
        else:
            c_check, c_body, c_more = st.columns([0.13, 0.75, 0.12], vertical_alignment="center")
        with c_check:
            st.button(
                "✓" if task.is_completed else "○",
                key=f"row-toggle-{task.id}",
                on_click=emit,
                args=(Intent(IntentKind.TOGGLE_TASK, task.id),),
            )
        with c_body:
            st.markdown(row_html(task), unsafe_allow_html=True)
            st.button(
                "Edit",
                key=f"row-open-{task.id}",
                type="tertiary",
                on_click=emit,
                args=(Intent(IntentKind.OPEN_EDITOR, task.id),),
            )
        with c_more:
            st.button(
                "‹" if not revealed else "›",
                key=f"row-reveal-{task.id}",
                help="Show delete" if not revealed else "Hide delete",
                on_click=emit,
                args=(Intent(IntentKind.REVEAL_DELETE, task.id),),
            )
        if revealed:
            with c_del:
                st.button(
                    "🗑",
                    key=f"row-delete-{task.id}",
                    type="primary",
                    help="Delete task",
                    on_click=emit,
                    args=(Intent(IntentKind.DELETE_TASK, task.id),),
                )


def render_task_list(tasks: List[Task], state: ShellState, emit: Emit) -> None:
    st.title("Tasks")
    search = st.text_input(
        "Search",
        key=KEY_SEARCH,
        placeholder="Search activities, bills...",
        label_visibility="collapsed",
    )
    picked = st.pills(
        "Category",
        options=FILTER_OPTIONS,
        default=ALL_CATEGORIES,
        key=KEY_FILTER,
        label_visibility="collapsed",
    )

    visible = filter_tasks(tasks, picked or ALL_CATEGORIES, search or "")
    grouped = group_by_completion(visible)

    if grouped.pending:
        st.markdown("<div class='bm-section'>In Progress</div>", unsafe_allow_html=True)
        for task in grouped.pending:
            _task_row(task, state, emit)

    if grouped.completed:
        st.markdown("<div class='bm-section'>Completed</div>", unsafe_allow_html=True)
        for task in grouped.completed:
            _task_row(task, state, emit)

    if not visible:
        st.markdown(
            "<div class='bm-empty'><div style='font-size:2rem'>🗒️</div>No tasks found in this category.</div>",
            unsafe_allow_html=True,
        )
