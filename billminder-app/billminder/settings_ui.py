from __future__ import annotations

from datetime import date
from typing import Callable, List

import pandas as pd
import streamlit as st

from billminder.models import Task
from billminder.shell import Intent, IntentKind
from billminder.task_store import TaskStore

Emit = Callable[[Intent], None]

EXPORT_COLUMNS = [
    "id", "title", "description", "category", "subCategory",
    "priority", "dueDate", "isCompleted", "recurring", "createdAt",
]

# Display-only device preferences; nothing here is persisted.
PREFERENCE_ROWS = [
    ("Face ID Lock", True),
    ("iCloud Sync", False),
]


def tasks_to_df(tasks: List[Task]) -> pd.DataFrame:
    if not tasks:
        return pd.DataFrame(columns=EXPORT_COLUMNS)
    df = pd.json_normalize([t.to_dict() for t in tasks])
    for col in EXPORT_COLUMNS:
        if col not in df.columns:
            df[col] = None
    return df[EXPORT_COLUMNS]


def tasks_to_csv(tasks: List[Task]) -> str:
    return tasks_to_df(tasks).to_csv(index=False)


def render_settings(store: TaskStore, emit: Emit) -> None:
    st.title("Settings")

    with st.container(border=True):
        for label, on in PREFERENCE_ROWS:
            st.toggle(label, value=on, disabled=True, key=f"pref-{label}")
        c_label, c_value = st.columns([0.6, 0.4])
        c_label.write("Dark Mode")
        c_value.caption("Automatic")

    st.markdown("<div class='bm-section'>Data</div>", unsafe_allow_html=True)
    tasks = store.tasks
    stamp = date.today().isoformat()
    with st.container(border=True):
        st.caption(f"{len(tasks)} tasks stored on this device.")
        c_json, c_csv = st.columns(2)
        with c_json:
            st.download_button(
                "Export JSON",
                data=store.export_json().encode("utf-8"),
                file_name=f"billminder-{stamp}.json",
                mime="application/json",
                key="export-json",
            )
        with c_csv:
            st.download_button(
                "Export CSV",
                data=tasks_to_csv(tasks).encode("utf-8"),
                file_name=f"billminder-{stamp}.csv",
                mime="text/csv",
                key="export-csv",
            )
        confirm = st.checkbox("Replace all tasks with the sample set", key="reset-confirm")
        st.button(
            "Restore sample tasks",
            key="reset-tasks",
            disabled=not confirm,
            on_click=emit,
            args=(Intent(IntentKind.RESET_TASKS),),
        )
