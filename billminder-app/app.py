import streamlit as st

from billminder.config import AppConfig
from billminder.dashboard_ui import render_dashboard
from billminder.editor import render_editor
from billminder.logging_setup import setup_logging
from billminder.settings_ui import render_settings
from billminder.shell import NAV_ITEMS, Intent, IntentKind, Shell, View
from billminder.storage import get_storage
from billminder.task_list_ui import render_task_list
from billminder.task_store import get_task_store
from billminder.theme import set_theme

config = AppConfig.from_env()
setup_logging(console_level=config.log_level, log_dir=config.log_dir)
set_theme(page_title=config.page_title)

# ----- Initialize session state -----
if "shell" not in st.session_state:
    store = get_task_store(get_storage(config.database_url), config.storage_key)
    st.session_state.shell = Shell(store)

shell: Shell = st.session_state.shell
emit = shell.dispatch
tasks = shell.store.tasks
view = shell.state.active_view

# ----- Active view -----
if view == View.DASHBOARD:
    render_dashboard(tasks, emit)
elif view == View.TASKS:
    render_task_list(tasks, shell.state, emit)
elif view == View.CALENDAR:
    st.title("Calendar")
    st.markdown(
        "<div class='bm-empty'>Calendar view implementation coming soon.</div>",
        unsafe_allow_html=True,
    )
elif view == View.SETTINGS:
    render_settings(shell.store, emit)

# ----- Floating add button -----
with st.container(key="bm-fab"):
    st.button(
        "＋",
        key="fab-add",
        help="New task",
        on_click=emit,
        args=(Intent(IntentKind.OPEN_EDITOR),),
    )

# ----- Tab bar -----
with st.container(key="bm-tabbar"):
    cols = st.columns(len(NAV_ITEMS))
    for col, (item_view, label, icon) in zip(cols, NAV_ITEMS):
        with col:
            st.button(
                f"{icon}\n\n{label}",
                key=f"nav-{item_view.value}",
                type="primary" if item_view == view else "secondary",
                width="stretch",
                on_click=emit,
                args=(Intent(IntentKind.CHANGE_VIEW, item_view.value),),
            )

render_editor(shell)
