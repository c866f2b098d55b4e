from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

APP_FILE = Path(__file__).resolve().parents[1] / "billminder-app" / "app.py"


@pytest.fixture()
def app(monkeypatch, db_url):
    monkeypatch.setenv("BILLMINDER_DATABASE_URL", db_url)
    at = AppTest.from_file(str(APP_FILE), default_timeout=30)
    at.run()
    return at


def test_starts_on_dashboard(app):
    assert not app.exception
    assert app.title[0].value == "Dashboard"
    assert app.subheader[0].value == "Today's Focus"


def test_tab_bar_switches_views(app):
    for key, title in (("nav-tasks", "Tasks"), ("nav-calendar", "Calendar"), ("nav-settings", "Settings")):
        app.button(key=key).click().run()
        assert not app.exception
        assert app.title[0].value == title


def test_toggle_from_task_list(app):
    app.button(key="nav-tasks").click().run()
    app.button(key="row-toggle-1").click().run()
    assert not app.exception
    shell = app.session_state["shell"]
    assert shell.store.get("1").is_completed is True


def test_add_button_opens_blank_editor(app):
    store = app.session_state["shell"].store
    before = len(store)
    app.button(key="fab-add").click().run()
    assert not app.exception
    assert app.session_state["shell"].state.editor_open
    assert app.text_input(key="editor-title").value == ""
    assert app.button(key="editor-submit").disabled is True
    assert len(store) == before


def test_category_change_resets_sub_category(app):
    app.button(key="fab-add").click().run()
    assert app.selectbox(key="editor-subcategory").value == "Health"
    app.selectbox(key="editor-category").select("Bills & Utilities").run()
    assert not app.exception
    assert app.selectbox(key="editor-subcategory").value == "Electricity"


def test_add_from_editor(app):
    store = app.session_state["shell"].store
    before = len(store)
    app.button(key="fab-add").click().run()
    app.selectbox(key="editor-category").select("Bills & Utilities").run()
    app.text_input(key="editor-title").input("Water").run()
    app.button(key="editor-submit").click().run()
    assert not app.exception

    assert len(store) == before + 1
    added = store.tasks[0]
    assert (added.title, added.category.value, added.sub_category) == ("Water", "Bills & Utilities", "Electricity")
    assert not app.session_state["shell"].state.editor_open


def test_edit_without_sub_category_stays_empty(app):
    store = app.session_state["shell"].store
    app.button(key="nav-tasks").click().run()
    app.button(key="row-open-3").click().run()
    assert app.selectbox(key="editor-subcategory").value == ""
    app.text_input(key="editor-title").input("Team Sync").run()
    app.button(key="editor-submit").click().run()
    assert not app.exception

    edited = store.get("3")
    assert edited.title == "Team Sync"
    assert edited.sub_category is None


def test_cancel_leaves_tasks_untouched(app):
    store = app.session_state["shell"].store
    before = store.tasks
    app.button(key="nav-tasks").click().run()
    app.button(key="row-open-2").click().run()
    app.text_input(key="editor-title").input("Changed").run()
    app.button(key="editor-cancel").click().run()
    assert not app.exception

    assert store.tasks == before
    assert not app.session_state["shell"].state.editor_open
