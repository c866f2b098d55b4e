import pytest

from billminder.shell import EditorMode, Intent, IntentKind, Shell, ShellState, View

from .conftest import make_draft


def test_initial_state():
    state = ShellState()
    assert state.active_view is View.DASHBOARD
    assert state.editor_mode is EditorMode.CLOSED
    assert not state.editor_open


def test_navigation_reaches_every_view(store):
    shell = Shell(store)
    for view in ("tasks", "calendar", "settings", "dashboard"):
        shell.dispatch(Intent(IntentKind.CHANGE_VIEW, view))
        assert shell.state.active_view is View(view)


def test_last_editor_intent_wins(store):
    shell = Shell(store)
    shell.dispatch(Intent(IntentKind.OPEN_EDITOR, "2"))
    assert shell.state.editor_mode is EditorMode.EDITING
    assert shell.editing_task().id == "2"

    shell.dispatch(Intent(IntentKind.OPEN_EDITOR))
    assert shell.state.editor_mode is EditorMode.ADDING
    assert shell.editing_task() is None

    shell.dispatch(Intent(IntentKind.OPEN_EDITOR, "3"))
    assert shell.state.editing_id == "3"

    shell.dispatch(Intent(IntentKind.CLOSE_EDITOR))
    assert not shell.state.editor_open


def test_open_editor_for_unknown_task_stays_closed(store):
    shell = Shell(store)
    shell.dispatch(Intent(IntentKind.OPEN_EDITOR, "ghost"))
    assert shell.state.editor_mode is EditorMode.CLOSED


def test_cancel_leaves_store_untouched(store):
    shell = Shell(store)
    before = store.tasks
    shell.dispatch(Intent(IntentKind.OPEN_EDITOR, "1"))
    shell.dispatch(Intent(IntentKind.CLOSE_EDITOR))
    assert store.tasks == before


def test_task_intents_route_to_store(store):
    shell = Shell(store)
    shell.dispatch(Intent(IntentKind.OPEN_EDITOR))
    shell.dispatch(Intent(IntentKind.ADD_TASK, make_draft("Condo dues")))
    assert store.tasks[0].title == "Condo dues"
    assert not shell.state.editor_open

    shell.dispatch(Intent(IntentKind.TOGGLE_TASK, "2"))
    assert store.get("2").is_completed is True

    shell.dispatch(Intent(IntentKind.DELETE_TASK, "2"))
    assert store.get("2") is None


def test_delete_of_edited_task_closes_editor(store):
    shell = Shell(store)
    shell.dispatch(Intent(IntentKind.OPEN_EDITOR, "1"))
    shell.dispatch(Intent(IntentKind.DELETE_TASK, "1"))
    assert not shell.state.editor_open


def test_reveal_delete_is_single_row_and_toggles(store):
    shell = Shell(store)
    shell.dispatch(Intent(IntentKind.REVEAL_DELETE, "1"))
    assert shell.state.is_revealed("1")
    shell.dispatch(Intent(IntentKind.REVEAL_DELETE, "2"))
    assert shell.state.is_revealed("2") and not shell.state.is_revealed("1")
    shell.dispatch(Intent(IntentKind.REVEAL_DELETE, "2"))
    assert shell.state.revealed_row is None


def test_reveal_resets_on_navigation_and_delete(store):
    shell = Shell(store)
    shell.dispatch(Intent(IntentKind.REVEAL_DELETE, "1"))
    shell.dispatch(Intent(IntentKind.CHANGE_VIEW, "settings"))
    assert shell.state.revealed_row is None

    shell.dispatch(Intent(IntentKind.REVEAL_DELETE, "3"))
    shell.dispatch(Intent(IntentKind.DELETE_TASK, "3"))
    assert shell.state.revealed_row is None


def test_noop_lookups_do_not_raise(store):
    shell = Shell(store)
    shell.dispatch(Intent(IntentKind.TOGGLE_TASK, "missing"))
    shell.dispatch(Intent(IntentKind.DELETE_TASK, "missing"))
    assert len(store) == 3


def test_reset_intent(store):
    shell = Shell(store)
    shell.dispatch(Intent(IntentKind.DELETE_TASK, "1"))
    shell.dispatch(Intent(IntentKind.RESET_TASKS))
    assert [t.id for t in store.tasks] == ["1", "2", "3"]


def test_bad_intents_raise(store):
    shell = Shell(store)
    with pytest.raises(ValueError):
        shell.dispatch(Intent("launch_rocket"))
    with pytest.raises(ValueError):
        shell.dispatch(Intent(IntentKind.ADD_TASK, {"title": "not a draft"}))
    with pytest.raises(ValueError):
        shell.dispatch(Intent(IntentKind.CHANGE_VIEW, "inbox"))
