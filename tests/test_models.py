from datetime import date

import pytest

from billminder.models import (
    Category,
    Priority,
    Recurrence,
    Task,
    TaskValidationError,
    first_suggestion,
    validate_title,
)

from .conftest import make_draft, make_task


def test_first_suggestion_per_category():
    assert first_suggestion(Category.PERSONAL) == "Health"
    assert first_suggestion(Category.BILLS) == "Electricity"
    assert first_suggestion(Category.TAXES) == "BIR Deadlines"
    assert first_suggestion(Category.CUSTOM) == ""


def test_validate_title_rejects_blank():
    with pytest.raises(TaskValidationError):
        validate_title("   ")
    with pytest.raises(ValueError):
        validate_title(None)
    assert validate_title("  Pay rent ") == "Pay rent"


def test_to_dict_uses_browser_record_keys():
    task = make_task("a1", sub_category="Health", recurring=Recurrence.MONTHLY)
    raw = task.to_dict()
    assert raw["dueDate"] == "2026-03-16"
    assert raw["isCompleted"] is False
    assert raw["subCategory"] == "Health"
    assert raw["recurring"] == "monthly"
    assert raw["category"] == "Personal"


def test_optional_keys_are_omitted():
    raw = make_task("a1").to_dict()
    assert "subCategory" not in raw
    assert "recurring" not in raw


def test_from_dict_reads_localstorage_record():
    raw = {
        "id": "k3j9x",
        "title": "Quarterly BIR Filing",
        "description": "Submit quarterly income tax returns for Q1.",
        "category": "Taxes & Gov",
        "subCategory": "BIR deadlines",
        "priority": "High",
        "dueDate": "2026-04-15",
        "isCompleted": False,
        "createdAt": 1773000000000,
    }
    task = Task.from_dict(raw)
    assert task.category is Category.TAXES
    assert task.priority is Priority.HIGH
    assert task.due_date == date(2026, 4, 15)
    assert task.recurring is None
    assert task.to_dict() == raw


@pytest.mark.parametrize(
    "patch",
    [
        {"category": "Groceries"},
        {"priority": "Critical"},
        {"dueDate": "soon"},
        {"title": ""},
        {"id": None},
        {"recurring": "hourly"},
    ],
)
def test_from_dict_rejects_malformed(patch):
    raw = make_task("a1").to_dict()
    raw.update(patch)
    with pytest.raises(TaskValidationError):
        Task.from_dict(raw)


def test_with_draft_keeps_identity_completion_and_recurrence():
    task = make_task("a1", done=True, recurring=Recurrence.YEARLY, created_at=42)
    edited = task.with_draft(make_draft("Renew permit", category=Category.TAXES, sub_category="LGU Fees"))
    assert edited.id == "a1"
    assert edited.created_at == 42
    assert edited.is_completed is True
    assert edited.recurring is Recurrence.YEARLY
    assert edited.title == "Renew permit"
    assert edited.category is Category.TAXES
    assert edited.sub_category == "LGU Fees"


def test_with_draft_rejects_blank_title():
    with pytest.raises(TaskValidationError):
        make_task("a1").with_draft(make_draft(" "))
