"""Task record and the enumerations it is built from.

Tasks are serialized with the same camelCase record keys as the localStorage export
so an exported localStorage blob loads unchanged.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class TaskValidationError(ValueError):
    """Raised for a task record or draft that cannot be accepted."""


class Category(str, Enum):
    PERSONAL = "Personal"
    BUSINESS = "Business"
    BILLS = "Bills & Utilities"
    TAXES = "Taxes & Gov"
    CUSTOM = "Custom"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Recurrence(str, Enum):
    # Stored and round-tripped only; nothing expands recurring tasks.
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


SUBCATEGORY_SUGGESTIONS: Dict[Category, List[str]] = {
    Category.PERSONAL: ["Health", "Social", "Admin"],
    Category.BUSINESS: ["Meetings", "Operations", "Strategy"],
    Category.BILLS: ["Electricity", "Water", "Internet", "Credit Card"],
    Category.TAXES: ["BIR Deadlines", "Annual Tax", "LGU Fees"],
    Category.CUSTOM: [],
}


def first_suggestion(category: Category) -> str:
    suggestions = SUBCATEGORY_SUGGESTIONS.get(Category(category), [])
    return suggestions[0] if suggestions else ""


def validate_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise TaskValidationError("Task title must not be empty")
    return cleaned


def _parse_enum(enum_cls, raw: Any, field_name: str):
    try:
        return enum_cls(raw)
    except ValueError:
        raise TaskValidationError(f"Invalid {field_name}: {raw!r}") from None


def _parse_date(raw: Any) -> date:
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise TaskValidationError(f"Invalid dueDate: {raw!r}")
    try:
        # Accept full ISO timestamps as well as plain dates.
        return date.fromisoformat(raw.strip()[:10])
    except ValueError:
        raise TaskValidationError(f"Invalid dueDate: {raw!r}") from None


@dataclass(frozen=True)
class TaskDraft:
    """Editor output: a task without id, completion flag or creation time."""

    title: str
    description: str = ""
    category: Category = Category.PERSONAL
    sub_category: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    due_date: date = field(default_factory=date.today)
    recurring: Optional[Recurrence] = None


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    description: str
    category: Category
    priority: Priority
    due_date: date
    is_completed: bool = False
    created_at: int = 0
    sub_category: Optional[str] = None
    recurring: Optional[Recurrence] = None

    @classmethod
    def from_draft(cls, draft: TaskDraft, *, task_id: str, created_at: int) -> "Task":
        return cls(
            id=task_id,
            title=validate_title(draft.title),
            description=draft.description or "",
            category=Category(draft.category),
            priority=Priority(draft.priority),
            due_date=draft.due_date,
            is_completed=False,
            created_at=created_at,
            sub_category=draft.sub_category or None,
            recurring=draft.recurring,
        )

    def with_draft(self, draft: TaskDraft) -> "Task":
        """Full edit: every field except id, creation time and completion."""
        return dataclasses.replace(
            self,
            title=validate_title(draft.title),
            description=draft.description or "",
            category=Category(draft.category),
            sub_category=draft.sub_category or None,
            priority=Priority(draft.priority),
            due_date=draft.due_date,
            recurring=draft.recurring if draft.recurring is not None else self.recurring,
        )

    def toggled(self) -> "Task":
        return dataclasses.replace(self, is_completed=not self.is_completed)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "priority": self.priority.value,
            "dueDate": self.due_date.isoformat(),
            "isCompleted": bool(self.is_completed),
            "createdAt": int(self.created_at),
        }
        if self.sub_category:
            out["subCategory"] = self.sub_category
        if self.recurring is not None:
            out["recurring"] = self.recurring.value
        return out

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        if not isinstance(raw, Mapping):
            raise TaskValidationError(f"Task record must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        if task_id is None or str(task_id).strip() == "":
            raise TaskValidationError("Task record is missing an id")

        title = raw.get("title")
        if not isinstance(title, str) or not title.strip():
            raise TaskValidationError(f"Task {task_id!r} has no title")

        recurring_raw = raw.get("recurring")
        created_raw = raw.get("createdAt", 0)
        try:
            created_at = int(created_raw or 0)
        except (TypeError, ValueError):
            raise TaskValidationError(f"Invalid createdAt: {created_raw!r}") from None

        return cls(
            id=str(task_id),
            title=title,
            description=str(raw.get("description") or ""),
            category=_parse_enum(Category, raw.get("category"), "category"),
            priority=_parse_enum(Priority, raw.get("priority"), "priority"),
            due_date=_parse_date(raw.get("dueDate")),
            is_completed=bool(raw.get("isCompleted", False)),
            created_at=created_at,
            sub_category=(str(raw["subCategory"]) if raw.get("subCategory") else None),
            recurring=(_parse_enum(Recurrence, recurring_raw, "recurring") if recurring_raw else None),
        )
