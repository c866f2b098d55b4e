"""Read-only projections of the task collection used by the views.

All functions are pure and recompute from the full collection; the data set
is tens to low hundreds of tasks.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Union

from billminder.models import Category, Priority, Task

ALL_CATEGORIES = "All"
DASHBOARD_CATEGORIES = (Category.PERSONAL, Category.BUSINESS, Category.BILLS, Category.TAXES)


@dataclass(frozen=True)
class DueSplit:
    today: List[Task]
    overdue: List[Task]


@dataclass(frozen=True)
class CategoryStats:
    category: Category
    total: int
    completed: int

    @property
    def percentage(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.completed / self.total * 100.0


@dataclass(frozen=True)
class Grouped:
    pending: List[Task]
    completed: List[Task]


def split_due(tasks: Sequence[Task], today: Optional[date] = None) -> DueSplit:
    today = today or date.today()
    due_today = [t for t in tasks if t.due_date == today and not t.is_completed]
    overdue = [t for t in tasks if t.due_date < today and not t.is_completed]
    return DueSplit(today=due_today, overdue=overdue)


def category_stats(
    tasks: Sequence[Task],
    categories: Sequence[Category] = DASHBOARD_CATEGORIES,
) -> List[CategoryStats]:
    out: List[CategoryStats] = []
    for cat in categories:
        in_cat = [t for t in tasks if t.category == cat]
        done = sum(1 for t in in_cat if t.is_completed)
        out.append(CategoryStats(category=cat, total=len(in_cat), completed=done))
    return out


def filter_tasks(
    tasks: Sequence[Task],
    category: Union[Category, str, None] = ALL_CATEGORIES,
    search: str = "",
) -> List[Task]:
    """Tasks matching both the category filter and the search term."""
    needle = (search or "").lower()
    wanted = None if category in (None, ALL_CATEGORIES) else Category(category)

    def matches(t: Task) -> bool:
        if wanted is not None and t.category != wanted:
            return False
        return needle in t.title.lower() or needle in t.description.lower()

    return [t for t in tasks if matches(t)]


def group_by_completion(tasks: Sequence[Task]) -> Grouped:
    return Grouped(
        pending=[t for t in tasks if not t.is_completed],
        completed=[t for t in tasks if t.is_completed],
    )


def is_urgent(task: Task) -> bool:
    return task.priority == Priority.HIGH


def category_badge(category: Category) -> str:
    return Category(category).value.split(" ")[0]


def format_long_date(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"{day.strftime('%A')}, {day.strftime('%B')} {day.day}"
