from __future__ import annotations

import html
from datetime import date
from typing import Callable, List, Optional, Sequence

import plotly.graph_objects as go
import streamlit as st

from billminder.models import Category, Task
from billminder.shell import Intent, IntentKind
from billminder.theme import badge_html, color_for
from billminder.views import (
    CategoryStats,
    category_badge,
    category_stats,
    format_long_date,
    is_urgent,
    split_due,
)

Emit = Callable[[Intent], None]

CATEGORY_ICONS = {
    Category.PERSONAL: "▦",
    Category.BUSINESS: "☰",
    Category.BILLS: "📅",
    Category.TAXES: "✓",
}


def stat_card_html(stats: CategoryStats) -> str:
    color = color_for(stats.category)
    icon = CATEGORY_ICONS.get(stats.category, "•")
    return (
        "<div class='bm-stat'>"
        "<div class='bm-stat-top'>"
        f"<div class='bm-stat-icon' style='background:{color}'>{icon}</div>"
        f"<span class='bm-stat-total'>{stats.total}</span>"
        "</div>"
        f"<div class='bm-stat-label'>{html.escape(stats.category.value)}</div>"
        f"<div class='bm-bar'><div class='bm-bar-fill' style='width:{stats.percentage:.0f}%;background:{color}'></div></div>"
        "</div>"
    )


def completion_figure(stats: Sequence[CategoryStats]) -> go.Figure:
    labels = [s.category.value for s in stats]
    fig = go.Figure(
        go.Bar(
            x=[round(s.percentage, 1) for s in stats],
            y=labels,
            orientation="h",
            marker_color=[color_for(s.category) for s in stats],
            text=[f"{s.completed}/{s.total}" for s in stats],
            textposition="auto",
            hovertemplate="%{y}: %{x:.0f}% done<extra></extra>",
        )
    )
    fig.update_layout(
        height=200,
        margin=dict(l=0, r=0, t=10, b=0),
        xaxis=dict(range=[0, 100], ticksuffix="%", showgrid=False),
        yaxis=dict(autorange="reversed"),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def _focus_card(task: Task, emit: Emit) -> None:
    with st.container(border=True):
        c_check, c_body, c_open = st.columns([0.14, 0.72, 0.14], vertical_alignment="center")
        with c_check:
            st.button(
                "✓" if task.is_completed else "○",
                key=f"dash-toggle-{task.id}",
                help="Mark as done",
                on_click=emit,
                args=(Intent(IntentKind.TOGGLE_TASK, task.id),),
            )
        with c_body:
            title_cls = "bm-task-title bm-task-done" if task.is_completed else "bm-task-title"
            badges = badge_html(category_badge(task.category), color_for(task.category))
            if is_urgent(task):
                badges += "<span class='bm-urgent'>Urgent</span>"
            st.markdown(
                f"<p class='{title_cls}'>{html.escape(task.title)}</p><div>{badges}</div>",
                unsafe_allow_html=True,
            )
        with c_open:
            st.button(
                "›",
                key=f"dash-open-{task.id}",
                help="Edit task",
                on_click=emit,
                args=(Intent(IntentKind.OPEN_EDITOR, task.id),),
            )


def render_dashboard(tasks: List[Task], emit: Emit, today: Optional[date] = None) -> None:
    today = today or date.today()
    due = split_due(tasks, today)
    stats = category_stats(tasks)

    st.markdown(f"<p class='bm-date'>{format_long_date(today)}</p>", unsafe_allow_html=True)
    st.title("Dashboard")

    if due.overdue:
        st.markdown(
            "<div class='bm-alert'><div class='bm-alert-icon'>!</div><div>"
            f"<div class='bm-alert-title'>{len(due.overdue)} Overdue Tasks</div>"
            "<div class='bm-alert-text'>Priority items need your immediate attention.</div>"
            "</div></div>",
            unsafe_allow_html=True,
        )

    for row in range(0, len(stats), 2):
        cols = st.columns(2)
        for col, s in zip(cols, stats[row:row + 2]):
            with col:
                st.markdown(stat_card_html(s), unsafe_allow_html=True)

    if any(s.total for s in stats):
        with st.expander("Completion by category", expanded=False):
            st.plotly_chart(completion_figure(stats), config={"displayModeBar": False}, key="dash-completion")

    h_left, h_right = st.columns([0.7, 0.3], vertical_alignment="bottom")
    with h_left:
        st.subheader("Today's Focus")
    with h_right:
        st.button(
            "View All",
            key="dash-view-all",
            type="tertiary",
            on_click=emit,
            args=(Intent(IntentKind.CHANGE_VIEW, "tasks"),),
        )

    if not due.today:
        st.markdown(
            "<div class='bm-empty'>No tasks for today. You're all caught up!</div>",
            unsafe_allow_html=True,
        )
        return
    for task in due.today:
        _focus_card(task, emit)
