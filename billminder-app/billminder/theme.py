import os

import streamlit as st

from billminder.models import Category, Priority

# Accent colours per category, used for badges, grid icons and progress bars.
CATEGORY_COLORS = {
    Category.PERSONAL: "#3b82f6",
    Category.BUSINESS: "#8b5cf6",
    Category.BILLS: "#f97316",
    Category.TAXES: "#ef4444",
    Category.CUSTOM: "#6b7280",
}

PRIORITY_COLORS = {
    Priority.HIGH: "#ef4444",
    Priority.MEDIUM: "#f97316",
    Priority.LOW: "#3b82f6",
}


def set_theme(
    page_title: str = "Billminder",
    page_icon: str = "🗓️",
    layout: str = "centered",
    initial_sidebar_state: str = "collapsed",
):
    """Configure the Streamlit page & inject the mobile stylesheet.

    Safe to call on every script run. Streamlit only accepts the page config
    once per run; the CSS is re-injected each time.
    """
    try:
        st.set_page_config(
            page_title=page_title,
            page_icon=page_icon,
            layout=layout,
            initial_sidebar_state=initial_sidebar_state,
        )
    except Exception:
        # set_page_config can only be called once; ignore if already set.
        pass

    theme_file = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'assets', 'mobile_theme.css')

    try:
        with open(theme_file, 'r', encoding='utf-8') as f:
            css = f.read()
            st.markdown(f"<style>{css}</style>", unsafe_allow_html=True)
    except FileNotFoundError:
        st.error(f"Theme file not found at {theme_file}. Please check the file path.")


def color_for(category) -> str:
    return CATEGORY_COLORS.get(Category(category), CATEGORY_COLORS[Category.CUSTOM])


def badge_html(text: str, color: str) -> str:
    return f"<span class='bm-badge' style='background:{color}'>{text}</span>"
