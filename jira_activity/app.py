"""Application entry point: page registry and router."""

from __future__ import annotations

import streamlit as st

PAGES = {}

SETUP_PAGE = "Setup / Connection"
PREFERRED_ORDER = ["Activity Report", SETUP_PAGE]


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def ordered_pages(labels, initialized: bool) -> tuple[list[str], int]:
    """Return page labels in display order and the index to select by default.

    Setup is preselected until a plugin has been initialized.
    """
    ordered = [name for name in PREFERRED_ORDER if name in labels]
    ordered += sorted(name for name in labels if name not in PREFERRED_ORDER)
    if SETUP_PAGE in ordered and not initialized:
        return ordered, ordered.index(SETUP_PAGE)
    return ordered, 0


def main():
    st.sidebar.title("Jira Activity Report")
    if not PAGES:
        st.write("No pages registered yet.")
        return
    pages, default = ordered_pages(list(PAGES), "activity_plugin" in st.session_state)
    page = st.sidebar.selectbox("Page", pages, index=default)
    PAGES[page]()


if __name__ == "__main__":
    main()
