"""
Layout helpers for the Streamlit application (page config and sidebar).
"""

from __future__ import annotations

from typing import Mapping

import streamlit as st


def setup_page(title: str = "Dashboard") -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title=title,
        layout="wide",
        page_icon=":bar_chart:",
    )


def sidebar_controls(data_path: str, deploy_vars: Mapping[str, str]) -> bool:
    """Render the sidebar and return True when a refresh was requested."""
    refresh = st.sidebar.button("🔄 Refresh Data")
    st.sidebar.caption(f"Data file: `{data_path}`")
    if deploy_vars:
        # Names only; values are deployment secrets.
        st.sidebar.caption("Configured variables: " + ", ".join(sorted(deploy_vars)))
    return refresh
