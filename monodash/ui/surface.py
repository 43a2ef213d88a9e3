"""
Display surface used by the page renderers.

Pages only talk to a `DisplaySurface`; `StreamlitSurface` binds it to the
running Streamlit script.
"""

from __future__ import annotations

from typing import Protocol

import pandas as pd
import streamlit as st


class DisplaySurface(Protocol):
    def heading(self, text: str) -> None: ...

    def info(self, text: str) -> None: ...

    def success(self, text: str) -> None: ...

    def warning(self, text: str) -> None: ...

    def table(self, df: pd.DataFrame) -> None: ...

    def error(self, text: str) -> None: ...

    def halt(self) -> None: ...


class StreamlitSurface:
    def heading(self, text: str) -> None:
        st.subheader(text)

    def info(self, text: str) -> None:
        st.write(text)

    def success(self, text: str) -> None:
        st.success(text)

    def warning(self, text: str) -> None:
        st.warning(text)

    def table(self, df: pd.DataFrame) -> None:
        st.dataframe(df, use_container_width=True)

    def error(self, text: str) -> None:
        st.error(text)

    def halt(self) -> None:
        # Raises Streamlit's StopException; nothing after this call renders.
        st.stop()
