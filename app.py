import monodash.bootstrap_env  # must be first to set env/secrets
import streamlit as st

from monodash.config import TABS, Settings, get_secret
from monodash.data.loader import DatasetCache
from monodash.logging_setup import configure_logging
from monodash.ui.layout import setup_page, sidebar_controls
from monodash.ui.pages import data_quality, summary
from monodash.ui.surface import StreamlitSurface


@st.cache_resource
def _dataset_cache(ttl: float | None) -> DatasetCache:
    return DatasetCache(ttl=ttl)


def main() -> None:
    configure_logging(get_secret("LOG_LEVEL"))
    settings = Settings.load()
    setup_page()
    st.title("Dashboard")

    cache = _dataset_cache(settings.cache_ttl)
    if sidebar_controls(str(settings.output_path), settings.deploy_vars):
        cache.clear(settings.output_path)

    surface = StreamlitSurface()
    result = cache.load(settings.output_path)

    renderers = {
        "summary": lambda: summary.render(surface, result),
        "data_quality": lambda: data_quality.render(surface, result.data),
    }

    if not result.ok:
        # Stops the script run after reporting the failure.
        summary.render(surface, result)
        return

    streamlit_tabs = st.tabs([tab.label for tab in TABS])
    for streamlit_tab, tab_config in zip(streamlit_tabs, TABS):
        renderer = renderers.get(tab_config.key)
        if renderer is None:
            continue
        with streamlit_tab:
            renderer()


if __name__ == "__main__":
    main()
