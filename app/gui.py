import streamlit as st

# MUST be the first Streamlit command
st.set_page_config(layout="wide", page_title="Portfolio")

import atexit
import logging
from concurrent.futures import ThreadPoolExecutor, wait

import streamlit.components.v1 as components

from config import LOG_LEVEL, get_site_config
from export import page_document, resume_bytes, validate_page
from pages import PAGES, get_page, mount_page, render_page, unmount_page
from store import LoadState
from temp_server import cleanup_site_server, serve_site

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("portfolio")

# Register cleanup function to run when Streamlit exits
atexit.register(cleanup_site_server)


@st.cache_resource
def get_executor() -> ThreadPoolExecutor:
    """One worker pool per server process; loads are I/O bound."""
    return ThreadPoolExecutor(max_workers=8, thread_name_prefix="content-load")


def get_config():
    config = get_site_config()
    if not config.base_path:
        # nothing deployed: fetch from the local site root through the preview server
        config = get_site_config(base_path=serve_site(config.site_root))
    return config


config = get_config()

# Initialize session state variables
if "page_slug" not in st.session_state:
    st.session_state.page_slug = None
if "page_store" not in st.session_state:
    st.session_state.page_store = None
if "page_futures" not in st.session_state:
    st.session_state.page_futures = []


def switch_page(slug: str):
    """Unmount the current page and mount `slug`, loading its collections."""
    if st.session_state.page_store is not None:
        unmount_page(st.session_state.page_store, st.session_state.page_futures)
    logger.info("Mounting page %s", slug)
    store, futures = mount_page(get_page(slug), config, get_executor())
    st.session_state.page_slug = slug
    st.session_state.page_store = store
    st.session_state.page_futures = futures


# --- Navigation ---
slugs = list(PAGES)
selected = st.sidebar.radio(
    "Page",
    options=slugs,
    format_func=lambda slug: PAGES[slug].label,
    index=slugs.index(st.session_state.page_slug) if st.session_state.page_slug in slugs else 0,
)

if selected != st.session_state.page_slug:
    switch_page(selected)
    with st.spinner("Loading content..."):
        wait(st.session_state.page_futures, timeout=config.fetch_timeout)

page = get_page(st.session_state.page_slug)
store = st.session_state.page_store
page_html = render_page(page, store, config, inline_css=True)

components.html(page_html, height=1600, scrolling=True)

# --- Load status ---
failed = {name: slot for name, slot in store.snapshot().items() if slot.state is LoadState.FAILED}
for name, slot in failed.items():
    st.sidebar.warning(f"Could not load {name}: {slot.error}")

with st.sidebar.expander("Content status"):
    for name, slot in store.snapshot().items():
        st.write(f"**{name}**: {slot.state.value} ({len(slot.collection)} records)")
    if st.button("Reload page content"):
        switch_page(page.slug)
        wait(st.session_state.page_futures, timeout=config.fetch_timeout)
        st.rerun()

# --- Downloads ---
st.sidebar.markdown("### Downloads")
resume = resume_bytes(config)
if resume is not None:
    st.sidebar.download_button("Download CV as PDF", data=resume,
                               file_name=config.resume_file, mime="application/pdf")
else:
    st.sidebar.caption("No résumé file deployed.")

if config.debug:
    issues = validate_page(page_html)
    if issues:
        with st.sidebar.expander(f"⚠️ {len(issues)} markup issue(s)"):
            for issue in issues:
                st.write(issue)
st.sidebar.download_button("Download page as HTML", data=page_document(page_html),
                           file_name=f"{page.slug}.html", mime="text/html")
