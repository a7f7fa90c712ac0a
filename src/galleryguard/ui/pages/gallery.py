"""Protected gallery page."""

import asyncio
import time

import streamlit as st
import structlog

from galleryguard.config import get_protection_locale
from galleryguard.messages import get_notices
from galleryguard.models.protection import Gallery
from galleryguard.platform.bridge import BrowserEventBridge
from galleryguard.platform.events import InMemoryEventSource
from galleryguard.services.protected_image import ProtectedImage
from galleryguard.services.scheduler import ManualScheduler
from galleryguard.ui.components.protected_image import render_protected_image
from galleryguard.ui.handlers.gallery import GalleryViewer, make_violation_auditor

logger = structlog.get_logger(__name__)


def get_protected_image(gallery: Gallery, viewer: GalleryViewer) -> ProtectedImage:
    """
    Get the session's protected image component, creating and mounting it once.

    Streamlit reruns the script on every interaction; the component, its
    listeners and the browser event bridge live in session state for the
    lifetime of the session.
    """
    key = f"protected_image_{gallery.id}"
    image = st.session_state.get(key)
    if image is None:
        scheduler = ManualScheduler(time.monotonic)
        event_source = InMemoryEventSource()
        image = ProtectedImage(
            event_source,
            gallery.protection,
            on_violation=make_violation_auditor(gallery, viewer),
            scheduler=scheduler,
            locale=get_protection_locale(),
        )
        image.mount()
        st.session_state[key] = image
        st.session_state[f"{key}_scheduler"] = scheduler
        st.session_state[f"{key}_bridge"] = BrowserEventBridge(event_source)
        st.session_state[f"{key}_shown_url"] = None
    return image


def render_gallery_page(gallery: Gallery) -> None:
    """Render a gallery with one protected image and navigation controls."""
    notices = get_notices(get_protection_locale())

    viewer_key = f"gallery_viewer_{gallery.id}"
    if viewer_key not in st.session_state:
        st.session_state[viewer_key] = GalleryViewer(gallery.images)
    viewer = st.session_state[viewer_key]

    col1, col2 = st.columns([3, 1])
    with col1:
        st.markdown(f"## {gallery.title}")
        if gallery.description:
            st.caption(gallery.description)
    with col2:
        if gallery.images:
            st.caption(notices.image_position.format(index=viewer.index + 1, total=len(gallery.images)))

    current = viewer.current
    if current is None:
        st.info(notices.image_unavailable)
        return

    image = get_protected_image(gallery, viewer)
    key = f"protected_image_{gallery.id}"
    st.session_state[f"{key}_scheduler"].run_due()

    if st.session_state[f"{key}_shown_url"] != current.url:
        with st.spinner():
            ready = asyncio.run(image.show(current.to_source()))
        st.session_state[f"{key}_shown_url"] = current.url if ready else None

    if not render_protected_image(image, bridge=st.session_state[f"{key}_bridge"], key=f"{key}_surface"):
        st.warning(notices.image_unavailable)

    if viewer.has_multiple:
        prev_col, _, next_col = st.columns([1, 2, 1])
        with prev_col:
            if st.button(f"◀ {notices.previous}", use_container_width=True):
                viewer.previous()
                st.rerun()
        with next_col:
            if st.button(f"{notices.next} ▶", use_container_width=True):
                viewer.next()
                st.rerun()

    st.caption(f"📄 {current.filename}")
    if current.width and current.height:
        st.caption(notices.image_dimensions.format(width=current.width, height=current.height))
