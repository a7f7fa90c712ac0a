"""
Main Streamlit application for galleryguard.

Shows one protected gallery described by the manifest at GALLERY_MANIFEST.
"""

import streamlit as st

from galleryguard.config import get_gallery_manifest_path, get_protection_locale
from galleryguard.errors import ConfigurationError
from galleryguard.logging_config import configure_structured_logging, get_logger
from galleryguard.messages import get_notices
from galleryguard.ui.handlers.gallery import load_gallery_manifest
from galleryguard.ui.pages.gallery import render_gallery_page

configure_structured_logging()
logger = get_logger(__name__)


def main() -> None:
    """Main application entry point."""
    st.set_page_config(page_title="Protected Gallery", page_icon="🔒", layout="wide")

    manifest_path = get_gallery_manifest_path()
    if not manifest_path:
        logger.warning("gallery_manifest_not_configured")
        st.error(get_notices(get_protection_locale()).gallery_not_found)
        return

    try:
        gallery = load_gallery_manifest(manifest_path)
    except ConfigurationError as e:
        st.error(e.user_message)
        return

    render_gallery_page(gallery)


if __name__ == "__main__":
    main()
