"""Configuration for UI unit tests."""

from unittest.mock import MagicMock, patch

import pytest


def _columns(spec, *args, **kwargs):
    count = len(spec) if isinstance(spec, list | tuple) else spec
    return [MagicMock() for _ in range(count)]


@pytest.fixture
def mock_page_st():
    """Streamlit module as seen by the gallery page, with dict-backed session state."""
    with patch("galleryguard.ui.pages.gallery.st") as mock:
        mock.session_state = {}
        mock.columns.side_effect = _columns
        mock.button.return_value = False
        yield mock


@pytest.fixture
def mock_surface_component():
    """Declared protected-surface component; returns no browser events by default."""
    with patch("galleryguard.ui.components.protected_image._protected_surface", return_value=None) as mock:
        yield mock
