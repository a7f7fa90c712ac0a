"""
Pytest configuration and fixtures for galleryguard tests.
"""

import asyncio
import io

import pytest
from PIL import Image

from galleryguard.errors import ImageLoadError
from galleryguard.platform.events import InMemoryEventSource
from galleryguard.services.scheduler import ManualScheduler


def create_test_image(size=(200, 100), color=(0, 0, 0, 255), format_type="PNG") -> bytes:
    """Create an encoded test image in memory."""
    mode = "RGBA" if format_type == "PNG" else "RGB"
    image = Image.new(mode, size, color=color if mode == "RGBA" else color[:3])
    buffer = io.BytesIO()
    image.save(buffer, format=format_type)
    return buffer.getvalue()


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StaticLoader:
    """Image loader serving bytes from a dict; unknown URLs fail like a 404."""

    def __init__(self, images: dict[str, bytes]):
        self.images = images
        self.requested: list[str] = []

    async def load(self, url: str) -> bytes:
        self.requested.append(url)
        if url not in self.images:
            raise ImageLoadError(f"Not found: {url}", code="image_fetch_failed")
        return self.images[url]


class GatedLoader:
    """Image loader whose loads complete only when the test releases them."""

    def __init__(self, images: dict[str, bytes]):
        self.images = images
        self.gates: dict[str, asyncio.Event] = {}

    async def load(self, url: str) -> bytes:
        gate = self.gates.setdefault(url, asyncio.Event())
        await gate.wait()
        if url not in self.images:
            raise ImageLoadError(f"Not found: {url}", code="image_fetch_failed")
        return self.images[url]

    def release(self, url: str) -> None:
        self.gates.setdefault(url, asyncio.Event()).set()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock: FakeClock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture
def windows_source() -> InMemoryEventSource:
    return InMemoryEventSource(platform_string="Win32")


@pytest.fixture
def mac_source() -> InMemoryEventSource:
    return InMemoryEventSource(platform_string="MacIntel")


@pytest.fixture
def linux_source() -> InMemoryEventSource:
    return InMemoryEventSource(platform_string="Linux x86_64")


@pytest.fixture
def sample_png() -> bytes:
    return create_test_image()


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set up test environment variables and a fresh config cache."""
    from galleryguard import config

    monkeypatch.setenv("TESTING", "true")
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv("PROTECTION_LOCALE", raising=False)
    monkeypatch.delenv("FLASH_DWELL_SECONDS", raising=False)
    monkeypatch.setattr(config, "_config", None)
