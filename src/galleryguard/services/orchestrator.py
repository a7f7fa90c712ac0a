"""
Protection orchestrator.

Owns the visual protection state of one rendered image and is the sole
subscriber of the screenshot detector, the focus detector and the
interaction blockers. Signals become state transitions and violation
notifications for the host.

States::

    NORMAL --focus lost--> OBSCURED --focus gained--> NORMAL
    any --screenshot attempt--> VIOLATION_FLASH --dwell expires--> NORMAL | OBSCURED

A screenshot attempt while OBSCURED shows the flash layered over the blur.
When the dwell expires the live focus signal decides whether the image
returns to NORMAL or stays OBSCURED.
"""

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from galleryguard.config import get_flash_dwell_seconds
from galleryguard.messages import ProtectionNotices, get_notices
from galleryguard.models.protection import Platform, ProtectionConfig, SignalEvent, ViewState
from galleryguard.platform.events import PlatformEventSource

from .focus_detector import FocusDetector
from .interaction import context_menu_blocker, drag_blocker
from .scheduler import AsyncioScheduler, ScheduledTask, Scheduler
from .screenshot_detector import ScreenshotDetector

logger = structlog.get_logger(__name__)

ViolationCallback = Callable[[], None]

BLUR_FILTER = "blur(10px)"

VIOLATION_SIGNALS = (
    SignalEvent.SCREENSHOT_ATTEMPT,
    SignalEvent.CONTEXT_MENU_ATTEMPT,
    SignalEvent.DRAG_ATTEMPT,
)


@dataclass(frozen=True)
class ProtectionView:
    """What the host surface should draw for the current state."""

    state: ViewState
    blurred: bool
    show_obscured_notice: bool
    show_flash_overlay: bool
    notices: ProtectionNotices

    @property
    def css_filter(self) -> str:
        return BLUR_FILTER if self.blurred else "none"


class ProtectionOrchestrator:
    """
    Reactive state machine wiring protection signals to visual state.

    Each protection toggle in ``ProtectionConfig`` attaches or detaches its
    own detector; a disabled protection has no listener at all.
    """

    def __init__(
        self,
        event_source: PlatformEventSource,
        config: ProtectionConfig | None = None,
        on_violation: ViolationCallback | None = None,
        scheduler: Scheduler | None = None,
        dwell_seconds: float | None = None,
        platform: Platform | None = None,
        locale: str | None = None,
    ):
        self.config = config or ProtectionConfig()
        self.on_violation = on_violation
        self.scheduler = scheduler or AsyncioScheduler()
        self.dwell_seconds = dwell_seconds if dwell_seconds is not None else get_flash_dwell_seconds()
        self.notices = get_notices(locale)

        self.screenshot_detector = ScreenshotDetector(event_source, platform)
        self.focus_detector = FocusDetector(event_source)
        self.context_menu_blocker = context_menu_blocker(event_source)
        self.drag_blocker = drag_blocker(event_source)

        self._state = ViewState.NORMAL
        self._dwell_task: ScheduledTask | None = None
        self._mounted = False

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def mounted(self) -> bool:
        return self._mounted

    def _detectors(self):
        return (self.screenshot_detector, self.focus_detector, self.context_menu_blocker, self.drag_blocker)

    def mount(self) -> None:
        """Attach listeners per the current config. Anything attached is undone if setup fails."""
        if self._mounted:
            return

        try:
            for detector in self._detectors():
                detector.subscribe(self.handle_signal)
            self._mounted = True
            self._state = ViewState.NORMAL
            self._apply_toggles()
        except Exception:
            self.unmount()
            raise

        logger.info(
            "protection_mounted",
            platform=self.screenshot_detector.platform.value,
            print_screen=self.config.disable_print_screen,
            right_click=self.config.disable_right_click,
            download=self.config.disable_download,
        )

    def unmount(self) -> None:
        """Detach every listener and cancel the pending dwell timer."""
        self._cancel_dwell()
        for detector in self._detectors():
            detector.disable()
            detector.unsubscribe(self.handle_signal)
        self._mounted = False
        self._state = ViewState.NORMAL
        logger.debug("protection_unmounted")

    def update_config(self, config: ProtectionConfig) -> None:
        """Swap in a new config, attaching or detaching protections that changed."""
        self.config = config
        if not self._mounted:
            return

        try:
            self._apply_toggles()
        except Exception:
            self.unmount()
            raise

        if not config.disable_print_screen and self._state != ViewState.NORMAL:
            # The protection behind these states was switched off
            self._cancel_dwell()
            self._transition(ViewState.NORMAL)

    def reset(self) -> None:
        """Clear any flash after a new image finished loading. Stays OBSCURED while focus is lost."""
        self._cancel_dwell()
        focus_lost = self.focus_detector.enabled and not self.focus_detector.is_exposed
        self._transition(ViewState.OBSCURED if focus_lost else ViewState.NORMAL)

    def _apply_toggles(self) -> None:
        # Focus loss obscuring belongs to print/tab protection
        self.screenshot_detector.set_enabled(self.config.disable_print_screen)
        self.focus_detector.set_enabled(self.config.disable_print_screen)
        self.context_menu_blocker.set_enabled(self.config.disable_right_click)
        self.drag_blocker.set_enabled(self.config.disable_download)

    def handle_signal(self, signal: SignalEvent) -> None:
        if signal == SignalEvent.FOCUS_LOST:
            self._cancel_dwell()
            self._transition(ViewState.OBSCURED)
        elif signal == SignalEvent.FOCUS_GAINED:
            if self._state == ViewState.OBSCURED:
                self._transition(ViewState.NORMAL)
        elif signal == SignalEvent.SCREENSHOT_ATTEMPT:
            self._transition(ViewState.VIOLATION_FLASH)
            self._notify_violation(signal)
            self._schedule_dwell()
        elif signal in VIOLATION_SIGNALS:
            self._notify_violation(signal)

    def _schedule_dwell(self) -> None:
        self._cancel_dwell()
        self._dwell_task = self.scheduler.call_later(self.dwell_seconds, self._end_flash)

    def _cancel_dwell(self) -> None:
        if self._dwell_task is not None:
            self._dwell_task.cancel()
            self._dwell_task = None

    def _end_flash(self) -> None:
        self._dwell_task = None
        if not self._mounted or self._state != ViewState.VIOLATION_FLASH:
            return
        exposed = self.focus_detector.is_exposed or not self.focus_detector.enabled
        self._transition(ViewState.NORMAL if exposed else ViewState.OBSCURED)

    def _transition(self, new_state: ViewState) -> None:
        if new_state == self._state:
            return
        logger.debug("view_state_changed", previous=self._state.value, current=new_state.value)
        self._state = new_state

    def _notify_violation(self, signal: SignalEvent) -> None:
        logger.info("protection_violation_detected", signal=signal.value, state=self._state.value)
        if self.on_violation is None:
            return
        try:
            self.on_violation()
        except Exception as e:
            logger.error("violation_callback_failed", signal=signal.value, error=str(e), exc_info=e)

    def view_model(self) -> ProtectionView:
        focus_lost = self.focus_detector.enabled and not self.focus_detector.is_exposed
        obscured = self._state == ViewState.OBSCURED
        flashing = self._state == ViewState.VIOLATION_FLASH
        return ProtectionView(
            state=self._state,
            blurred=obscured or (flashing and focus_lost),
            show_obscured_notice=obscured,
            show_flash_overlay=flashing,
            notices=self.notices,
        )
