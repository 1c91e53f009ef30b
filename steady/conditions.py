from __future__ import annotations

import functools
import time
from pathlib import Path
from typing import Callable, Optional, Union

from playwright.sync_api import ElementHandle, Error as PlaywrightError, Page

from steady.polling import PollConfig, poll

# What Playwright says when a handle outlived its element or its document.
_STALE_MESSAGES = (
    "not attached to the DOM",
    "Execution context was destroyed",
    "Cannot find context with specified id",
)


class StaleElementError(Exception):
    """The element a handle pointed at is gone (reload, re-render)."""


# Pass this in `ignoring`; a closed page or a failed navigation still propagates.
STALE_ELEMENT_ERRORS = (StaleElementError,)


def is_stale(error: PlaywrightError) -> bool:
    return any(m in error.message for m in _STALE_MESSAGES)


def _stale_is_transient(check):
    # Playwright raises one Error class for everything; only staleness is retried.
    @functools.wraps(check)
    def wrapper():
        try:
            return check()
        except PlaywrightError as e:
            if is_stale(e):
                raise StaleElementError(e.message) from e
            raise
    return wrapper


def element_present(page: Page, selector: str) -> Callable[[], Optional[ElementHandle]]:
    """Ready once at least one element matches `selector` in the DOM."""
    @_stale_is_transient
    def check():
        return page.query_selector(selector)
    return check


def element_visible(page: Page, selector: str) -> Callable[[], Optional[ElementHandle]]:
    """
    Ready once the element is in the DOM *and* displayed.

    Presence alone is not enough: an element can sit in the DOM hidden for a
    while before the page shows it.
    """
    @_stale_is_transient
    def check():
        handle = page.query_selector(selector)
        if handle is not None and handle.is_visible():
            return handle
        return None
    return check


def element_clickable(page: Page, selector: str) -> Callable[[], Optional[ElementHandle]]:
    @_stale_is_transient
    def check():
        handle = page.query_selector(selector)
        if handle is not None and handle.is_visible() and handle.is_enabled():
            return handle
        return None
    return check


def handle_enabled(handle: ElementHandle) -> Callable[[], Optional[ElementHandle]]:
    """Wait on an element that was already located until it becomes enabled."""
    @_stale_is_transient
    def check():
        return handle if handle.is_enabled() else None
    return check


def element_stopped_moving(
    page: Page,
    selector: str,
    settle_s: float = 0.1,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[], Optional[dict]]:
    """
    Ready when the element's bounding box is the same before and after
    `settle_s`. Returns that box.
    """
    @_stale_is_transient
    def check():
        handle = page.query_selector(selector)
        if handle is None:
            return None
        before = handle.bounding_box()
        sleep(settle_s)
        after = handle.bounding_box()
        if before is not None and before == after:
            return after
        return None
    return check


def file_exists(path: Union[str, Path]) -> Callable[[], Optional[Path]]:
    """Not a browser condition at all: anything that can be asked can be polled."""
    target = Path(path)

    def check():
        return target if target.exists() else None
    return check


def type_into(page: Page, selector: str, text: str, timeout: float = 10.0) -> None:
    """
    Locate the element right before filling it in.

    Never keep a handle across a reload; a fresh lookup on every call means a
    refreshed DOM cannot leave us holding a stale element.
    """
    config = PollConfig(timeout=timeout, interval=0.1, ignoring=STALE_ELEMENT_ERRORS)
    handle = poll(element_present(page, selector), config, label=f"present: {selector}")
    handle.fill(text)
