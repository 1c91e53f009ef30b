from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from playwright.sync_api import Page, sync_playwright

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrowserProfile:
    """
    A browser that looks the same on every machine.

    "Maximized" depends on the screen the test happens to run on, and a
    retina display doubles the pixel ratio, so both size and scale are pinned.

    With `pin_viewport=False` only the window is sized (`--window-size`) and
    the page gets whatever the browser chrome leaves over.
    """
    width: int = 1366
    height: int = 768
    device_scale_factor: float = 1
    headless: bool = True
    pin_viewport: bool = True

    def launch_args(self) -> list[str]:
        scale = f"{self.device_scale_factor:g}"
        return [
            f"--window-size={self.width},{self.height}",
            f"--force-device-scale-factor={scale}",
        ]

    def context_options(self) -> dict:
        if not self.pin_viewport:
            # Playwright refuses device_scale_factor without a viewport;
            # --force-device-scale-factor covers it.
            return {"no_viewport": True}
        return {
            "viewport": {"width": self.width, "height": self.height},
            "device_scale_factor": self.device_scale_factor,
        }


@contextmanager
def open_page(profile: BrowserProfile = BrowserProfile(), accept_downloads: bool = False) -> Iterator[Page]:
    with sync_playwright() as p:
        logger.debug("launching chromium with %s", profile)
        browser = p.chromium.launch(headless=profile.headless, args=profile.launch_args())
        context = browser.new_context(accept_downloads=accept_downloads, **profile.context_options())
        try:
            yield context.new_page()
        finally:
            context.close()
            browser.close()
