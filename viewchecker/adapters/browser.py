"""
Browser session adapter (Playwright, sync API).

One headless Chromium per analysis. The number of live sessions is capped
process-wide and the browser is closed on every path.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright

from viewchecker.config import Settings, load_settings

logger = logging.getLogger("viewchecker.browser")

DEFAULT_VIEWPORT = "desktop"

VIEWPORTS: Dict[str, Dict[str, int]] = {
    "desktop": {"width": 1920, "height": 1080},
    "tablet": {"width": 768, "height": 1024},
    "mobile": {"width": 390, "height": 844},
}

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

_session_slots: Optional[threading.BoundedSemaphore] = None
_session_slots_size = 0
_slots_lock = threading.Lock()


class AnalysisError(RuntimeError):
    """The target page could not be loaded or inspected."""


def resolve_viewport(viewport: Optional[str]) -> str:
    """Unknown or missing viewports fall back to desktop."""
    if viewport and viewport in VIEWPORTS:
        return viewport
    return DEFAULT_VIEWPORT


def _slots(size: int) -> threading.BoundedSemaphore:
    global _session_slots, _session_slots_size
    with _slots_lock:
        if _session_slots is None or _session_slots_size != size:
            _session_slots = threading.BoundedSemaphore(size)
            _session_slots_size = size
        return _session_slots


@contextmanager
def browser_session(
    url: str,
    viewport: str = DEFAULT_VIEWPORT,
    settings: Optional[Settings] = None,
) -> Iterator[Page]:
    """
    Yields a page with `url` loaded at the given viewport.
    Raises AnalysisError when the browser cannot start or the page cannot load.
    """
    settings = settings or load_settings()
    viewport = resolve_viewport(viewport)

    with _slots(settings.max_browser_sessions):
        with sync_playwright() as p:
            try:
                browser = p.chromium.launch(headless=True, args=LAUNCH_ARGS)
            except PlaywrightError as e:
                raise AnalysisError(f"Browser launch failed: {e}") from e

            try:
                page = browser.new_page(
                    viewport=VIEWPORTS[viewport],
                    user_agent=settings.user_agent,
                )
                logger.info(f"Loading {url} ({viewport})")
                try:
                    page.goto(
                        url,
                        wait_until="networkidle",
                        timeout=settings.page_load_timeout_ms,
                    )
                except PlaywrightError as e:
                    raise AnalysisError(f"Page load failed for {url}: {e}") from e

                yield page
            finally:
                browser.close()
                logger.info(f"Browser closed for {url}")
