"""
Browser session lifecycle for Browser Task Agent.

Owns the Playwright driver, the Chromium process and the single active
page for one agent run.
"""

import atexit
import logging
from typing import Optional

from playwright.sync_api import Browser, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from .config import AgentConfig
from .exceptions import BrowserLaunchError
from .tools import BrowserTools


logger = logging.getLogger(__name__)


# Track open sessions for cleanup on exit
_active_sessions: list["BrowserSession"] = []


def _close_all_sessions():
    """Close all open sessions on process exit."""
    for session in _active_sessions[:]:
        try:
            session.close()
        except Exception:
            logger.debug("Failed to close browser session on exit", exc_info=True)
    _active_sessions.clear()


atexit.register(_close_all_sessions)


class BrowserSession:
    """One headless browser process with one page.

    Usage:
        with BrowserSession(config) as session:
            session.tools.navigate("example.com")
    """

    def __init__(self, config: AgentConfig):
        """Initialize the session without launching anything.

        Args:
            config: Agent configuration with browser settings
        """
        self.config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None
        self._tools: Optional[BrowserTools] = None
        self._closed = False

    def start(self) -> BrowserTools:
        """Launch the browser and open the page.

        Returns:
            BrowserTools bound to the page

        Raises:
            BrowserLaunchError: If the browser cannot be started
            RuntimeError: If the session has been closed
        """
        if self._closed:
            raise RuntimeError("Browser session has been closed")

        if self._tools is not None:
            return self._tools

        logger.debug("Launching headless browser")
        args = ["--no-sandbox"] if self.config.no_sandbox else []

        _active_sessions.append(self)
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                headless=self.config.headless,
                args=args,
            )
            self._page = self._browser.new_page()
        except PlaywrightError as e:
            self.close()
            raise BrowserLaunchError(f"Failed to launch browser: {e.message}") from e

        self._tools = BrowserTools(self._page, self.config)
        logger.debug("Browser launched")
        return self._tools

    @property
    def tools(self) -> BrowserTools:
        """Browser tools for the active page, launching on first use."""
        return self.start()

    def is_open(self) -> bool:
        """Check if the browser is running."""
        return self._browser is not None and not self._closed

    def close(self) -> None:
        """Close the page, then the browser, then the driver.

        Safe to call multiple times and after a partial start.
        """
        if self._closed:
            return
        self._closed = True

        if self in _active_sessions:
            _active_sessions.remove(self)

        if self._page is not None:
            try:
                self._page.close()
            except PlaywrightError:
                logger.debug("Page already closed", exc_info=True)
            self._page = None

        if self._browser is not None:
            try:
                self._browser.close()
            except PlaywrightError:
                logger.debug("Browser already closed", exc_info=True)
            self._browser = None

        if self._playwright is not None:
            try:
                self._playwright.stop()
            except PlaywrightError:
                logger.debug("Playwright already stopped", exc_info=True)
            self._playwright = None

        self._tools = None

    def __enter__(self) -> "BrowserSession":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - ensures cleanup."""
        self.close()
