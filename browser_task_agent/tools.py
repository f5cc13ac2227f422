"""
Browser tools for Browser Task Agent.

Provides the browser action layer over a single Playwright page. Every
element lookup and navigation is bounded by a timeout, and failures are
raised as BrowserActionError subclasses for the dispatcher to report.
"""

import logging
from typing import Any, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import ElementHandle, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .config import AgentConfig
from .element_registry import (
    ELEMENT_ATTRIBUTES_JS,
    INTERACTIVE_SELECTORS,
    VISIBLE_ELEMENTS_JS,
    build_element_infos,
    visible_element_info,
)
from .exceptions import (
    BrowserActionError,
    ElementNotFoundError,
    NavigationError,
    ScriptExecutionError,
)
from .types import ElementInfo
from .utils import normalize_url


logger = logging.getLogger(__name__)


class BrowserTools:
    """Executes browser actions on one page via Playwright."""

    def __init__(self, page: Page, config: Optional[AgentConfig] = None):
        """Initialize browser tools.

        Args:
            page: Playwright page instance
            config: Agent configuration (timeouts and settle delays)
        """
        self.page = page
        self.config = config or AgentConfig()

    # Navigation

    def navigate(self, url: str) -> str:
        """Navigate to a URL and let client-side rendering settle.

        Args:
            url: URL to load; https:// is assumed when no scheme is given

        Returns:
            The URL that was loaded

        Raises:
            NavigationError: On timeout or network failure
        """
        url = normalize_url(url)
        logger.debug("Navigating to %s", url)

        try:
            self.page.goto(
                url,
                wait_until="load",
                timeout=self.config.navigation_timeout,
            )
        except PlaywrightTimeoutError as e:
            raise NavigationError(
                f"Timed out loading {url} after {self.config.navigation_timeout / 1000:g}s"
            ) from e
        except PlaywrightError as e:
            raise NavigationError(f"Failed to load {url}: {e.message}") from e

        # Fixed settle delay for client-side rendering
        try:
            self.page.wait_for_timeout(self.config.navigation_settle_delay)
        except PlaywrightError as e:
            raise NavigationError(f"Page closed after loading {url}: {e.message}") from e
        return url

    # Page content

    def get_page_content(self) -> str:
        """Get the raw HTML of the page."""
        try:
            return self.page.content()
        except PlaywrightError as e:
            raise BrowserActionError(f"Failed to read page HTML: {e.message}") from e

    def get_page_text(self) -> str:
        """Get the rendered text of the page body."""
        try:
            return self.page.inner_text("body", timeout=self.config.action_timeout)
        except PlaywrightError as e:
            raise BrowserActionError(f"Failed to read page text: {e.message}") from e

    def get_page_url(self) -> str:
        """Get the current page URL."""
        return self.page.url

    def get_page_title(self) -> str:
        """Get the current page title."""
        try:
            return self.page.title()
        except PlaywrightError as e:
            raise BrowserActionError(f"Failed to read page title: {e.message}") from e

    # Elements

    def _wait_for_element(self, selector: str, timeout_ms: int) -> ElementHandle:
        """Resolve the first element attached to the DOM for ``selector``."""
        try:
            element = self.page.wait_for_selector(
                selector,
                state="attached",
                timeout=timeout_ms,
            )
        except PlaywrightTimeoutError as e:
            raise ElementNotFoundError(selector, timeout_ms) from e
        except PlaywrightError as e:
            raise BrowserActionError(f"Invalid selector '{selector}': {e.message}") from e

        if element is None:
            raise ElementNotFoundError(selector, timeout_ms)
        return element

    def click_element(self, selector: str) -> None:
        """Click the first element matching ``selector``.

        Raises:
            ElementNotFoundError: If nothing matches within the action timeout
            BrowserActionError: If the click itself fails
        """
        element = self._wait_for_element(selector, self.config.action_timeout)
        try:
            element.click(timeout=self.config.action_timeout)
            self.page.wait_for_timeout(self.config.click_settle_delay)
        except PlaywrightError as e:
            raise BrowserActionError(f"Failed to click '{selector}': {e.message}") from e

    def fill_input(self, selector: str, text: str) -> None:
        """Set the value of the first input matching ``selector``.

        Raises:
            ElementNotFoundError: If nothing matches within the action timeout
            BrowserActionError: If the element cannot be filled
        """
        element = self._wait_for_element(selector, self.config.action_timeout)
        try:
            element.fill(text, timeout=self.config.action_timeout)
        except PlaywrightError as e:
            raise BrowserActionError(
                f"Failed to enter text into '{selector}': {e.message}"
            ) from e

    def get_elements(self, selector: str) -> list[ElementInfo]:
        """List every element matching ``selector`` in DOM order.

        Returns an empty list when nothing appears within the action timeout.

        Raises:
            BrowserActionError: If the selector is invalid or the page changed
                while reading
        """
        try:
            self._wait_for_element(selector, self.config.action_timeout)
        except ElementNotFoundError:
            return []

        try:
            handles = self.page.query_selector_all(selector)
            raw_elements: list[tuple[dict[str, Any], bool]] = [
                (handle.evaluate(ELEMENT_ATTRIBUTES_JS), handle.is_visible())
                for handle in handles
            ]
        except PlaywrightError as e:
            raise BrowserActionError(
                f"Failed to read elements for '{selector}': {e.message}"
            ) from e

        return build_element_infos(raw_elements, selector)

    def get_visible_elements(self) -> list[ElementInfo]:
        """List visible interactive elements (links, buttons, inputs)."""
        data = self.execute_javascript(VISIBLE_ELEMENTS_JS, list(INTERACTIVE_SELECTORS))
        return [visible_element_info(item) for item in data or []]

    def wait_for_element(self, selector: str, timeout_ms: Optional[int] = None) -> None:
        """Wait until an element matching ``selector`` exists.

        Only existence is checked, not visibility.

        Raises:
            ElementNotFoundError: If nothing appears within the timeout
        """
        if timeout_ms is None:
            timeout_ms = self.config.default_wait_timeout_s * 1000
        self._wait_for_element(selector, timeout_ms)

    # Scripts

    def execute_javascript(self, script: str, arg: Any = None) -> Any:
        """Evaluate JavaScript in the page and return its result.

        Raises:
            ScriptExecutionError: If evaluation fails
        """
        try:
            if arg is None:
                return self.page.evaluate(script)
            return self.page.evaluate(script, arg)
        except PlaywrightError as e:
            raise ScriptExecutionError(f"JavaScript execution failed: {e.message}") from e
