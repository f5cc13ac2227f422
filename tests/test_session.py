"""
Tests for the browser session lifecycle.

Playwright is patched out; no browser is launched.
"""

import pytest
from unittest.mock import MagicMock, patch

from playwright.sync_api import Error as PlaywrightError

from browser_task_agent import session as session_module
from browser_task_agent.config import AgentConfig
from browser_task_agent.exceptions import BrowserLaunchError
from browser_task_agent.session import BrowserSession
from browser_task_agent.tools import BrowserTools


@pytest.fixture
def playwright():
    pw = MagicMock()
    with patch("browser_task_agent.session.sync_playwright") as sync_pw:
        sync_pw.return_value.start.return_value = pw
        yield pw


@pytest.fixture
def config():
    return AgentConfig(api_key="sk-test")


class TestBrowserSession:
    """Tests for starting and closing sessions."""

    def test_start_launches_headless_chromium(self, playwright, config):
        session = BrowserSession(config)

        tools = session.start()

        playwright.chromium.launch.assert_called_once_with(
            headless=True, args=["--no-sandbox"]
        )
        browser = playwright.chromium.launch.return_value
        browser.new_page.assert_called_once()
        assert isinstance(tools, BrowserTools)
        assert tools.page is browser.new_page.return_value
        assert session.is_open()
        session.close()

    def test_sandbox_flag_optional(self, playwright):
        session = BrowserSession(AgentConfig(api_key="sk-test", no_sandbox=False))

        session.start()

        playwright.chromium.launch.assert_called_once_with(headless=True, args=[])
        session.close()

    def test_start_is_cached(self, playwright, config):
        session = BrowserSession(config)

        assert session.start() is session.tools
        playwright.chromium.launch.assert_called_once()
        session.close()

    def test_close_order(self, playwright, config):
        """Page closes before the browser, the browser before the driver."""
        order = MagicMock()
        browser = playwright.chromium.launch.return_value
        page = browser.new_page.return_value
        page.close.side_effect = lambda: order("page")
        browser.close.side_effect = lambda: order("browser")
        playwright.stop.side_effect = lambda: order("playwright")

        session = BrowserSession(config)
        session.start()
        session.close()

        assert [c.args[0] for c in order.call_args_list] == ["page", "browser", "playwright"]
        assert not session.is_open()

    def test_close_is_idempotent(self, playwright, config):
        session = BrowserSession(config)
        session.start()

        session.close()
        session.close()

        playwright.stop.assert_called_once()

    def test_close_tolerates_errors(self, playwright, config):
        browser = playwright.chromium.launch.return_value
        browser.new_page.return_value.close.side_effect = PlaywrightError("Target closed")

        session = BrowserSession(config)
        session.start()
        session.close()

        browser.close.assert_called_once()
        playwright.stop.assert_called_once()

    def test_launch_failure_releases_driver(self, playwright, config):
        playwright.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")
        session = BrowserSession(config)

        with pytest.raises(BrowserLaunchError, match="Executable doesn't exist"):
            session.start()

        playwright.stop.assert_called_once()
        assert session not in session_module._active_sessions

    def test_start_after_close(self, playwright, config):
        session = BrowserSession(config)
        session.close()

        with pytest.raises(RuntimeError):
            session.start()

    def test_context_manager(self, playwright, config):
        with BrowserSession(config) as session:
            session.start()
            assert session in session_module._active_sessions

        playwright.stop.assert_called_once()
        assert session not in session_module._active_sessions
