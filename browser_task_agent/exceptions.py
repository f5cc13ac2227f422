"""Exception hierarchy for Browser Task Agent."""

from __future__ import annotations


class BrowserAgentError(Exception):
    """Base exception for all agent errors."""


class ConfigurationError(BrowserAgentError):
    """Raised at startup when required configuration is missing."""


class LLMTransportError(BrowserAgentError):
    """Raised when the chat completion request fails.

    Fatal for the current task only. The agent loop does not retry.
    """


class IterationBudgetExceededError(BrowserAgentError):
    """Raised when a task runs out of iterations without completing.

    Attributes:
        max_iterations: The configured iteration budget.
    """

    def __init__(self, max_iterations: int) -> None:
        self.max_iterations = max_iterations
        super().__init__(
            f"Iteration budget exceeded ({max_iterations} iterations). "
            "The task may be too complex or need more information."
        )


class ToolArgumentError(BrowserAgentError):
    """Raised when a tool call's argument payload does not match its schema."""

    def __init__(self, tool_name: str, detail: str) -> None:
        self.tool_name = tool_name
        self.detail = detail
        super().__init__(f"invalid arguments for {tool_name}: {detail}")


class BrowserActionError(BrowserAgentError):
    """Base for failures of a browser action (element lookup, script, ...)."""


class NavigationError(BrowserActionError):
    """Raised when a page fails to load."""


class ElementNotFoundError(BrowserActionError):
    """Raised when no element matches a selector within the timeout."""

    def __init__(self, selector: str, timeout_ms: int) -> None:
        self.selector = selector
        self.timeout_ms = timeout_ms
        super().__init__(
            f"No element matching '{selector}' found within {timeout_ms / 1000:g}s"
        )


class ScriptExecutionError(BrowserActionError):
    """Raised when JavaScript evaluation in the page fails."""


class BrowserLaunchError(BrowserActionError):
    """Raised when the browser process or page cannot be started."""
