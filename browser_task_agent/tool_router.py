"""
Tool dispatch for Browser Task Agent.

Routes a model-requested tool call to the browser action layer and turns the
outcome into text for the transcript. Argument and browser errors never
escape this boundary; the model reads them and may try something else.
"""

import logging
from typing import Any, Callable, Optional

from pydantic import BaseModel

from .config import AgentConfig
from .exceptions import BrowserActionError, ToolArgumentError
from .tool_schemas import (
    COMPLETE_TASK,
    TOOL_ARGUMENT_MODELS,
    ClickElementArgs,
    CompleteTaskArgs,
    FillInputArgs,
    GetElementsArgs,
    NavigateArgs,
    WaitForElementArgs,
    parse_tool_arguments,
)
from .types import ElementInfo, ToolCallRequest, ToolResult
from .utils import format_error, truncate_text


logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Maps ToolCallRequests onto BrowserTools operations."""

    def __init__(self, browser_tools: Any, config: Optional[AgentConfig] = None):
        """Initialize the dispatcher.

        Args:
            browser_tools: BrowserTools instance (or anything with its methods)
            config: Agent configuration (result size limits)
        """
        self.browser_tools = browser_tools
        self.config = config or AgentConfig()
        self._handlers: dict[str, Callable[[Any], str]] = {
            "navigate": self._navigate,
            "get_page_content": self._get_page_content,
            "get_page_info": self._get_page_info,
            "click_element": self._click_element,
            "fill_input": self._fill_input,
            "get_elements": self._get_elements,
            "wait_for_element": self._wait_for_element,
            COMPLETE_TASK: self._complete_task,
        }

    def is_known_tool(self, name: str) -> bool:
        """Check if a tool name is in the catalog."""
        return name in TOOL_ARGUMENT_MODELS

    def parse_arguments(self, call: ToolCallRequest) -> BaseModel:
        """Validate a call's arguments.

        Raises:
            ToolArgumentError: If the payload does not fit the tool's schema
        """
        return parse_tool_arguments(call.name, call.raw_arguments)

    def dispatch(self, call: ToolCallRequest) -> ToolResult:
        """Execute one tool call and describe the outcome.

        Args:
            call: The requested tool call

        Returns:
            ToolResult whose content is either the outcome or an error message
        """
        if not self.is_known_tool(call.name):
            logger.warning("Model requested unknown tool: %s", call.name)
            return ToolResult(call.id, f"Unknown tool: {call.name}", is_error=True)

        try:
            args = self.parse_arguments(call)
        except ToolArgumentError as e:
            logger.info("Rejected arguments for %s: %s", call.name, e.detail)
            return ToolResult(call.id, format_error(e), is_error=True)

        try:
            content = self._handlers[call.name](args)
        except BrowserActionError as e:
            logger.info("Tool %s failed: %s", call.name, e)
            return ToolResult(call.id, format_error(e), is_error=True)

        return ToolResult(call.id, content)

    # Handlers

    def _navigate(self, args: NavigateArgs) -> str:
        url = self.browser_tools.navigate(args.url)
        return f"Navigated to {url}"

    def _get_page_content(self, args: BaseModel) -> str:
        html = self.browser_tools.get_page_content()
        text = self.browser_tools.get_page_text()
        return (
            f"HTML (first {self.config.html_max_chars} characters): "
            f"{truncate_text(html, self.config.html_max_chars)}\n\n"
            f"Page text (first {self.config.text_max_chars} characters): "
            f"{truncate_text(text, self.config.text_max_chars)}"
        )

    def _get_page_info(self, args: BaseModel) -> str:
        url = self.browser_tools.get_page_url()
        title = self.browser_tools.get_page_title()
        return f"URL: {url}\nTitle: {title}"

    def _click_element(self, args: ClickElementArgs) -> str:
        self.browser_tools.click_element(args.selector)
        return f"Clicked element: {args.selector}"

    def _fill_input(self, args: FillInputArgs) -> str:
        self.browser_tools.fill_input(args.selector, args.text)
        return f"Filled {args.selector} with text: {args.text}"

    def _get_elements(self, args: GetElementsArgs) -> str:
        elements = self.browser_tools.get_elements(args.selector)
        if not elements:
            return f"No elements found matching selector '{args.selector}'"
        return format_element_list(elements, self.config.max_listed_elements)

    def _wait_for_element(self, args: WaitForElementArgs) -> str:
        seconds = args.timeout_seconds(self.config.default_wait_timeout_s)
        self.browser_tools.wait_for_element(args.selector, seconds * 1000)
        return f"Element {args.selector} appeared"

    def _complete_task(self, args: CompleteTaskArgs) -> str:
        return f"Task completed: {args.result}"


def format_element_list(elements: list[ElementInfo], max_listed: int = 10) -> str:
    """Summarize elements for the model, listing at most ``max_listed``."""
    lines = [f"Found {len(elements)} elements:"]
    for position, element in enumerate(elements[:max_listed], start=1):
        line = (
            f"{position}. selector: {element.selector}, tag: {element.tag}, "
            f"text: {truncate_text(element.text, 100)}"
        )
        if element.href is not None:
            line += f", href: {element.href}"
        if element.id is not None:
            line += f", id: {element.id}"
        lines.append(line)

    remaining = len(elements) - max_listed
    if remaining > 0:
        lines.append(f"... and {remaining} more elements")
    return "\n".join(lines)
