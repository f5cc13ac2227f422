"""
Agent core for Browser Task Agent.

Provides the bounded agent loop: send the transcript and tool catalog to the
LLM, run the requested tool calls in order, and stop on a final answer, a
complete_task call, or when the iteration budget runs out.
"""

import json
import logging
from typing import Any, Optional

from .config import AgentConfig
from .exceptions import IterationBudgetExceededError, ToolArgumentError
from .llm_client import ChatModel
from .logger import RunLogger
from .tool_router import ToolDispatcher
from .tool_schemas import COMPLETE_TASK, tools_for_openai
from .types import ROLE_SYSTEM, ROLE_USER, ConversationTurn, ToolCallRequest, ToolResult


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are an autonomous browser agent that carries out tasks on the web.

You control a single headless browser page through these tools:
- navigate(url): open a URL (https:// is added when no scheme is given)
- get_page_content(): read the page HTML and visible text (truncated)
- get_page_info(): read the current URL and title
- click_element(selector): click the first element matching a CSS selector
- fill_input(selector, text): type text into an input field
- get_elements(selector): list matching elements with stable selectors
- wait_for_element(selector, timeout): wait for an element to exist
- complete_task(result): finish the task and report the result

Guidelines:
1. Work step by step. Look at the page before acting on it.
2. Prefer selectors returned by get_elements. Positional selectors
   (:nth-child) are only valid until the page changes; list elements again
   after navigating or clicking.
3. If a tool returns an error, read it and try a different approach instead
   of repeating the same call.
4. When the task is done, call complete_task with a concise result that
   answers the task directly."""


class BrowserAgent:
    """Runs tasks by letting the LLM drive the browser tools."""

    def __init__(
        self,
        config: AgentConfig,
        browser_tools: Any,
        llm: ChatModel,
        run_logger: Optional[RunLogger] = None,
    ):
        """Initialize the agent.

        Args:
            config: Agent configuration
            browser_tools: BrowserTools for the session's page
            llm: Chat model client
            run_logger: Console reporter (silent if None)
        """
        self.config = config
        self.llm = llm
        self.dispatcher = ToolDispatcher(browser_tools, config)
        self.run_logger = run_logger or RunLogger(enable_console=False)
        self._tools = tools_for_openai()
        self._conversation: list[ConversationTurn] = []
        self._initialize_system_prompt()

    def _initialize_system_prompt(self) -> None:
        self._conversation = [ConversationTurn(role=ROLE_SYSTEM, content=SYSTEM_PROMPT)]

    def execute_task(self, task: str) -> str:
        """Run one task to completion.

        Args:
            task: Natural-language task; the caller rejects blank input

        Returns:
            The final result text

        Raises:
            LLMTransportError: If a completion request fails
            IterationBudgetExceededError: If the budget runs out first
        """
        max_iterations = self.config.max_iterations
        self.run_logger.print_task_header(task)
        self._conversation.append(ConversationTurn(role=ROLE_USER, content=task))

        for iteration in range(1, max_iterations + 1):
            self.run_logger.print_iteration(iteration, max_iterations)

            reply = self.llm.complete(list(self._conversation), self._tools)
            self._conversation.append(reply)

            if not reply.tool_calls:
                if reply.content:
                    logger.debug("Task answered without tool calls at iteration %d", iteration)
                    self.run_logger.print_final_answer(reply.content)
                    return reply.content
                self.run_logger.print_notice("Empty reply from model, continuing")
                continue

            for call in reply.tool_calls:
                result = self._run_tool_call(call)

                if call.name == COMPLETE_TASK and not result.is_error:
                    answer = self._completion_result(call)
                    if answer is not None:
                        self.run_logger.print_final_answer(answer)
                        return answer

        logger.warning("Iteration budget of %d exhausted", max_iterations)
        raise IterationBudgetExceededError(max_iterations)

    def _run_tool_call(self, call: ToolCallRequest) -> ToolResult:
        self.run_logger.print_tool_call(call.name, _display_arguments(call))
        result = self.dispatcher.dispatch(call)
        self._conversation.append(result.to_turn())
        self.run_logger.print_result(result.content, failed=result.is_error)
        return result

    def _completion_result(self, call: ToolCallRequest) -> Optional[str]:
        try:
            args = self.dispatcher.parse_arguments(call)
        except ToolArgumentError:
            return None
        return args.result

    def get_conversation_history(self) -> list[ConversationTurn]:
        """Get a copy of the transcript."""
        return list(self._conversation)

    def clear_history(self) -> None:
        """Reset the transcript to the system prompt. The browser is untouched."""
        self._initialize_system_prompt()


def _display_arguments(call: ToolCallRequest) -> dict[str, Any]:
    """Best-effort decode of a call's arguments for the console."""
    try:
        args = json.loads(call.raw_arguments or "{}")
    except json.JSONDecodeError:
        return {"raw": call.raw_arguments}
    return args if isinstance(args, dict) else {"raw": call.raw_arguments}
