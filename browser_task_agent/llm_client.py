"""
LLM client for Browser Task Agent.

Provides an OpenAI-compatible chat completions client with tool calling.
Failures are reported as LLMTransportError and are not retried here.
"""

import logging
from typing import Any, Optional, Protocol, Sequence

import httpx

from .config import AgentConfig
from .exceptions import LLMTransportError
from .types import ROLE_ASSISTANT, ConversationTurn


logger = logging.getLogger(__name__)


class ChatModel(Protocol):
    """Anything that can answer a transcript with one assistant turn."""

    def complete(
        self,
        messages: Sequence[ConversationTurn],
        tools: Sequence[dict[str, Any]],
    ) -> ConversationTurn:
        ...


class LLMClient:
    """Client for OpenAI-compatible chat completion APIs."""

    def __init__(self, config: AgentConfig, client: Optional[httpx.Client] = None):
        """Initialize the LLM client.

        Args:
            config: Agent configuration
            client: Optional preconfigured httpx client
        """
        self.config = config
        self.endpoint = config.model_endpoint.rstrip("/")
        self.model = config.model
        self.temperature = config.temperature

        self.headers = {"Content-Type": "application/json"}
        if config.api_key:
            self.headers["Authorization"] = f"Bearer {config.api_key}"

        self.client = client or httpx.Client(timeout=config.request_timeout)

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def build_payload(
        self,
        messages: Sequence[ConversationTurn],
        tools: Sequence[dict[str, Any]],
    ) -> dict[str, Any]:
        """Build the request body. No tool_choice is sent."""
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [turn.to_message() for turn in messages],
            "temperature": self.temperature,
        }
        if tools:
            payload["tools"] = list(tools)
        return payload

    def complete(
        self,
        messages: Sequence[ConversationTurn],
        tools: Sequence[dict[str, Any]],
    ) -> ConversationTurn:
        """Send the transcript and return the assistant's reply.

        Args:
            messages: Full ordered transcript
            tools: Tool catalog in OpenAI shape

        Returns:
            The assistant turn (content and/or tool calls)

        Raises:
            LLMTransportError: On network, HTTP or response format errors
        """
        url = f"{self.endpoint}/chat/completions"
        payload = self.build_payload(messages, tools)
        logger.debug("Requesting completion from %s (%d messages)", url, len(messages))

        try:
            response = self.client.post(url, json=payload, headers=self.headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise LLMTransportError(
                f"LLM request failed with status {e.response.status_code}: "
                f"{e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise LLMTransportError(f"LLM request failed: {e}") from e
        except ValueError as e:
            raise LLMTransportError(f"LLM returned invalid JSON: {e}") from e

        try:
            message = data["choices"][0]["message"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMTransportError(f"LLM response has no message: {data!r:.200}") from e

        _check_message(message)
        turn = ConversationTurn.from_message(message)
        turn.role = ROLE_ASSISTANT
        return turn


def _check_message(message: Any) -> None:
    """Reject assistant messages that cannot become a ConversationTurn.

    Raises:
        LLMTransportError: If the message or one of its tool calls is malformed
    """
    if not isinstance(message, dict):
        raise LLMTransportError(f"LLM message is not an object: {message!r:.200}")

    tool_calls = message.get("tool_calls")
    if tool_calls is None:
        return
    if not isinstance(tool_calls, list):
        raise LLMTransportError(f"LLM tool_calls is not a list: {tool_calls!r:.200}")
    for call in tool_calls:
        if not isinstance(call, dict) or not isinstance(call.get("function"), dict):
            raise LLMTransportError(f"LLM returned a malformed tool call: {call!r:.200}")
