"""
Type definitions for Browser Task Agent.

Provides typed dataclasses for the conversation transcript, tool calls and
page elements. The transcript types convert to and from the OpenAI chat
message shape so the whole list can be sent to the model each iteration.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional


ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLE_TOOL = "tool"


@dataclass(frozen=True)
class ToolCallRequest:
    """One tool invocation requested by the model.

    Attributes:
        id: Opaque id, unique within the assistant turn
        name: Tool name from the catalog
        raw_arguments: Serialized JSON argument payload
    """
    id: str
    name: str
    raw_arguments: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the OpenAI tool call shape."""
        return {
            "id": self.id,
            "type": "function",
            "function": {
                "name": self.name,
                "arguments": self.raw_arguments,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ToolCallRequest":
        """Create from an OpenAI tool call dict."""
        function = data.get("function") or {}
        arguments = function.get("arguments")
        if arguments is None:
            arguments = ""
        elif not isinstance(arguments, str):
            # Some compatible servers send the arguments already decoded
            arguments = json.dumps(arguments)
        return cls(
            id=data.get("id", ""),
            name=function.get("name", ""),
            raw_arguments=arguments,
        )


@dataclass
class ConversationTurn:
    """One message of the transcript.

    Attributes:
        role: system, user, assistant or tool
        content: Message text; may be None for assistant turns that only
            carry tool calls
        tool_call_id: For tool turns, the id of the call being answered
        tool_calls: For assistant turns, the requested calls in order
    """
    role: str
    content: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: list[ToolCallRequest] = field(default_factory=list)

    def to_message(self) -> dict[str, Any]:
        """Convert to an OpenAI chat message dict."""
        message: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        if self.tool_call_id is not None:
            message["tool_call_id"] = self.tool_call_id
        return message

    @classmethod
    def from_message(cls, data: dict[str, Any]) -> "ConversationTurn":
        """Create from an OpenAI chat message dict."""
        return cls(
            role=data.get("role") or ROLE_ASSISTANT,
            content=data.get("content"),
            tool_call_id=data.get("tool_call_id"),
            tool_calls=[
                ToolCallRequest.from_dict(call)
                for call in data.get("tool_calls") or []
            ],
        )


@dataclass(frozen=True)
class ToolResult:
    """Outcome of dispatching one tool call, as text for the model."""
    tool_call_id: str
    content: str
    is_error: bool = False

    def to_turn(self) -> ConversationTurn:
        """Wrap as a tool turn for the transcript."""
        return ConversationTurn(
            role=ROLE_TOOL,
            content=self.content,
            tool_call_id=self.tool_call_id,
        )


@dataclass(frozen=True)
class ElementInfo:
    """Snapshot of one page element matched by a selector.

    Only valid for the page state it was read from.

    Attributes:
        selector: Synthesized selector (id, data-id or positional)
        tag: Lowercase tag name
        text: Trimmed rendered text
        href: href attribute, if any
        id: id attribute, if any
        class_name: class attribute, if any
        visible: Whether the element is visible
        index: Position among the query's matches
    """
    selector: str
    tag: str
    text: str
    href: Optional[str] = None
    id: Optional[str] = None
    class_name: Optional[str] = None
    visible: bool = False
    index: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "selector": self.selector,
            "tag": self.tag,
            "text": self.text,
            "href": self.href,
            "id": self.id,
            "class": self.class_name,
            "visible": self.visible,
            "index": self.index,
        }
