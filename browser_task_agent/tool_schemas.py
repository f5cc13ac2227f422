"""
Typed tool schemas for Browser Task Agent.

Holds the Tool Catalog exposed to the LLM and the Pydantic models that
validate each tool's argument payload. The catalog is pure data; the models
form a tagged variant keyed by tool name.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ToolArgumentError


# =============================================================================
# Tool Catalog
# =============================================================================

@dataclass(frozen=True)
class Tool:
    """A callable action as advertised to the model."""
    name: str
    description: str
    parameters: dict[str, Any]

    def to_openai(self) -> dict[str, Any]:
        """Convert to the OpenAI ``tools`` entry shape."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


def _object_schema(properties: dict[str, dict[str, str]], required: list[str]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": required,
    }


COMPLETE_TASK = "complete_task"

BROWSER_TOOLS: tuple[Tool, ...] = (
    Tool(
        name="navigate",
        description="Navigate to the given URL",
        parameters=_object_schema(
            {"url": {"type": "string", "description": "URL of the page to open"}},
            ["url"],
        ),
    ),
    Tool(
        name="get_page_content",
        description="Get the HTML and visible text of the current page",
        parameters=_object_schema({}, []),
    ),
    Tool(
        name="click_element",
        description="Click an element on the page by CSS selector",
        parameters=_object_schema(
            {"selector": {"type": "string", "description": "CSS selector of the element"}},
            ["selector"],
        ),
    ),
    Tool(
        name="fill_input",
        description="Fill an input field with text",
        parameters=_object_schema(
            {
                "selector": {"type": "string", "description": "CSS selector of the input field"},
                "text": {"type": "string", "description": "Text to enter"},
            },
            ["selector", "text"],
        ),
    ),
    Tool(
        name="get_elements",
        description="List elements on the page matching a selector",
        parameters=_object_schema(
            {"selector": {"type": "string", "description": "CSS selector to search for"}},
            ["selector"],
        ),
    ),
    Tool(
        name="get_page_info",
        description="Get the URL and title of the current page",
        parameters=_object_schema({}, []),
    ),
    Tool(
        name="wait_for_element",
        description="Wait for an element to appear on the page",
        parameters=_object_schema(
            {
                "selector": {"type": "string", "description": "CSS selector of the element"},
                "timeout": {"type": "integer", "description": "Wait time in seconds"},
            },
            ["selector"],
        ),
    ),
    Tool(
        name=COMPLETE_TASK,
        description="Finish the task and report the result",
        parameters=_object_schema(
            {"result": {"type": "string", "description": "Result of the task"}},
            ["result"],
        ),
    ),
)

def get_browser_tools() -> tuple[Tool, ...]:
    """Return the static tool catalog."""
    return BROWSER_TOOLS


def tools_for_openai() -> list[dict[str, Any]]:
    """Return the catalog in the OpenAI request shape."""
    return [tool.to_openai() for tool in BROWSER_TOOLS]


# =============================================================================
# Argument Schemas
# =============================================================================

def _require_selector(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Selector cannot be empty")
    return v


class NoArgs(BaseModel):
    """Arguments for tools that take none."""

    model_config = ConfigDict(extra="ignore")


class NavigateArgs(BaseModel):
    """Arguments for navigate."""

    url: str = Field(description="URL to navigate to")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("URL cannot be empty")
        return v


class ClickElementArgs(BaseModel):
    """Arguments for click_element."""

    selector: str = Field(description="CSS selector of the element")

    @field_validator("selector")
    @classmethod
    def validate_selector(cls, v: str) -> str:
        return _require_selector(v)


class FillInputArgs(BaseModel):
    """Arguments for fill_input."""

    selector: str = Field(description="CSS selector of the input field")
    text: str = Field(description="Text to enter")

    @field_validator("selector")
    @classmethod
    def validate_selector(cls, v: str) -> str:
        return _require_selector(v)


class GetElementsArgs(BaseModel):
    """Arguments for get_elements."""

    selector: str = Field(description="CSS selector to search for")

    @field_validator("selector")
    @classmethod
    def validate_selector(cls, v: str) -> str:
        return _require_selector(v)


class WaitForElementArgs(BaseModel):
    """Arguments for wait_for_element.

    ``timeout`` is in whole seconds; zero, negative or missing means the
    default wait.
    """

    selector: str = Field(description="CSS selector of the element")
    timeout: Optional[int] = Field(default=None, description="Wait time in seconds")

    @field_validator("selector")
    @classmethod
    def validate_selector(cls, v: str) -> str:
        return _require_selector(v)

    def timeout_seconds(self, default: int = 10) -> int:
        if self.timeout is None or self.timeout <= 0:
            return default
        return self.timeout


class CompleteTaskArgs(BaseModel):
    """Arguments for complete_task."""

    result: str = Field(description="Result of the task")


TOOL_ARGUMENT_MODELS: dict[str, type[BaseModel]] = {
    "navigate": NavigateArgs,
    "get_page_content": NoArgs,
    "get_page_info": NoArgs,
    "click_element": ClickElementArgs,
    "fill_input": FillInputArgs,
    "get_elements": GetElementsArgs,
    "wait_for_element": WaitForElementArgs,
    COMPLETE_TASK: CompleteTaskArgs,
}


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "payload"
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse_tool_arguments(tool_name: str, raw_arguments: Any) -> BaseModel:
    """Validate a tool call payload against the named tool's model.

    Args:
        tool_name: Catalog tool name
        raw_arguments: JSON object text (blank means no arguments) or an
            already decoded dict

    Returns:
        The validated argument model

    Raises:
        KeyError: If the tool is not in the catalog
        ToolArgumentError: If the payload is not valid for the tool
    """
    model = TOOL_ARGUMENT_MODELS[tool_name]
    try:
        if isinstance(raw_arguments, dict):
            return model.model_validate(raw_arguments)
        if raw_arguments is None or isinstance(raw_arguments, str):
            payload = (raw_arguments or "").strip() or "{}"
            return model.model_validate_json(payload)
    except ValidationError as e:
        raise ToolArgumentError(tool_name, _describe_validation_error(e)) from e

    raise ToolArgumentError(
        tool_name,
        f"payload: expected a JSON object, got {type(raw_arguments).__name__}",
    )
