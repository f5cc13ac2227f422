"""
Tests for the tool catalog and argument schemas.
"""

import pytest

from browser_task_agent.exceptions import ToolArgumentError
from browser_task_agent.tool_schemas import (
    BROWSER_TOOLS,
    TOOL_ARGUMENT_MODELS,
    FillInputArgs,
    NoArgs,
    WaitForElementArgs,
    get_browser_tools,
    parse_tool_arguments,
    tools_for_openai,
)


class TestToolCatalog:
    """Tests for the static catalog."""

    def test_catalog_has_eight_tools(self):
        names = [tool.name for tool in get_browser_tools()]

        assert sorted(names) == sorted([
            "navigate", "get_page_content", "get_page_info", "click_element",
            "fill_input", "get_elements", "wait_for_element", "complete_task",
        ])

    def test_every_tool_has_argument_model(self):
        assert set(TOOL_ARGUMENT_MODELS) == {tool.name for tool in BROWSER_TOOLS}

    def test_required_parameters(self):
        required = {tool.name: tool.parameters["required"] for tool in BROWSER_TOOLS}

        assert required["navigate"] == ["url"]
        assert required["fill_input"] == ["selector", "text"]
        assert required["wait_for_element"] == ["selector"]
        assert required["complete_task"] == ["result"]
        assert required["get_page_info"] == []

    def test_wait_timeout_is_integer(self):
        wait = next(t for t in BROWSER_TOOLS if t.name == "wait_for_element")

        assert wait.parameters["properties"]["timeout"]["type"] == "integer"

    def test_openai_shape(self):
        entries = tools_for_openai()

        assert len(entries) == 8
        for entry in entries:
            assert entry["type"] == "function"
            assert set(entry["function"]) == {"name", "description", "parameters"}
            assert entry["function"]["parameters"]["type"] == "object"


class TestParseToolArguments:
    """Tests for argument validation at the dispatch boundary."""

    def test_fill_input_valid(self):
        args = parse_tool_arguments("fill_input", '{"selector": "#q", "text": "hello"}')

        assert isinstance(args, FillInputArgs)
        assert args.selector == "#q"
        assert args.text == "hello"

    def test_fill_input_missing_text(self):
        with pytest.raises(ToolArgumentError) as exc_info:
            parse_tool_arguments("fill_input", '{"selector": "#q"}')

        assert exc_info.value.tool_name == "fill_input"
        assert "text" in exc_info.value.detail

    def test_invalid_json(self):
        with pytest.raises(ToolArgumentError, match="invalid arguments for navigate"):
            parse_tool_arguments("navigate", '{"url": ')

    def test_non_object_payload(self):
        with pytest.raises(ToolArgumentError):
            parse_tool_arguments("click_element", '["#a"]')

    def test_wrong_type(self):
        with pytest.raises(ToolArgumentError):
            parse_tool_arguments("complete_task", '{"result": {"title": "x"}}')

    def test_blank_payload_for_no_arg_tool(self):
        assert isinstance(parse_tool_arguments("get_page_info", ""), NoArgs)
        assert isinstance(parse_tool_arguments("get_page_content", "  "), NoArgs)

    def test_blank_payload_for_required_args(self):
        with pytest.raises(ToolArgumentError, match="url"):
            parse_tool_arguments("navigate", "")

    def test_empty_selector_rejected(self):
        with pytest.raises(ToolArgumentError, match="Selector cannot be empty"):
            parse_tool_arguments("click_element", '{"selector": "   "}')

    def test_unknown_tool(self):
        with pytest.raises(KeyError):
            parse_tool_arguments("take_screenshot", "{}")


class TestWaitTimeout:
    """Tests for the wait_for_element timeout default."""

    @pytest.mark.parametrize("payload", [
        '{"selector": "#a"}',
        '{"selector": "#a", "timeout": 0}',
        '{"selector": "#a", "timeout": -5}',
        '{"selector": "#a", "timeout": null}',
    ])
    def test_defaults_to_ten_seconds(self, payload):
        args = parse_tool_arguments("wait_for_element", payload)

        assert args.timeout_seconds() == 10

    def test_explicit_timeout(self):
        args = WaitForElementArgs(selector="#a", timeout=3)

        assert args.timeout_seconds() == 3


class TestDecodedPayloads:
    """Payloads that arrive already decoded."""

    def test_dict_payload(self):
        args = parse_tool_arguments("fill_input", {"selector": "#q", "text": "hi"})

        assert isinstance(args, FillInputArgs)
        assert args.text == "hi"

    def test_dict_payload_missing_field(self):
        with pytest.raises(ToolArgumentError, match="url"):
            parse_tool_arguments("navigate", {})

    @pytest.mark.parametrize("payload", [42, ["#a"], 1.5, True])
    def test_other_payload_types(self, payload):
        with pytest.raises(ToolArgumentError, match="expected a JSON object"):
            parse_tool_arguments("click_element", payload)
