"""
Tests for selector synthesis and element records.
"""

from browser_task_agent.element_registry import (
    build_element_info,
    build_element_infos,
    synthesize_selector,
)


RAW_LIST = [
    ({"tag": "li", "text": "First", "id": "first"}, True),
    ({"tag": "li", "text": "Second", "dataId": "row-2"}, True),
    ({"tag": "li", "text": "Third"}, True),
    ({"tag": "li", "text": "Fourth", "id": "", "dataId": ""}, False),
]


class TestSynthesizeSelector:
    """Tests for the id > data-id > positional preference."""

    def test_id_wins(self):
        assert synthesize_selector("li", 3, element_id="item", data_id="9") == "#item"

    def test_data_id_when_no_id(self):
        assert synthesize_selector("li", 3, data_id="9") == "[data-id='9']"

    def test_positional_fallback(self):
        """Index is zero-based, nth-child is one-based."""
        assert synthesize_selector("ul > li", 0) == "ul > li:nth-child(1)"
        assert synthesize_selector("ul > li", 4) == "ul > li:nth-child(5)"

    def test_empty_attributes_fall_through(self):
        assert synthesize_selector("li", 1, element_id="", data_id="") == "li:nth-child(2)"


class TestBuildElementInfos:
    """Tests for building ElementInfo records."""

    def test_selectors_follow_policy(self):
        elements = build_element_infos(RAW_LIST, "li")

        assert [e.selector for e in elements] == [
            "#first",
            "[data-id='row-2']",
            "li:nth-child(3)",
            "li:nth-child(4)",
        ]

    def test_same_state_same_selectors(self):
        """Synthesizing twice over the same DOM state gives identical output."""
        first = build_element_infos(RAW_LIST, "li")
        second = build_element_infos(RAW_LIST, "li")

        assert [e.selector for e in first] == [e.selector for e in second]
        assert first == second

    def test_empty_id_is_not_reported(self):
        element = build_element_info({"tag": "li", "id": ""}, "li", 0, visible=True)

        assert element.id is None
        assert element.selector == "li:nth-child(1)"

    def test_text_is_trimmed(self):
        element = build_element_info(
            {"tag": "button", "text": "\n  Sign in  \n"}, "button", 0, visible=True
        )

        assert element.text == "Sign in"
        assert element.tag == "button"

    def test_missing_text(self):
        element = build_element_info({"tag": "img", "text": None}, "img", 2, visible=False)

        assert element.text == ""
        assert element.index == 2
        assert element.visible is False

    def test_to_dict(self):
        element = build_element_info(
            {"tag": "a", "text": "Docs", "href": "/docs", "className": "nav"},
            "a",
            0,
            visible=True,
        )

        assert element.to_dict() == {
            "selector": "a:nth-child(1)",
            "tag": "a",
            "text": "Docs",
            "href": "/docs",
            "id": None,
            "class": "nav",
            "visible": True,
            "index": 0,
        }
