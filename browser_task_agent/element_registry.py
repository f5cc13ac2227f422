"""
Element registry for Browser Task Agent.

Turns raw element attributes read from the page into ElementInfo records
with a reproducible selector. Selector preference is ``#id``, then
``[data-id='...']``, then a positional ``:nth-child`` fallback. Positional
selectors are only valid for the page state they were read from; after a
navigation or DOM change the elements must be listed again.
"""

from typing import Any, Optional

from .types import ElementInfo


# Reads everything needed for one ElementInfo in a single round trip.
ELEMENT_ATTRIBUTES_JS = """
(el) => ({
    tag: el.tagName.toLowerCase(),
    text: el.innerText ?? el.textContent ?? "",
    href: el.getAttribute("href"),
    id: el.getAttribute("id"),
    className: el.getAttribute("class"),
    dataId: el.getAttribute("data-id"),
})
"""

INTERACTIVE_SELECTORS = (
    "a",
    "button",
    "input",
    "textarea",
    "select",
    "[onclick]",
    '[role="button"]',
)

# Collects visible interactive elements with a best-effort selector.
VISIBLE_ELEMENTS_JS = """
(selectors) => {
    const elements = [];
    selectors.forEach(selector => {
        document.querySelectorAll(selector).forEach((el, index) => {
            const rect = el.getBoundingClientRect();
            const style = window.getComputedStyle(el);
            if (rect.width <= 0 || rect.height <= 0 ||
                style.visibility === 'hidden' || style.display === 'none') {
                return;
            }
            let best = el.tagName.toLowerCase();
            if (el.id) {
                best = '#' + el.id;
            } else if (typeof el.className === 'string' && el.className.trim()) {
                best = '.' + el.className.trim().split(/\\s+/)[0];
            }
            elements.push({
                selector: best,
                tag: el.tagName.toLowerCase(),
                text: (el.textContent || '').trim().substring(0, 100),
                href: el.getAttribute('href'),
                id: el.id || null,
                className: (typeof el.className === 'string' && el.className) || null,
                index: index,
            });
        });
    });
    return elements;
}
"""


def _non_empty(value: Optional[str]) -> Optional[str]:
    return value if value else None


def synthesize_selector(
    base_selector: str,
    index: int,
    element_id: Optional[str] = None,
    data_id: Optional[str] = None,
) -> str:
    """Build a selector for the ``index``-th match of ``base_selector``.

    Args:
        base_selector: The selector the element was found with
        index: Zero-based position among the matches
        element_id: The element's id attribute
        data_id: The element's data-id attribute

    Returns:
        ``#id``, ``[data-id='...']`` or ``base:nth-child(index+1)``
    """
    if element_id:
        return f"#{element_id}"
    if data_id:
        return f"[data-id='{data_id}']"
    return f"{base_selector}:nth-child({index + 1})"


def build_element_info(
    attributes: dict[str, Any],
    base_selector: str,
    index: int,
    visible: bool,
) -> ElementInfo:
    """Create an ElementInfo from attributes read with ELEMENT_ATTRIBUTES_JS."""
    element_id = _non_empty(attributes.get("id"))
    return ElementInfo(
        selector=synthesize_selector(
            base_selector,
            index,
            element_id=element_id,
            data_id=_non_empty(attributes.get("dataId")),
        ),
        tag=attributes.get("tag") or "",
        text=(attributes.get("text") or "").strip(),
        href=attributes.get("href"),
        id=element_id,
        class_name=attributes.get("className"),
        visible=visible,
        index=index,
    )


def build_element_infos(
    raw_elements: list[tuple[dict[str, Any], bool]],
    base_selector: str,
) -> list[ElementInfo]:
    """Create ElementInfo records for matches in query order.

    Args:
        raw_elements: (attributes, visible) pairs in DOM order
        base_selector: The selector the elements were found with
    """
    return [
        build_element_info(attributes, base_selector, index, visible)
        for index, (attributes, visible) in enumerate(raw_elements)
    ]


def visible_element_info(data: dict[str, Any]) -> ElementInfo:
    """Create an ElementInfo from one VISIBLE_ELEMENTS_JS entry."""
    return ElementInfo(
        selector=data.get("selector") or "",
        tag=data.get("tag") or "",
        text=(data.get("text") or "").strip(),
        href=data.get("href"),
        id=data.get("id"),
        class_name=data.get("className"),
        visible=True,
        index=int(data.get("index") or 0),
    )
