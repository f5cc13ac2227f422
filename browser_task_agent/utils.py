"""
Utility functions for Browser Task Agent.

Provides helpers for text processing, URLs, and error formatting.
"""

import re
from typing import Any


def truncate_text(text: str, max_chars: int, suffix: str = "...") -> str:
    """Truncate text to a maximum number of characters.

    Keeps the first ``max_chars`` characters and appends ``suffix``.

    Args:
        text: Text to truncate
        max_chars: Maximum number of characters kept
        suffix: Suffix to add when truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + suffix


def normalize_url(url: str) -> str:
    """Prepend https:// unless the URL already has an http(s) scheme.

    Args:
        url: URL as given by the model

    Returns:
        URL with a scheme
    """
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def format_error(error: BaseException) -> str:
    """Format an error for a tool result."""
    return f"Error: {error}"


def is_password_field(selector: str) -> bool:
    """Check if a selector likely refers to a password field.

    Args:
        selector: The selector to check

    Returns:
        True if likely a password field
    """
    password_patterns = [
        r'password',
        r'type=["\']?password',
        r'#pass',
        r'\.pass',
        r'passwd',
        r'pwd',
    ]
    selector_lower = selector.lower()
    return any(re.search(p, selector_lower) for p in password_patterns)


def redact_arguments(tool_name: str, args: dict[str, Any]) -> dict[str, Any]:
    """Hide text typed into password fields before it is displayed."""
    if tool_name == "fill_input" and is_password_field(str(args.get("selector", ""))):
        redacted = args.copy()
        redacted["text"] = "[REDACTED]"
        return redacted
    return args
