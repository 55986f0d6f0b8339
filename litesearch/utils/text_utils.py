"""
Text utility functions for litesearch.

Turns arbitrary document values into the flat strings stored in the
full-text columns, and shortens text for console display.
"""

from typing import Any, Iterator

DEFAULT_MIN_NESTED_LENGTH = 15


def stringify(value: Any, min_length: int = DEFAULT_MIN_NESTED_LENGTH) -> str:
    """
    Convert a document value into a single indexable string.

    Strings pass through and numbers keep their textual form, zero
    included. Booleans become "true"/"false". For lists and dicts only
    string leaves longer than `min_length` characters are kept, so short
    structural tokens such as ids or codes do not pollute the index while
    prose-like nested content does get indexed.

    Args:
        value: Any JSON-like value.
        min_length: Nested strings must be longer than this to be kept.

    Returns:
        The indexable text, possibly empty.
    """
    if isinstance(value, str):
        return value

    if value is None:
        return ""

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, (int, float)):
        return str(value)

    if isinstance(value, (list, tuple, dict)):
        return " ".join(
            leaf for leaf in iter_leaves(value)
            if isinstance(leaf, str) and len(leaf) > min_length
        )

    return ""


def iter_leaves(value: Any) -> Iterator[Any]:
    """Yield every non-container value of a nested structure, depth first."""
    if isinstance(value, dict):
        children = value.values()
    elif isinstance(value, (list, tuple)):
        children = value
    else:
        yield value
        return

    for item in children:
        yield from iter_leaves(item)


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate text to maximum length with ellipsis.

    Args:
        text: Text to truncate.
        max_length: Maximum length including suffix.
        suffix: String to append when truncated.

    Returns:
        Truncated text or original if within limit.
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)
    if truncate_at <= 0:
        return suffix[:max_length]

    # Try to break at word boundary
    truncated = text[:truncate_at]
    last_space = truncated.rfind(" ")

    if last_space > truncate_at * 0.7:
        truncated = truncated[:last_space]

    return truncated + suffix
