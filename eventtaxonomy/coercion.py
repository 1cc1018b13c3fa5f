"""
Null-safe conversion of attribute values to display strings.
"""

from datetime import datetime
from typing import Any


def display_string_of(value: Any) -> str:
    """
    Convert an optional attribute value to its display string.

    Args:
        value: Attribute value, or None when the attribute is absent

    Returns:
        The display string, or "" when the value is absent
    """
    if value is None:
        return ""
    display = getattr(value, "display_string", None)
    if display is not None:
        return str(display)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def direction_label(value: Any) -> str:
    """
    Map a message/call direction to the word used in summaries.

    "Incoming" becomes "from" and "Outgoing" becomes "to". Any other present
    value maps to a single space while an absent value maps to "".
    """
    if value is None:
        return ""
    display = display_string_of(value)
    if display == "Incoming":
        return "from"
    if display == "Outgoing":
        return "to"
    return " "
