# substrate_indexer/utils/values.py

from typing import Any

import msgspec


NULL_BYTE_MARKER = "u0000"


def value_to_str(value: Any) -> str:
    """Render a decoded call/event argument the way the node's JSON codec prints it"""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if value is None:
        return ""
    return msgspec.json.encode(value).decode()


def sanitize_event_value(value: Any) -> str:
    """
    Stringify an event argument, stripping escaped null bytes.

    Byte strings padded with NUL come back from the node JSON-escaped
    (``"\\u0000"``); those payloads have the marker, backslashes and quotes
    removed so the stored value is plain text.
    """
    encoded = msgspec.json.encode(value).decode()
    if NULL_BYTE_MARKER not in encoded:
        return value_to_str(value)
    return encoded.replace(NULL_BYTE_MARKER, "").replace("\\", "").replace('"', "")
