"""
Encode/decode helpers for the ;-delimited keyword string stored per image
"""
from typing import List

DELIMITER = ";"


def decode(raw: str) -> List[str]:
    """Split a raw keyword string into tag names (no trimming, no deduplication)"""
    if raw == "":
        return []
    return raw.split(DELIMITER)


def toggle(raw: str, name: str) -> str:
    """
    Add `name` to the raw keyword string, or remove its first occurrence if present.

    Examples:
        >>> toggle("dog", "cat")
        'dog;cat'
        >>> toggle("cat;dog", "cat")
        'dog'
    """
    parts = decode(raw)
    if name in parts:
        parts.remove(name)
        return DELIMITER.join(parts)
    if raw == "":
        return name
    return raw + DELIMITER + name
