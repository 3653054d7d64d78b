"""
Text helpers for list and item identifiers.
"""

import re
from typing import Set


def slugify(text: str) -> str:
    """
    Turn a label into an identifier.

    ASCII letters and digits are lowercased and kept; runs of whitespace,
    '-' and '_' collapse into a single '-'; everything else is dropped.

    Example:
        >>> slugify("Green Apple")
        'green-apple'
    """
    slug = []
    for ch in text:
        if ch.isascii() and ch.isalnum():
            slug.append(ch.lower())
        elif ch.isspace() or ch in "-_":
            if not slug or slug[-1] != "-":
                slug.append("-")
    return "".join(slug).strip("-")


def display_name(identifier: str) -> str:
    """
    Human-readable name for a list id.

    Example:
        >>> display_name("stone_fruit")
        'Stone Fruit'
    """
    segments = [s for s in re.split(r"[_\- ]", identifier) if s]
    return " ".join(s[0].upper() + s[1:].lower() for s in segments)


def ensure_unique_id(seen: Set[str], base: str) -> str:
    """
    Return base, or base-2, base-3, ... whichever is not yet in seen.

    The returned id is added to seen.
    """
    if base not in seen:
        seen.add(base)
        return base

    counter = 2
    while f"{base}-{counter}" in seen:
        counter += 1
    candidate = f"{base}-{counter}"
    seen.add(candidate)
    return candidate
