"""Parse and re-serialize raw tag attribute fragments.

This is a deliberately small pattern-based scanner, not an HTML tokenizer:
a quoted value cannot contain its own delimiting quote character.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

_ATTRIBUTE_RE = re.compile(r"""([\w-]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|(\S+)))?""")


def parse_attributes(fragment: str) -> dict[str, str]:
    """Parse ``name[=value]`` tokens into a name -> value mapping.

    Values may be double-quoted, single-quoted or bare. Boolean attributes
    map to an empty string. A repeated name keeps its last value.

    Args:
        fragment: Raw text between the tag name and the closing ``>``.

    Returns:
        Attributes in document order.
    """
    attrs: dict[str, str] = {}
    for match in _ATTRIBUTE_RE.finditer(fragment):
        name, double, single, bare = match.groups()
        if double is not None:
            attrs[name] = double
        elif single is not None:
            attrs[name] = single
        else:
            attrs[name] = bare or ""
    return attrs


def format_attributes(attrs: Mapping[str, str], exclude: Iterable[str] = ()) -> str:
    """Serialize attributes back to a tag fragment.

    Returns a string with a single leading space, or ``""`` when nothing
    remains after dropping ``exclude``.
    """
    excluded = set(exclude)
    parts = [
        name if value == "" else f'{name}="{value}"'
        for name, value in attrs.items()
        if name not in excluded
    ]
    return f" {' '.join(parts)}" if parts else ""
