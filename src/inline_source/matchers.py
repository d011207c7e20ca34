"""Locate inline-marked <script> and <link> tags in raw text.

Matching is pattern-based: offsets are stable positions in the scanned text
so replacements can be spliced in place, last match first.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from .attributes import parse_attributes
from .paths import AssetKind

SCRIPT_TAG_RE = re.compile(
    r"<script\b([^>]*?)(?:/>|>([\s\S]*?)</script\s*>)", re.IGNORECASE
)
LINK_TAG_RE = re.compile(r"<link\b([^>]*?)/?\s*>", re.IGNORECASE)

STYLESHEET_REL = "stylesheet"


class TagMatch(NamedTuple):
    """One tag occurrence in the scanned text."""

    start: int
    end: int
    attributes: str
    body: str = ""


class InlineTag(NamedTuple):
    """A tag that carries the trigger attribute and its required companions."""

    kind: AssetKind
    match: TagMatch
    attrs: dict[str, str]
    reference: str

    @property
    def consumed_attributes(self) -> tuple[str, ...]:
        """Attribute names that are dropped when the tag is rewritten."""
        if self.kind is AssetKind.SCRIPT:
            return ("src",)
        return ("rel", "href")


def collect_matches(text: str, pattern: re.Pattern[str]) -> list[TagMatch]:
    """Collect every occurrence of ``pattern`` in document order."""
    matches: list[TagMatch] = []
    for m in pattern.finditer(text):
        body = m.group(2) if pattern.groups >= 2 else None
        matches.append(TagMatch(m.start(), m.end(), m.group(1) or "", body or ""))
    return matches


def has_inline_candidate(text: str, attribute: str) -> bool:
    """Cheap check for the trigger attribute inside a script or link tag."""
    pattern = rf"<(?:script|link)\b[^>]*(?<![\w-]){re.escape(attribute)}(?![\w-])"
    return re.search(pattern, text, re.IGNORECASE) is not None


def find_inline_tags(text: str, attribute: str) -> list[InlineTag]:
    """Find every marked script and stylesheet link, in document order.

    A script needs the trigger attribute and ``src``; a link needs the
    trigger attribute, ``rel="stylesheet"`` and ``href``. Anything else is
    skipped silently. Links that sit inside a script element are ignored.
    """
    scripts = collect_matches(text, SCRIPT_TAG_RE)
    found: list[InlineTag] = []

    for match in scripts:
        attrs = parse_attributes(match.attributes)
        if attribute in attrs and "src" in attrs:
            found.append(InlineTag(AssetKind.SCRIPT, match, attrs, attrs["src"]))

    for match in collect_matches(text, LINK_TAG_RE):
        if any(s.start < match.start < s.end for s in scripts):
            continue
        attrs = parse_attributes(match.attributes)
        if (
            attribute in attrs
            and attrs.get("rel") == STYLESHEET_REL
            and "href" in attrs
        ):
            found.append(InlineTag(AssetKind.STYLE, match, attrs, attrs["href"]))

    found.sort(key=lambda tag: tag.match.start)
    return found


def splice(text: str, match: TagMatch, replacement: str) -> str:
    """Replace the span of ``match`` in ``text``."""
    return text[: match.start] + replacement + text[match.end :]
