"""Direct markup transform: resolve marked tags and splice content in place.

    <script inline src="./app.js"></script>
        -> <script>...app.js content...</script>
    <link inline rel="stylesheet" href="./style.css">
        -> <style>...style.css content...</style>
"""

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Awaitable, Callable

from .attributes import format_attributes
from .conf import get_setting
from .matchers import InlineTag, find_inline_tags, has_inline_candidate, splice
from .paths import AssetKind

logger = logging.getLogger(__name__)

Resolver = Callable[[str], "str | None"]
AsyncResolver = Callable[[str], "Awaitable[str | None] | str | None"]

_CLOSING_SCRIPT_RE = re.compile(r"</(script)", re.IGNORECASE)


def escape_script_content(content: str) -> str:
    """Neutralize every ``</script`` so inlined code cannot close its element."""
    return _CLOSING_SCRIPT_RE.sub(r"<\\/\1", content)


def render_inline_tag(tag: InlineTag, content: str, attribute: str) -> str:
    """Build the replacement element for a resolved tag."""
    remaining = format_attributes(tag.attrs, (attribute, *tag.consumed_attributes))
    if tag.kind is AssetKind.SCRIPT:
        return f"<script{remaining}>{escape_script_content(content)}</script>"
    return f"<style{remaining}>{content}</style>"


def transform_html(html: str, resolve: Resolver, attribute: str | None = None) -> str:
    """Inline every marked script and stylesheet link in ``html``.

    Args:
        html: Markup to transform.
        resolve: Returns the content for a ``src``/``href`` value, or None
            when it cannot be resolved (the tag is then left untouched).
        attribute: Trigger attribute; defaults to the ``ATTRIBUTE`` setting.

    Returns:
        The transformed markup, or ``html`` itself when nothing matched.
    """
    attribute = attribute or get_setting("ATTRIBUTE")
    if not has_inline_candidate(html, attribute):
        return html

    result = html
    for tag in reversed(find_inline_tags(html, attribute)):
        content = resolve(tag.reference)
        if content is None:
            logger.warning("Could not resolve inline asset: %s", tag.reference)
            continue
        result = splice(result, tag.match, render_inline_tag(tag, content, attribute))
    return result


async def atransform_html(
    html: str, resolve: AsyncResolver, attribute: str | None = None
) -> str:
    """Async variant of :func:`transform_html`; ``resolve`` may be a coroutine."""
    attribute = attribute or get_setting("ATTRIBUTE")
    if not has_inline_candidate(html, attribute):
        return html

    result = html
    for tag in reversed(find_inline_tags(html, attribute)):
        content = resolve(tag.reference)
        if inspect.isawaitable(content):
            content = await content
        if content is None:
            logger.warning("Could not resolve inline asset: %s", tag.reference)
            continue
        result = splice(result, tag.match, render_inline_tag(tag, content, attribute))
    return result
