"""Rewrite marked tags in JSX/TSX component source into imports.

    <script inline src="./app.js"></script>
becomes
    import __inline_0 from './app.js?__inline_build'
    ...
    <script dangerouslySetInnerHTML={{__html: __inline_0}}></script>

so the bundler resolves the asset through the inline build pipeline and the
component renders its content as raw markup.
"""

from __future__ import annotations

from .attributes import format_attributes
from .matchers import InlineTag, find_inline_tags, has_inline_candidate, splice
from .paths import AssetKind

BINDING_PREFIX = "__inline_"


def _render_component_tag(tag: InlineTag, binding: str, attribute: str) -> str:
    remaining = format_attributes(tag.attrs, (attribute, *tag.consumed_attributes))
    raw_content = f"dangerouslySetInnerHTML={{{{__html: {binding}}}}}"
    if tag.kind is AssetKind.SCRIPT:
        return f"<script{remaining} {raw_content}></script>"
    return f"<style{remaining} {raw_content} />"


def transform_component_source(
    source: str, attribute: str, import_suffix: str
) -> str | None:
    """Turn marked script/link tags into default imports plus raw-content bindings.

    Bindings are numbered ``__inline_0`` .. ``__inline_{N-1}`` in document
    order. Returns None when the source has no marked tag, so callers can
    keep the module untouched.
    """
    if not has_inline_candidate(source, attribute):
        return None

    tags = find_inline_tags(source, attribute)
    if not tags:
        return None

    imports: list[str] = []
    replacements: list[tuple[InlineTag, str]] = []
    for counter, tag in enumerate(tags):
        binding = f"{BINDING_PREFIX}{counter}"
        imports.append(f"import {binding} from '{tag.reference}{import_suffix}'")
        replacements.append((tag, _render_component_tag(tag, binding, attribute)))

    result = source
    for tag, replacement in reversed(replacements):
        result = splice(result, tag.match, replacement)

    return "\n".join(imports) + "\n" + result
