"""System checks for the INLINE_SOURCE settings."""

from __future__ import annotations

import re
from typing import Any

from django.core.checks import CheckMessage, Error, register

from .conf import get_setting
from .utils import import_class

_ATTRIBUTE_NAME_RE = re.compile(r"[\w-]+")


@register()
def check_settings(app_configs: Any, **kwargs: Any) -> list[CheckMessage]:
    errors: list[CheckMessage] = []

    attribute = get_setting("ATTRIBUTE")
    if not isinstance(attribute, str) or not _ATTRIBUTE_NAME_RE.fullmatch(attribute):
        errors.append(
            Error(
                f"INLINE_SOURCE['ATTRIBUTE'] is not a valid attribute name: {attribute!r}",
                hint="Use letters, digits, underscores and hyphens only.",
                id="inline_source.E001",
            )
        )

    for key in ("JS_BUILDER", "CSS_BUILDER"):
        path = get_setting(key)
        try:
            import_class(path)
        except (ImportError, AttributeError, ValueError) as e:
            errors.append(
                Error(
                    f"INLINE_SOURCE['{key}'] cannot be imported: {path!r} ({e})",
                    id="inline_source.E002",
                )
            )

    return errors
