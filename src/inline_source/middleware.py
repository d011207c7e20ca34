"""Middleware that inlines marked <script>/<link> tags in HTML responses."""

from __future__ import annotations

import logging
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from .resolvers import StaticFilesResolver
from .transform import transform_html

logger = logging.getLogger(__name__)


class InlineSourceMiddleware:
    """Replace ``<script inline src>`` and ``<link inline rel="stylesheet">``
    with the referenced static file's content.

    Only text/html, non-streaming responses are touched. Responses without
    marked tags pass through untouched.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        response = self.get_response(request)

        if getattr(response, "streaming", False):
            return response

        content_type = response.get("Content-Type", "")
        if "text/html" not in content_type:
            return response

        charset = response.charset or "utf-8"
        content = response.content.decode(charset)
        transformed = transform_html(content, StaticFilesResolver())
        if transformed is content:
            return response

        response.content = transformed.encode(charset)
        response["Content-Length"] = len(response.content)
        logger.debug("Inlined assets into %s", request.path)
        return response
