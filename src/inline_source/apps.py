"""Django app configuration for django-inline-source."""

from django.apps import AppConfig


class InlineSourceConfig(AppConfig):
    name = "inline_source"
    verbose_name = "Inline Source"

    def ready(self) -> None:
        from . import checks  # noqa: F401
