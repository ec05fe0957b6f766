from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .errors import TemplateNotFoundError
from .models import RenderedMessage, Template

LOGGER = logging.getLogger(__name__)


def _substitute(text: str, variables: Mapping[str, Any]) -> str:
    for key, value in variables.items():
        text = text.replace("{{" + str(key) + "}}", str(value))
    return text


def render_template(template: Template, variables: Optional[Mapping[str, Any]] = None) -> RenderedMessage:
    """Replace every ``{{key}}`` occurrence for the supplied keys.

    Placeholders without a matching key are left untouched.
    """
    variables = variables or {}
    return RenderedMessage(
        subject=_substitute(template.subject, variables),
        html_body=_substitute(template.html_body, variables),
        text_body=_substitute(template.text_body, variables),
    )


class TemplateStore:
    """Registry of named templates, filled once at startup."""

    def __init__(self) -> None:
        self._templates: Dict[str, Template] = {}

    def register(self, name: str, template: Template) -> Template:
        if name in self._templates:
            raise ValueError(f"Template '{name}' is already registered")
        if template.name != name:
            template = Template(name=name, subject=template.subject, html_body=template.html_body, text_body=template.text_body)
        self._templates[name] = template
        LOGGER.debug("Registered notification template %s", name)
        return template

    def get(self, name: str) -> Template:
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFoundError(name) from None

    def render(self, name: str, variables: Optional[Mapping[str, Any]] = None) -> RenderedMessage:
        return render_template(self.get(name), variables)

    def names(self) -> List[str]:
        return list(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


__all__ = ["TemplateStore", "render_template"]
