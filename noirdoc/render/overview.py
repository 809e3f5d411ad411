"""Jinja-backed overview pages linking to every unit document."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound

from ..config import ConfigError

DEFAULT_TEMPLATE = """# {{ title }}

{{ intro }}

{% for unit in units %}
- [{{ unit.name }}]({{ unit.link }})
{% endfor %}
"""


class OverviewRenderer:
    """Renders landing pages from the built-in template or a user-supplied one.

    Templates receive ``title``, ``intro`` and ``units`` (each with ``name`` and
    a relative ``link``).
    """

    def __init__(self, template_path: Path | None = None) -> None:
        self.template_path = template_path
        self._template = self._load_template(template_path)

    def render(self, title: str, intro: str, unit_names: Sequence[str]) -> str:
        units = [{"name": name, "link": name} for name in unit_names]
        return self._template.render(title=title, intro=intro, units=units)

    @staticmethod
    def _load_template(template_path: Path | None) -> Template:
        if template_path is None:
            env = Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)
            return env.from_string(DEFAULT_TEMPLATE)
        env = Environment(
            loader=FileSystemLoader(str(template_path.parent)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        try:
            return env.get_template(template_path.name)
        except TemplateNotFound as exc:
            raise ConfigError(f"Overview template not found: {template_path}") from exc


__all__ = ["DEFAULT_TEMPLATE", "OverviewRenderer"]
