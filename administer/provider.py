# -*- coding: utf-8 -*-
"""
provider

Utility class for providing templates for the admin.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from fastapi.templating import Jinja2Templates

from .conf import AdministerSettings, current_settings

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class TemplateProvider:
    """Encapsulates template handling."""

    def __init__(
        self,
        *,
        templates_dir: str | Path | Iterable[str | Path] = TEMPLATES_DIR,
        settings: AdministerSettings | None = None,
    ) -> None:
        """Store template paths together with active settings."""

        self._template_dirs = self._coerce_template_dirs(templates_dir)
        self._settings = settings or current_settings()

    def get_templates(self, **globals_: Any) -> Jinja2Templates:
        """Return a configured ``Jinja2Templates`` instance."""

        templates = Jinja2Templates(directory=list(self._template_dirs))
        templates.env.globals["settings"] = self._settings
        templates.env.globals.update(globals_)
        return templates

    @property
    def template_directories(self) -> tuple[str, ...]:
        """Return template directories available to the provider."""

        return tuple(self._template_dirs)

    def add_template_directory(self, directory: str | Path) -> None:
        """Put ``directory`` first in the search path so it can override pages."""

        normalized = str(directory)
        if normalized not in self._template_dirs:
            self._template_dirs.insert(0, normalized)

    @staticmethod
    def _coerce_template_dirs(
        templates_dir: str | Path | Iterable[str | Path]
    ) -> list[str]:
        """Normalise ``templates_dir`` into a mutable list of strings."""

        if isinstance(templates_dir, (str, Path)):
            return [str(templates_dir)]
        return [str(path) for path in templates_dir]


__all__ = ["TEMPLATES_DIR", "TemplateProvider"]


# The End
