# -*- coding: utf-8 -*-
"""
config

Normalization of model declarations into the per-slug admin configuration.

A declaration is either a bare class identifier (a model class or a dotted
string) or a mapping::

    [
        Post,
        {
            "class": Tag,
            "url": "post-tags",
            "labels": ["Tags", "Tag", "the tag"],
            "menu_icon": "tags",
        },
    ]

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from .exceptions import ConfigurationError
from .inflector import basename, camel_to_id, pluralize

logger = logging.getLogger(__name__)

DEFAULT_MENU_ICON = "dashboard"
SLUG_PATTERN = re.compile(r"^[\w-]+$")


@dataclass(frozen=True)
class ModelDeclaration:
    """Raw model declaration supplied by the application."""

    model: Any
    url: str | None = None
    labels: Sequence[str | None] | None = None
    menu_icon: str | None = None


@dataclass(frozen=True)
class ModelConfig:
    """Fully resolved configuration of one administered model."""

    class_identifier: str
    labels: tuple[str, str, str]
    menu_icon: str
    url: str
    model: type | None = None

    @property
    def plural_label(self) -> str:
        """Return the label used for listings and menu entries."""

        return self.labels[0]

    @property
    def singular_label(self) -> str:
        """Return the label used on create and update pages."""

        return self.labels[1]

    @property
    def articled_label(self) -> str:
        """Return the singular label with an article for detail pages."""

        return self.labels[2]


class ModelsConfigNormalizer:
    """Turn raw declarations into an ordered ``slug -> ModelConfig`` mapping."""

    def __init__(self, *, default_icon: str = DEFAULT_MENU_ICON) -> None:
        """Remember the icon used when a declaration does not name one."""

        self.default_icon = default_icon

    def normalize(self, declarations: Iterable[Any]) -> dict[str, ModelConfig]:
        """Return normalized configuration for ``declarations``.

        Later declarations replace earlier ones resolving to the same slug.
        """

        config: dict[str, ModelConfig] = {}
        for raw in declarations:
            declaration = self._coerce(raw)
            entry = self._resolve(declaration)
            if entry.url in config:
                logger.warning(
                    "Model %s replaces %s under slug '%s'",
                    entry.class_identifier,
                    config[entry.url].class_identifier,
                    entry.url,
                )
            config[entry.url] = entry
        return config

    def _coerce(self, raw: Any) -> ModelDeclaration:
        """Return ``raw`` as a :class:`ModelDeclaration`."""

        if isinstance(raw, ModelDeclaration):
            return raw
        if isinstance(raw, (str, type)):
            return ModelDeclaration(model=raw)
        if isinstance(raw, Mapping):
            if raw.get("class") is None:
                raise ConfigurationError(
                    'Each models config item must contain "class" field.'
                )
            return ModelDeclaration(
                model=raw["class"],
                url=raw.get("url"),
                labels=raw.get("labels"),
                menu_icon=raw.get("menu_icon"),
            )
        raise ConfigurationError(
            'Each models config item must contain "class" field.'
        )

    def _resolve(self, declaration: ModelDeclaration) -> ModelConfig:
        """Fill unspecified fields of ``declaration`` with defaults."""

        if declaration.model is None or declaration.model == "":
            raise ConfigurationError(
                'Each models config item must contain "class" field.'
            )
        short_name = basename(declaration.model)
        url = declaration.url if declaration.url is not None else camel_to_id(short_name)
        if not SLUG_PATTERN.match(url):
            raise ConfigurationError(
                f"Url '{url}' of model {short_name} is not a valid path segment."
            )
        provided = list(declaration.labels or ())
        labels = []
        for position, plural in enumerate((True, False, False)):
            value = provided[position] if position < len(provided) else None
            if value is None:
                value = pluralize(short_name) if plural else short_name
            labels.append(value)
        model = declaration.model if isinstance(declaration.model, type) else None
        return ModelConfig(
            class_identifier=self._identifier(declaration.model),
            labels=(labels[0], labels[1], labels[2]),
            menu_icon=(
                declaration.menu_icon
                if declaration.menu_icon is not None
                else self.default_icon
            ),
            url=url,
            model=model,
        )

    @staticmethod
    def _identifier(model: Any) -> str:
        """Return a stable string identifier for a class or dotted name."""

        if isinstance(model, type):
            return f"{model.__module__}.{model.__qualname__}"
        return str(model)


def normalize_models_config(
    declarations: Iterable[Any], *, default_icon: str = DEFAULT_MENU_ICON
) -> dict[str, ModelConfig]:
    """Shortcut for :meth:`ModelsConfigNormalizer.normalize`."""

    return ModelsConfigNormalizer(default_icon=default_icon).normalize(declarations)


__all__ = [
    "DEFAULT_MENU_ICON",
    "ModelConfig",
    "ModelDeclaration",
    "ModelsConfigNormalizer",
    "normalize_models_config",
]


# The End
