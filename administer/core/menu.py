# -*- coding: utf-8 -*-
"""
menu

Navigation menu derived from the normalized model configuration.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, TYPE_CHECKING

from .config import ModelConfig

if TYPE_CHECKING:  # pragma: no cover
    from .routes import RouteTable


@dataclass(frozen=True)
class MenuItem:
    """Single navigation entry."""

    label: str
    icon: str
    url: str


class MenuProjector:
    """Project configuration entries onto menu items."""

    def __init__(self, routes: "RouteTable") -> None:
        """Bind the projector to the route table used to build links."""

        self._routes = routes

    def project(self, config: Mapping[str, ModelConfig]) -> List[MenuItem]:
        """Return one item per model in configuration order."""

        return [
            MenuItem(
                label=entry.plural_label,
                icon=entry.menu_icon,
                url=self._routes.index_url(slug),
            )
            for slug, entry in config.items()
        ]


__all__ = ["MenuItem", "MenuProjector"]


# The End
