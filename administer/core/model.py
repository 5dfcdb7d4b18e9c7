# -*- coding: utf-8 -*-
"""
model

Persistence model contract consumed by the CRUD dispatcher.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .routes import RouteTable


@dataclass
class GridColumn:
    """Column shown in the listing grid."""

    name: str
    label: str
    sortable: bool = True


@dataclass
class GridRow:
    """Rendered row of the listing grid."""

    id: Any
    cells: list[str]


@dataclass
class GridDescription:
    """Paginated and filtered listing produced from query parameters."""

    url: str
    columns: list[GridColumn]
    rows: list[GridRow]
    filters: list[dict[str, Any] | None]
    page: int = 1
    per_page: int = 20
    page_count: int = 1
    total: int = 0
    sort: str | None = None


@dataclass
class FormField:
    """Input rendered on create and update forms."""

    name: str
    label: str
    input_type: str = "text"
    value: Any = None
    required: bool = False
    errors: list[str] = field(default_factory=list)
    choices: list[tuple[str, str]] | None = None


@dataclass
class FormDescription:
    """Form rendered for create and update pages."""

    url: str
    fields: list[FormField]
    errors: dict[str, list[str]] = field(default_factory=dict)


class CrudModel(ABC):
    """Capability set the dispatcher invokes on an administered model.

    Implementations wrap one entity type. A fresh instance stands for a new,
    unsaved record; :meth:`find` returns instances bound to stored records.
    """

    def __init__(self) -> None:
        """Initialise submitted attributes and validation errors."""

        self.attributes: dict[str, Any] = {}
        self.errors: dict[str, list[str]] = {}

    @property
    @abstractmethod
    def identity(self) -> Any:
        """Return the primary key of the bound record or ``None``."""

    @property
    def is_new(self) -> bool:
        """Return ``True`` until the record has been stored."""

        return self.identity is None

    @abstractmethod
    async def find(self, id: Any) -> "CrudModel | None":
        """Return a model bound to record ``id`` or ``None``."""

    @abstractmethod
    def load(self, data: Mapping[str, Any]) -> bool:
        """Populate attributes from ``data``; ``False`` when nothing applies."""

    @abstractmethod
    def validate(self) -> bool:
        """Validate loaded attributes filling :attr:`errors`."""

    @abstractmethod
    async def save(self) -> bool:
        """Validate and persist the record; ``False`` on validation errors."""

    @abstractmethod
    async def delete(self) -> bool:
        """Remove the bound record."""

    @abstractmethod
    async def render_grid(
        self,
        params: Mapping[str, str],
        url: str,
        *,
        page_size: int = 20,
        max_page_size: int = 100,
    ) -> GridDescription:
        """Return the listing grid described by query ``params``."""

    @abstractmethod
    def render_detail(self) -> list[dict[str, Any]]:
        """Return ``label``/``value`` pairs of the bound record."""

    @abstractmethod
    def render_form(self, url: str) -> FormDescription:
        """Return the input form including submitted values and errors."""

    @abstractmethod
    async def autocomplete(self, query: str, limit: int) -> list[dict[str, Any]]:
        """Return ``id``/``text`` pairs of records matching ``query``."""

    def describe(self) -> str:
        """Return a short human-readable description of the bound record."""

        return f"#{self.identity}"

    def add_error(self, attribute: str, message: str) -> None:
        """Attach a validation ``message`` to ``attribute``."""

        self.errors.setdefault(attribute, []).append(message)

    def get_breadcrumbs(
        self,
        action: str,
        url: str | None,
        label: str,
        id: Any = None,
        *,
        routes: "RouteTable",
    ) -> list[dict[str, Any]]:
        """Return breadcrumb links for ``action`` pages."""

        if action == "index" or url is None:
            return [{"label": label, "url": None}]
        crumbs = [{"label": label, "url": routes.index_url(url)}]
        if id is not None and action == "update":
            crumbs.append({"label": f"#{id}", "url": routes.action_url(url, "view", id)})
            crumbs.append({"label": action.capitalize(), "url": None})
        elif id is not None:
            crumbs.append({"label": f"#{id}", "url": None})
        else:
            crumbs.append({"label": action.capitalize(), "url": None})
        return crumbs

    def get_buttons(
        self,
        action: str,
        url: str,
        id: Any = None,
        *,
        routes: "RouteTable",
    ) -> list[dict[str, Any]]:
        """Return toolbar buttons for ``action`` pages.

        Buttons with ``method`` set to ``POST`` must be rendered as forms.
        """

        if action == "index":
            return [
                {"label": "Create", "url": routes.action_url(url, "create"), "method": "GET"}
            ]
        if id is None:
            return []
        buttons = []
        if action == "view":
            buttons.append(
                {"label": "Update", "url": routes.action_url(url, "update", id), "method": "GET"}
            )
        if action == "update":
            buttons.append(
                {"label": "View", "url": routes.action_url(url, "view", id), "method": "GET"}
            )
        buttons.append(
            {"label": "Delete", "url": routes.action_url(url, "delete", id), "method": "POST"}
        )
        return buttons


__all__ = [
    "CrudModel",
    "FormDescription",
    "FormField",
    "GridColumn",
    "GridDescription",
    "GridRow",
]


# The End
