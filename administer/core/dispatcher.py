# -*- coding: utf-8 -*-
"""
dispatcher

Resolve admin requests to model configuration and run CRUD operations.

Each request goes through resolving (slug and action), authorizing
(access policy and per-model access control) and executing. Execution ends
with a :class:`RenderResult` or a :class:`RedirectResult`; failures are
raised as :mod:`administer.core.exceptions` errors.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Union

from ..conf import AdministerSettings, current_settings
from .access import AccessControl, AccessPolicy
from .config import ModelConfig
from .context import RequestContext
from .exceptions import (
    BadRequestError,
    ForbiddenError,
    MethodNotAllowedError,
    NotFoundError,
)
from .i18n import MessageCatalog
from .menu import MenuProjector
from .model import CrudModel
from .registry import ModelRegistry
from .routes import RouteTable

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Template to render with its context."""

    template: str
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class RedirectResult:
    """Redirect to ``url``."""

    url: str


DispatchResult = Union[RenderResult, RedirectResult]
Handler = Callable[[RequestContext, ModelConfig, Any], Awaitable[DispatchResult]]


class CrudDispatcher:
    """Generic controller logic shared by every administered model."""

    def __init__(
        self,
        config: Mapping[str, ModelConfig],
        registry: ModelRegistry,
        policy: AccessPolicy,
        routes: RouteTable,
        *,
        controller_id: str = "admin/crud",
        access_control: AccessControl | None = None,
        settings: AdministerSettings | None = None,
        messages: MessageCatalog | None = None,
    ) -> None:
        """Bind the dispatcher to the module collaborators."""

        self.config = config
        self.registry = registry
        self.policy = policy
        self.routes = routes
        self.controller_id = controller_id
        self.access_control = access_control or AccessControl()
        self.settings = settings or current_settings()
        self.messages = messages or MessageCatalog(default_locale=self.settings.locale)
        self._handlers: dict[str, Handler] = {
            "index": self.action_index,
            "view": self.action_view,
            "create": self.action_create,
            "update": self.action_update,
            "delete": self.action_delete,
        }

    @property
    def actions(self) -> tuple[str, ...]:
        """Return the names of model-scoped actions."""

        return tuple(self._handlers)

    async def dispatch(
        self,
        context: RequestContext,
        action: str,
        model_class: str | None = None,
        id: Any = None,
    ) -> DispatchResult:
        """Run ``action`` for the model registered under ``model_class``."""

        if action == "default":
            self.authorize(context, action)
            return self.action_default(context)
        entry = self.resolve(model_class)
        handler = self._handlers.get(action)
        if handler is None:
            raise NotFoundError(f"Unknown action '{action}'.")
        self.authorize(context, action, entry)
        logger.debug("Dispatching %s on %s (id=%s)", action, entry.url, id)
        return await handler(context, entry, id)

    def resolve(self, model_class: str | None) -> ModelConfig:
        """Return the configuration registered under slug ``model_class``."""

        entry = self.config.get(model_class or "")
        if entry is None:
            raise NotFoundError(f"Unknown model '{model_class}'.")
        return entry

    def authorize(
        self,
        context: RequestContext,
        action: str,
        entry: ModelConfig | None = None,
        *,
        controller: str | None = None,
    ) -> None:
        """Raise :class:`ForbiddenError` unless the caller may run ``action``."""

        controller_id = controller or self.controller_id
        if not self.policy.is_allowed(controller_id, action, context.is_authenticated):
            raise ForbiddenError("You are not allowed to perform this action.")
        if entry is not None:
            self.access_control.check_access(action, entry.url, context)

    def create_model(self, entry: ModelConfig) -> CrudModel:
        """Return an empty persistence model for ``entry``."""

        return self.registry.create(entry)

    def t(self, message: str, context: RequestContext) -> str:
        """Translate ``message`` for the caller's locale."""

        return self.messages.translate(message, context.locale)

    # --- actions ------------------------------------------------------------

    def action_default(self, context: RequestContext) -> RenderResult:
        """Show the landing page."""

        items = MenuProjector(self.routes).project(self.config)
        return RenderResult(
            "administer/default.html",
            {"title": self.t("Dashboard", context), "items": items, "breadcrumbs": []},
        )

    async def action_index(
        self, context: RequestContext, entry: ModelConfig, id: Any = None
    ) -> RenderResult:
        """List records of the model."""

        model = self.create_model(entry)
        grid = await model.render_grid(
            context.query_params,
            self.routes.index_url(entry.url),
            page_size=self.settings.page_size,
            max_page_size=self.settings.max_page_size,
        )
        return RenderResult(
            "administer/index.html",
            {
                "grid": grid,
                "title": entry.plural_label,
                "breadcrumbs": model.get_breadcrumbs(
                    "index", None, entry.plural_label, routes=self.routes
                ),
                "buttons": model.get_buttons("index", entry.url, routes=self.routes),
                "model_config": entry,
            },
        )

    async def action_view(
        self, context: RequestContext, entry: ModelConfig, id: Any
    ) -> RenderResult:
        """Display a single record."""

        model = await self.find_model(entry, id)
        return RenderResult(
            "administer/view.html",
            {
                "detail": model.render_detail(),
                "title": f"{self.t('View', context)} {entry.articled_label} #{id}",
                "breadcrumbs": model.get_breadcrumbs(
                    "view", entry.url, entry.plural_label, id, routes=self.routes
                ),
                "buttons": model.get_buttons("view", entry.url, id, routes=self.routes),
                "model_config": entry,
            },
        )

    async def action_create(
        self, context: RequestContext, entry: ModelConfig, id: Any = None
    ) -> DispatchResult:
        """Create a record; redirect on success, re-render the form otherwise."""

        model = self.create_model(entry)
        if await self._load_and_save(context, model):
            return self.post_write_redirect(context, entry, model)
        return RenderResult(
            "administer/form.html",
            {
                "form": model.render_form(self.routes.action_url(entry.url, "create")),
                "title": f"{self.t('Create', context)} {entry.singular_label}",
                "breadcrumbs": model.get_breadcrumbs(
                    "create", entry.url, entry.plural_label, routes=self.routes
                ),
                "buttons": model.get_buttons("create", entry.url, routes=self.routes),
                "model_config": entry,
            },
        )

    async def action_update(
        self, context: RequestContext, entry: ModelConfig, id: Any
    ) -> DispatchResult:
        """Update a record; redirect on success, re-render the form otherwise."""

        model = await self.find_model(entry, id)
        if await self._load_and_save(context, model):
            return self.post_write_redirect(context, entry, model)
        return RenderResult(
            "administer/form.html",
            {
                "form": model.render_form(self.routes.action_url(entry.url, "update", id)),
                "title": f"{self.t('Update', context)} {entry.singular_label} #{id}",
                "breadcrumbs": model.get_breadcrumbs(
                    "update", entry.url, entry.plural_label, id, routes=self.routes
                ),
                "buttons": model.get_buttons("update", entry.url, id, routes=self.routes),
                "model_config": entry,
            },
        )

    async def action_delete(
        self, context: RequestContext, entry: ModelConfig, id: Any
    ) -> RedirectResult:
        """Delete a record and return to the listing.

        Only POST requests are accepted so that links followed by crawlers or
        prefetchers never remove data.
        """

        if not context.is_post:
            raise MethodNotAllowedError("Method Not Allowed. This URL can only handle: POST.")
        model = await self.find_model(entry, id)
        await model.delete()
        logger.info("Deleted %s #%s", entry.class_identifier, id)
        return RedirectResult(self.routes.index_url(entry.url))

    # --- helpers ------------------------------------------------------------

    async def find_model(self, entry: ModelConfig, id: Any) -> CrudModel:
        """Return the persistence model bound to record ``id``."""

        if id is None:
            raise BadRequestError("Missing required parameters: id")
        model = await self.create_model(entry).find(id)
        if model is None:
            raise NotFoundError("The requested page does not exist.")
        return model

    def post_write_redirect(
        self, context: RequestContext, entry: ModelConfig, model: CrudModel
    ) -> RedirectResult:
        """Redirect after a successful write.

        The "apply" button keeps the user on the edit page of the record;
        "save" returns to the listing.
        """

        if str(context.form_data.get("apply", "")) == "1":
            return RedirectResult(
                self.routes.action_url(entry.url, "update", model.identity)
            )
        return RedirectResult(self.routes.index_url(entry.url))

    @staticmethod
    async def _load_and_save(context: RequestContext, model: CrudModel) -> bool:
        """Load submitted data into ``model`` and save it."""

        if not context.has_submission:
            return False
        return model.load(context.form_data) and await model.save()


__all__ = [
    "CrudDispatcher",
    "DispatchResult",
    "RedirectResult",
    "RenderResult",
]


# The End
