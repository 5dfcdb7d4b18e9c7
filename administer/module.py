# -*- coding: utf-8 -*-
"""
module

Entry point assembling the admin module and mounting it onto an application.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
import weakref
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Iterable, Sequence

from fastapi import APIRouter, FastAPI
from starlette.middleware.sessions import SessionMiddleware

from .auth import UserDataProvider, resolve_user_data
from .conf import AdministerSettings, current_settings
from .core.access import AccessControl, AccessPolicy, AccessRule
from .core.config import ModelConfig, ModelsConfigNormalizer
from .core.dispatcher import CrudDispatcher
from .core.i18n import MessageCatalog
from .core.menu import MenuItem, MenuProjector
from .core.registry import ModelRegistry
from .core.routes import RouteTable, RouteTableBuilder
from .provider import TemplateProvider

logger = logging.getLogger(__name__)


class AdministerModule:
    """Admin module serving CRUD pages for the configured models."""

    def __init__(
        self,
        models_config: Iterable[Any] = (),
        *,
        module_id: str = "admin",
        url_prefix: str | None = None,
        uploads_url: str | None = None,
        uploads_path: str | Path | None = None,
        user_data_class: Any = None,
        access_control: AccessControl | None = None,
        access_rules: Sequence[AccessRule] | None = None,
        settings: AdministerSettings | None = None,
        registry: ModelRegistry | None = None,
        messages: MessageCatalog | None = None,
        templates_dir: str | Path | None = None,
    ) -> None:
        """Normalise configuration and assemble collaborators."""

        self.module_id = module_id
        self.settings = settings or current_settings()
        prefix = url_prefix if url_prefix is not None else self.settings.url_prefix
        self.url_prefix = prefix.strip("/")
        self.uploads_url = uploads_url or self.settings.uploads_url
        if not self.uploads_url.endswith("/"):
            self.uploads_url += "/"
        self.uploads_path = Path(uploads_path) if uploads_path else self.settings.uploads_path

        self.models_config: dict[str, ModelConfig] = ModelsConfigNormalizer(
            default_icon=self.settings.default_icon
        ).normalize(models_config)
        self.registry = registry or ModelRegistry()
        self.registry.register_config(self.models_config)

        self.user_data: UserDataProvider | None = resolve_user_data(user_data_class)
        self.policy = (
            AccessPolicy(access_rules)
            if access_rules is not None
            else AccessPolicy.default(module_id)
        )
        has_login = (
            self.user_data is not None and self.user_data.get_login_form() is not None
        )
        self.routes: RouteTable = RouteTableBuilder().build(
            self.url_prefix,
            self.models_config,
            has_login=has_login,
            has_logout=self.user_data is not None,
        )
        self.messages = messages or MessageCatalog(default_locale=self.settings.locale)
        self.dispatcher = CrudDispatcher(
            self.models_config,
            self.registry,
            self.policy,
            self.routes,
            controller_id=f"{module_id}/crud",
            access_control=access_control,
            settings=self.settings,
            messages=self.messages,
        )
        self.template_provider = TemplateProvider(settings=self.settings)
        if templates_dir is not None:
            self.template_provider.add_template_directory(templates_dir)
        self.templates = self.template_provider.get_templates(
            t=self.messages.translate,
            upload_location=self.upload_location,
        )
        self._mounted: "weakref.WeakSet[FastAPI]" = weakref.WeakSet()
        logger.debug(
            "Admin module '%s' configured with %d model(s)",
            module_id,
            len(self.models_config),
        )

    def get_menu_items(self) -> list[MenuItem]:
        """Return navigation entries, one per configured model."""

        return MenuProjector(self.routes).project(self.models_config)

    def upload_location(self, url: str, field: str) -> tuple[str, Path]:
        """Return the public URL and storage path for uploads of ``field``."""

        return (
            f"{self.uploads_url}{url}/{field}",
            self.uploads_path / url / field,
        )

    def check_models(self) -> None:
        """Resolve every configured model, failing fast on unknown classes."""

        for entry in self.models_config.values():
            self.registry.resolve(entry)

    def build_router(self) -> APIRouter:
        """Return the router serving the admin route table."""

        from .router import AdminRouterBuilder

        return AdminRouterBuilder(self).build()

    def mount(self, app: FastAPI, *, install_session: bool = True) -> None:
        """Mount the admin interface onto ``app`` once."""

        if app in self._mounted:
            logger.debug("Admin module '%s' is already mounted", self.module_id)
            return
        self._mounted.add(app)
        app.state.administer = self
        app.include_router(self.build_router())
        if install_session and self.user_data is not None:
            app.add_middleware(
                SessionMiddleware,
                secret_key=self.settings.session_secret,
                session_cookie=self.settings.session_cookie,
            )

        previous_lifespan = app.router.lifespan_context

        @asynccontextmanager
        async def _check_admin_models(app_: Any) -> AsyncIterator[Any]:
            async with previous_lifespan(app_) as state:
                self.check_models()
                yield state

        app.router.lifespan_context = _check_admin_models

        logger.info(
            "Admin module '%s' mounted at /%s", self.module_id, self.url_prefix
        )


__all__ = ["AdministerModule"]


# The End
