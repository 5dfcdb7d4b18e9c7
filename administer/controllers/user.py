# -*- coding: utf-8 -*-
"""
user

Login and logout pages backed by the configured user data provider.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import Response
from pydantic import BaseModel, ValidationError

from ..core.dispatcher import RenderResult
from ..core.exceptions import ForbiddenError
from .base import BaseController

logger = logging.getLogger(__name__)


class UserController(BaseController):
    """Authenticate users and keep their identity in the session."""

    name = "user"

    async def login(self, request: Request) -> Response:
        """Render the login form and sign the user in on valid submission."""

        context = await self.build_context(request)
        if context.is_authenticated:
            return self.redirect(self.module.routes.url_for("default"))
        try:
            self.module.dispatcher.authorize(
                context, "login", controller=self.controller_id
            )
        except ForbiddenError as exc:
            raise self.http_error(exc) from exc

        form_cls = self.module.user_data.get_login_form()
        errors: dict[str, list[str]] = {}
        values: dict[str, Any] = {}
        if context.has_submission:
            values = {
                key: value for key, value in context.form_data.items() if key != "password"
            }
            form = self._validate(form_cls, context.form_data, errors)
            if form is not None:
                identity = await self.module.user_data.authenticate(form)
                if identity is not None:
                    request.session[self.module.settings.session_key] = (
                        self.module.user_data.get_id(identity)
                    )
                    logger.info("User %s signed in", self.module.user_data.get_id(identity))
                    return self.redirect(self.module.routes.url_for("default"))
                errors.setdefault("__all__", []).append(
                    self.module.dispatcher.t("Invalid credentials.", context)
                )
        return self.respond(
            request,
            RenderResult(
                "administer/login.html",
                {
                    "title": self.module.dispatcher.t("Login", context),
                    "fields": self._fields(form_cls),
                    "values": values,
                    "errors": errors,
                    "action_url": self.module.routes.url_for("login"),
                    "breadcrumbs": [],
                },
            ),
        )

    async def logout(self, request: Request) -> Response:
        """Forget the signed-in user."""

        context = await self.build_context(request)
        try:
            self.module.dispatcher.authorize(
                context, "logout", controller=self.controller_id
            )
        except ForbiddenError as exc:
            return self.deny(context, exc)
        request.session.pop(self.module.settings.session_key, None)
        logger.info("User signed out")
        if self.module.routes.has("login"):
            return self.redirect(self.module.routes.url_for("login"))
        return self.redirect(self.module.routes.url_for("default"))

    @staticmethod
    def _validate(
        form_cls: type[BaseModel],
        data: dict[str, Any],
        errors: dict[str, list[str]],
    ) -> BaseModel | None:
        """Return the validated login form or collect its ``errors``."""

        try:
            return form_cls.model_validate(data)
        except ValidationError as exc:
            for error in exc.errors():
                location = error.get("loc") or ("__all__",)
                errors.setdefault(str(location[0]), []).append(error["msg"])
        return None

    @staticmethod
    def _fields(form_cls: type[BaseModel]) -> list[dict[str, str]]:
        """Describe login inputs for the template."""

        described = []
        for name, info in form_cls.model_fields.items():
            described.append(
                {
                    "name": name,
                    "label": info.title or name.replace("_", " ").capitalize(),
                    "type": "password" if "password" in name else "text",
                }
            )
        return described


__all__ = ["UserController"]


# The End
