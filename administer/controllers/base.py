# -*- coding: utf-8 -*-
"""
base

Shared helpers for admin controllers.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Any, TYPE_CHECKING

from fastapi import HTTPException, Request, status
from fastapi.responses import RedirectResponse, Response

from ..core.context import RequestContext
from ..core.dispatcher import DispatchResult, RedirectResult
from ..core.exceptions import ForbiddenError, HTTPError

if TYPE_CHECKING:  # pragma: no cover
    from ..module import AdministerModule

logger = logging.getLogger(__name__)


class BaseController:
    """Common request handling for admin controllers."""

    name = ""

    def __init__(self, module: "AdministerModule") -> None:
        """Bind the controller to ``module``."""

        self.module = module

    @property
    def controller_id(self) -> str:
        """Return the identifier used by access rules."""

        return f"{self.module.module_id}/{self.name}"

    async def build_context(self, request: Request) -> RequestContext:
        """Collect the request data handed to the dispatcher."""

        form_data: dict[str, Any] = {}
        if request.method == "POST":
            form_data = dict(await request.form())
        user = await self.current_user(request)
        request.state.administer_user = user
        return RequestContext(
            method=request.method,
            user=user,
            query_params=dict(request.query_params),
            form_data=form_data,
            locale=self.module.settings.locale,
        )

    async def current_user(self, request: Request) -> Any | None:
        """Return the signed-in identity.

        A user placed on ``request.state`` by the host application wins over
        the session stored by the login action.
        """

        user = getattr(request.state, "user", None)
        if user is not None:
            return user
        user_data = self.module.user_data
        session = request.scope.get("session")
        if user_data is None or session is None:
            return None
        user_id = session.get(self.module.settings.session_key)
        if user_id is None:
            return None
        identity = await user_data.find_identity(user_id)
        if identity is None:
            session.pop(self.module.settings.session_key, None)
        return identity

    def respond(self, request: Request, result: DispatchResult) -> Response:
        """Turn a dispatcher result into a response."""

        if isinstance(result, RedirectResult):
            return self.redirect(result.url)
        context = {
            "module": self.module,
            "menu_items": self.module.get_menu_items(),
            "routes": self.module.routes,
            "user": getattr(request.state, "administer_user", None),
            **result.context,
        }
        return self.module.templates.TemplateResponse(
            request=request, name=result.template, context=context
        )

    @staticmethod
    def redirect(url: str) -> RedirectResponse:
        """Return a redirect that turns the follow-up request into a GET."""

        return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)

    def deny(self, context: RequestContext, exc: ForbiddenError) -> Response:
        """Send guests to the login page, refuse everybody else."""

        if not context.is_authenticated and self.module.routes.has("login"):
            logger.debug("Redirecting anonymous caller to the login page")
            return self.redirect(self.module.routes.url_for("login"))
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc

    @staticmethod
    def http_error(exc: HTTPError) -> HTTPException:
        """Convert a domain error into ``HTTPException``."""

        return HTTPException(status_code=exc.status_code, detail=exc.detail or None)


__all__ = ["BaseController"]


# The End
