# -*- coding: utf-8 -*-
"""
router

Build the FastAPI router serving the admin route table.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import Response

from .controllers import ApiController, CrudController, UserController
from .core.exceptions import ConfigurationError
from .core.routes import RouteRule

if TYPE_CHECKING:  # pragma: no cover
    from .module import AdministerModule

logger = logging.getLogger(__name__)

Endpoint = Callable[[Request], Awaitable[Response]]


class AdminRouterBuilder:
    """Translate route rules into FastAPI routes bound to controllers."""

    def __init__(self, module: "AdministerModule") -> None:
        """Create the controllers of ``module``."""

        self.module = module
        self.crud = CrudController(module)
        self.api = ApiController(module)
        self.user = UserController(module)

    def build(self) -> APIRouter:
        """Return a router with one route per rule, in table order."""

        router = APIRouter()
        for rule in self.module.routes:
            router.add_api_route(
                rule.path,
                self.endpoint_for(rule),
                methods=list(rule.methods),
                name=f"{self.module.module_id}:{rule.name}",
                include_in_schema=False,
            )
            logger.debug("Admin route %s %s -> %s", rule.methods, rule.path, rule.target)
        return router

    def endpoint_for(self, rule: RouteRule) -> Endpoint:
        """Return the endpoint coroutine serving ``rule``."""

        controller, _, action = rule.target.partition("/")
        if controller == "crud":
            crud = self.crud

            async def crud_endpoint(request: Request) -> Response:
                params: dict[str, Any] = {**rule.defaults, **request.path_params}
                return await crud.handle(request, rule.resolve_target(params).split("/", 1)[1])

            return crud_endpoint
        if controller == "api" and action == "autocomplete":
            return self.api.autocomplete
        if controller == "user" and action == "login":
            return self.user.login
        if controller == "user" and action == "logout":
            return self.user.logout
        raise ConfigurationError(f"No controller serves route target '{rule.target}'.")


__all__ = ["AdminRouterBuilder"]


# The End
