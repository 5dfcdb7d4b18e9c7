# -*- coding: utf-8 -*-
"""
crud

Controller for all CRUD actions.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import Response

from ..core.exceptions import ForbiddenError, HTTPError
from .base import BaseController


class CrudController(BaseController):
    """Serve listing, detail, create, update and delete pages."""

    name = "crud"

    async def handle(self, request: Request, action: str) -> Response:
        """Dispatch ``action`` for the model addressed by the path."""

        context = await self.build_context(request)
        params = request.path_params
        try:
            result = await self.module.dispatcher.dispatch(
                context,
                action,
                params.get("model_class"),
                params.get("id"),
            )
        except ForbiddenError as exc:
            return self.deny(context, exc)
        except HTTPError as exc:
            raise self.http_error(exc) from exc
        return self.respond(request, result)


__all__ = ["CrudController"]


# The End
