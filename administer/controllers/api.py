# -*- coding: utf-8 -*-
"""
api

JSON endpoints used by admin widgets.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from ..core.exceptions import HTTPError
from .base import BaseController


class ApiController(BaseController):
    """Serve autocomplete lookups for relation widgets."""

    name = "api"

    async def autocomplete(self, request: Request) -> JSONResponse:
        """Return the record ``id`` and records matching the ``q`` parameter."""

        context = await self.build_context(request)
        dispatcher = self.module.dispatcher
        try:
            entry = dispatcher.resolve(request.path_params.get("model_class"))
            dispatcher.authorize(
                context, "autocomplete", entry, controller=self.controller_id
            )
        except HTTPError as exc:
            raise self.http_error(exc) from exc
        model = dispatcher.create_model(entry)
        record = await model.find(request.path_params["id"])
        results = await model.autocomplete(
            context.query_params.get("q", ""), self.module.settings.autocomplete_limit
        )
        selected = None
        if record is not None:
            selected = {"id": record.identity, "text": record.describe()}
        return JSONResponse({"selected": selected, "results": results})


__all__ = ["ApiController"]


# The End
