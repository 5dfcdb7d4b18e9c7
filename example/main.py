# -*- coding: utf-8 -*-
"""
main

Example application bootstrap.

Run with ``uvicorn example.main:app``; the first start creates the operator
``admin`` with password ``admin``.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from tortoise import Tortoise

from administer import AdministerModule, AdministerSettings

from .models import Operator, Post, PostTag
from .users import OperatorUserData, hash_password

logger = logging.getLogger(__name__)

DB_URL = os.environ.get("EXAMPLE_DB_URL", "sqlite://example.sqlite3")


class ExampleORMLifecycle:
    """Start and stop Tortoise together with the application."""

    def __init__(self, db_url: str = DB_URL) -> None:
        """Remember the database URL."""

        self.db_url = db_url

    async def startup(self) -> None:
        """Initialise Tortoise, create tables and the default operator."""

        await Tortoise.init(db_url=self.db_url, modules={"models": ["example.models"]})
        await Tortoise.generate_schemas(safe=True)
        if not await Operator.exists():
            await Operator.create(username="admin", password=hash_password("admin"))
            logger.info("Created default operator 'admin'")

    async def shutdown(self) -> None:
        """Close database connections."""

        await Tortoise.close_connections()

    @asynccontextmanager
    async def lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        """Run ``startup`` and ``shutdown`` around the application's life."""

        await self.startup()
        try:
            yield
        finally:
            await self.shutdown()


def create_app() -> FastAPI:
    """Return the example application with the admin mounted."""

    lifecycle = ExampleORMLifecycle()
    app = FastAPI(title="Administer example", lifespan=lifecycle.lifespan)
    settings = AdministerSettings.from_env()
    admin = AdministerModule(
        [
            Post,
            {"class": PostTag, "url": "tags", "labels": ["Tags", "Tag"], "menu_icon": "tags"},
            {"class": Operator, "menu_icon": "user"},
        ],
        user_data_class=OperatorUserData,
        settings=settings,
    )
    admin.mount(app)
    return app


app = create_app()


__all__ = ["ExampleORMLifecycle", "app", "create_app"]

# The End
