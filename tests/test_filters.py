# -*- coding: utf-8 -*-
"""
test_filters

Grid filter inputs applied to Tortoise querysets.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import pytest

from administer.grid.filters import (
    BooleanFilterInput,
    ExactFilterInput,
    TextFilterInput,
)
from tests.blog_models import Article, close_db, init_db


def test_render_describes_widget() -> None:
    widget = TextFilterInput(Article, "title").render({"value": "abc"})

    assert widget == {
        "type": "text",
        "name": "filter[title]",
        "attribute": "title",
        "value": "abc",
    }


def test_boolean_render_offers_choices() -> None:
    widget = BooleanFilterInput(Article, "published").render()

    assert widget["type"] == "select"
    assert [value for value, _ in widget["choices"]] == ["", "1", "0"]


class TestApply:
    """Filters narrow querysets against a real database."""

    @pytest.mark.asyncio
    async def test_text_filter_is_case_insensitive(self) -> None:
        await init_db()
        try:
            await Article.create(title="Hello World")
            await Article.create(title="Other")

            rows = await TextFilterInput(Article, "title").apply(Article.all(), "hello")

            assert [row.title for row in rows] == ["Hello World"]
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_exact_filter_converts_value(self) -> None:
        await init_db()
        try:
            await Article.create(title="a", rating=3)
            await Article.create(title="b", rating=5)
            filter_input = ExactFilterInput(Article, "rating", int)

            rows = await filter_input.apply(Article.all(), "5")
            assert [row.title for row in rows] == ["b"]

            rows = await filter_input.apply(Article.all().order_by("id"), "five")
            assert [row.title for row in rows] == ["a", "b"]
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_boolean_filter(self) -> None:
        await init_db()
        try:
            await Article.create(title="draft", published=False)
            await Article.create(title="live", published=True)
            filter_input = BooleanFilterInput(Article, "published")

            rows = await filter_input.apply(Article.all(), "1")
            assert [row.title for row in rows] == ["live"]

            rows = await filter_input.apply(Article.all(), "no")
            assert [row.title for row in rows] == ["draft"]

            rows = await filter_input.apply(Article.all(), "maybe")
            assert len(rows) == 2
        finally:
            await close_db()


# The End
