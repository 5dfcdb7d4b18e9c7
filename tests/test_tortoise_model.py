# -*- coding: utf-8 -*-
"""
test_tortoise_model

Tortoise implementation of the CRUD model contract.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import pytest
from tortoise.exceptions import IntegrityError

from administer.adapters.tortoise import TortoiseCrudModel, display_value
from administer.core.exceptions import PersistenceFailure
from administer.grid.filters import ExactFilterInput, TextFilterInput
from tests.blog_models import Article, ArticleKind, PostTag, close_db, init_db


class TestMetadata:
    """Field introspection without a database."""

    def test_editable_fields_skip_generated_values(self) -> None:
        model = TortoiseCrudModel(Article)

        assert list(model.editable_fields()) == [
            "title",
            "body",
            "kind",
            "rating",
            "published",
        ]

    def test_list_columns_skip_text_fields(self) -> None:
        columns = TortoiseCrudModel(Article).list_columns()

        assert [column.name for column in columns] == [
            "id",
            "title",
            "kind",
            "rating",
            "published",
            "created_at",
        ]
        assert columns[-1].label == "Created at"

    def test_list_display_override(self) -> None:
        columns = TortoiseCrudModel(PostTag).list_columns()

        assert [column.name for column in columns] == ["id", "name"]

    def test_default_filters_by_field_type(self) -> None:
        model = TortoiseCrudModel(Article)

        assert isinstance(model.filter_for("title"), TextFilterInput)
        assert isinstance(model.filter_for("rating"), ExactFilterInput)
        assert model.filter_for("kind") is None
        assert model.filter_for("missing") is None

    def test_filter_overrides(self) -> None:
        model = TortoiseCrudModel(PostTag)

        assert isinstance(model.filter_for("name"), ExactFilterInput)
        assert model.filter_for("id") is None

    def test_new_model_has_no_identity(self) -> None:
        model = TortoiseCrudModel(Article)

        assert model.identity is None
        assert model.is_new is True

    def test_form_for_new_record(self) -> None:
        form = TortoiseCrudModel(Article).render_form("/admin/article/create")
        fields = {field.name: field for field in form.fields}

        assert form.url == "/admin/article/create"
        assert fields["title"].required is True
        assert fields["body"].input_type == "textarea"
        assert fields["kind"].input_type == "select"
        assert fields["kind"].value == "news"
        assert fields["kind"].choices == [("news", "NEWS"), ("review", "REVIEW")]
        assert fields["published"].input_type == "checkbox"
        assert fields["rating"].input_type == "number"

    def test_validation_errors_are_collected(self) -> None:
        model = TortoiseCrudModel(Article)

        assert model.load({"title": "x" * 30, "rating": "many"}) is True
        assert model.validate() is False
        assert set(model.errors) == {"title", "rating"}

    def test_load_ignores_unknown_fields(self) -> None:
        model = TortoiseCrudModel(Article)

        assert model.load({"apply": "1", "id": "5"}) is False
        assert model.attributes == {}

    def test_required_field_missing(self) -> None:
        model = TortoiseCrudModel(Article)

        model.load({"title": ""})
        assert model.validate() is False
        assert "title" in model.errors


def test_display_value() -> None:
    assert display_value(None) == ""
    assert display_value(True) == "Yes"
    assert display_value(ArticleKind.REVIEW) == "review"
    assert display_value(12) == "12"


class TestPersistence:
    """Saving, finding and deleting records."""

    @pytest.mark.asyncio
    async def test_create_update_delete(self) -> None:
        await init_db()
        try:
            model = TortoiseCrudModel(Article)
            model.load({"title": "First", "body": "", "rating": "4", "published": "1"})
            assert await model.save() is True
            assert model.identity is not None

            stored = await Article.get(pk=model.identity)
            assert stored.title == "First"
            assert stored.body is None
            assert stored.rating == 4
            assert stored.published is True
            assert stored.kind == ArticleKind.NEWS

            found = await TortoiseCrudModel(Article).find(model.identity)
            assert found is not None
            assert found.describe() == "First"
            found.load({"title": "Renamed", "kind": "review"})
            assert await found.save() is True

            stored = await Article.get(pk=model.identity)
            assert stored.title == "Renamed"
            assert stored.rating == 4
            assert stored.kind == ArticleKind.REVIEW

            assert await found.delete() is True
            assert await Article.exists(pk=model.identity) is False
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_invalid_update_persists_nothing(self) -> None:
        await init_db()
        try:
            article = await Article.create(title="Keep", rating=1)
            found = await TortoiseCrudModel(Article).find(article.pk)

            found.load({"title": "y" * 40, "rating": "2"})
            assert await found.save() is False
            assert "title" in found.errors

            stored = await Article.get(pk=article.pk)
            assert stored.title == "Keep"
            assert stored.rating == 1
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_find_missing_record(self) -> None:
        await init_db()
        try:
            assert await TortoiseCrudModel(Article).find(404) is None
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_find_out_of_range_identifier(self) -> None:
        await init_db()
        try:
            model = TortoiseCrudModel(Article)

            assert await model.find(99999999999999999999) is None
            assert await model.find(-99999999999999999999) is None
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_integrity_error_is_wrapped(self) -> None:
        await init_db()
        try:
            await PostTag.create(name="python")
            model = TortoiseCrudModel(PostTag)
            model.load({"name": "python"})

            with pytest.raises(PersistenceFailure) as info:
                await model.save()
            assert isinstance(info.value.__cause__, IntegrityError)
            assert info.value.status_code == 500
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_describe_without_str(self) -> None:
        await init_db()
        try:
            tag = await PostTag.create(name="web")
            found = await TortoiseCrudModel(PostTag).find(tag.pk)

            assert found.describe() == f"PostTag #{tag.pk}"
        finally:
            await close_db()


class TestGrid:
    """Listing with paging, sorting and filters."""

    @pytest.mark.asyncio
    async def test_pagination_and_sorting(self) -> None:
        await init_db()
        try:
            for index in range(5):
                await Article.create(title=f"Item {index}", rating=index)
            model = TortoiseCrudModel(Article)

            grid = await model.render_grid(
                {"per-page": "2", "page": "2", "sort": "-rating"}, "/admin/article"
            )

            assert grid.total == 5
            assert grid.page == 2
            assert grid.page_count == 3
            assert grid.per_page == 2
            assert grid.sort == "-rating"
            assert [row.cells[1] for row in grid.rows] == ["Item 2", "Item 1"]
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_out_of_range_values_are_clamped(self) -> None:
        await init_db()
        try:
            for index in range(3):
                await Article.create(title=f"Item {index}")
            model = TortoiseCrudModel(Article)

            grid = await model.render_grid(
                {"per-page": "1000", "page": "99", "sort": "password"},
                "/admin/article",
                page_size=2,
                max_page_size=10,
            )

            assert grid.per_page == 10
            assert grid.page == 1
            assert grid.sort is None
            assert [row.id for row in grid.rows] == sorted(row.id for row in grid.rows)
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_malformed_sort_falls_back_to_primary_key(self) -> None:
        await init_db()
        try:
            for title in ["Beta", "Alpha"]:
                await Article.create(title=title)
            model = TortoiseCrudModel(Article)

            for sort in ["--title", "-", "-password"]:
                grid = await model.render_grid({"sort": sort}, "/admin/article")

                assert grid.sort is None
                assert [row.cells[1] for row in grid.rows] == ["Beta", "Alpha"]
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_out_of_range_exact_filter_is_ignored(self) -> None:
        await init_db()
        try:
            await Article.create(title="First", rating=1)
            await Article.create(title="Second", rating=2)
            exact = ExactFilterInput(Article, "rating", int)

            rows = await exact.apply(Article.all(), "99999999999999999999")
            matched = await exact.apply(Article.all(), "2")

            assert len(rows) == 2
            assert [row.title for row in matched] == ["Second"]
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_filters_narrow_rows(self) -> None:
        await init_db()
        try:
            await Article.create(title="Python news", published=True)
            await Article.create(title="Python tips", published=False)
            await Article.create(title="Go news", published=True)
            model = TortoiseCrudModel(Article)

            grid = await model.render_grid(
                {"filter[title]": "python", "filter[published]": "1"}, "/admin/article"
            )

            assert grid.total == 1
            assert grid.rows[0].cells[1] == "Python news"
            title_filter = grid.filters[1]
            assert title_filter["name"] == "filter[title]"
            assert title_filter["value"] == "python"
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_empty_listing(self) -> None:
        await init_db()
        try:
            grid = await TortoiseCrudModel(Article).render_grid({}, "/admin/article")

            assert grid.total == 0
            assert grid.rows == []
            assert grid.page == 1
            assert grid.page_count == 1
        finally:
            await close_db()


class TestAutocomplete:
    """Search used by relation widgets."""

    @pytest.mark.asyncio
    async def test_search_and_limit(self) -> None:
        await init_db()
        try:
            for title in ["Alpha", "Alphabet", "Beta", "alpine"]:
                await Article.create(title=title)
            model = TortoiseCrudModel(Article)

            results = await model.autocomplete("alp", 2)

            assert [item["text"] for item in results] == ["Alpha", "Alphabet"]
            assert set(results[0]) == {"id", "text"}

            everything = await model.autocomplete("", 10)
            assert len(everything) == 4
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_default_search_fields(self) -> None:
        await init_db()
        try:
            await PostTag.create(name="web", code="WB")
            await PostTag.create(name="data", code="DT")
            model = TortoiseCrudModel(PostTag)

            assert model.search_fields() == ["name", "code"]
            results = await model.autocomplete("wb", 10)
            assert [item["text"] for item in results] == [f"PostTag #{results[0]['id']}"]
        finally:
            await close_db()


# The End
