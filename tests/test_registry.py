# -*- coding: utf-8 -*-
"""
test_registry

Resolution of configured classes to CRUD model factories.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
from tortoise.exceptions import ConfigurationError as TortoiseConfigurationError

from administer.adapters.tortoise import TortoiseCrudModel
from administer.core.config import normalize_models_config
from administer.core.exceptions import ConfigurationError
from administer.core.registry import ModelRegistry
from tests.blog_models import Article, close_db, init_db


class TestModelRegistry:
    """Explicit, declared and Tortoise-registered models."""

    def test_declared_class_is_registered(self) -> None:
        config = normalize_models_config([Article])
        registry = ModelRegistry()
        registry.register_config(config)

        model = registry.create(config["article"])

        assert registry.is_registered("tests.blog_models.Article")
        assert isinstance(model, TortoiseCrudModel)
        assert model.model_cls is Article

    def test_explicit_factory_wins(self) -> None:
        config = normalize_models_config(["shop.Product"])
        registry = ModelRegistry()
        registry.register("shop.Product", TortoiseCrudModel.factory(Article))

        assert registry.create(config["product"]).model_cls is Article

    def test_unknown_identifier_fails(self) -> None:
        config = normalize_models_config(["shop.Product"])

        with pytest.raises(ConfigurationError):
            ModelRegistry().resolve(config["product"])

    def test_unsupported_class_fails(self) -> None:
        class Plain:
            pass

        config = normalize_models_config([Plain])

        with pytest.raises(ConfigurationError):
            ModelRegistry().register_config(config)

    @pytest.mark.asyncio
    async def test_tortoise_app_lookup(self) -> None:
        await init_db()
        try:
            config = normalize_models_config(["models.Article"])
            registry = ModelRegistry()

            model = registry.create(config["article"])

            assert model.model_cls is Article
            assert registry.is_registered("models.Article")
        finally:
            await close_db()

    @pytest.mark.asyncio
    async def test_unknown_model_in_known_app_fails(self) -> None:
        await init_db()
        try:
            config = normalize_models_config(["models.Missing"])

            with pytest.raises(ConfigurationError):
                ModelRegistry().resolve(config["missing"])
        finally:
            await close_db()

    def test_lookup_through_apps_registry(self) -> None:
        config = normalize_models_config(["blog.Article"])
        apps = Mock(spec=["get_model"])
        apps.get_model.return_value = Article

        with patch("administer.core.registry.Tortoise") as tortoise:
            tortoise.apps = apps
            model = ModelRegistry().create(config["article"])

        apps.get_model.assert_called_once_with("blog", "Article")
        assert model.model_cls is Article

    @pytest.mark.parametrize("apps", [None, {}])
    def test_lookup_without_registered_apps_fails(self, apps) -> None:
        config = normalize_models_config(["blog.Article"])

        with patch("administer.core.registry.Tortoise") as tortoise:
            tortoise.apps = apps
            with pytest.raises(ConfigurationError):
                ModelRegistry().resolve(config["article"])

    def test_apps_registry_errors_become_configuration_errors(self) -> None:
        config = normalize_models_config(["blog.Article"])
        apps = Mock(spec=["get_model"])
        apps.get_model.side_effect = TortoiseConfigurationError("No app with name 'blog'")

        with patch("administer.core.registry.Tortoise") as tortoise:
            tortoise.apps = apps
            with pytest.raises(ConfigurationError):
                ModelRegistry().resolve(config["article"])


# The End
