# -*- coding: utf-8 -*-
"""
test_config_normalizer

Normalization of model declarations into per-slug configuration.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging

import pytest

from administer.core.config import (
    DEFAULT_MENU_ICON,
    ModelConfig,
    ModelDeclaration,
    ModelsConfigNormalizer,
    normalize_models_config,
)
from administer.core.exceptions import ConfigurationError
from tests.blog_models import Article, PostTag


class TestNormalizer:
    """Defaults, overrides and failure modes of the normalizer."""

    def test_bare_string_identifier(self) -> None:
        config = normalize_models_config(["Post"])

        assert config == {
            "post": ModelConfig(
                class_identifier="Post",
                labels=("Posts", "Post", "Post"),
                menu_icon=DEFAULT_MENU_ICON,
                url="post",
            )
        }

    def test_bare_class_identifier(self) -> None:
        config = normalize_models_config([PostTag])

        entry = config["post-tag"]
        assert entry.class_identifier == "tests.blog_models.PostTag"
        assert entry.labels == ("PostTags", "PostTag", "PostTag")
        assert entry.model is PostTag

    def test_dotted_identifier_uses_short_name(self) -> None:
        config = normalize_models_config(["models.PostTag"])

        assert list(config) == ["post-tag"]
        assert config["post-tag"].class_identifier == "models.PostTag"
        assert config["post-tag"].model is None

    def test_explicit_url_is_used_verbatim(self) -> None:
        config = normalize_models_config([{"class": "models.PostTag", "url": "Tags_2"}])

        assert list(config) == ["Tags_2"]
        assert config["Tags_2"].url == "Tags_2"

    def test_labels_fill_positionally(self) -> None:
        config = normalize_models_config(
            [{"class": "Category", "labels": [None, "Rubric"]}]
        )

        assert config["category"].labels == ("Categories", "Rubric", "Category")

    def test_all_labels_provided(self) -> None:
        config = normalize_models_config(
            [{"class": Article, "labels": ["Stories", "Story", "a story"]}]
        )

        entry = config["article"]
        assert entry.plural_label == "Stories"
        assert entry.singular_label == "Story"
        assert entry.articled_label == "a story"

    def test_menu_icon_override_and_default(self) -> None:
        config = normalize_models_config(
            ["Post", {"class": "Tag", "menu_icon": "tags"}]
        )

        assert config["post"].menu_icon == "dashboard"
        assert config["tag"].menu_icon == "tags"

    def test_custom_default_icon(self) -> None:
        config = ModelsConfigNormalizer(default_icon="table").normalize(["Post"])

        assert config["post"].menu_icon == "table"

    def test_empty_menu_icon_is_kept(self) -> None:
        config = normalize_models_config([{"class": "Post", "menu_icon": ""}])

        assert config["post"].menu_icon == ""

    def test_declaration_objects_are_accepted(self) -> None:
        config = normalize_models_config(
            [ModelDeclaration(model=Article, url="news", menu_icon="news")]
        )

        assert config["news"].model is Article
        assert config["news"].menu_icon == "news"

    def test_order_follows_declarations(self) -> None:
        config = normalize_models_config(["Zeta", "Alpha", "Mid"])

        assert list(config) == ["zeta", "alpha", "mid"]

    def test_last_declaration_wins_on_same_slug(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="administer.core.config"):
            config = normalize_models_config(
                ["app.Post", {"class": "blog.Post", "menu_icon": "pen"}]
            )

        assert list(config) == ["post"]
        assert config["post"].class_identifier == "blog.Post"
        assert config["post"].menu_icon == "pen"
        assert "replaces" in caplog.text

    @pytest.mark.parametrize(
        "declaration",
        [
            {"url": "posts"},
            {"class": None},
            {"class": ""},
            42,
        ],
    )
    def test_missing_class_fails(self, declaration) -> None:
        with pytest.raises(ConfigurationError, match='"class" field'):
            normalize_models_config([declaration])

    def test_invalid_slug_fails(self) -> None:
        with pytest.raises(ConfigurationError):
            normalize_models_config([{"class": "Post", "url": "a/b"}])


# The End
