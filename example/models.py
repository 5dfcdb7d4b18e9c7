# -*- coding: utf-8 -*-
"""
models

Blog models used by the example project.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from enum import Enum

from tortoise import fields
from tortoise.models import Model


class PostStatus(str, Enum):
    """Publication state of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"


class Post(Model):
    """Blog entry."""

    id = fields.IntField(pk=True)
    title = fields.CharField(max_length=200)
    body = fields.TextField(null=True)
    status = fields.CharEnumField(PostStatus, default=PostStatus.DRAFT)
    is_pinned = fields.BooleanField(default=False)
    created_at = fields.DatetimeField(auto_now_add=True)

    admin_search_fields = ("title",)

    class Meta:
        table = "example_post"

    def __str__(self) -> str:
        """Return the post title."""

        return self.title


class PostTag(Model):
    """Label attached to posts."""

    id = fields.IntField(pk=True)
    name = fields.CharField(max_length=50, unique=True)
    weight = fields.IntField(default=0)

    class Meta:
        table = "example_post_tag"

    def __str__(self) -> str:
        return self.name


class Operator(Model):
    """Person allowed to sign in to the admin."""

    id = fields.IntField(pk=True)
    username = fields.CharField(max_length=50, unique=True)
    password = fields.CharField(max_length=128)

    admin_list_display = ("id", "username")

    class Meta:
        table = "example_operator"


__all__ = ["Operator", "Post", "PostStatus", "PostTag"]

# The End
