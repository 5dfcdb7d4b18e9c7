# -*- coding: utf-8 -*-
"""
auth

User data provider contract used for login, logout and session identity.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from .core.exceptions import ConfigurationError


@runtime_checkable
class UserDataProvider(Protocol):
    """Application hook supplying login forms and user identities."""

    def get_login_form(self) -> type[BaseModel] | None:
        """Return the pydantic model describing the login form, if any."""

    async def authenticate(self, form: BaseModel) -> Any | None:
        """Return the identity matching the submitted ``form`` or ``None``."""

    async def find_identity(self, user_id: Any) -> Any | None:
        """Return the identity stored under ``user_id`` or ``None``."""

    def get_id(self, identity: Any) -> Any:
        """Return the value stored in the session for ``identity``."""


def resolve_user_data(source: Any) -> UserDataProvider | None:
    """Return a provider from an instance, a class or ``"module:Class"``."""

    if source is None:
        return None
    if isinstance(source, str):
        module_name, _, attribute = source.partition(":")
        if not attribute:
            module_name, _, attribute = source.rpartition(".")
        if not module_name or not attribute:
            raise ConfigurationError(f"Invalid user data class path '{source}'.")
        try:
            source = getattr(import_module(module_name), attribute)
        except (ImportError, AttributeError) as exc:
            raise ConfigurationError(f"Cannot import user data class '{source}'.") from exc
    if isinstance(source, type):
        source = source()
    if not isinstance(source, UserDataProvider):
        raise ConfigurationError(
            f"{type(source).__name__} does not implement UserDataProvider."
        )
    return source


__all__ = ["UserDataProvider", "resolve_user_data"]


# The End
