# -*- coding: utf-8 -*-
"""
users

User data provider signing operators in to the admin.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Any

from pydantic import BaseModel, Field

from .models import Operator


class LoginForm(BaseModel):
    """Credentials submitted on the login page."""

    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1)


def hash_password(password: str) -> str:
    """Return the stored form of ``password``."""

    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class OperatorUserData:
    """Authenticate operators against the ``Operator`` table."""

    def get_login_form(self) -> type[BaseModel]:
        """Return the login form model."""

        return LoginForm

    async def authenticate(self, form: BaseModel) -> Operator | None:
        """Return the operator whose credentials match ``form``."""

        operator = await Operator.get_or_none(username=form.username)
        if operator is None:
            return None
        if not hmac.compare_digest(operator.password, hash_password(form.password)):
            return None
        return operator

    async def find_identity(self, user_id: Any) -> Operator | None:
        """Return the operator stored in the session."""

        return await Operator.get_or_none(pk=user_id)

    def get_id(self, identity: Operator) -> int:
        """Return the session value for ``identity``."""

        return identity.pk


__all__ = ["LoginForm", "OperatorUserData", "hash_password"]

# The End
