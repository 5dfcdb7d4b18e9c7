# -*- coding: utf-8 -*-
"""
context

Per-request context handed explicitly to the dispatcher.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class RequestContext:
    """Request data the dispatcher needs, detached from the web framework."""

    method: str = "GET"
    user: Any | None = None
    query_params: Mapping[str, str] = field(default_factory=dict)
    form_data: Mapping[str, Any] = field(default_factory=dict)
    locale: str = "en"

    @property
    def is_authenticated(self) -> bool:
        """Return ``True`` when a user identity is attached."""

        return self.user is not None

    @property
    def is_post(self) -> bool:
        """Return ``True`` for state-changing submissions."""

        return self.method.upper() == "POST"

    @property
    def has_submission(self) -> bool:
        """Return ``True`` when the request carries submitted form data."""

        return self.is_post and bool(self.form_data)


__all__ = ["RequestContext"]


# The End
