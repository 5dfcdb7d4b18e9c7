# -*- coding: utf-8 -*-
"""
exceptions

Custom domain exceptions for the administer core.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations


class AdministerError(Exception):
    """Base class for administer-specific exceptions."""


class ConfigurationError(AdministerError):
    """Raised when the module configuration is malformed."""


# --- HTTP-like domain errors -------------------------------------------------

class HTTPError(AdministerError):
    """Base class for exceptions carrying an HTTP status code."""

    status_code: int = 500

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or "")
        self.detail = detail


class BadRequestError(HTTPError):
    """Raised when a request is missing required parameters."""

    status_code = 400


class ForbiddenError(HTTPError):
    """Raised when the access policy denies an operation."""

    status_code = 403


class NotFoundError(HTTPError):
    """Raised when a requested model or record is not found."""

    status_code = 404


class MethodNotAllowedError(HTTPError):
    """Raised when an action is requested with a forbidden HTTP verb."""

    status_code = 405


class PersistenceFailure(HTTPError):
    """Raised when the persistence layer rejects a write or delete."""

    status_code = 500


__all__ = [
    "AdministerError",
    "BadRequestError",
    "ConfigurationError",
    "ForbiddenError",
    "HTTPError",
    "MethodNotAllowedError",
    "NotFoundError",
    "PersistenceFailure",
]


# The End
