# -*- coding: utf-8 -*-
"""
__init__

Core utilities for the admin interface.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .config import ModelConfig, ModelDeclaration, normalize_models_config
from .exceptions import (
    AdministerError,
    BadRequestError,
    ConfigurationError,
    ForbiddenError,
    HTTPError,
    MethodNotAllowedError,
    NotFoundError,
    PersistenceFailure,
)

__all__ = [
    "AdministerError",
    "BadRequestError",
    "ConfigurationError",
    "ForbiddenError",
    "HTTPError",
    "MethodNotAllowedError",
    "ModelConfig",
    "ModelDeclaration",
    "NotFoundError",
    "PersistenceFailure",
    "normalize_models_config",
]

# The End
