# -*- coding: utf-8 -*-
"""
__init__

Admin module entry point.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .auth import UserDataProvider
from .conf import AdministerSettings, configure, current_settings
from .core.access import AccessControl, AccessPolicy, AccessRule
from .core.config import ModelDeclaration
from .module import AdministerModule

__version__ = "0.1.0"

__all__ = [
    "AccessControl",
    "AccessPolicy",
    "AccessRule",
    "AdministerModule",
    "AdministerSettings",
    "ModelDeclaration",
    "UserDataProvider",
    "configure",
    "current_settings",
]

# The End
