# -*- coding: utf-8 -*-
"""
controllers

HTTP controllers of the admin module.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from .api import ApiController
from .base import BaseController
from .crud import CrudController
from .user import UserController

__all__ = ["ApiController", "BaseController", "CrudController", "UserController"]


# The End
