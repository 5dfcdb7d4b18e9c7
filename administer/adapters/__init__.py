# -*- coding: utf-8 -*-
"""
__init__

Persistence adapters implementing the CRUD model contract.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .tortoise import TortoiseCrudModel, display_value

__all__ = ["TortoiseCrudModel", "display_value"]

# The End
