# -*- coding: utf-8 -*-
"""
grid

Grid filtering primitives.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .filters import (
    BaseFilterInput,
    BooleanFilterInput,
    ExactFilterInput,
    TextFilterInput,
)

__all__ = [
    "BaseFilterInput",
    "BooleanFilterInput",
    "ExactFilterInput",
    "TextFilterInput",
]


# The End
