# -*- coding: utf-8 -*-
"""
filters

Filter inputs rendered above grid columns and applied to querysets.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

DATABASE_INT_MIN = -(2**63)
DATABASE_INT_MAX = 2**63 - 1


def fits_database_int(value: int) -> bool:
    """Return ``True`` when ``value`` fits a signed 64-bit column."""

    return DATABASE_INT_MIN <= value <= DATABASE_INT_MAX


class BaseFilterInput(ABC):
    """Basic class for filters in the grid.

    A filter is bound to one model class and one attribute. ``render``
    describes the widget for the template; ``apply`` narrows a queryset by the
    submitted value.
    """

    input_type = "text"

    def __init__(self, model: type, attribute: str) -> None:
        """Bind the filter to ``model`` and ``attribute``."""

        self.model = model
        self.attribute = attribute

    @property
    def param_name(self) -> str:
        """Return the query parameter carrying the filter value."""

        return f"filter[{self.attribute}]"

    def render(self, options: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """Return the widget description or ``None`` to hide the filter."""

        data: dict[str, Any] = {
            "type": self.input_type,
            "name": self.param_name,
            "attribute": self.attribute,
            "value": "",
        }
        data.update(options or {})
        return data

    @abstractmethod
    def apply(self, queryset: Any, value: str) -> Any:
        """Return ``queryset`` narrowed by ``value``."""


class TextFilterInput(BaseFilterInput):
    """Case-insensitive substring filter for character fields."""

    def apply(self, queryset: Any, value: str) -> Any:
        """Filter rows whose attribute contains ``value``."""

        return queryset.filter(**{f"{self.attribute}__icontains": value})


class ExactFilterInput(BaseFilterInput):
    """Equality filter converting the value to the field's python type."""

    def __init__(self, model: type, attribute: str, value_type: type | None = None) -> None:
        """Remember the conversion type in addition to the binding."""

        super().__init__(model, attribute)
        self.value_type = value_type

    def apply(self, queryset: Any, value: str) -> Any:
        """Filter rows equal to ``value``; unconvertible values are ignored."""

        converted: Any = value
        if self.value_type is not None:
            try:
                converted = self.value_type(value)
            except (TypeError, ValueError, ArithmeticError):
                return queryset
            if isinstance(converted, int) and not fits_database_int(converted):
                return queryset
        return queryset.filter(**{self.attribute: converted})


class BooleanFilterInput(BaseFilterInput):
    """Yes/no choice filter for boolean fields."""

    input_type = "select"
    truthy = {"1", "true", "yes", "on"}
    falsy = {"0", "false", "no", "off"}

    def render(self, options: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """Describe a select widget with empty, yes and no options."""

        data = super().render(options)
        if data is not None:
            data.setdefault("choices", [("", ""), ("1", "Yes"), ("0", "No")])
        return data

    def apply(self, queryset: Any, value: str) -> Any:
        """Filter rows by the parsed boolean ``value``."""

        normalized = value.strip().lower()
        if normalized in self.truthy:
            return queryset.filter(**{self.attribute: True})
        if normalized in self.falsy:
            return queryset.filter(**{self.attribute: False})
        return queryset


__all__ = [
    "BaseFilterInput",
    "BooleanFilterInput",
    "ExactFilterInput",
    "TextFilterInput",
    "fits_database_int",
]


# The End
