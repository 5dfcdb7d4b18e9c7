# -*- coding: utf-8 -*-
"""
tortoise

Tortoise ORM implementation of the CRUD model contract.

:class:`TortoiseCrudModel` wraps a Tortoise model class and exposes the
load / validate / save / delete capability set the dispatcher relies on.
Submitted values are validated by a pydantic model derived from the Tortoise
field definitions.

Models may customise the admin through optional class attributes:

* ``admin_list_display`` - field names shown as grid columns;
* ``admin_search_fields`` - fields searched by the autocomplete API;
* ``admin_filters`` - mapping of field name to a filter input class, or
  ``None`` to disable the column filter.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import partial
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel, Field as PField, ValidationError, create_model
from tortoise import fields
from tortoise.exceptions import IntegrityError, OperationalError
from tortoise.expressions import Q
from tortoise.models import Model

from ..core.exceptions import PersistenceFailure
from ..core.inflector import humanize
from ..core.model import (
    CrudModel,
    FormDescription,
    FormField,
    GridColumn,
    GridDescription,
    GridRow,
)
from ..grid.filters import (
    BaseFilterInput,
    BooleanFilterInput,
    ExactFilterInput,
    fits_database_int,
    TextFilterInput,
)

logger = logging.getLogger(__name__)

_NUMERIC_TYPES = (int, float, Decimal)


class TortoiseCrudModel(CrudModel):
    """CRUD model bound to a Tortoise model class and optionally one record."""

    def __init__(self, model_cls: type[Model], instance: Model | None = None) -> None:
        """Bind the wrapper to ``model_cls`` and an optional stored ``instance``."""

        super().__init__()
        self.model_cls = model_cls
        self.instance = instance
        self._cleaned: dict[str, Any] = {}
        self._validator: type[BaseModel] | None = None

    @classmethod
    def factory(cls, model_cls: type[Model]) -> Callable[[], "TortoiseCrudModel"]:
        """Return a callable producing empty wrappers for ``model_cls``."""

        return partial(cls, model_cls)

    # --- metadata ---------------------------------------------------------

    @property
    def meta(self) -> Any:
        """Return Tortoise metadata of the wrapped model."""

        return self.model_cls._meta

    @property
    def pk_attr(self) -> str:
        """Return the primary-key attribute name."""

        return self.meta.pk_attr

    @property
    def identity(self) -> Any:
        """Return the primary key of the bound record."""

        if self.instance is None:
            return None
        return self.instance.pk

    def data_fields(self) -> dict[str, fields.Field]:
        """Return non-relational fields in declaration order."""

        return {
            name: field
            for name, field in self.meta.fields_map.items()
            if name not in self.meta.fetch_fields
        }

    def editable_fields(self) -> dict[str, fields.Field]:
        """Return fields accepted from submitted forms."""

        editable: dict[str, fields.Field] = {}
        for name, field in self.data_fields().items():
            if field.pk and (field.generated or field.default is not None):
                continue
            if getattr(field, "auto_now", False) or getattr(field, "auto_now_add", False):
                continue
            if isinstance(field, fields.JSONField):
                continue
            editable[name] = field
        return editable

    # --- lookup -------------------------------------------------------------

    async def find(self, id: Any) -> "TortoiseCrudModel | None":
        """Return a wrapper bound to record ``id`` or ``None``.

        Identifiers the database cannot represent match no record.
        """

        if isinstance(id, int) and not fits_database_int(id):
            logger.debug("Identifier %s is out of range for %s", id, self.model_cls.__name__)
            return None
        try:
            instance = await self.model_cls.get_or_none(pk=id)
        except (OverflowError, ValueError):
            logger.debug("Identifier %r rejected for %s", id, self.model_cls.__name__)
            return None
        if instance is None:
            return None
        return type(self)(self.model_cls, instance)

    # --- writing ----------------------------------------------------------

    def load(self, data: Mapping[str, Any]) -> bool:
        """Take values of editable fields from ``data``."""

        loaded = False
        for name in self.editable_fields():
            if name in data:
                self.attributes[name] = data[name]
                loaded = True
        return loaded

    def validate(self) -> bool:
        """Validate the bound values merged with loaded attributes."""

        self.errors = {}
        editable = self.editable_fields()
        payload: dict[str, Any] = {}
        if self.instance is not None:
            for name in editable:
                payload[name] = getattr(self.instance, name)
        for name, value in self.attributes.items():
            field = editable[name]
            if value == "":
                if field.null:
                    payload[name] = None
                    continue
                if field.field_type is str and field.default is not None:
                    payload[name] = value
                    continue
                payload.pop(name, None)
                continue
            payload[name] = value
        try:
            validated = self._get_validator().model_validate(payload)
        except ValidationError as exc:
            for error in exc.errors():
                location = error.get("loc") or ("__all__",)
                self.add_error(str(location[0]), error["msg"])
            return False
        self._cleaned = validated.model_dump()
        return True

    async def save(self) -> bool:
        """Validate and store the record."""

        if not self.validate():
            return False
        try:
            if self.instance is None:
                self.instance = await self.model_cls.create(**self._cleaned)
            else:
                self.instance.update_from_dict(self._cleaned)
                await self.instance.save()
        except (IntegrityError, OperationalError) as exc:
            logger.exception("Failed to save %s", self.model_cls.__name__)
            raise PersistenceFailure(str(exc)) from exc
        return True

    async def delete(self) -> bool:
        """Remove the bound record."""

        if self.instance is None:
            return False
        try:
            await self.instance.delete()
        except (IntegrityError, OperationalError) as exc:
            logger.exception(
                "Failed to delete %s #%s", self.model_cls.__name__, self.identity
            )
            raise PersistenceFailure(str(exc)) from exc
        return True

    def _get_validator(self) -> type[BaseModel]:
        """Return the pydantic model validating submitted values."""

        if self._validator is None:
            definitions: dict[str, Any] = {}
            for name, field in self.editable_fields().items():
                annotation: Any = getattr(field, "enum_type", None) or field.field_type
                if field.null:
                    annotation = Optional[annotation]
                options: dict[str, Any] = {}
                max_length = (getattr(field, "constraints", None) or {}).get("max_length")
                if max_length and field.field_type is str:
                    options["max_length"] = max_length
                if field.default is not None:
                    if callable(field.default):
                        options["default_factory"] = field.default
                    else:
                        options["default"] = field.default
                elif field.null:
                    options["default"] = None
                definitions[name] = (annotation, PField(**options))
            self._validator = create_model(
                f"{self.model_cls.__name__}Input", **definitions
            )
        return self._validator

    # --- rendering --------------------------------------------------------

    def list_columns(self) -> list[GridColumn]:
        """Return grid columns for the listing."""

        data_fields = self.data_fields()
        names = getattr(self.model_cls, "admin_list_display", None)
        if names is None:
            names = [
                name
                for name, field in data_fields.items()
                if not isinstance(field, (fields.TextField, fields.JSONField))
            ]
        return [
            GridColumn(name=name, label=humanize(name), sortable=name in data_fields)
            for name in names
        ]

    def filter_for(self, attribute: str) -> BaseFilterInput | None:
        """Return the filter input for ``attribute`` or ``None``."""

        overrides = getattr(self.model_cls, "admin_filters", None) or {}
        if attribute in overrides:
            filter_cls = overrides[attribute]
            return filter_cls(self.model_cls, attribute) if filter_cls else None
        field = self.data_fields().get(attribute)
        if field is None:
            return None
        if getattr(field, "enum_type", None) is not None:
            return None
        if field.field_type is bool:
            return BooleanFilterInput(self.model_cls, attribute)
        if field.field_type is str:
            return TextFilterInput(self.model_cls, attribute)
        if field.field_type in _NUMERIC_TYPES:
            return ExactFilterInput(self.model_cls, attribute, field.field_type)
        return None

    async def render_grid(
        self,
        params: Mapping[str, str],
        url: str,
        *,
        page_size: int = 20,
        max_page_size: int = 100,
    ) -> GridDescription:
        """Return the filtered, sorted and paginated listing."""

        columns = self.list_columns()
        queryset = self.model_cls.all()
        filters: list[dict[str, Any] | None] = []
        for column in columns:
            filter_input = self.filter_for(column.name)
            if filter_input is None:
                filters.append(None)
                continue
            value = params.get(filter_input.param_name, "")
            if value:
                queryset = filter_input.apply(queryset, value)
            filters.append(filter_input.render({"value": value}))

        sort = params.get("sort") or None
        sortable = {column.name for column in columns if column.sortable}
        sort_field = sort[1:] if sort and sort.startswith("-") else sort
        if sort_field in sortable:
            queryset = queryset.order_by(sort)
        else:
            sort = None
            queryset = queryset.order_by(self.pk_attr)

        per_page = min(max(_to_int(params.get("per-page"), page_size), 1), max_page_size)
        total = await queryset.count()
        page_count = max(1, math.ceil(total / per_page))
        page = min(max(_to_int(params.get("page"), 1), 1), page_count)
        records = await queryset.offset((page - 1) * per_page).limit(per_page)
        rows = [
            GridRow(
                id=record.pk,
                cells=[display_value(getattr(record, column.name, None)) for column in columns],
            )
            for record in records
        ]
        return GridDescription(
            url=url,
            columns=columns,
            rows=rows,
            filters=filters,
            page=page,
            per_page=per_page,
            page_count=page_count,
            total=total,
            sort=sort,
        )

    def render_detail(self) -> list[dict[str, Any]]:
        """Return labelled values of the bound record."""

        if self.instance is None:
            return []
        return [
            {"label": humanize(name), "value": display_value(getattr(self.instance, name))}
            for name in self.data_fields()
        ]

    def render_form(self, url: str) -> FormDescription:
        """Return the input form for the bound or new record."""

        form_fields: list[FormField] = []
        for name, field in self.editable_fields().items():
            if name in self.attributes:
                value = self.attributes[name]
            elif self.instance is not None:
                value = getattr(self.instance, name)
            elif field.default is not None and not callable(field.default):
                value = field.default
            else:
                value = None
            if isinstance(value, Enum):
                value = value.value
            enum_type = getattr(field, "enum_type", None)
            form_fields.append(
                FormField(
                    name=name,
                    label=humanize(name),
                    input_type=_input_type(field),
                    value=value,
                    required=not field.null and field.default is None,
                    errors=list(self.errors.get(name, [])),
                    choices=(
                        [(str(member.value), member.name) for member in enum_type]
                        if enum_type is not None
                        else None
                    ),
                )
            )
        return FormDescription(url=url, fields=form_fields, errors=dict(self.errors))

    # --- lookup helpers ---------------------------------------------------

    def search_fields(self) -> list[str]:
        """Return fields searched by :meth:`autocomplete`."""

        configured = getattr(self.model_cls, "admin_search_fields", None)
        if configured is not None:
            return list(configured)
        return [
            name
            for name, field in self.data_fields().items()
            if isinstance(field, fields.CharField) and not field.pk
        ]

    async def autocomplete(self, query: str, limit: int) -> list[dict[str, Any]]:
        """Return up to ``limit`` records whose search fields contain ``query``."""

        queryset = self.model_cls.all()
        search = self.search_fields()
        if query and search:
            queryset = queryset.filter(
                Q(*[Q(**{f"{name}__icontains": query}) for name in search], join_type="OR")
            )
        records = await queryset.order_by(self.pk_attr).limit(limit)
        return [{"id": record.pk, "text": self._text(record)} for record in records]

    def describe(self) -> str:
        """Return the display text of the bound record."""

        if self.instance is None:
            return super().describe()
        return self._text(self.instance)

    @staticmethod
    def _text(record: Model) -> str:
        """Return ``str(record)`` when the model defines it, else ``Name #pk``."""

        if type(record).__str__ is not Model.__str__:
            return str(record)
        return f"{type(record).__name__} #{record.pk}"


def display_value(value: Any) -> str:
    """Return ``value`` formatted for grids and detail pages."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _input_type(field: fields.Field) -> str:
    """Return the HTML input type suitable for ``field``."""

    if getattr(field, "enum_type", None) is not None:
        return "select"
    if field.field_type is bool:
        return "checkbox"
    if isinstance(field, fields.TextField):
        return "textarea"
    if field.field_type in _NUMERIC_TYPES:
        return "number"
    if field.field_type is datetime:
        return "datetime-local"
    if field.field_type is date:
        return "date"
    return "text"


def _to_int(value: str | None, default: int) -> int:
    """Return ``value`` as an integer or ``default`` when it is not numeric."""

    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


__all__ = ["TortoiseCrudModel", "display_value"]


# The End
