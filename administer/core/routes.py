# -*- coding: utf-8 -*-
"""
routes

Route table describing the URL surface of the admin module.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Sequence

from starlette.convertors import Convertor, register_url_convertor
from starlette.routing import compile_path

from .config import ModelConfig
from .exceptions import NotFoundError


class SlugConvertor(Convertor):
    """Match a single path segment made of word characters and hyphens."""

    regex = r"[\w-]+"

    def convert(self, value: str) -> str:
        """Return the matched segment unchanged."""

        return value

    def to_string(self, value: str) -> str:
        """Validate ``value`` before it is placed into a URL."""

        value = str(value)
        if not re.fullmatch(self.regex, value):
            raise ValueError(f"Invalid slug segment: {value!r}")
        return value


register_url_convertor("slug", SlugConvertor())


@dataclass(frozen=True)
class RouteRule:
    """Single URL pattern mapped to a controller action."""

    name: str
    path: str
    target: str
    methods: tuple[str, ...] = ("GET",)
    defaults: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Compile the path template once."""

        regex, path_format, convertors = compile_path(self.path)
        object.__setattr__(self, "_regex", regex)
        object.__setattr__(self, "_format", path_format)
        object.__setattr__(self, "_convertors", convertors)

    @property
    def param_names(self) -> tuple[str, ...]:
        """Return the names of placeholders in the path."""

        return tuple(self._convertors)  # type: ignore[attr-defined]

    def match(self, path: str) -> dict[str, Any] | None:
        """Return converted path parameters when ``path`` fits the rule."""

        found = self._regex.match(path)  # type: ignore[attr-defined]
        if found is None:
            return None
        params = dict(self.defaults)
        for key, value in found.groupdict().items():
            params[key] = self._convertors[key].convert(value)  # type: ignore[attr-defined]
        return params

    def resolve_target(self, params: Mapping[str, Any]) -> str:
        """Return the controller action addressed by ``params``."""

        return self.target.replace("<action>", str(params.get("action", "")))

    def build(self, **params: Any) -> str:
        """Render the path with ``params`` substituted."""

        rendered: dict[str, str] = {}
        for key, convertor in self._convertors.items():  # type: ignore[attr-defined]
            if key not in params:
                raise KeyError(f"Missing path parameter '{key}' for route {self.name}")
            rendered[key] = convertor.to_string(params[key])
        return self._format.format(**rendered)  # type: ignore[attr-defined]


class RouteTable(Sequence[RouteRule]):
    """Ordered collection of route rules with lookup helpers."""

    def __init__(
        self,
        rules: Sequence[RouteRule],
        *,
        prefix: str,
        slugs: Sequence[str] = (),
    ) -> None:
        """Store ``rules`` in evaluation order."""

        self._rules = tuple(rules)
        self._by_name = {rule.name: rule for rule in self._rules}
        self.prefix = prefix
        self._slugs = frozenset(slugs)

    def __getitem__(self, index):  # type: ignore[override]
        """Return rule(s) at ``index``."""

        return self._rules[index]

    def __len__(self) -> int:
        """Return the number of rules."""

        return len(self._rules)

    def __iter__(self) -> Iterator[RouteRule]:
        """Iterate rules in evaluation order."""

        return iter(self._rules)

    def has(self, name: str) -> bool:
        """Return ``True`` when a rule called ``name`` is registered."""

        return name in self._by_name

    def match(self, path: str) -> tuple[RouteRule, dict[str, Any]] | None:
        """Return the first rule matching ``path`` with its parameters."""

        for rule in self._rules:
            params = rule.match(path)
            if params is not None:
                return rule, params
        return None

    def url_for(self, name: str, **params: Any) -> str:
        """Return the URL of rule ``name`` for ``params``."""

        slug = params.get("model_class")
        if slug is not None and slug not in self._slugs:
            raise NotFoundError(f"Unknown model '{slug}'")
        try:
            rule = self._by_name[name]
        except KeyError as exc:
            raise KeyError(f"Route '{name}' is not registered") from exc
        return rule.build(**params)

    def index_url(self, slug: str) -> str:
        """Return the listing URL for ``slug``."""

        return self.url_for("index", model_class=slug)

    def action_url(self, slug: str, action: str, id: int | None = None) -> str:
        """Return the URL of ``action`` for ``slug`` optionally scoped to ``id``."""

        if id is None:
            return self.url_for("action", model_class=slug, action=action)
        return self.url_for("item_action", model_class=slug, action=action, id=id)


class RouteTableBuilder:
    """Produce the ordered rule set for a URL prefix."""

    def build(
        self,
        prefix: str,
        config: Mapping[str, ModelConfig],
        has_login: bool = False,
        has_logout: bool = False,
    ) -> RouteTable:
        """Return the route table for ``prefix`` and ``config``.

        Rules are listed most specific first where two could match the same
        path, and the router evaluates them in this order.
        """

        base = "/" + prefix.strip("/") if prefix.strip("/") else ""
        model = base + "/{model_class:slug}"
        rules: list[RouteRule] = []
        if has_logout:
            rules.append(RouteRule("logout", base + "/logout", "user/logout", ("POST",)))
        if has_login:
            rules.append(RouteRule("login", base + "/login", "user/login", ("GET", "POST")))
        rules.extend(
            [
                RouteRule("default", base or "/", "crud/default"),
                RouteRule("index", model, "crud/index"),
                RouteRule(
                    "autocomplete",
                    model + "/autocomplete/{id:int}",
                    "api/autocomplete",
                    defaults={"action": "autocomplete"},
                ),
                RouteRule(
                    "action",
                    model + "/{action:slug}",
                    "crud/<action>",
                    ("GET", "POST"),
                ),
                RouteRule(
                    "item_action",
                    model + "/{action:slug}/{id:int}",
                    "crud/<action>",
                    ("GET", "POST"),
                ),
            ]
        )
        return RouteTable(rules, prefix=base, slugs=list(config))


__all__ = ["RouteRule", "RouteTable", "RouteTableBuilder", "SlugConvertor"]


# The End
