# -*- coding: utf-8 -*-
"""
access

Declarative allow/deny rules gating admin controllers.

Roles follow the usual shorthand: ``"?"`` matches anonymous callers and
``"@"`` matches authenticated ones.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, TYPE_CHECKING

from .exceptions import ForbiddenError

if TYPE_CHECKING:  # pragma: no cover
    from .context import RequestContext

logger = logging.getLogger(__name__)

ROLE_GUEST = "?"
ROLE_AUTHENTICATED = "@"


@dataclass(frozen=True)
class AccessRule:
    """Single access rule; ``None`` scopes match everything."""

    allow: bool
    controllers: frozenset[str] | None = None
    actions: frozenset[str] | None = None
    roles: frozenset[str] | None = None

    @classmethod
    def build(
        cls,
        *,
        allow: bool,
        controllers: Iterable[str] | None = None,
        actions: Iterable[str] | None = None,
        roles: Iterable[str] | None = None,
    ) -> "AccessRule":
        """Create a rule from plain iterables."""

        return cls(
            allow=allow,
            controllers=frozenset(controllers) if controllers is not None else None,
            actions=frozenset(actions) if actions is not None else None,
            roles=frozenset(roles) if roles is not None else None,
        )

    def matches(self, controller: str, action: str, is_authenticated: bool) -> bool:
        """Return ``True`` when the rule applies to the request."""

        if self.controllers is not None and controller not in self.controllers:
            return False
        if self.actions is not None and action not in self.actions:
            return False
        if self.roles is not None:
            role = ROLE_AUTHENTICATED if is_authenticated else ROLE_GUEST
            if role not in self.roles:
                return False
        return True


class AccessPolicy:
    """Evaluate access rules in order; the first match decides."""

    def __init__(self, rules: Sequence[AccessRule]) -> None:
        """Store ``rules`` in declaration order."""

        self.rules = tuple(rules)

    def is_allowed(self, controller: str, action: str, is_authenticated: bool) -> bool:
        """Return whether the caller may run ``controller``/``action``."""

        for rule in self.rules:
            if rule.matches(controller, action, is_authenticated):
                logger.debug(
                    "Access %s for %s/%s",
                    "granted" if rule.allow else "denied",
                    controller,
                    action,
                )
                return rule.allow
        logger.debug("No access rule matched %s/%s", controller, action)
        return False

    @classmethod
    def default(cls, module_id: str = "admin") -> "AccessPolicy":
        """Return the policy shipped with the module.

        Login is open to guests, logout to signed-in users; CRUD and API
        controllers require an authenticated user.
        """

        return cls(
            [
                AccessRule.build(
                    allow=True,
                    controllers=[f"{module_id}/user"],
                    actions=["login"],
                    roles=[ROLE_GUEST],
                ),
                AccessRule.build(
                    allow=True,
                    controllers=[f"{module_id}/user"],
                    actions=["logout"],
                    roles=[ROLE_AUTHENTICATED],
                ),
                AccessRule.build(
                    allow=True,
                    controllers=[f"{module_id}/api", f"{module_id}/crud"],
                    roles=[ROLE_AUTHENTICATED],
                ),
            ]
        )


class AccessControl:
    """Per-model access hook consulted after the access policy.

    Subclass and override :meth:`is_granted` to restrict individual models
    or actions; the default grants everything.
    """

    def is_granted(self, action: str, url: str, context: "RequestContext") -> bool:
        """Return whether ``action`` on model ``url`` is permitted."""

        return True

    def check_access(self, action: str, url: str, context: "RequestContext") -> None:
        """Raise :class:`ForbiddenError` when :meth:`is_granted` refuses."""

        if not self.is_granted(action, url, context):
            logger.debug("Access control refused %s on %s", action, url)
            raise ForbiddenError("You are not allowed to perform this action.")


__all__ = [
    "AccessControl",
    "AccessPolicy",
    "AccessRule",
    "ROLE_AUTHENTICATED",
    "ROLE_GUEST",
]


# The End
