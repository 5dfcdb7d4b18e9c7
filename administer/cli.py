# -*- coding: utf-8 -*-
"""
cli

Click entry point inspecting a configured admin module.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

import click

from .core.exceptions import ConfigurationError
from .module import AdministerModule


def load_module(path: str) -> AdministerModule:
    """Import ``package.module:attribute`` and return the admin module.

    The attribute may be the module itself or an application it was
    mounted on.
    """

    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter(f"Expected 'package.module:attribute', got '{path}'.")
    try:
        target: Any = getattr(import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        raise click.BadParameter(f"Cannot import '{path}': {exc}") from exc
    if isinstance(target, AdministerModule):
        return target
    state = getattr(target, "state", None)
    admin = getattr(state, "administer", None)
    if isinstance(admin, AdministerModule):
        return admin
    raise click.BadParameter(f"'{path}' is neither an admin module nor an application with one.")


class RoutesCommand:
    """Produce the `routes` command listing the route table."""

    def execute(self, target: str) -> None:
        """Print rules in evaluation order."""

        admin = load_module(target)
        for rule in admin.routes:
            methods = ",".join(rule.methods)
            click.echo(f"{methods:<9} {rule.path:<45} {rule.target}")

    def to_click_command(self) -> click.Command:
        """Return a Click command configured for listing routes."""
        return click.Command(
            name="routes",
            callback=self.execute,
            params=[click.Argument(["target"], required=True)],
            help="List admin routes of TARGET (package.module:attribute).",
        )


class CheckCommand:
    """Produce the `check` command resolving every configured model."""

    def execute(self, target: str) -> None:
        """Resolve configured models and report failures."""

        admin = load_module(target)
        try:
            admin.check_models()
        except ConfigurationError as error:
            click.secho(str(error), fg="red")
            raise click.exceptions.Exit(1) from error
        for slug, entry in admin.models_config.items():
            click.secho(f"{slug}: {entry.class_identifier}", fg="green")

    def to_click_command(self) -> click.Command:
        """Return a Click command configured for model checks."""
        return click.Command(
            name="check",
            callback=self.execute,
            params=[click.Argument(["target"], required=True)],
            help="Check that every model of TARGET can be administered.",
        )


class AdministerCLI:
    """Aggregate all CLI commands exposed by the package."""

    def __init__(self) -> None:
        """Create command instances required to build the CLI group."""
        self._routes_command = RoutesCommand()
        self._check_command = CheckCommand()

    def create_cli(self) -> click.Group:
        """Build the Click group with all registered commands."""
        group = click.Group(
            name="administer",
            help="Command line tools for inspecting admin modules.",
        )
        group.add_command(self._routes_command.to_click_command())
        group.add_command(self._check_command.to_click_command())
        return group


cli = AdministerCLI().create_cli()


__all__ = ["AdministerCLI", "cli", "load_module"]


# The End
