# -*- coding: utf-8 -*-
"""
registry

Explicit mapping from class identifiers to CRUD model factories.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from tortoise import Tortoise
from tortoise.exceptions import ConfigurationError as TortoiseConfigurationError
from tortoise.models import Model

from ..adapters.tortoise import TortoiseCrudModel
from .config import ModelConfig
from .exceptions import ConfigurationError
from .model import CrudModel

logger = logging.getLogger(__name__)

ModelFactory = Callable[[], CrudModel]


class ModelRegistry:
    """Resolve persistence models for normalized configuration entries.

    Declared model classes are registered from the configuration. String
    identifiers are looked up among explicitly registered factories first and
    then in the Tortoise application registry using ``app_label.ModelName``.
    """

    def __init__(self) -> None:
        """Start with an empty factory table."""

        self._factories: dict[str, ModelFactory] = {}

    def register(self, identifier: str, factory: ModelFactory) -> None:
        """Register ``factory`` for ``identifier``, replacing any previous one."""

        self._factories[identifier] = factory

    def register_config(self, config: Mapping[str, ModelConfig]) -> None:
        """Register factories for every declared model class in ``config``."""

        for entry in config.values():
            if entry.model is None or entry.class_identifier in self._factories:
                continue
            self.register(entry.class_identifier, self._factory_for_class(entry.model))

    def is_registered(self, identifier: str) -> bool:
        """Return ``True`` when ``identifier`` has an explicit factory."""

        return identifier in self._factories

    def resolve(self, entry: ModelConfig) -> ModelFactory:
        """Return the factory producing models for ``entry``."""

        factory = self._factories.get(entry.class_identifier)
        if factory is not None:
            return factory
        model_cls = self._lookup_tortoise(entry.class_identifier)
        if model_cls is None:
            raise ConfigurationError(
                f"Model '{entry.class_identifier}' is not registered."
            )
        factory = TortoiseCrudModel.factory(model_cls)
        self._factories[entry.class_identifier] = factory
        return factory

    def create(self, entry: ModelConfig) -> CrudModel:
        """Return an empty CRUD model for ``entry``."""

        return self.resolve(entry)()

    @staticmethod
    def _factory_for_class(model: type) -> ModelFactory:
        """Return a factory for a declared class."""

        if issubclass(model, CrudModel):
            return model
        if issubclass(model, Model):
            return TortoiseCrudModel.factory(model)
        raise ConfigurationError(
            f"Class {model.__name__} is neither a Tortoise model nor a CrudModel."
        )

    @staticmethod
    def _lookup_tortoise(identifier: str) -> type[Model] | None:
        """Return the Tortoise model registered as ``app_label.ModelName``.

        Older Tortoise releases expose ``Tortoise.apps`` as a nested dict,
        newer ones as an ``Apps`` registry that is ``None`` before init.
        """

        if "." not in identifier:
            return None
        app_label, model_name = identifier.rsplit(".", 1)
        apps = Tortoise.apps
        model_cls = None
        if isinstance(apps, Mapping):
            model_cls = apps.get(app_label, {}).get(model_name)
        elif apps is not None:
            try:
                model_cls = apps.get_model(app_label, model_name)
            except (KeyError, TortoiseConfigurationError):
                model_cls = None
        if model_cls is None:
            logger.debug("Tortoise has no model %s", identifier)
        return model_cls


__all__ = ["ModelFactory", "ModelRegistry"]


# The End
