# -*- coding: utf-8 -*-
"""
conf

Runtime configuration utilities for the administer package.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from threading import RLock
from typing import Callable, Mapping


@dataclass
class AdministerSettings:
    """Container for admin configuration derived from environment variables."""

    secret_key: str = field(default_factory=lambda: "change-me")
    session_secret: str | None = None
    session_cookie: str = "administer"
    session_key: str = "administer_user_id"
    url_prefix: str = "admin"
    uploads_url: str = "/uploads/"
    uploads_path: Path = field(default_factory=lambda: Path.cwd() / "uploads")
    page_size: int = 20
    max_page_size: int = 100
    autocomplete_limit: int = 20
    default_icon: str = "dashboard"
    locale: str = "en"
    site_title: str = "Administer"

    def __post_init__(self) -> None:
        """Finalize defaults and normalise path-like values."""
        if not self.session_secret:
            self.session_secret = self.secret_key
        self.url_prefix = self._normalize_prefix(self.url_prefix)
        if not self.uploads_url.endswith("/"):
            self.uploads_url += "/"
        if not isinstance(self.uploads_path, Path):
            self.uploads_path = Path(str(self.uploads_path))
        if self.page_size < 1:
            self.page_size = 1
        if self.max_page_size < self.page_size:
            self.max_page_size = self.page_size

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        *,
        prefix: str = "ADMINISTER_",
    ) -> "AdministerSettings":
        """Build a settings instance from environment variables."""
        source = env if env is not None else os.environ
        data = {key[len(prefix) :]: value for key, value in source.items() if key.startswith(prefix)}
        secret_key = data.get("SECRET_KEY") or source.get("SECRET_KEY") or "change-me"
        uploads_path = data.get("UPLOADS_PATH") or (Path.cwd() / "uploads")
        return cls(
            secret_key=secret_key,
            session_secret=data.get("SESSION_SECRET"),
            session_cookie=data.get("SESSION_COOKIE") or "administer",
            session_key=data.get("SESSION_KEY") or "administer_user_id",
            url_prefix=data.get("URL_PREFIX") or "admin",
            uploads_url=data.get("UPLOADS_URL") or "/uploads/",
            uploads_path=Path(uploads_path),
            page_size=cls._to_int(data.get("PAGE_SIZE"), default=20),
            max_page_size=cls._to_int(data.get("MAX_PAGE_SIZE"), default=100),
            autocomplete_limit=cls._to_int(data.get("AUTOCOMPLETE_LIMIT"), default=20),
            default_icon=data.get("DEFAULT_ICON") or "dashboard",
            locale=data.get("LOCALE") or "en",
            site_title=data.get("SITE_TITLE") or "Administer",
        )

    @staticmethod
    def _to_int(value: str | None, *, default: int) -> int:
        """Return an integer from ``value`` or ``default`` when conversion fails."""
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    @staticmethod
    def _normalize_prefix(value: str) -> str:
        """Strip surrounding slashes so the prefix is a bare path."""
        return value.strip().strip("/")


class SettingsManager:
    """Central storage for the active ``AdministerSettings`` instance."""

    def __init__(self, initial: AdministerSettings | None = None) -> None:
        """Prepare storage with an optional preconfigured ``initial`` settings."""

        self._lock = RLock()
        self._settings = initial
        self._callbacks: list[Callable[[AdministerSettings], None]] = []

    def configure(self, settings: AdministerSettings) -> None:
        """Install a new settings instance and notify observers."""
        with self._lock:
            self._settings = settings
            for callback in list(self._callbacks):
                callback(settings)

    def current(self) -> AdministerSettings:
        """Return the active settings, lazily initializing from the environment."""
        with self._lock:
            if self._settings is None:
                self._settings = AdministerSettings.from_env()
            return self._settings

    def register(self, callback: Callable[[AdministerSettings], None]) -> None:
        """Register a callback invoked whenever settings change."""
        with self._lock:
            self._callbacks.append(callback)

    def unregister(self, callback: Callable[[AdministerSettings], None]) -> None:
        """Remove a previously registered settings change callback if present."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)


_settings_manager = SettingsManager()


def configure(settings: AdministerSettings) -> None:
    """Public entry point to install application specific settings."""
    _settings_manager.configure(settings)


def current_settings() -> AdministerSettings:
    """Return the active settings instance used by administer components."""
    return _settings_manager.current()


def register_settings_observer(callback: Callable[[AdministerSettings], None]) -> None:
    """Subscribe to configuration changes."""
    _settings_manager.register(callback)


def unregister_settings_observer(callback: Callable[[AdministerSettings], None]) -> None:
    """Unsubscribe from configuration changes previously registered."""
    _settings_manager.unregister(callback)


__all__ = [
    "AdministerSettings",
    "SettingsManager",
    "configure",
    "current_settings",
    "register_settings_observer",
    "unregister_settings_observer",
]


# The End
