# -*- coding: utf-8 -*-
"""
i18n

Message catalog for the admin interface.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Mapping

DEFAULT_MESSAGES: dict[str, dict[str, str]] = {
    "ru": {
        "View": "Просмотр",
        "Create": "Создать",
        "Update": "Редактировать",
        "Delete": "Удалить",
        "Save": "Сохранить",
        "Apply": "Применить",
        "Login": "Вход",
        "Logout": "Выход",
        "Dashboard": "Панель управления",
        "Yes": "Да",
        "No": "Нет",
        "Invalid credentials.": "Неверные учетные данные.",
        "No results found.": "Ничего не найдено.",
    },
}


class MessageCatalog:
    """Translate interface messages; unknown messages are returned as is."""

    def __init__(
        self,
        messages: Mapping[str, Mapping[str, str]] | None = None,
        *,
        default_locale: str = "en",
    ) -> None:
        """Store translations keyed by locale."""

        self._messages = {
            locale: dict(table)
            for locale, table in (messages if messages is not None else DEFAULT_MESSAGES).items()
        }
        self.default_locale = default_locale

    def add(self, locale: str, messages: Mapping[str, str]) -> None:
        """Merge ``messages`` into the table of ``locale``."""

        self._messages.setdefault(locale, {}).update(messages)

    def translate(self, message: str, locale: str | None = None) -> str:
        """Return ``message`` translated into ``locale``."""

        table = self._messages.get(locale or self.default_locale, {})
        return table.get(message, message)


__all__ = ["DEFAULT_MESSAGES", "MessageCatalog"]


# The End
