# -*- coding: utf-8 -*-
"""
inflector

String helpers deriving slugs and labels from model class names.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import re
from typing import Any

_UPPER_START = re.compile(r"(?<![A-Z])([A-Z])")
_LAST_WORD = re.compile(r"[A-Z]?[a-z0-9]*$")
_QUALIFIER = re.compile(r"[.\\/:]")

_UNCOUNTABLE = (
    "equipment",
    "information",
    "rice",
    "money",
    "species",
    "series",
    "fish",
    "sheep",
    "deer",
    "news",
    "staff",
    "data",
    "media",
)

# Ordered (pattern, replacement) pairs; the first matching pattern wins.
_PLURAL_RULES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in (
        (r"(p)erson$", r"\1eople"),
        (r"(c)hild$", r"\1hildren"),
        (r"(h)uman$", r"\1umans"),
        (r"(m)an$", r"\1en"),
        (r"(f)oot$", r"\1eet"),
        (r"(t)ooth$", r"\1eeth"),
        (r"(g)oose$", r"\1eese"),
        (r"^(m|l)ouse$", r"\1ice"),
        (r"^(ox)$", r"\1en"),
        (r"(s)tatus$", r"\1tatuses"),
        (r"(quiz)$", r"\1zes"),
        (r"(matr|vert|ind)(ix|ex)$", r"\1ices"),
        (r"(alias)$", r"\1es"),
        (r"(x|ch|ss|sh|z)$", r"\1es"),
        (r"([^aeiouy]|qu)y$", r"\1ies"),
        (r"(?:([^f])fe|([lr])f)$", r"\1\2ves"),
        (r"sis$", "ses"),
        (r"([ti])um$", r"\1a"),
        (r"(buffal|tomat|potat|ech|her|vet)o$", r"\1oes"),
        (r"(alumn|cact|foc|fung|nucle|radi|stimul|syllab|termin|vir)us$", r"\1i"),
        (r"us$", "uses"),
        (r"s$", "s"),
    )
)


def basename(identifier: Any) -> str:
    """Return the short class name for a class object or dotted identifier."""

    if isinstance(identifier, type):
        return identifier.__name__
    text = str(identifier).rstrip(".\\/:")
    return _QUALIFIER.split(text)[-1]


def camel_to_id(name: str, separator: str = "-") -> str:
    """Convert ``PostTag`` style names into ``post-tag`` identifiers.

    A separator is inserted before every uppercase letter that does not follow
    another uppercase letter, so acronyms stay glued (``HTMLParser`` becomes
    ``htmlparser``). Underscores are turned into the separator.
    """

    spaced = _UPPER_START.sub(separator + r"\1", name)
    return spaced.replace("_", separator).strip(separator).lower()


def humanize(attribute: str) -> str:
    """Return a column label such as ``Created at`` for ``created_at``."""

    words = camel_to_id(attribute, " ").replace("-", " ").split()
    if len(words) > 1 and words[-1] == "id":
        words.pop()
    return " ".join(words).capitalize()


def pluralize(word: str) -> str:
    """Return the English plural of ``word`` keeping its leading case."""

    if not word:
        return word
    last_word = _LAST_WORD.search(word).group(0) or word
    if last_word.lower() in _UNCOUNTABLE:
        return word
    for pattern, replacement in _PLURAL_RULES:
        if pattern.search(word):
            return pattern.sub(replacement, word, count=1)
    return word + "s"


__all__ = ["basename", "camel_to_id", "humanize", "pluralize"]


# The End
