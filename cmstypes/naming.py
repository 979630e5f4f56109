"""
Identifier normalization for generated TypeScript names.

Display names from the CMS ("Página", "Menu-Category") become alphanumeric
identifiers that are safe to use as file names and TypeScript bindings.
"""

import re
import unicodedata
from typing import Set

from loguru import logger

from cmstypes.constants import EMPTY_IDENTIFIER_FALLBACK, IDENTIFIER_MARKER

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def clean_type_name(name: str) -> str:
    """
    Normalize a display name into a TypeScript identifier.

    Accents are stripped ("Página" -> "Pagina"), every character that is not
    an ASCII letter or digit is removed ("Menu-Category" -> "MenuCategory")
    and a leading digit gets the marker letter prepended.

    Args:
        name: Display name from the catalog

    Returns:
        Identifier made of ASCII letters and digits, never starting with a digit
    """
    decomposed = unicodedata.normalize("NFD", name)
    without_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    identifier = _NON_ALPHANUMERIC.sub("", without_marks)

    if not identifier:
        return EMPTY_IDENTIFIER_FALLBACK

    if identifier[0].isdigit():
        identifier = IDENTIFIER_MARKER + identifier

    return identifier


class IdentifierRegistry:
    """Hands out unique identifiers within one catalog."""

    def __init__(self):
        self.assigned: Set[str] = set()

    def assign(self, name: str) -> str:
        """
        Normalize a display name and make it unique within this registry.

        Colliding names get the smallest free numeric suffix, starting at 2,
        so "São Paulo" then "Sao-Paulo" yield "SaoPaulo" and "SaoPaulo2".

        Args:
            name: Raw display name

        Returns:
            Identifier not previously returned by this registry
        """
        base = clean_type_name(name)
        identifier = base
        suffix = 2
        while identifier in self.assigned:
            identifier = f"{base}{suffix}"
            suffix += 1

        if identifier != base:
            logger.warning(f"Identifier collision for '{name}': using {identifier} instead of {base}")

        self.assigned.add(identifier)
        return identifier

    def __contains__(self, identifier: str) -> bool:
        return identifier in self.assigned

    def __len__(self) -> int:
        return len(self.assigned)
