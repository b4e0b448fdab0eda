"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user code
when annotating Resolver call sites.

Python 3.13+. Zero external dependencies.
"""

from typing import TypeAlias

__all__ = [
    "LocaleCode",
    "Phrase",
    "StringsSource",
    "TranslationKey",
]

LocaleCode: TypeAlias = str
"""Locale code as used in lproj directory names (e.g., 'en', 'de', 'pt-BR')."""

TranslationKey: TypeAlias = str
"""Normalized (lowercased) identifier of one translatable unit."""

Phrase: TypeAlias = str
"""Human-readable text as it appears in a string table."""

StringsSource: TypeAlias = str
"""Decoded .strings file content as a Python string."""
