"""Data model for parsed string tables.

Translation is an immutable record of one entry. Localization groups the
entries of one string table under their normalized keys.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from lprojfill.types import LocaleCode, TranslationKey

__all__ = ["Localization", "Translation", "normalize_key"]


def normalize_key(text: str) -> TranslationKey:
    """Return the lookup key for a phrase (case-insensitive matching).

    Example:
        >>> normalize_key("Activity")
        'activity'
    """
    return text.lower()


@dataclass(frozen=True, slots=True)
class Translation:
    """One entry of a string table.

    ``source`` is the column the entry is keyed by and ``target`` the payload.
    For canonically parsed files that is the left and right quoted segment
    respectively; inversed parsing swaps them. Both preserve original case.

    Attributes:
        source: Key column text
        target: Payload column text
        comment: Comment block preceding the entry ("" if none)
    """

    source: str
    target: str
    comment: str = ""

    @property
    def key(self) -> TranslationKey:
        """Normalized lookup key derived from ``source``."""
        return normalize_key(self.source)


@dataclass(slots=True)
class Localization:
    """String table for a single locale.

    Maps normalized keys to Translation records. Insertion order is preserved
    so iteration is deterministic. Keys are unique: inserting an entry whose
    key already exists replaces the earlier one.

    Instances are created fresh per parse and never written back to disk.

    Attributes:
        locale: Locale code the table belongs to ("" when unknown)
        translations: Ordered key -> Translation mapping
        path: File the table was parsed from, if any
    """

    locale: LocaleCode
    translations: dict[TranslationKey, Translation] = field(default_factory=dict)
    path: Path | None = None

    def __len__(self) -> int:
        return len(self.translations)

    def __iter__(self) -> Iterator[TranslationKey]:
        return iter(self.translations)

    def __contains__(self, key: object) -> bool:
        return key in self.translations

    def get(self, key: TranslationKey) -> Translation | None:
        """Return the entry stored under ``key``, or None."""
        return self.translations.get(key)

    def merge(self, key: TranslationKey, translation: Translation) -> None:
        """Insert ``translation`` under ``key``, replacing any existing entry."""
        self.translations[key] = translation
