"""Locale utilities: lproj naming, BCP-47 to POSIX conversion, Babel lookups.

Centralizes locale format normalization used throughout the codebase.
Directory names follow Apple's ``<code>.lproj`` convention where ``<code>``
is a BCP-47-ish tag ("de", "pt-BR", "zh-Hans"). Babel expects POSIX-style
identifiers ("pt_BR", "zh_Hans"); machine-translation services expect bare
language codes ("pt", "zh").

Python 3.13+.
"""

from __future__ import annotations

import functools

from babel import Locale, UnknownLocaleError

from lprojfill.constants import LPROJ_SUFFIX
from lprojfill.types import LocaleCode

__all__ = [
    "describe_locale",
    "get_babel_locale",
    "is_known_locale",
    "locale_from_dir_name",
    "lproj_dir_name",
    "normalize_locale",
    "to_language_code",
]

# Pre-ISO directory names still found in older Xcode projects.
_LEGACY_LPROJ_NAMES: dict[str, LocaleCode] = {
    "Dutch": "nl",
    "English": "en",
    "French": "fr",
    "German": "de",
    "Italian": "it",
    "Japanese": "ja",
    "Spanish": "es",
}


def lproj_dir_name(locale: LocaleCode) -> str:
    """Return the directory name for a locale.

    Example:
        >>> lproj_dir_name("de")
        'de.lproj'
    """
    return f"{locale}{LPROJ_SUFFIX}"


def locale_from_dir_name(name: str) -> LocaleCode | None:
    """Strip the ``.lproj`` suffix from a directory name.

    Returns:
        Locale code, or None if ``name`` is not an lproj directory name
    """
    if not name.endswith(LPROJ_SUFFIX) or name == LPROJ_SUFFIX:
        return None
    return name.removesuffix(LPROJ_SUFFIX)


def normalize_locale(locale_code: LocaleCode) -> str:
    """Convert an lproj locale code to POSIX format for Babel.

    Legacy English-name directories ("German") map to their ISO code.

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("German")
        'de'
    """
    code = _LEGACY_LPROJ_NAMES.get(locale_code, locale_code)
    return code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: LocaleCode) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (lproj, BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    return Locale.parse(normalize_locale(locale_code))


def is_known_locale(locale_code: LocaleCode) -> bool:
    """Check whether Babel has CLDR data for ``locale_code``."""
    try:
        get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError):
        return False
    return True


def describe_locale(locale_code: LocaleCode, display_locale: LocaleCode = "en") -> str:
    """Return a human-readable label such as ``"German (de)"``.

    Codes Babel does not know (e.g. "Base") are returned unchanged.
    """
    try:
        name = get_babel_locale(locale_code).get_display_name(normalize_locale(display_locale))
    except (UnknownLocaleError, ValueError):
        return locale_code
    return f"{name} ({locale_code})" if name else locale_code


def to_language_code(locale_code: LocaleCode) -> str:
    """Reduce a locale code to the bare language code used by translation APIs.

    Example:
        >>> to_language_code("pt-BR")
        'pt'
        >>> to_language_code("zh-Hans")
        'zh'

    Raises:
        ValueError: If the code is not a recognizable locale
    """
    try:
        return get_babel_locale(locale_code).language
    except (UnknownLocaleError, ValueError) as e:
        msg = f"Unknown locale: '{locale_code}'"
        raise ValueError(msg) from e
