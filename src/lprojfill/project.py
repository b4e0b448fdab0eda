"""Locale directory model for an lproj-based project.

A Project is a read-only view of ``<root>/<code>.lproj/*.strings``. Nothing
is cached: every discovery call re-reads the filesystem, so directories
created mid-run (for example by the resolver's bootstrap copy) are visible
immediately.

Error recovery:
    Enumeration is resilient. A string table that cannot be read, decoded
    or attributed to a locale is logged at WARNING level and skipped; the
    remaining files are still produced. Only a missing or non-directory
    root is fatal (see :meth:`Project.validate`).

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from lprojfill.constants import IGNORED_DIR_NAMES, STRINGS_EXTENSION
from lprojfill.diagnostics import LocaleResolutionError, ParseError, ProjectError
from lprojfill.locale_utils import locale_from_dir_name, lproj_dir_name
from lprojfill.strings.model import Localization, Translation
from lprojfill.strings.parser import load_localization
from lprojfill.types import LocaleCode, Phrase, TranslationKey

__all__ = ["Project"]

logger = logging.getLogger(__name__)


class Project:
    """Read-only view of a project's locale directories.

    Args:
        root: Project directory containing ``<code>.lproj`` subdirectories
        exclude: Case-insensitive substrings; string tables whose path
            contains any of them are ignored

    Example:
        >>> proj = Project("MyApp/Resources", exclude=["InfoPlist"])
        >>> sorted(proj.available_locales())
        ['de', 'en']
        >>> for loc in proj.localizations_for_locale("de"):
        ...     print(loc.path, len(loc))
    """

    __slots__ = ("_exclude", "_root")

    def __init__(self, root: Path | str, *, exclude: Iterable[str] = ()) -> None:
        self._root = Path(root)
        self._exclude: tuple[str, ...] = tuple(p.lower() for p in exclude if p)

    @property
    def root(self) -> Path:
        """Project root directory."""
        return self._root

    @property
    def exclude(self) -> tuple[str, ...]:
        """Lowercased path-exclusion patterns."""
        return self._exclude

    def __repr__(self) -> str:
        return f"Project(root={str(self._root)!r}, exclude={list(self._exclude)!r})"

    def validate(self) -> None:
        """Check that the root exists and is a directory.

        Raises:
            ProjectError: If the root is missing or not a directory
        """
        if not self._root.exists():
            msg = f"Project path does not exist: {self._root}"
            raise ProjectError(msg, path=self._root)
        if not self._root.is_dir():
            msg = f"Project path is not a directory: {self._root}"
            raise ProjectError(msg, path=self._root)

    def locale_dir(self, locale: LocaleCode) -> Path:
        """Return the ``<locale>.lproj`` directory path (may not exist)."""
        return self._root / lproj_dir_name(locale)

    def has_locale(self, locale: LocaleCode) -> bool:
        """Check whether ``<locale>.lproj`` exists as a directory."""
        return self.locale_dir(locale).is_dir()

    def available_locales(self) -> list[LocaleCode]:
        """List locales with an ``.lproj`` directory directly under the root.

        Order follows filesystem enumeration and is not sorted.

        Raises:
            ProjectError: If the root cannot be listed
        """
        try:
            entries = list(self._root.iterdir())
        except OSError as e:
            msg = f"Cannot list project directory {self._root}: {e}"
            raise ProjectError(msg, path=self._root) from e

        locales: list[LocaleCode] = []
        for entry in entries:
            locale = locale_from_dir_name(entry.name)
            if locale is not None and entry.is_dir():
                locales.append(locale)
        return locales

    def _is_excluded(self, path: Path) -> bool:
        if any(part in IGNORED_DIR_NAMES for part in path.parts):
            return True
        lowered = str(path).lower()
        return any(pattern in lowered for pattern in self._exclude)

    def strings_files(self, locale: LocaleCode) -> Iterator[Path]:
        """Yield ``.strings`` files directly inside ``<locale>.lproj``.

        Missing locale directories yield nothing. Excluded paths are skipped.
        """
        directory = self.locale_dir(locale)
        try:
            entries = list(directory.iterdir())
        except FileNotFoundError:
            return
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            return

        for path in entries:
            if path.suffix != STRINGS_EXTENSION or not path.is_file():
                continue
            if self._is_excluded(path):
                logger.debug("Excluded %s", path)
                continue
            yield path

    def localizations_for_locale(
        self, locale: LocaleCode, *, inversed: bool = False
    ) -> Iterator[Localization]:
        """Lazily parse every string table of ``locale``.

        Files that fail to parse are logged and skipped; they never abort the
        sequence.

        Args:
            locale: Locale code
            inversed: Parse with swapped columns (key by phrase)
        """
        for path in self.strings_files(locale):
            try:
                yield load_localization(path, inversed=inversed)
            except (ParseError, LocaleResolutionError) as e:
                logger.warning("Skipping %s: %s", path, e)

    def find_translation(
        self, locale: LocaleCode, key: TranslationKey, *, inversed: bool = False
    ) -> Translation | None:
        """Return the first entry stored under ``key`` in any table of ``locale``.

        Tables are searched in enumeration order; parsing stops at the first hit.
        """
        for localization in self.localizations_for_locale(locale, inversed=inversed):
            translation = localization.get(key)
            if translation is not None:
                logger.debug("Found '%s' in %s", key, localization.path)
                return translation
        return None

    def base_phrases(self, locale: LocaleCode) -> Iterator[Phrase]:
        """Yield each distinct phrase (right-hand column) of ``locale``'s tables.

        Phrases are deduplicated case-insensitively, first occurrence wins,
        in file and entry order.
        """
        seen: set[TranslationKey] = set()
        for localization in self.localizations_for_locale(locale, inversed=True):
            for key, translation in localization.translations.items():
                if key not in seen:
                    seen.add(key)
                    yield translation.source
