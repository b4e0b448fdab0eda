"""Contracts for the external collaborators the resolver calls into.

These are Protocols (structural typing) rather than ABCs so tests and
callers can supply any object with matching methods.

Components:
    ResourceReference - Immutable pointer to a remote string table
    CodeSearch - Locates and fetches candidate string tables (async)
    MachineTranslator - Translates one phrase (async)
    DirectoryCopier - Mirrors a directory tree (sync, local I/O)

Implementations report failures as CollaboratorError.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from lprojfill.types import LocaleCode, Phrase

__all__ = [
    "CodeSearch",
    "DirectoryCopier",
    "MachineTranslator",
    "ResourceReference",
]


@dataclass(frozen=True, slots=True)
class ResourceReference:
    """Pointer to a remote string table returned by code search.

    Attributes:
        repository: Repository the file lives in (e.g. 'owner/name')
        path: File path inside the repository (e.g. 'App/de.lproj/Localizable.strings')
        url: URL the raw content is fetched from
    """

    repository: str
    path: str
    url: str


class CodeSearch(Protocol):
    """Search a code corpus for string tables containing a phrase.

    Example:
        >>> class StaticSearch:
        ...     async def search(self, phrase, target_locale):
        ...         return [ResourceReference("o/r", "de.lproj/a.strings", "mem://a")]
        ...     async def fetch(self, reference):
        ...         return b'"Activity" = "Aktivitaet";'
    """

    async def search(
        self, phrase: Phrase, target_locale: LocaleCode
    ) -> Sequence[ResourceReference]:
        """Return candidate string tables for ``target_locale``, best first.

        Raises:
            CollaboratorError: On network, authentication or rate-limit failure
        """
        ...

    async def fetch(self, reference: ResourceReference) -> bytes:
        """Return the raw content of a referenced string table.

        Raises:
            CollaboratorError: On network, authentication or rate-limit failure
        """
        ...


class MachineTranslator(Protocol):
    """Translate a phrase between two locales."""

    async def translate(
        self, phrase: Phrase, source_lang: LocaleCode, target_lang: LocaleCode
    ) -> str:
        """Return ``phrase`` translated from ``source_lang`` to ``target_lang``.

        Raises:
            CollaboratorError: On provider, network or authentication failure
        """
        ...


class DirectoryCopier(Protocol):
    """Recursively mirror a directory tree."""

    def copy_tree(self, source_dir: Path, dest_dir: Path) -> None:
        """Copy ``source_dir`` and everything below it to ``dest_dir``.

        Raises:
            CollaboratorError: On I/O failure
        """
        ...
