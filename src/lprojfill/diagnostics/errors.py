"""lprojfill exception hierarchy.

Every error raised by the package derives from LprojError. Subclasses carry
the structured context (path, phrase, locale, collaborator) callers need to
report the failure without parsing the message.

Propagation policy:
    ParseError / LocaleResolutionError - recovered per file during directory
        enumeration; raised directly by single-file loaders.
    NotFoundError / UnresolvedError - per phrase; never abort a batch.
    CollaboratorError - soft during remote corpus lookup, becomes
        UnresolvedError during machine translation.
    ProjectError - fatal; aborts the run.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "CollaboratorError",
    "LocaleResolutionError",
    "LprojError",
    "NotFoundError",
    "ParseError",
    "ProjectError",
    "UnresolvedError",
]


class LprojError(Exception):
    """Base exception for all lprojfill errors."""


class ParseError(LprojError):
    """String table could not be read or decoded.

    Malformed entry lines are NOT parse errors; the parser skips them.
    This error covers failures that make the whole payload unusable:
    unreadable file, undecodable bytes, oversize input.

    Attributes:
        path: File the payload came from, if known
    """

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        """Initialize ParseError.

        Args:
            message: Human-readable description
            path: File the payload came from, if known
        """
        super().__init__(message)
        self.path = path


class LocaleResolutionError(LprojError):
    """Path has no ``<code>.lproj`` ancestor, so its locale is unknown.

    Attributes:
        path: The offending path
    """

    def __init__(self, message: str, *, path: Path | str) -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(LprojError):
    """Phrase is absent from every base-locale string table.

    Attributes:
        phrase: The phrase that was looked up
        locale: The base locale that was searched
    """

    def __init__(self, message: str, *, phrase: str, locale: str) -> None:
        super().__init__(message)
        self.phrase = phrase
        self.locale = locale


class UnresolvedError(LprojError):
    """Every resolution step was exhausted without producing a translation.

    Attributes:
        phrase: The phrase that could not be translated
        locale: The target locale
    """

    def __init__(self, message: str, *, phrase: str, locale: str) -> None:
        super().__init__(message)
        self.phrase = phrase
        self.locale = locale


class CollaboratorError(LprojError):
    """An external collaborator (search, fetch, translate, copy) failed.

    Covers network errors, authentication failures, rate limiting and
    filesystem I/O errors reported by the collaborator.

    Attributes:
        collaborator: Short name of the failing collaborator (e.g. 'github')
        status_code: HTTP status code when the failure was an HTTP response
    """

    def __init__(
        self,
        message: str,
        *,
        collaborator: str,
        status_code: int | None = None,
    ) -> None:
        """Initialize CollaboratorError.

        Args:
            message: Human-readable description
            collaborator: Short name of the failing collaborator
            status_code: HTTP status code, if any
        """
        super().__init__(message)
        self.collaborator = collaborator
        self.status_code = status_code


class ProjectError(LprojError):
    """Project layout is unusable (missing root, missing base locale).

    This is the only run-aborting condition.

    Attributes:
        path: The directory that was expected to exist
    """

    def __init__(self, message: str, *, path: Path | str) -> None:
        super().__init__(message)
        self.path = path
