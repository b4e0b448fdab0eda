"""lprojfill - fill missing translations in lproj-based projects.

Maintains Apple ``.strings`` string tables laid out as one ``<code>.lproj``
directory per language, and resolves missing target-language entries from
progressively more expensive sources: the project's own files, a remote code
search corpus, and a machine-translation service.

Public API:
    Project - Locale directory discovery and string-table enumeration
    Resolver - Multi-step resolution pipeline
    Deadline - Time budget / cancellation token for collaborator calls
    Localization, Translation - Parsed string-table model
    parse_strings - Parse decoded .strings text
    parse - Decode and parse raw .strings bytes
    resolve_path_locale - Locale of a path's innermost .lproj component

Exceptions:
    LprojError - Base exception class
    ParseError, LocaleResolutionError, NotFoundError, UnresolvedError,
    CollaboratorError, ProjectError

Submodules:
    lprojfill.strings - Parser and data model
    lprojfill.collaborators - Code search, machine translation, directory copy
    lprojfill.config - Collaborator configuration
    lprojfill.locale_utils - Locale code helpers (Babel-backed)
"""

from .diagnostics import (
    CollaboratorError,
    LocaleResolutionError,
    LprojError,
    NotFoundError,
    ParseError,
    ProjectError,
    UnresolvedError,
)
from .enums import ResolutionOrigin
from .project import Project
from .resolution import BatchResult, Deadline, Resolution, Resolver
from .strings import Localization, Translation, parse, parse_strings, resolve_path_locale

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("lprojfill")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BatchResult",
    "CollaboratorError",
    "Deadline",
    "LocaleResolutionError",
    "Localization",
    "LprojError",
    "NotFoundError",
    "ParseError",
    "Project",
    "ProjectError",
    "Resolution",
    "ResolutionOrigin",
    "Resolver",
    "Translation",
    "UnresolvedError",
    "__version__",
    "parse",
    "parse_strings",
    "resolve_path_locale",
]
