"""Error types for lprojfill.

Python 3.13+. Zero external dependencies.
"""

from .errors import (
    CollaboratorError,
    LocaleResolutionError,
    LprojError,
    NotFoundError,
    ParseError,
    ProjectError,
    UnresolvedError,
)

__all__ = [
    "CollaboratorError",
    "LocaleResolutionError",
    "LprojError",
    "NotFoundError",
    "ParseError",
    "ProjectError",
    "UnresolvedError",
]
