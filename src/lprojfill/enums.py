"""Enumerations for lprojfill type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum


class ParserState(StrEnum):
    """State of the line-oriented .strings parser.

    StrEnum provides automatic string conversion: str(ParserState.IDLE) == "idle"
    """

    IDLE = "idle"
    """Between entries; the next line may start a comment or be an entry."""

    IN_BLOCK_COMMENT = "in_block_comment"
    """Inside an unterminated /* ... */ block; every line is comment text."""


class ResolutionOrigin(StrEnum):
    """Source that produced a resolved translation.

    StrEnum provides automatic string conversion: str(ResolutionOrigin.LOCAL) == "local"
    """

    LOCAL = "local"
    """Found in the project's own target-locale files."""

    REMOTE = "remote"
    """Found in a string table returned by code search."""

    MACHINE = "machine"
    """Produced by the machine-translation service."""


__all__ = [
    "ParserState",
    "ResolutionOrigin",
]
