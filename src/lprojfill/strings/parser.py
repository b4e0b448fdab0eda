"""Parser for Apple ``.strings`` string tables.

Architecture:
    Parsing is split into two pure stages so the grammar can be tested with
    literal string fixtures and no filesystem:

    - :func:`decode_strings` detects the byte encoding (UTF-8, optionally with
      BOM, or UTF-16 with BOM) and transcodes to ``str``.
    - :func:`parse_strings` runs a line-oriented finite-state machine over
      the decoded text and produces a :class:`Localization`.

    :func:`load_localization` is the filesystem entry point; it reads a file,
    stamps the locale derived from its ``<code>.lproj`` ancestor, and
    delegates to the two stages above.

Grammar (line based):
    - Lines end at ``\n`` only; a trailing ``\r`` is stripped with the other
      surrounding whitespace. Other Unicode line breaks (U+2028, form feed)
      are ordinary characters and may appear inside quoted values.
    - Blank lines are ignored.
    - A line starting with ``//`` or ``/*``, or any line while a block comment
      is open, is comment text. A block stays open until a line ends in ``*/``.
    - Any other line is split on ``"``. Segments that are empty, exactly ``;``
      or contain ``=`` are discarded. Exactly two remaining segments form an
      entry; every other shape is skipped without error.
    - The accumulated comment is attached to the next entry and then reset.

Python 3.13+.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path

from lprojfill.constants import MAX_SOURCE_SIZE
from lprojfill.diagnostics import LocaleResolutionError, ParseError
from lprojfill.enums import ParserState
from lprojfill.locale_utils import locale_from_dir_name
from lprojfill.strings.model import Localization, Translation
from lprojfill.types import LocaleCode, StringsSource

__all__ = [
    "decode_strings",
    "load_localization",
    "parse",
    "parse_strings",
    "resolve_path_locale",
]

logger = logging.getLogger(__name__)

_LINE_COMMENT = "//"
_BLOCK_OPEN = "/*"
_BLOCK_CLOSE = "*/"
_QUOTE = '"'
_TERMINATOR = ";"
_ASSIGN = "="
_NEWLINE = "\n"

# BOM -> codec. The "utf-16" codec consumes the BOM and honours its byte order.
_BOMS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def decode_strings(raw: bytes, *, path: Path | str | None = None) -> StringsSource:
    """Decode raw string-table bytes to text.

    Xcode writes string tables as UTF-16 LE with a byte-order mark; hand
    edited or generated files are usually UTF-8. The BOM decides; without
    one the payload must be valid UTF-8.

    Args:
        raw: File content
        path: Origin of the payload, used in error messages only

    Returns:
        Decoded text with the BOM removed

    Raises:
        ParseError: If the payload is oversize or not valid in the detected encoding
    """
    if len(raw) > MAX_SOURCE_SIZE:
        msg = f"String table exceeds {MAX_SOURCE_SIZE} bytes ({len(raw)} bytes)"
        raise ParseError(msg, path=path)

    encoding = "utf-8"
    for bom, candidate in _BOMS:
        if raw.startswith(bom):
            encoding = candidate
            break

    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        msg = f"String table is not valid {encoding}: {e}"
        raise ParseError(msg, path=path) from e


def _split_entry(line: str) -> tuple[str, str] | None:
    """Extract the two quoted segments of an entry line, or None."""
    segments = [
        segment
        for segment in line.split(_QUOTE)
        if segment and segment != _TERMINATOR and _ASSIGN not in segment
    ]
    if len(segments) != 2:
        return None
    return segments[0], segments[1]


def parse_strings(
    text: StringsSource,
    *,
    locale: LocaleCode = "",
    inversed: bool = False,
) -> Localization:
    """Parse decoded string-table text into a Localization.

    Pure function: no I/O, no global state. Malformed lines are skipped and
    logged at DEBUG level; they never raise.

    Args:
        text: Decoded file content
        locale: Locale code to stamp on the result
        inversed: Swap the quoted segments, keying entries by the right-hand
            side (the phrase) instead of the left-hand side (the key)

    Returns:
        Localization whose keys are the lowercased key column

    Example:
        >>> loc = parse_strings('"Activity" = "Aktivität";', locale="de")
        >>> loc.get("activity").target
        'Aktivität'
        >>> inv = parse_strings('"Activity" = "Aktivität";', inversed=True)
        >>> inv.get("aktivität").target
        'Activity'
    """
    localization = Localization(locale=locale)
    state = ParserState.IDLE
    comment: list[str] = []

    for lineno, raw_line in enumerate(text.split(_NEWLINE), start=1):
        line = raw_line.strip()
        if not line:
            continue

        match state:
            case ParserState.IN_BLOCK_COMMENT:
                comment.append(line)
                if line.endswith(_BLOCK_CLOSE):
                    state = ParserState.IDLE
                continue
            case ParserState.IDLE if line.startswith(_LINE_COMMENT):
                comment.append(line)
                continue
            case ParserState.IDLE if line.startswith(_BLOCK_OPEN):
                comment.append(line)
                if not line.endswith(_BLOCK_CLOSE):
                    state = ParserState.IN_BLOCK_COMMENT
                continue

        entry = _split_entry(line)
        if entry is None:
            logger.debug("Skipping malformed line %d: %r", lineno, line)
            continue

        source, target = entry
        if inversed:
            source, target = target, source

        translation = Translation(source=source, target=target, comment="\n".join(comment))
        localization.merge(translation.key, translation)
        comment.clear()

    return localization


def parse(
    raw: bytes,
    *,
    locale: LocaleCode = "",
    inversed: bool = False,
    path: Path | str | None = None,
) -> Localization:
    """Decode and parse a raw string table.

    Args:
        raw: File content (UTF-8 or BOM-marked UTF-16)
        locale: Locale code to stamp on the result
        inversed: See :func:`parse_strings`
        path: Origin of the payload, used in error messages only

    Returns:
        Parsed Localization

    Raises:
        ParseError: If the payload cannot be decoded
    """
    return parse_strings(decode_strings(raw, path=path), locale=locale, inversed=inversed)


def resolve_path_locale(path: Path | str) -> LocaleCode | None:
    """Return the locale of the innermost ``<code>.lproj`` path component.

    Example:
        >>> resolve_path_locale("/proj/de.lproj/Localizable.strings")
        'de'
        >>> resolve_path_locale("/proj/Localizable.strings") is None
        True
    """
    for part in reversed(Path(path).parts):
        locale = locale_from_dir_name(part)
        if locale is not None:
            return locale
    return None


def load_localization(path: Path | str, *, inversed: bool = False) -> Localization:
    """Read and parse a string table from disk.

    Args:
        path: Path to a ``.strings`` file inside a ``<code>.lproj`` directory
        inversed: See :func:`parse_strings`

    Returns:
        Parsed Localization stamped with the path's locale

    Raises:
        LocaleResolutionError: If the path has no ``.lproj`` ancestor
        ParseError: If the file cannot be read or decoded
    """
    file_path = Path(path)
    locale = resolve_path_locale(file_path)
    if locale is None:
        msg = f"Could not resolve locale from path: {file_path}"
        raise LocaleResolutionError(msg, path=file_path)

    try:
        raw = file_path.read_bytes()
    except OSError as e:
        msg = f"Could not read string table: {e}"
        raise ParseError(msg, path=file_path) from e

    localization = parse(raw, locale=locale, inversed=inversed, path=file_path)
    localization.path = file_path
    logger.debug(
        "Parsed %s (%s, inversed=%s): %d entries",
        file_path,
        locale,
        inversed,
        len(localization),
    )
    return localization
