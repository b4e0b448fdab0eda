"""Apple .strings string-table support: data model and parser.

Submodules:
    model  - Translation, Localization, normalize_key
    parser - decode_strings, parse_strings, parse, load_localization,
             resolve_path_locale

Python 3.13+.
"""

from lprojfill.strings.model import Localization, Translation, normalize_key
from lprojfill.strings.parser import (
    decode_strings,
    load_localization,
    parse,
    parse_strings,
    resolve_path_locale,
)

__all__ = [
    "Localization",
    "Translation",
    "decode_strings",
    "load_localization",
    "normalize_key",
    "parse",
    "parse_strings",
    "resolve_path_locale",
]
