"""Tests for the .strings parser and data model.

Covers encoding detection, the comment state machine, the quote-split entry
rule, inversed parsing, and locale resolution from paths.
"""

from __future__ import annotations

import codecs
from pathlib import Path

import pytest

from lprojfill.constants import MAX_SOURCE_SIZE
from lprojfill.diagnostics import LocaleResolutionError, ParseError
from lprojfill.strings import (
    Localization,
    Translation,
    decode_strings,
    load_localization,
    normalize_key,
    parse,
    parse_strings,
    resolve_path_locale,
)

SAMPLE = """\
/* Title of the activity tab */
"Activity" = "Aktivität";

// Shown on the settings screen
"Settings" = "Einstellungen";

"Cancel" = "Abbrechen";
"""


class TestDecodeStrings:
    """Test byte-level encoding detection."""

    def test_plain_utf8(self) -> None:
        """UTF-8 without BOM decodes as-is."""
        assert decode_strings('"a" = "ä";'.encode()) == '"a" = "ä";'

    def test_utf8_with_bom(self) -> None:
        """UTF-8 BOM is stripped."""
        raw = codecs.BOM_UTF8 + '"a" = "b";'.encode()
        assert decode_strings(raw) == '"a" = "b";'

    def test_utf16_le_with_bom(self) -> None:
        """UTF-16 LE with BOM (Xcode default) is transcoded."""
        raw = codecs.BOM_UTF16_LE + '"a" = "ö";'.encode("utf-16-le")
        assert decode_strings(raw) == '"a" = "ö";'

    def test_utf16_be_with_bom(self) -> None:
        """UTF-16 BE with BOM is transcoded."""
        raw = codecs.BOM_UTF16_BE + '"a" = "ö";'.encode("utf-16-be")
        assert decode_strings(raw) == '"a" = "ö";'

    def test_invalid_utf8_raises(self) -> None:
        """Bytes that are not valid UTF-8 raise ParseError."""
        with pytest.raises(ParseError, match="not valid utf-8"):
            decode_strings(b'"a" = "\xff";')

    def test_oversize_raises(self) -> None:
        """Payloads above MAX_SOURCE_SIZE are rejected."""
        with pytest.raises(ParseError, match="exceeds"):
            decode_strings(b" " * (MAX_SOURCE_SIZE + 1))

    def test_error_carries_path(self) -> None:
        """ParseError records the originating path."""
        with pytest.raises(ParseError) as exc_info:
            decode_strings(b"\x80", path="x/de.lproj/a.strings")
        assert exc_info.value.path == "x/de.lproj/a.strings"


class TestParseEntries:
    """Test the quote-split entry rule."""

    def test_sample_entries(self) -> None:
        """Every well-formed entry is parsed with verbatim source/target."""
        loc = parse_strings(SAMPLE, locale="de")

        assert loc.locale == "de"
        assert len(loc) == 3
        assert loc.get("activity") == Translation(
            source="Activity", target="Aktivität", comment="/* Title of the activity tab */"
        )
        assert loc.get("settings").target == "Einstellungen"
        assert loc.get("cancel").target == "Abbrechen"

    def test_keys_are_lowercased(self) -> None:
        """Keys are the lowercased source column."""
        loc = parse_strings('"OK Button" = "OK";')
        assert list(loc) == ["ok button"]
        assert loc.get("ok button").source == "OK Button"

    def test_insertion_order_preserved(self) -> None:
        """Iteration follows file order."""
        loc = parse_strings('"b" = "1";\n"a" = "2";\n"c" = "3";')
        assert list(loc) == ["b", "a", "c"]

    def test_case_insensitive_collision_last_wins(self) -> None:
        """'Activity' and 'activity' share a slot; the later entry wins."""
        loc = parse_strings('"Activity" = "Erste";\n"activity" = "Zweite";')

        assert len(loc) == 1
        assert loc.get("activity") == Translation(source="activity", target="Zweite")

    def test_malformed_unquoted_value_skipped(self) -> None:
        """A line with one quoted segment is skipped without error."""
        loc = parse_strings('"key" = noquotes;\n"ok" = "fine";')

        assert "key" not in loc
        assert list(loc) == ["ok"]

    @pytest.mark.parametrize(
        "line",
        [
            '"only-one";',
            '"a" = "b" = "c";',
            '"a" "b" "c";',
            "garbage without quotes",
        ],
    )
    def test_other_shapes_skipped(self, line: str) -> None:
        """Lines that do not reduce to exactly two segments are ignored."""
        assert len(parse_strings(line)) == 0

    def test_trailing_whitespace_after_terminator(self) -> None:
        """Whitespace after the semicolon does not break the entry."""
        loc = parse_strings('"a" = "b";   ')
        assert list(loc) == ["a"]

    def test_segment_containing_equals_is_discarded(self) -> None:
        """A quoted segment containing '=' is dropped, leaving one segment."""
        loc = parse_strings('"a=b" = "c";')
        assert len(loc) == 0

    def test_blank_and_whitespace_lines_ignored(self) -> None:
        """Blank and whitespace-only lines do not affect parsing."""
        loc = parse_strings('\n   \n\t\n"a" = "b";\n\n')
        assert list(loc) == ["a"]

    def test_crlf_line_endings(self) -> None:
        """Windows line endings parse like Unix ones."""
        loc = parse_strings('"a" = "1";\r\n"b" = "2";\r\n')
        assert list(loc) == ["a", "b"]

    @pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x0b", "\x0c", "\x1c", "\x85"])
    def test_unicode_line_breaks_inside_value(self, separator: str) -> None:
        """Only '\\n' ends a line; other line-break characters stay in the value."""
        text = f'"greeting" = "Hello{separator}World";\n"a" = "x{separator}y";'

        loc = parse_strings(text)

        assert len(loc) == 2
        assert loc.get("greeting").target == f"Hello{separator}World"
        assert loc.get("a").target == f"x{separator}y"

    def test_indented_entry(self) -> None:
        """Leading indentation is ignored."""
        loc = parse_strings('    "a" = "b";')
        assert loc.get("a").target == "b"

    def test_empty_input(self) -> None:
        """Empty text yields an empty Localization."""
        loc = parse_strings("", locale="fr")
        assert loc == Localization(locale="fr")


class TestInversedParsing:
    """Test inversed mode (keying by the right-hand column)."""

    def test_swaps_columns(self) -> None:
        """Inversed parsing keys by the right-hand segment."""
        loc = parse_strings('"activity_title" = "Activity";', inversed=True)

        translation = loc.get("activity")
        assert translation == Translation(source="Activity", target="activity_title")

    def test_every_entry_swapped(self) -> None:
        """Swapping applies consistently to all entries."""
        canonical = parse_strings(SAMPLE)
        inversed = parse_strings(SAMPLE, inversed=True)

        assert len(canonical) == len(inversed)
        for translation in canonical.translations.values():
            swapped = inversed.get(normalize_key(translation.target))
            assert swapped is not None
            assert swapped.source == translation.target
            assert swapped.target == translation.source


class TestCommentStateMachine:
    """Test comment accumulation and attachment."""

    def test_line_comment_attaches_to_next_entry(self) -> None:
        """A // comment attaches to the following entry."""
        loc = parse_strings('// greeting\n"Hello" = "Hallo";')
        assert loc.get("hello").comment == "// greeting"

    def test_line_comment_does_not_swallow_next_line(self) -> None:
        """A // comment never opens a block: the next line is still an entry."""
        loc = parse_strings('// note\n"a" = "b";\n"c" = "d";')
        assert list(loc) == ["a", "c"]

    def test_multiline_block_comment(self) -> None:
        """Lines inside an open block are comment text, even if entry-shaped."""
        text = '/* first\n"not" = "an entry";\nlast */\n"real" = "entry";'
        loc = parse_strings(text)

        assert list(loc) == ["real"]
        assert loc.get("real").comment == '/* first\n"not" = "an entry";\nlast */'

    def test_comment_resets_after_attach(self) -> None:
        """The buffer is cleared once attached; the next entry has no comment."""
        loc = parse_strings('/* only first */\n"a" = "1";\n"b" = "2";')

        assert loc.get("a").comment == "/* only first */"
        assert loc.get("b").comment == ""

    def test_consecutive_comments_accumulate(self) -> None:
        """Several comment lines before one entry are joined with newlines."""
        loc = parse_strings('// one\n/* two */\n"a" = "b";')
        assert loc.get("a").comment == "// one\n/* two */"

    def test_malformed_line_keeps_comment_pending(self) -> None:
        """A skipped line does not consume the pending comment."""
        loc = parse_strings('/* c */\n"broken";\n"a" = "b";')
        assert loc.get("a").comment == "/* c */"

    def test_unterminated_block_consumes_rest(self) -> None:
        """An unterminated block comment swallows the remaining lines."""
        loc = parse_strings('"a" = "b";\n/* never closed\n"c" = "d";')
        assert list(loc) == ["a"]


class TestParseBytes:
    """Test the decode + parse convenience function."""

    def test_utf16_matches_utf8(self) -> None:
        """UTF-16 LE with BOM parses to the same table as UTF-8."""
        utf8 = parse(SAMPLE.encode("utf-8"), locale="de")
        utf16 = parse(codecs.BOM_UTF16_LE + SAMPLE.encode("utf-16-le"), locale="de")
        assert utf8 == utf16


class TestResolvePathLocale:
    """Test locale detection from file paths."""

    def test_lproj_parent(self) -> None:
        assert resolve_path_locale("/proj/de.lproj/Localizable.strings") == "de"

    def test_no_lproj(self) -> None:
        assert resolve_path_locale("/proj/Localizable.strings") is None

    def test_innermost_wins(self) -> None:
        """The component closest to the file is used."""
        assert resolve_path_locale("/a/en.lproj/b/fr.lproj/x.strings") == "fr"

    def test_region_code(self) -> None:
        assert resolve_path_locale(Path("App/pt-BR.lproj/Main.strings")) == "pt-BR"

    def test_bare_suffix_is_not_a_locale(self) -> None:
        """A component named just '.lproj' carries no locale."""
        assert resolve_path_locale("/proj/.lproj/x.strings") is None


class TestLoadLocalization:
    """Test loading string tables from disk."""

    def test_stamps_locale_and_path(self, tmp_path: Path) -> None:
        """Locale comes from the lproj directory; path is recorded."""
        path = tmp_path / "de.lproj" / "Localizable.strings"
        path.parent.mkdir()
        path.write_text(SAMPLE, encoding="utf-8")

        loc = load_localization(path)

        assert loc.locale == "de"
        assert loc.path == path
        assert len(loc) == 3

    def test_inversed(self, tmp_path: Path) -> None:
        path = tmp_path / "en.lproj" / "a.strings"
        path.parent.mkdir()
        path.write_text('"greeting" = "Hello";', encoding="utf-8")

        loc = load_localization(path, inversed=True)

        assert loc.get("hello").target == "greeting"

    def test_no_lproj_ancestor_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "a.strings"
        path.write_text('"a" = "b";', encoding="utf-8")

        with pytest.raises(LocaleResolutionError, match="Could not resolve locale"):
            load_localization(path)

    def test_missing_file_raises_parse_error(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="Could not read"):
            load_localization(tmp_path / "de.lproj" / "missing.strings")


class TestLocalizationModel:
    """Test Localization mapping helpers."""

    def test_merge_overwrites(self) -> None:
        loc = Localization(locale="de")
        loc.merge("a", Translation("A", "1"))
        loc.merge("a", Translation("A", "2"))

        assert len(loc) == 1
        assert loc.get("a").target == "2"

    def test_get_missing_returns_none(self) -> None:
        assert Localization(locale="de").get("nope") is None

    def test_translation_key_property(self) -> None:
        assert Translation("Hello World", "x").key == "hello world"
