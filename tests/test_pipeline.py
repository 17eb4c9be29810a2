"""End-to-end tests for ChangeLog rendering."""

import re
from unittest.mock import patch

import pytest

from git2cl.errors import ExternalSourceError, MalformedInputError
from git2cl.gitlog import END_SENTINEL
from git2cl.pipeline import generate_changelog, render_changelog

HEADER_RE = re.compile(r"^\d{4}-\d{2}-\d{2}  .+  <[^>]+>$")


class TestRenderChangelog:
    """Tests for render_changelog()."""

    def test_structured_entry(self, make_raw):
        raw = make_raw(("2020-01-02", "Add parser", ["* parser.c (parse): New function."]))
        assert render_changelog(raw) == (
            "2020-01-02  Jane Doe  <jane@example.com>\n"
            "\n"
            "\tAdd parser\n"
            "\t* parser.c (parse): New function.\n"
        )

    def test_nfc_entry_leaves_no_trace(self, make_raw):
        raw = make_raw(
            ("2020-01-03", "Fix typo; nfc.", ["* parser.c: Fix typo."]),
            ("2020-01-02", "Add parser", ["* parser.c (parse): New function."]),
        )
        text = render_changelog(raw)
        assert "Fix typo" not in text
        assert "2020-01-03" not in text
        assert text.startswith("2020-01-02  ")

    def test_header_count_matches_entries(self, make_raw):
        entries = [
            ("2020-01-0%d" % day, f"Change {day}", ["* f.c: x."] if day % 2 else ["free text"])
            for day in range(1, 8)
        ]
        text = render_changelog(make_raw(*entries))
        headers = [line for line in text.splitlines() if HEADER_RE.match(line)]
        assert len(headers) == 7

    def test_legacy_entry(self, make_raw):
        raw = make_raw(("1999-12-31", "Old style", ["Rewrote everything.", "  Really."]))
        assert render_changelog(raw) == (
            "1999-12-31  Jane Doe  <jane@example.com>\n"
            "\n"
            "\tOld style\n"
            "Rewrote everything.\n"
            "  Really.\n"
        )

    def test_mixed_entries_separated_by_one_blank_line(self, make_raw):
        raw = make_raw(
            ("2020-01-02", "Second", ["Why.", "", "", "* b.c: y."]),
            ("2020-01-01", "First", ["Legacy", "", "", "", "text"]),
        )
        text = render_changelog(raw)
        assert "\n\n\n" not in text
        assert text == (
            "2020-01-02  Jane Doe  <jane@example.com>\n"
            "\n"
            "\tSecond\n"
            "\t* b.c: y.\n"
            "\n"
            "2020-01-01  Jane Doe  <jane@example.com>\n"
            "\n"
            "\tFirst\n"
            "Legacy\n"
            "\n"
            "text\n"
        )

    def test_only_excluded_entries_gives_empty_document(self, make_raw):
        raw = make_raw(("2020-01-02", "Tidy; nfc", []))
        assert render_changelog(raw) == ""

    def test_empty_stream(self):
        assert render_changelog("") == ""

    def test_copyright_footer(self, make_raw):
        raw = make_raw(("2020-01-02", "Add parser", ["* parser.c (parse): New function."]))
        text = render_changelog(raw, copyright_who="Example Org", year=2024)
        assert text.endswith(
            "\t* parser.c (parse): New function.\n"
            "\f\n"
            "Copyright (C) 2024 Example Org\n"
            "\n"
            "Copying and distribution of this file, with or without modification,\n"
            "are permitted provided the copyright notice and this notice are preserved.\n"
        )

    def test_malformed_stream_produces_nothing(self, make_raw):
        raw = make_raw(("2020-01-02", "Good", []), ("2020-01-01", "Bad", []))
        raw = raw[: raw.rindex(END_SENTINEL)]
        with pytest.raises(MalformedInputError):
            render_changelog(raw)


class TestGenerateChangelog:
    @patch("git2cl.pipeline.read_log")
    def test_reads_log_and_renders(self, mock_read_log, make_raw):
        mock_read_log.return_value = make_raw(("2020-01-02", "Add parser", ["* p.c: New."]))
        text = generate_changelog(since="v1.0", cwd="/repo")

        mock_read_log.assert_called_once_with("v1.0", cwd="/repo")
        assert text.startswith("2020-01-02  Jane Doe  <jane@example.com>\n")

    @patch("git2cl.pipeline.read_log")
    def test_source_failure_propagates(self, mock_read_log):
        mock_read_log.side_effect = ExternalSourceError("fatal: bad revision", returncode=128)
        with pytest.raises(ExternalSourceError):
            generate_changelog(since="nope")
