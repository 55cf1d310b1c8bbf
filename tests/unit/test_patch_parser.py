"""
Unit tests for the patch parser and reconstructor.
"""

import pytest

from review_scope.diff.parser import PatchParser, MalformedPatch, parse_patch
from review_scope.diff.reconstructor import reconstruct_patch
from review_scope.models.patch import Hunk


SIMPLE_PATCH = (
    "@@ -1,3 +1,4 @@\n"
    " import os\n"
    "-import sys\n"
    "+import re\n"
    "+import json\n"
    " \n"
    "@@ -20,2 +21,3 @@ def main():\n"
    "     run()\n"
    "+    cleanup()\n"
    "     return 0"
)


class TestPatchParser:
    """Unit tests for PatchParser."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = PatchParser()

    def test_parse_empty_patch(self):
        """None or empty text gives no hunks."""
        assert self.parser.parse(None, "a.py").is_empty
        assert self.parser.parse("", "a.py").is_empty
        assert self.parser.parse(None, "a.py").filename == "a.py"

    def test_parse_multiple_hunks(self):
        """Test basic multi-hunk parsing."""
        patch = self.parser.parse(SIMPLE_PATCH, "app.py")

        assert patch.filename == "app.py"
        assert len(patch.hunks) == 2

        first, second = patch.hunks
        assert (first.old_start, first.old_lines, first.new_start, first.new_lines) == (1, 3, 1, 4)
        assert first.lines == (" import os", "-import sys", "+import re", "+import json", " ")
        assert (second.old_start, second.old_lines, second.new_start, second.new_lines) == (20, 2, 21, 3)
        assert second.lines == ("     run()", "+    cleanup()", "     return 0")

    def test_omitted_counts_default_to_one(self):
        patch = self.parser.parse("@@ -7 +7 @@\n-a\n+b", "a.py")

        hunk = patch.hunks[0]
        assert hunk.old_lines == 1
        assert hunk.new_lines == 1
        assert hunk.lines == ("-a", "+b")

    def test_zero_length_start_kept_as_written(self):
        """Header values are stored without adjustment."""
        patch = self.parser.parse("@@ -5,0 +6,2 @@\n+a\n+b", "a.py")

        hunk = patch.hunks[0]
        assert hunk.old_start == 5
        assert hunk.old_lines == 0
        assert hunk.new_start == 6

    def test_skips_file_headers(self):
        """Git file headers before the first hunk are ignored."""
        text = (
            "diff --git a/a.py b/a.py\n"
            "index 83db48f..bf269f4 100644\n"
            "--- a/a.py\n"
            "+++ b/a.py\n"
            "@@ -1,2 +1,2 @@\n"
            " keep\n"
            "-old\n"
            "+new\n"
        )
        patch = self.parser.parse(text, "a.py")

        assert len(patch.hunks) == 1
        assert patch.hunks[0].lines == (" keep", "-old", "+new")

    def test_only_first_file_section_is_parsed(self):
        text = (
            "--- a/a.py\n"
            "+++ b/a.py\n"
            "@@ -1 +1 @@\n"
            "-a\n"
            "+b\n"
            "diff --git a/b.py b/b.py\n"
            "--- a/b.py\n"
            "+++ b/b.py\n"
            "@@ -1 +1 @@\n"
            "-c\n"
            "+d\n"
        )
        patch = self.parser.parse(text, "a.py")

        assert len(patch.hunks) == 1
        assert patch.hunks[0].lines == ("-a", "+b")

    def test_removed_line_that_looks_like_header(self):
        """A removed '-- x' line inside a hunk is body, not a file header."""
        text = "@@ -1,2 +1,1 @@\n--- comment\n keep"
        patch = self.parser.parse(text, "a.sql")

        assert patch.hunks[0].lines == ("--- comment", " keep")

    def test_no_newline_marker_is_kept(self):
        text = "@@ -1 +1 @@\n-a\n\\ No newline at end of file\n+b\n\\ No newline at end of file"
        patch = self.parser.parse(text, "a.txt")

        assert patch.hunks[0].lines == (
            "-a",
            "\\ No newline at end of file",
            "+b",
            "\\ No newline at end of file",
        )

    def test_blank_line_inside_hunk_is_context(self):
        """Whitespace-stripped context lines count as context."""
        text = "@@ -1,3 +1,3 @@\n a\n\n-b\n+c"
        patch = self.parser.parse(text, "a.py")

        assert patch.hunks[0].lines == (" a", "", "-b", "+c")

    def test_truncated_hunk_is_accepted(self):
        patch = self.parser.parse("@@ -1,5 +1,5 @@\n a\n b", "a.py")

        assert patch.hunks[0].lines == (" a", " b")
        assert patch.hunks[0].new_lines == 5

    def test_invalid_header_raises(self):
        with pytest.raises(MalformedPatch):
            self.parser.parse("@@ -x,1 +1,1 @@\n-a\n+b", "a.py")

    def test_invalid_second_header_reports_line(self):
        with pytest.raises(MalformedPatch) as exc_info:
            self.parser.parse("@@ -1 +1 @@\n-a\n+b\n@@ -9,z +9 @@\n+c", "a.py")

        assert exc_info.value.line_number == 4

    def test_line_beyond_header_counts_is_skipped(self):
        """A body longer than its header says keeps the counted lines."""
        patch = self.parser.parse("@@ -1 +1 @@\n-a\n+b\n ctx", "a.py")

        assert len(patch.hunks) == 1
        assert patch.hunks[0].lines == ("-a", "+b")

    def test_stray_lines_between_hunks_are_skipped(self):
        text = "@@ -1 +1 @@\n-a\n+b\ngarbage\n@@ -9 +9 @@\n-c\n+d"
        patch = self.parser.parse(text, "a.py")

        assert [h.lines for h in patch.hunks] == [("-a", "+b"), ("-c", "+d")]

    def test_trailing_blank_context_line_is_counted(self):
        """A blank last line still owed to the hunk is its stripped context line."""
        patch = self.parser.parse("@@ -1,2 +1,2 @@\n a\n", "a.py")

        assert patch.hunks[0].lines == (" a", "")

    def test_trailing_newline_after_complete_hunk_is_ignored(self):
        patch = self.parser.parse("@@ -1 +1 @@\n-a\n+b\n", "a.py")

        assert patch.hunks[0].lines == ("-a", "+b")

    def test_blank_context_line_survives_round_trip(self):
        """A hunk ending in a stripped blank context line parses back unchanged."""
        hunks = self.parser.parse("@@ -1,2 +1,3 @@\n a\n+b\n\n@@ -9 +10 @@\n-c\n+d", "a.py").hunks

        text = reconstruct_patch(hunks[:1])

        assert text == "@@ -1,2 +1,3 @@\n a\n+b\n"
        assert parse_patch(text, "a.py").hunks == hunks[:1]

    def test_malformed_patch_is_value_error(self):
        assert issubclass(MalformedPatch, ValueError)

    def test_module_level_parse_patch(self):
        assert parse_patch(SIMPLE_PATCH, "app.py") == self.parser.parse(SIMPLE_PATCH, "app.py")


class TestReconstructPatch:
    """Unit tests for reconstruct_patch."""

    def test_reconstruct_single_hunk(self):
        hunk = Hunk(3, 2, 3, 2, (" a", "-b", "+c"))
        assert reconstruct_patch([hunk]) == "@@ -3,2 +3,2 @@\n a\n-b\n+c"

    def test_reconstruct_joins_hunks_in_order(self):
        hunks = [
            Hunk(50, 1, 50, 1, ("-x", "+y")),
            Hunk(10, 1, 10, 1, ("-p", "+q")),
        ]

        assert reconstruct_patch(hunks) == (
            "@@ -50,1 +50,1 @@\n-x\n+y\n"
            "@@ -10,1 +10,1 @@\n-p\n+q"
        )

    def test_reconstruct_empty(self):
        assert reconstruct_patch([]) == ""

    def test_reconstruct_drops_section_heading(self):
        """Headers are rewritten in canonical form."""
        patch = parse_patch(SIMPLE_PATCH, "app.py")
        text = reconstruct_patch(patch.hunks)

        assert "@@ -20,2 +21,3 @@\n" in text
        assert "def main()" not in text.split("\n")[6]
        assert parse_patch(text, "app.py") == patch
