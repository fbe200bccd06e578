"""Tests for checklist template handling."""

import pytest

from app.checklist import ChecklistError, append_checklist, has_checklist, load_checklist
from shared.schemas import ChecklistTemplate


class TestLoadChecklist:
    """Tests for load_checklist function."""

    def test_reads_first_line_and_content(self, checklist_file):
        """Should split out the first line and keep the full text."""
        checklist = load_checklist(checklist_file)

        assert checklist.first_line == "## Checklist"
        assert checklist.full_content == "## Checklist\n- [ ] Step 1"

    def test_rereads_on_every_call(self, checklist_file):
        """Should pick up edits without caching."""
        load_checklist(checklist_file)
        checklist_file.write_text("### Release steps\n- [ ] Tag", encoding="utf-8")

        assert load_checklist(checklist_file).first_line == "### Release steps"

    def test_missing_file(self, tmp_path):
        """Should raise ChecklistError for a missing file."""
        with pytest.raises(ChecklistError):
            load_checklist(tmp_path / "missing.md")

    def test_marker_skips_leading_blank_lines(self, tmp_path):
        """Should use the first non-blank line as the marker."""
        path = tmp_path / "checklist.md"
        path.write_text("\n  \n## Checklist\n- [ ] Step 1", encoding="utf-8")

        checklist = load_checklist(path)

        assert checklist.first_line == "## Checklist"
        assert checklist.full_content == "\n  \n## Checklist\n- [ ] Step 1"

    def test_blank_file(self, tmp_path):
        """Should raise ChecklistError when there is no marker line."""
        path = tmp_path / "checklist.md"
        path.write_text("\n\n", encoding="utf-8")

        with pytest.raises(ChecklistError):
            load_checklist(path)

    def test_shipped_checklist_is_readable(self):
        """Should load the checklist bundled with the service."""
        from pathlib import Path

        checklist = load_checklist(Path(__file__).parent.parent / "checklist.md")
        assert checklist.first_line.startswith("## ")


class TestBodyComposition:
    """Tests for the idempotence check and body composition."""

    checklist = ChecklistTemplate(first_line="## Checklist", full_content="## Checklist\n- [ ] Step 1")

    def test_append(self):
        """Should separate the body and checklist with a blank line."""
        assert append_checklist("Hello", self.checklist) == "Hello\n\n## Checklist\n- [ ] Step 1"

    def test_append_to_empty_body(self):
        """Should still prefix the separator for an empty body."""
        assert append_checklist("", self.checklist) == "\n\n## Checklist\n- [ ] Step 1"

    def test_has_checklist(self):
        """Should detect the marker anywhere in the body."""
        assert has_checklist("Intro\n## Checklist\n- [x] Step 1", self.checklist) is True
        assert has_checklist("Intro only", self.checklist) is False
