"""Checklist template loading and issue body composition."""

from pathlib import Path

from shared.constants import CHECKLIST_SEPARATOR
from shared.schemas import ChecklistTemplate


class ChecklistError(Exception):
    """Raised when the checklist template cannot be read."""


def load_checklist(path: str | Path) -> ChecklistTemplate:
    """Read the checklist template from disk.

    The file is read on every call so edits apply without a restart. The
    first non-blank line is the marker used to detect an existing checklist.

    Args:
        path: Path to the UTF-8 checklist file

    Returns:
        ChecklistTemplate with the marker line and the full text

    Raises:
        ChecklistError: If the file cannot be read or decoded, or has no
            non-blank line
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ChecklistError(f"Could not read checklist file {path}: {e}") from e

    marker = next((line for line in content.split("\n") if line.strip()), None)
    if marker is None:
        raise ChecklistError(f"Checklist file {path} is empty")

    return ChecklistTemplate(first_line=marker, full_content=content)


def has_checklist(body: str, checklist: ChecklistTemplate) -> bool:
    """Return True if the body already carries the checklist marker."""
    return checklist.first_line in body


def append_checklist(body: str, checklist: ChecklistTemplate) -> str:
    """Return the issue body with the checklist appended."""
    return f"{body}{CHECKLIST_SEPARATOR}{checklist.full_content}"
