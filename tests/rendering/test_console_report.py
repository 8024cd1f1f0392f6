# topmark:header:start
#
#   project      : ApiDelta
#   file         : test_console_report.py
#   file_relpath : tests/rendering/test_console_report.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the console renderer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from apidelta.rendering.console import render_console, render_summary_line
from tests.rendering.conftest import empty_result

if TYPE_CHECKING:
    from apidelta.model.result import ComparisonResult


def test_sections_in_fixed_order(result: ComparisonResult) -> None:
    """Removed first, excluded last; empty sections are omitted."""
    text = render_console(result)
    headings = ["Removed (1)", "Modified (2)", "Added (1)", "Excluded (1)"]
    positions = [text.index(h) for h in headings]
    assert positions == sorted(positions)
    assert "Moved (" not in text
    assert text.startswith("API comparison: MyLib 1.0 -> MyLib 2.0\n")


def test_difference_lines(result: ComparisonResult) -> None:
    """Severity, breaking marker and details appear on each difference."""
    lines = render_console(result).splitlines()
    removed = next(line for line in lines if "MyLib.Legacy.Widget" in line)
    assert removed.strip().startswith("[critical] BREAKING")
    assert removed.endswith("Removed class MyLib.Legacy.Widget")

    reset = next(line for line in lines if "MyLib.Parser.Reset" in line)
    assert "BREAKING" not in reset
    assert "[warning]" in reset

    assert any(
        line.strip()
        == "- Signature changed: System.Int32 Parse(System.String text) -> "
        "System.Int64 Parse(System.String text) (breaking)"
        for line in lines
    )
    assert any(line.strip() == "- Marked obsolete" for line in lines)


def test_diagnostics_and_summary(result: ComparisonResult) -> None:
    """Diagnostics get their own section; the summary closes the report."""
    lines = render_console(result).splitlines()
    assert "Diagnostics (1)" in lines
    assert any("unexpectedly_included: MyLib.ParsedHandler" in line for line in lines)
    assert lines[-1] == "Summary: 1 added, 1 removed, 2 modified, 0 moved, 1 excluded (2 breaking)"


def test_verbose_shows_signatures(result: ComparisonResult) -> None:
    """Verbosity adds old/new signature lines."""
    plain = render_console(result)
    verbose = render_console(result, verbosity_level=1)
    assert "old: " not in plain
    assert "old: public class MyLib.Legacy.Widget" in verbose
    assert "new: public class MyLib.Tokenizer" in verbose


def test_plain_output_has_no_escape_codes(result: ComparisonResult) -> None:
    """Without color the report is plain text."""
    assert "\x1b[" not in render_console(result, color=False)


def test_empty_result() -> None:
    """An empty comparison says so and still prints the summary."""
    text = render_console(empty_result())
    assert "No API differences found." in text
    assert text.endswith(
        "Summary: 0 added, 0 removed, 0 modified, 0 moved, 0 excluded (0 breaking)\n"
    )
    assert render_summary_line(empty_result()) in text
