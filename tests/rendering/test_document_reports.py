# topmark:header:start
#
#   project      : ApiDelta
#   file         : test_document_reports.py
#   file_relpath : tests/rendering/test_document_reports.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the Markdown and HTML reports and the format dispatcher."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from apidelta.core.formats import ReportFormat
from apidelta.model.result import ComparisonResult
from apidelta.rendering.api import render_report
from apidelta.rendering.html_report import render_html
from apidelta.rendering.markdown import escape_cell, render_markdown, render_markdown_table
from tests.conftest import parametrize
from tests.rendering.conftest import empty_result, sample_result

if TYPE_CHECKING:
    from collections.abc import Callable


def test_markdown_table_layout() -> None:
    """Columns are padded; alignment markers follow the requested style."""
    table = render_markdown_table(["Change", "Count"], [["Added", "3"]], align={1: "right"})
    assert table == "| Change | Count |\n| ------ | ----: |\n| Added  | 3     |\n"
    assert render_markdown_table([], []) == ""


def test_markdown_table_rejects_ragged_rows() -> None:
    """Every row must match the header width."""
    with pytest.raises(ValueError, match="same number of columns"):
        render_markdown_table(["A", "B"], [["only one"]])


def test_escape_cell() -> None:
    """Pipes, angle brackets and newlines cannot break a table."""
    assert escape_cell("List<T>|x\ny") == "List&lt;T&gt;\\|x y"


def test_markdown_report(result: ComparisonResult) -> None:
    """Heading, verdict, summary table and one section per change kind."""
    text = render_markdown(result)
    assert text.startswith("# API comparison: MyLib 1.0 → MyLib 2.0\n")
    assert "> **2 breaking change(s) detected.**" in text
    assert "## Removed (1)" in text
    assert "## Moved" not in text
    row = next(line for line in text.splitlines() if "`MyLib.Legacy.Widget`" in line)
    assert "**yes**" in row and "critical" in row
    assert "## Diagnostics (1)" in text
    assert text.endswith("\n") and not text.endswith("\n\n")


def test_markdown_without_breaking_changes() -> None:
    """The verdict line reflects a clean comparison."""
    assert "> No breaking changes detected." in render_markdown(empty_result())


def test_html_report(result: ComparisonResult) -> None:
    """A standalone page with one table per change kind."""
    html = render_html(result)
    assert html.startswith("<!DOCTYPE html>")
    assert "<h2>Modified (2)</h2>" in html
    assert '<td class="severity-critical">critical</td>' in html
    assert "2 breaking change(s) detected." in html
    assert "<h2>Diagnostics (1)</h2>" in html


def test_html_escapes_labels() -> None:
    """Labels and names are HTML-escaped."""
    html = render_html(ComparisonResult.build([], source_label="a<b", target_label="c&d"))
    assert "a&lt;b -&gt; c&amp;d" in html
    assert "a<b" not in html


@parametrize(
    "fmt, check",
    [
        (ReportFormat.CONSOLE, lambda text: text.startswith("API comparison:")),
        (ReportFormat.JSON, lambda text: json.loads(text)["summary"]["total"] == 5),
        (ReportFormat.XML, lambda text: text.startswith("<?xml")),
        (ReportFormat.HTML, lambda text: "<html" in text),
        (ReportFormat.MARKDOWN, lambda text: text.startswith("# API comparison")),
    ],
)
def test_render_report_dispatch(fmt: ReportFormat, check: Callable[[str], bool]) -> None:
    """Every format renders and ends with a newline."""
    text = render_report(sample_result(), fmt)
    assert text.endswith("\n")
    assert check(text)
