# topmark:header:start
#
#   project      : ApiDelta
#   file         : api.py
#   file_relpath : src/apidelta/rendering/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Single entry point for rendering a comparison report in any supported format."""

from __future__ import annotations

from typing import TYPE_CHECKING

from apidelta.core.formats import ReportFormat
from apidelta.rendering.console import render_console
from apidelta.rendering.html_report import render_html
from apidelta.rendering.machine import render_json, render_xml
from apidelta.rendering.markdown import render_markdown

if TYPE_CHECKING:
    from apidelta.model.result import ComparisonResult


def render_report(
    result: ComparisonResult,
    fmt: ReportFormat = ReportFormat.CONSOLE,
    *,
    color: bool = False,
    verbosity_level: int = 0,
) -> str:
    """Render ``result`` as text in ``fmt``.

    Args:
        result (ComparisonResult): The comparison result.
        fmt (ReportFormat): Output format.
        color (bool): Emit ANSI colors (console format only).
        verbosity_level (int): Console detail level; ``>= 1`` also shows the
            source and target signatures of each difference.

    Returns:
        str: The rendered report, ending with a newline.
    """
    match fmt:
        case ReportFormat.CONSOLE:
            return render_console(result, color=color, verbosity_level=verbosity_level)
        case ReportFormat.JSON:
            return render_json(result)
        case ReportFormat.XML:
            return render_xml(result)
        case ReportFormat.HTML:
            return render_html(result)
        case ReportFormat.MARKDOWN:
            return render_markdown(result)
