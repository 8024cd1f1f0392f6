# topmark:header:start
#
#   project      : ApiDelta
#   file         : formats.py
#   file_relpath : src/apidelta/core/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Report output formats.

The format is a *presentation* choice: renderers in `apidelta.rendering`
consume it, the comparison engine never does.
"""

from __future__ import annotations

from apidelta.core.enum_mixins import KeyedStrEnum


class ReportFormat(KeyedStrEnum):
    """Output format for comparison reports.

    Members:
        CONSOLE: Human-readable, optionally colored text grouped by change kind.
        JSON: Machine-readable JSON document.
        XML: Machine-readable XML document.
        HTML: Standalone HTML page.
        MARKDOWN: Markdown summary table and sections (PR comments, job summaries).
    """

    CONSOLE = ("console", "Human-readable console output", ("text", "default"))
    JSON = ("json", "JSON document")
    XML = ("xml", "XML document")
    HTML = ("html", "HTML page", ("htm",))
    MARKDOWN = ("markdown", "Markdown document", ("md",))

    @property
    def is_machine(self) -> bool:
        """True for formats intended for machine consumption."""
        return self in (ReportFormat.JSON, ReportFormat.XML)
