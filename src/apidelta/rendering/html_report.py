# topmark:header:start
#
#   project      : ApiDelta
#   file         : html_report.py
#   file_relpath : src/apidelta/rendering/html_report.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Standalone HTML report (inline CSS, no external assets)."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING, Final

from apidelta.model.difference import ChangeKind
from apidelta.rendering.console import SECTION_ORDER

if TYPE_CHECKING:
    from apidelta.model.difference import ApiDifference
    from apidelta.model.result import ComparisonResult

_STYLE: Final[str] = """
body { font-family: system-ui, sans-serif; margin: 2rem; color: #222; }
table { border-collapse: collapse; margin-bottom: 1.5rem; }
th, td { border: 1px solid #ccc; padding: 0.3rem 0.6rem; text-align: left; vertical-align: top; }
th { background: #f3f3f3; }
code { font-size: 0.9em; }
.breaking { color: #b00020; font-weight: bold; }
.ok { color: #1b5e20; }
.severity-info { color: #1565c0; }
.severity-warning { color: #a66300; }
.severity-error { color: #c62828; }
.severity-critical { color: #b00020; font-weight: bold; }
""".strip()


def _difference_row(diff: ApiDifference) -> str:
    notes: list[str] = [escape(d.description) for d in diff.details]
    if diff.change_kind == ChangeKind.MOVED and diff.target is not None:
        notes.insert(0, f"moved to <code>{escape(diff.target.full_name)}</code>")
    breaking: str = '<span class="breaking">yes</span>' if diff.is_breaking else "no"
    return (
        "<tr>"
        f"<td>{escape(diff.element_kind.label)}</td>"
        f"<td><code>{escape(diff.element_name)}</code></td>"
        f'<td class="severity-{diff.severity.label}">{diff.severity.label}</td>'
        f"<td>{breaking}</td>"
        f"<td>{'<br>'.join(notes)}</td>"
        "</tr>"
    )


def render_html(result: ComparisonResult) -> str:
    """Render ``result`` as a standalone HTML page."""
    s = result.summary
    title: str = escape(f"API comparison: {result.source_label} -> {result.target_label}")
    body: list[str] = [f"<h1>{title}</h1>"]
    if result.has_breaking_changes:
        body.append(f'<p class="breaking">{s.breaking} breaking change(s) detected.</p>')
    else:
        body.append('<p class="ok">No breaking changes detected.</p>')

    body.append("<h2>Summary</h2>")
    body.append("<table><tr><th>Change</th><th>Count</th></tr>")
    for label, count in (
        ("Added", s.added),
        ("Removed", s.removed),
        ("Modified", s.modified),
        ("Moved", s.moved),
        ("Excluded", s.excluded),
        ("Breaking", s.breaking),
        ("Total", s.total),
    ):
        body.append(f"<tr><td>{label}</td><td>{count}</td></tr>")
    body.append("</table>")

    for kind in SECTION_ORDER:
        diffs: tuple[ApiDifference, ...] = result.of_kind(kind)
        if not diffs:
            continue
        body.append(f"<h2>{kind.label} ({len(diffs)})</h2>")
        body.append(
            "<table><tr><th>Kind</th><th>Element</th><th>Severity</th>"
            "<th>Breaking</th><th>Details</th></tr>"
        )
        body.extend(_difference_row(d) for d in diffs)
        body.append("</table>")

    if result.diagnostics:
        body.append(f"<h2>Diagnostics ({len(result.diagnostics)})</h2><ul>")
        body.extend(
            f'<li><span class="severity-{d.severity.label}">{d.severity.label}</span> '
            f"<code>{escape(d.kind.value)}</code> {escape(d.subject)}: {escape(d.message)}</li>"
            for d in result.diagnostics
        )
        body.append("</ul>")

    body.append(f"<p><small>Generated {escape(result.compared_at.isoformat())}</small></p>")
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f"<title>{title}</title>\n<style>\n{_STYLE}\n</style>\n</head>\n<body>\n"
        + "\n".join(body)
        + "\n</body>\n</html>\n"
    )
