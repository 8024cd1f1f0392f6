# topmark:header:start
#
#   project      : ApiDelta
#   file         : console.py
#   file_relpath : src/apidelta/rendering/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-readable console report.

Differences are grouped by change kind (removed first, excluded last), one line
per difference, with the severity in brackets and a ``BREAKING`` marker on
breaking differences. Detail lines are indented below their difference.

Colors come from `yachalk` (severity colors live on `Severity.color`); with
``color=False`` every colorizer is replaced by the identity function so the
output is plain text.

Example (colors omitted):

    API comparison: MyLib 1.0 -> MyLib 2.0

    Removed (1)
      [critical] BREAKING  Removed class MyLib.Legacy

    Modified (1)
      [error]    BREAKING  Modified method MyLib.Parser.Parse
                   - Signature changed: Int32 Parse(String) -> Int64 Parse(String) (breaking)

    Summary: 0 added, 1 removed, 1 modified, 0 moved, 0 excluded (2 breaking)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from yachalk import chalk

from apidelta.model.difference import ChangeKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from apidelta.diagnostic.model import Diagnostic
    from apidelta.model.difference import ApiDifference
    from apidelta.model.result import ComparisonResult

# Section order of the report.
SECTION_ORDER: Final[tuple[ChangeKind, ...]] = (
    ChangeKind.REMOVED,
    ChangeKind.MODIFIED,
    ChangeKind.MOVED,
    ChangeKind.ADDED,
    ChangeKind.EXCLUDED,
)

_SEVERITY_WIDTH: Final[int] = len("[critical]")


def _plain(text: str) -> str:
    return text


def _paint(color: bool, fn: Callable[[str], str]) -> Callable[[str], str]:
    return fn if color else _plain


def render_difference_line(diff: ApiDifference, *, color: bool = False) -> str:
    """Return the one-line rendering of ``diff`` (without details)."""
    severity: str = f"[{diff.severity.label}]".ljust(_SEVERITY_WIDTH)
    marker: str = "BREAKING " if diff.is_breaking else " " * len("BREAKING ")
    return (
        _paint(color, diff.severity.color)(severity)
        + " "
        + _paint(color, chalk.red_bright.bold)(marker)
        + " "
        + _head(diff)
    )


def _head(diff: ApiDifference) -> str:
    if diff.change_kind == ChangeKind.MODIFIED:
        return f"Modified {diff.element_kind.label} {diff.element_name}"
    return diff.description


def _diagnostic_line(diagnostic: Diagnostic, *, color: bool) -> str:
    level: str = f"[{diagnostic.severity.label}]".ljust(_SEVERITY_WIDTH)
    return (
        _paint(color, diagnostic.severity.color)(level)
        + f" {diagnostic.kind.value}: {diagnostic.subject}: {diagnostic.message}"
    )


def render_summary_line(result: ComparisonResult, *, color: bool = False) -> str:
    """Return the ``Summary: ...`` line."""
    s = result.summary
    text: str = (
        f"Summary: {s.added} added, {s.removed} removed, {s.modified} modified, "
        f"{s.moved} moved, {s.excluded} excluded ({s.breaking} breaking)"
    )
    if not color:
        return text
    return chalk.red_bright.bold(text) if s.breaking else chalk.green(text)


def render_console(
    result: ComparisonResult,
    *,
    color: bool = False,
    verbosity_level: int = 0,
) -> str:
    """Render ``result`` for a terminal.

    Args:
        result (ComparisonResult): The comparison result.
        color (bool): Emit ANSI colors.
        verbosity_level (int): ``>= 1`` adds source/target signature lines.

    Returns:
        str: The report text.
    """
    bold = _paint(color, chalk.bold)
    dim = _paint(color, chalk.dim)
    lines: list[str] = [
        bold(f"API comparison: {result.source_label} -> {result.target_label}"),
        "",
    ]

    if not result.differences:
        lines.append(_paint(color, chalk.green)("No API differences found."))
        lines.append("")

    for kind in SECTION_ORDER:
        diffs: tuple[ApiDifference, ...] = result.of_kind(kind)
        if not diffs:
            continue
        lines.append(bold(f"{kind.label} ({len(diffs)})"))
        for diff in diffs:
            lines.append("  " + render_difference_line(diff, color=color))
            indent: str = " " * (2 + _SEVERITY_WIDTH + 11)
            for detail in diff.details:
                text: str = f"- {detail.description}"
                if detail.is_breaking:
                    text += " (breaking)"
                lines.append(indent + _paint(color, detail.severity.color)(text))
            if verbosity_level > 0:
                if diff.source is not None:
                    lines.append(indent + dim(f"old: {diff.source.display_signature()}"))
                if diff.target is not None:
                    lines.append(indent + dim(f"new: {diff.target.display_signature()}"))
        lines.append("")

    if result.diagnostics:
        lines.append(bold(f"Diagnostics ({len(result.diagnostics)})"))
        lines.extend("  " + _diagnostic_line(d, color=color) for d in result.diagnostics)
        lines.append("")

    lines.append(render_summary_line(result, color=color))
    return "\n".join(lines) + "\n"
