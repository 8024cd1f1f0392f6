# topmark:header:start
#
#   project      : ApiDelta
#   file         : markdown.py
#   file_relpath : src/apidelta/rendering/markdown.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Markdown report: a summary table followed by one section per change kind.

Suited for pull-request comments and CI job summaries. Cell text is escaped so
generic type names (``List<T>``) and pipes do not break the tables.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apidelta.config.logging import get_logger
from apidelta.model.difference import ChangeKind
from apidelta.rendering.console import SECTION_ORDER

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from apidelta.config.logging import ApiDeltaLogger
    from apidelta.model.difference import ApiDifference
    from apidelta.model.result import ComparisonResult

logger: ApiDeltaLogger = get_logger(__name__)


def escape_cell(text: str) -> str:
    """Escape text for use inside a Markdown table cell."""
    return (
        text.replace("\\", "\\\\")
        .replace("|", "\\|")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("\n", " ")
    )


def render_markdown_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    align: Mapping[int, str] | None = None,
) -> str:
    """Render a GitHub-flavoured Markdown table with padded columns.

    Args:
        headers (Sequence[str]): Column headers.
        rows (Sequence[Sequence[str]]): Rows, each as long as ``headers``.
        align (Mapping[int, str] | None): Column index to ``"left"`` (default),
            ``"right"`` or ``"center"``.

    Returns:
        str: The table, ending with a newline (empty when there are no headers).

    Raises:
        ValueError: If a row length differs from the number of headers.
    """
    if not headers:
        return ""
    ncols: int = len(headers)
    if any(len(r) != ncols for r in rows):
        raise ValueError("All rows must have the same number of columns as headers")

    widths: list[int] = [len(h) for h in headers]
    for r in rows:
        for i, cell in enumerate(r):
            widths[i] = max(widths[i], len(cell))

    def sep_for(i: int) -> str:
        style: str = (align or {}).get(i, "left").lower()
        w: int = max(3, widths[i])
        if style == "right":
            return "-" * (w - 1) + ":"
        if style == "center":
            return ":" + "-" * (w - 2) + ":"
        return "-" * w

    def line(cells: Sequence[str]) -> str:
        return "| " + " | ".join(f"{c:<{widths[i]}}" for i, c in enumerate(cells)) + " |"

    out: list[str] = [line(headers), "| " + " | ".join(sep_for(i) for i in range(ncols)) + " |"]
    out.extend(line(r) for r in rows)
    return "\n".join(out) + "\n"


def _difference_row(diff: ApiDifference) -> list[str]:
    notes: list[str] = [d.description for d in diff.details]
    if diff.change_kind == ChangeKind.MOVED and diff.target is not None:
        notes.insert(0, f"moved to {diff.target.full_name}")
    details: str = "; ".join(notes)
    return [
        escape_cell(diff.element_kind.label),
        f"`{escape_cell(diff.element_name)}`",
        diff.severity.label,
        "**yes**" if diff.is_breaking else "no",
        escape_cell(details),
    ]


def render_markdown(result: ComparisonResult) -> str:
    """Render ``result`` as a Markdown document."""
    s = result.summary
    parts: list[str] = [
        f"# API comparison: {escape_cell(result.source_label)} → {escape_cell(result.target_label)}\n",
        "",
    ]
    if result.has_breaking_changes:
        parts.append(f"> **{s.breaking} breaking change(s) detected.**\n")
    else:
        parts.append("> No breaking changes detected.\n")
    parts.append("")

    parts.append("## Summary\n")
    parts.append(
        render_markdown_table(
            ["Change", "Count"],
            [
                ["Added", str(s.added)],
                ["Removed", str(s.removed)],
                ["Modified", str(s.modified)],
                ["Moved", str(s.moved)],
                ["Excluded", str(s.excluded)],
                ["**Breaking**", str(s.breaking)],
                ["Total", str(s.total)],
            ],
            align={1: "right"},
        )
    )

    for kind in SECTION_ORDER:
        diffs: tuple[ApiDifference, ...] = result.of_kind(kind)
        if not diffs:
            continue
        parts.append(f"## {kind.label} ({len(diffs)})\n")
        parts.append(
            render_markdown_table(
                ["Kind", "Element", "Severity", "Breaking", "Details"],
                [_difference_row(d) for d in diffs],
            )
        )

    if result.diagnostics:
        parts.append(f"## Diagnostics ({len(result.diagnostics)})\n")
        parts.extend(
            f"- **{d.severity.label}** `{d.kind.value}` {escape_cell(d.subject)}: "
            f"{escape_cell(d.message)}"
            for d in result.diagnostics
        )
        parts.append("")

    text: str = "\n".join(parts)
    logger.trace("Rendered markdown report (%d chars)", len(text))
    return text.rstrip("\n") + "\n"
