# topmark:header:start
#
#   project      : ApiDelta
#   file         : result.py
#   file_relpath : src/apidelta/model/result.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Aggregated, immutable output of one comparison.

`ComparisonResult.build()` is the only constructor the engine uses: it orders
the classified differences deterministically and derives the summary counters
from them, so counters can never disagree with the difference list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from apidelta.diagnostic.model import FrozenDiagnosticLog
from apidelta.model.difference import ApiDifference, ChangeKind, Severity

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class ComparisonSummary:
    """Per-change-kind counters plus the number of breaking differences."""

    added: int = 0
    removed: int = 0
    modified: int = 0
    moved: int = 0
    excluded: int = 0
    breaking: int = 0

    @property
    def total(self) -> int:
        """Total number of differences (excluded ones included)."""
        return self.added + self.removed + self.modified + self.moved + self.excluded

    @classmethod
    def from_differences(cls, differences: Iterable[ApiDifference]) -> ComparisonSummary:
        """Count ``differences`` by change kind and breaking verdict."""
        counts: dict[ChangeKind, int] = dict.fromkeys(ChangeKind, 0)
        breaking: int = 0
        for diff in differences:
            counts[diff.change_kind] += 1
            if diff.is_breaking:
                breaking += 1
        return cls(
            added=counts[ChangeKind.ADDED],
            removed=counts[ChangeKind.REMOVED],
            modified=counts[ChangeKind.MODIFIED],
            moved=counts[ChangeKind.MOVED],
            excluded=counts[ChangeKind.EXCLUDED],
            breaking=breaking,
        )

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping."""
        return {
            "added": self.added,
            "removed": self.removed,
            "modified": self.modified,
            "moved": self.moved,
            "excluded": self.excluded,
            "breaking": self.breaking,
            "total": self.total,
        }


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Immutable result of comparing a source snapshot with a target snapshot.

    Attributes:
        source_label (str): Name of the source snapshot (e.g. assembly name or path).
        target_label (str): Name of the target snapshot.
        differences (tuple[ApiDifference, ...]): Classified differences in
            deterministic order.
        summary (ComparisonSummary): Counters derived from ``differences``.
        diagnostics (FrozenDiagnosticLog): Recoverable findings recorded during the run.
        compared_at (datetime): UTC timestamp of the comparison (not part of equality).
    """

    source_label: str
    target_label: str
    differences: tuple[ApiDifference, ...]
    summary: ComparisonSummary
    diagnostics: FrozenDiagnosticLog = FrozenDiagnosticLog()
    compared_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), compare=False
    )

    @classmethod
    def build(
        cls,
        differences: Iterable[ApiDifference],
        *,
        source_label: str = "source",
        target_label: str = "target",
        diagnostics: FrozenDiagnosticLog | None = None,
    ) -> ComparisonResult:
        """Order ``differences`` and derive the summary."""
        ordered: tuple[ApiDifference, ...] = tuple(sorted(differences, key=ApiDifference.sort_key))
        return cls(
            source_label=source_label,
            target_label=target_label,
            differences=ordered,
            summary=ComparisonSummary.from_differences(ordered),
            diagnostics=diagnostics or FrozenDiagnosticLog(),
        )

    @property
    def has_breaking_changes(self) -> bool:
        """True if at least one difference is breaking."""
        return self.summary.breaking > 0

    @property
    def breaking_changes(self) -> tuple[ApiDifference, ...]:
        """The breaking differences, in result order."""
        return tuple(d for d in self.differences if d.is_breaking)

    @property
    def max_severity(self) -> Severity | None:
        """Highest severity among the differences, or None when there are none."""
        return max((d.severity for d in self.differences), default=None)

    def of_kind(self, kind: ChangeKind) -> tuple[ApiDifference, ...]:
        """The differences of change kind ``kind``, in result order."""
        return tuple(d for d in self.differences if d.change_kind == kind)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping."""
        return {
            "source": self.source_label,
            "target": self.target_label,
            "comparedAt": self.compared_at.isoformat(),
            "hasBreakingChanges": self.has_breaking_changes,
            "summary": self.summary.to_dict(),
            "differences": [d.to_dict() for d in self.differences],
            "diagnostics": self.diagnostics.to_list(),
        }
