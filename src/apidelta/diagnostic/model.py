# topmark:header:start
#
#   project      : ApiDelta
#   file         : model.py
#   file_relpath : src/apidelta/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics recorded while comparing two snapshots.

Diagnostics are *recoverable* findings about the inputs or the configuration,
as opposed to API differences. They never stop a comparison and never make a
change breaking; they travel on the `ComparisonResult` so that callers and
renderers can surface them.

Sections:
    * DiagnosticKind: the recoverable conditions the engine reports.
    * Diagnostic: immutable structured diagnostic payload.
    * DiagnosticStats: aggregated per-severity counts.
    * DiagnosticLog: mutable per-run collection with helpers for adding
      and summarizing diagnostics.
    * FrozenDiagnosticLog: immutable snapshot stored on the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from apidelta.config.logging import get_logger
from apidelta.core.enum_mixins import KeyedStrEnum
from apidelta.model.difference import Severity

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from apidelta.config.logging import ApiDeltaLogger


logger: ApiDeltaLogger = get_logger(__name__)


class DiagnosticKind(KeyedStrEnum):
    """Recoverable conditions reported during a comparison."""

    UNEXPECTEDLY_INCLUDED = (
        "unexpectedly_included",
        "Excluded element present in target",
    )
    RESOLUTION_AMBIGUITY = (
        "resolution_ambiguity",
        "No mapped candidate found in target",
    )
    DESCRIPTOR_CONTRACT_VIOLATION = (
        "descriptor_contract_violation",
        "Malformed descriptor skipped",
    )


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic.

    Attributes:
        kind (DiagnosticKind): The reported condition.
        severity (Severity): Severity of the finding.
        subject (str): Identity (usually a full name) the finding is about.
        message (str): Human-readable explanation.
    """

    kind: DiagnosticKind
    severity: Severity
    subject: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping."""
        return {
            "kind": self.kind.value,
            "severity": self.severity.label,
            "subject": self.subject,
            "message": self.message,
        }


@dataclass(frozen=True, slots=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_info + self.n_warning + self.n_error


@dataclass
class DiagnosticLog:
    """Mutable, per-run collection of diagnostics."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def freeze(self) -> FrozenDiagnosticLog:
        """Return an immutable snapshot of this log's diagnostics."""
        return FrozenDiagnosticLog(items=tuple(self.items))

    def add(
        self,
        kind: DiagnosticKind,
        subject: str,
        message: str,
        *,
        severity: Severity = Severity.WARNING,
    ) -> Diagnostic:
        """Append a diagnostic and return it.

        Args:
            kind (DiagnosticKind): The reported condition.
            subject (str): Identity the finding is about.
            message (str): Human-readable explanation.
            severity (Severity): Severity of the finding.

        Returns:
            Diagnostic: The recorded diagnostic.
        """
        diagnostic = Diagnostic(kind=kind, severity=severity, subject=subject, message=message)
        self.items.append(diagnostic)
        logger.debug("Diagnostic [%s] %s: %s", kind.value, subject, message)
        return diagnostic

    def stats(self) -> DiagnosticStats:
        """Return per-severity counts for diagnostics in this log."""
        return compute_diagnostic_stats(self.items)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        """Return the diagnostics of ``kind`` in insertion order."""
        return [d for d in self.items if d.kind == kind]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class FrozenDiagnosticLog:
    """Immutable diagnostic container stored on a `ComparisonResult`."""

    items: tuple[Diagnostic, ...] = ()

    def __iter__(self) -> Iterator[Diagnostic]:
        """Iterate over contained diagnostics in insertion order."""
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        """Return the diagnostics of ``kind`` in insertion order."""
        return [d for d in self.items if d.kind == kind]

    def stats(self) -> DiagnosticStats:
        """Return aggregated per-severity counts for the contained diagnostics."""
        return compute_diagnostic_stats(self.items)

    def to_list(self) -> list[dict[str, Any]]:
        """Return the diagnostics as JSON-friendly mappings."""
        return [d.to_dict() for d in self.items]


def compute_diagnostic_stats(diagnostics: Iterable[Diagnostic]) -> DiagnosticStats:
    """Return per-severity counts for a sequence of diagnostics.

    ``CRITICAL`` diagnostics are counted as errors.
    """
    items: list[Diagnostic] = list(diagnostics)
    n_info: int = sum(1 for d in items if d.severity == Severity.INFO)
    n_warn: int = sum(1 for d in items if d.severity == Severity.WARNING)
    n_err: int = sum(1 for d in items if d.severity >= Severity.ERROR)
    return DiagnosticStats(n_info=n_info, n_warning=n_warn, n_error=n_err)
