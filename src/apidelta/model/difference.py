# topmark:header:start
#
#   project      : ApiDelta
#   file         : difference.py
#   file_relpath : src/apidelta/model/difference.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed differences between two API snapshots.

An `ApiDifference` is created exactly once by the differ (unclassified) and
annotated exactly once by the classifier, which returns a *new* frozen value
carrying the breaking verdict and severity. Nothing mutates a difference in
place.

Sections:
    * ChangeKind: what happened to an element (added, removed, ...).
    * Severity: ordered severity levels with terminal colors.
    * DetailKind / ChangeDetail: the individual aspects of a modification.
    * ApiDifference: one element-level difference.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import TYPE_CHECKING, Any, cast

from yachalk import chalk

from apidelta.core.enum_mixins import KeyedStrEnum

if TYPE_CHECKING:
    from collections.abc import Callable

    from apidelta.model.descriptor import MemberDescriptor, MemberKind


class ChangeKind(KeyedStrEnum):
    """What happened to an API element between the two snapshots."""

    ADDED = ("added", "Added")
    REMOVED = ("removed", "Removed")
    MODIFIED = ("modified", "Modified")
    MOVED = ("moved", "Moved")
    EXCLUDED = ("excluded", "Excluded")


class Severity(IntEnum):
    """Severity levels, ordered by importance: CRITICAL > ERROR > WARNING > INFO."""

    INFO = 0
    WARNING = 1
    ERROR = 2
    CRITICAL = 3

    @property
    def label(self) -> str:
        """Lower-case machine label (``"warning"``)."""
        return self.name.lower()

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only; machine formats should not use colors.
        """
        return cast(
            "Callable[[str], str]",
            {
                Severity.INFO: chalk.blue,
                Severity.WARNING: chalk.yellow,
                Severity.ERROR: chalk.red,
                Severity.CRITICAL: chalk.red_bright.bold,
            }[self],
        )


class DetailKind(KeyedStrEnum):
    """One aspect in which a matched element changed."""

    SIGNATURE_CHANGED = ("signature_changed", "Signature changed", ("type_kind_changed",))
    OPTIONAL_PARAMETER_ADDED = ("optional_parameter_added", "Optional parameter added")
    PARAMETER_RENAMED = ("parameter_renamed", "Parameter renamed")
    ACCESSIBILITY_REDUCED = ("accessibility_reduced", "Accessibility reduced")
    ACCESSIBILITY_WIDENED = ("accessibility_widened", "Accessibility widened")
    INTERFACE_ADDED = ("interface_added", "Interface added")
    INTERFACE_REMOVED = ("interface_removed", "Interface removed")
    OBSOLETE_ADDED = ("obsolete_added", "Marked obsolete")
    OBSOLETE_REMOVED = ("obsolete_removed", "Obsolete marker removed")


@dataclass(frozen=True, slots=True)
class ChangeDetail:
    """A single sub-change of a modified or moved element.

    Attributes:
        kind (DetailKind): What changed.
        old_value (str): Value in the source snapshot (may be empty).
        new_value (str): Value in the target snapshot (may be empty).
        is_breaking (bool): Breaking verdict (set by the classifier).
        severity (Severity): Severity (set by the classifier).
    """

    kind: DetailKind
    old_value: str = ""
    new_value: str = ""
    is_breaking: bool = False
    severity: Severity = Severity.INFO

    @property
    def description(self) -> str:
        """Human-readable one-line description."""
        if self.old_value and self.new_value:
            return f"{self.kind.label}: {self.old_value} -> {self.new_value}"
        if self.new_value:
            return f"{self.kind.label}: {self.new_value}"
        if self.old_value:
            return f"{self.kind.label}: {self.old_value}"
        return self.kind.label

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping."""
        return {
            "kind": self.kind.value,
            "oldValue": self.old_value,
            "newValue": self.new_value,
            "isBreaking": self.is_breaking,
            "severity": self.severity.label,
        }


@dataclass(frozen=True, slots=True)
class ApiDifference:
    """One element-level difference between the source and target snapshots.

    Attributes:
        change_kind (ChangeKind): Added, removed, modified, moved or excluded.
        element_kind (MemberKind): Kind of the element concerned.
        source (MemberDescriptor | None): Source-side descriptor (absent for Added).
        target (MemberDescriptor | None): Target-side descriptor (absent for
            Removed and Excluded).
        details (tuple[ChangeDetail, ...]): Ordered sub-changes (Modified/Moved).
        is_breaking (bool): Breaking verdict (set by the classifier).
        severity (Severity): Severity (set by the classifier).
        classified (bool): True once the classifier has annotated this difference.

    Raises:
        ValueError: If the descriptors do not fit the change kind (Added has a
            target only, Removed and Excluded a source only, Modified and Moved both).
    """

    change_kind: ChangeKind
    element_kind: MemberKind
    source: MemberDescriptor | None = None
    target: MemberDescriptor | None = None
    details: tuple[ChangeDetail, ...] = ()
    is_breaking: bool = False
    severity: Severity = Severity.INFO
    classified: bool = False

    def __post_init__(self) -> None:
        match self.change_kind:
            case ChangeKind.ADDED:
                valid: bool = self.source is None and self.target is not None
            case ChangeKind.REMOVED | ChangeKind.EXCLUDED:
                valid = self.source is not None and self.target is None
            case ChangeKind.MODIFIED | ChangeKind.MOVED:
                valid = self.source is not None and self.target is not None
        if not valid:
            raise ValueError(
                f"invalid descriptors for a {self.change_kind.value} difference "
                f"(source={self.source is not None}, target={self.target is not None})"
            )

    @property
    def subject(self) -> MemberDescriptor:
        """The descriptor that best identifies the element (source first)."""
        return cast("MemberDescriptor", self.source or self.target)

    @property
    def element_name(self) -> str:
        """Full name of the element (source-side for moved elements)."""
        return self.subject.full_name

    @property
    def is_type_level(self) -> bool:
        """True if the difference concerns a type rather than a member."""
        return self.element_kind.is_type

    @property
    def description(self) -> str:
        """Human-readable one-line description."""
        what: str = f"{self.element_kind.label} {self.element_name}"
        match self.change_kind:
            case ChangeKind.ADDED:
                return f"Added {what}"
            case ChangeKind.REMOVED:
                return f"Removed {what}"
            case ChangeKind.EXCLUDED:
                return f"Excluded {what}"
            case ChangeKind.MOVED:
                moved_to: str = self.target.full_name if self.target else "?"
                return f"Moved {what} to {moved_to}"
            case ChangeKind.MODIFIED:
                changes: str = "; ".join(d.description for d in self.details)
                return f"Modified {what}" + (f" ({changes})" if changes else "")

    def annotated(
        self,
        *,
        is_breaking: bool,
        severity: Severity,
        details: tuple[ChangeDetail, ...] | None = None,
    ) -> ApiDifference:
        """Return a classified copy of this difference."""
        return replace(
            self,
            is_breaking=is_breaking,
            severity=severity,
            details=self.details if details is None else details,
            classified=True,
        )

    def sort_key(self) -> tuple[str, int, str, str]:
        """Deterministic ordering key: element name, members after their type, kind."""
        return (
            self.subject.type_full_name,
            0 if self.is_type_level else 1,
            self.element_name,
            self.change_kind.value,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping."""
        return {
            "changeKind": self.change_kind.value,
            "elementKind": self.element_kind.value,
            "elementName": self.element_name,
            "description": self.description,
            "isBreaking": self.is_breaking,
            "severity": self.severity.label,
            "source": self.source.display_signature() if self.source else None,
            "target": self.target.display_signature() if self.target else None,
            "details": [d.to_dict() for d in self.details],
        }
