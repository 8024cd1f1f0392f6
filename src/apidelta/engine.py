# topmark:header:start
#
#   project      : ApiDelta
#   file         : engine.py
#   file_relpath : src/apidelta/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comparison engine: the one entry point that wires the components together.

Data flow for one comparison (single pass, no shared state between runs):

    raw entries ──► descriptor contract check ──► scope filter
                                                       │
                       identity mapper + exclusion registry
                                                       │
                                              matcher & differ
                                                       │
                                                  classifier ──► ComparisonResult

Malformed descriptors never abort a comparison: each one is skipped and
recorded as a ``descriptor_contract_violation`` diagnostic. Configuration
problems, on the other hand, are raised as `ConfigurationError` before any
comparison work starts.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from apidelta.classifier import classify_all
from apidelta.config.logging import get_logger
from apidelta.config.model import ComparisonConfiguration
from apidelta.core.errors import DescriptorError
from apidelta.diagnostic.model import DiagnosticKind, DiagnosticLog
from apidelta.differ import SnapshotDiffer
from apidelta.exclusions import ExclusionRegistry
from apidelta.mapping import IdentityMapper
from apidelta.model.descriptor import MemberDescriptor
from apidelta.model.difference import Severity
from apidelta.model.result import ComparisonResult
from apidelta.scope import ScopeFilter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apidelta.config.logging import ApiDeltaLogger
    from apidelta.model.difference import ApiDifference

logger: ApiDeltaLogger = get_logger(__name__)

DescriptorInput = MemberDescriptor | Mapping[str, Any]


def _subject_of(entry: object, side: str, index: int) -> str:
    if isinstance(entry, MemberDescriptor) and entry.full_name:
        return entry.full_name
    if isinstance(entry, Mapping):
        full_name: object = entry.get("fullName")  # pyright: ignore[reportUnknownMemberType]
        if isinstance(full_name, str) and full_name:
            return full_name
    return f"{side}[{index}]"


def materialize(
    entries: Iterable[DescriptorInput],
    diagnostics: DiagnosticLog,
    *,
    side: str = "source",
) -> list[MemberDescriptor]:
    """Turn raw snapshot entries into valid descriptors.

    Skips (with a contract-violation diagnostic) entries that cannot be parsed,
    descriptors missing a kind/name/full name, members without a declaring type
    or whose declaring type is absent from the snapshot, and repeated identities
    (the first occurrence is kept).

    Args:
        entries (Iterable[DescriptorInput]): Descriptors or their serialized form.
        diagnostics (DiagnosticLog): Receives one diagnostic per skipped entry.
        side (str): ``"source"`` or ``"target"``, used in diagnostic subjects.

    Returns:
        list[MemberDescriptor]: Valid descriptors, snapshot order preserved.
    """

    def violation(subject: str, message: str) -> None:
        diagnostics.add(
            DiagnosticKind.DESCRIPTOR_CONTRACT_VIOLATION,
            subject,
            f"{side}: {message}",
            severity=Severity.WARNING,
        )

    parsed: list[MemberDescriptor] = []
    seen: set[MemberDescriptor] = set()
    for index, entry in enumerate(entries):
        subject: str = _subject_of(entry, side, index)
        descriptor: MemberDescriptor
        if isinstance(entry, MemberDescriptor):
            problems: list[str] = entry.contract_problems()
            if problems:
                violation(subject, "; ".join(problems))
                continue
            descriptor = entry
        elif isinstance(entry, Mapping):
            try:
                descriptor = MemberDescriptor.from_dict(entry)
            except DescriptorError as exc:
                violation(subject, str(exc))
                continue
        else:
            violation(subject, f"entry is not an object: {entry!r}")
            continue

        if descriptor in seen:
            violation(subject, "duplicate descriptor identity (first occurrence kept)")
            continue
        seen.add(descriptor)
        parsed.append(descriptor)

    type_names: set[str] = {d.full_name for d in parsed if d.is_type}
    valid: list[MemberDescriptor] = []
    for descriptor in parsed:
        if not descriptor.is_type and descriptor.declaring_type not in type_names:
            violation(
                descriptor.full_name,
                f"declaring type {descriptor.declaring_type} is absent from the snapshot",
            )
            continue
        valid.append(descriptor)
    return valid


def apply_scope(descriptors: Iterable[MemberDescriptor], scope: ScopeFilter) -> list[MemberDescriptor]:
    """In-scope descriptors; members follow their declaring type out of scope."""
    kept: list[MemberDescriptor] = [d for d in descriptors if scope.is_in_scope(d)]
    kept_types: set[str] = {d.full_name for d in kept if d.is_type}
    return [d for d in kept if d.is_type or d.declaring_type in kept_types]


class ComparisonEngine:
    """Compares descriptor snapshots under one immutable configuration.

    Args:
        config (ComparisonConfiguration | None): Configuration; defaults when None.

    Raises:
        ConfigurationError: If ``config`` is invalid.
    """

    def __init__(self, config: ComparisonConfiguration | None = None) -> None:
        self.config: ComparisonConfiguration = config or ComparisonConfiguration.default()
        self.config.validate()
        self.scope = ScopeFilter.from_config(
            self.config.filters,
            self.config.exclusions,
            ignore_case=self.config.mappings.ignore_case,
        )

    def compare(
        self,
        source: Iterable[DescriptorInput],
        target: Iterable[DescriptorInput],
        *,
        source_label: str = "source",
        target_label: str = "target",
    ) -> ComparisonResult:
        """Compare two snapshots.

        Args:
            source (Iterable[DescriptorInput]): Source (old) snapshot.
            target (Iterable[DescriptorInput]): Target (new) snapshot.
            source_label (str): Display name of the source snapshot.
            target_label (str): Display name of the target snapshot.

        Returns:
            ComparisonResult: Classified differences, summary and diagnostics.
        """
        diagnostics = DiagnosticLog()
        src_all: list[MemberDescriptor] = materialize(source, diagnostics, side="source")
        tgt_all: list[MemberDescriptor] = materialize(target, diagnostics, side="target")

        src: list[MemberDescriptor] = apply_scope(src_all, self.scope)
        tgt: list[MemberDescriptor] = apply_scope(tgt_all, self.scope)
        logger.debug(
            "In scope: %d/%d source, %d/%d target descriptors",
            len(src),
            len(src_all),
            len(tgt),
            len(tgt_all),
        )

        ignore_case: bool = self.config.mappings.ignore_case
        mapper = IdentityMapper(self.config.mappings, (d.full_name for d in tgt if d.is_type))
        registry = ExclusionRegistry(
            self.config.exclusions,
            (d.full_name for d in tgt),
            ignore_case=ignore_case,
        )
        differ = SnapshotDiffer(mapper, registry, diagnostics)

        differences: list[ApiDifference] = classify_all(
            differ.diff(src, tgt), self.config.breaking_change_rules
        )
        result: ComparisonResult = ComparisonResult.build(
            differences,
            source_label=source_label,
            target_label=target_label,
            diagnostics=diagnostics.freeze(),
        )
        logger.debug(
            "Comparison %s -> %s: %d differences, %d breaking, %d diagnostics",
            source_label,
            target_label,
            result.summary.total,
            result.summary.breaking,
            len(result.diagnostics),
        )
        return result


def compare_snapshots(
    source: Iterable[DescriptorInput],
    target: Iterable[DescriptorInput],
    config: ComparisonConfiguration | None = None,
    *,
    source_label: str = "source",
    target_label: str = "target",
) -> ComparisonResult:
    """Compare two descriptor snapshots (convenience wrapper around `ComparisonEngine`).

    Raises:
        ConfigurationError: If ``config`` is invalid.
    """
    return ComparisonEngine(config).compare(
        source, target, source_label=source_label, target_label=target_label
    )
