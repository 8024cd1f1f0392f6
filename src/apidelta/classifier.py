# topmark:header:start
#
#   project      : ApiDelta
#   file         : classifier.py
#   file_relpath : src/apidelta/classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Breaking-change classifier.

Pure functions of a difference (or detail) and the `BreakingChangeRules`:
nothing here reads global state, so classifying the same difference twice
always yields the same verdict.

Severity scale:

    ============================  ===============  ===================
    Change                        breaking         not breaking
    ============================  ===============  ===================
    type removed                  Critical         Warning
    member removed                Error            Warning
    added type / member           Warning          Info
    signature / accessibility     Error            Warning
    interface removed             Error            Warning
    interface added               Warning          Info
    parameter renamed             Warning          Info
    optional parameter added      Warning          Info
    accessibility widened         (never)          Info
    obsolete added / removed      (never)          Warning / Info
    moved, no other change        (never)          Info
    excluded                      (never)          Info
    ============================  ===============  ===================
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from apidelta.config.logging import get_logger
from apidelta.exclusions import ExclusionVerdict
from apidelta.model.difference import ChangeKind, DetailKind, Severity

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apidelta.config.logging import ApiDeltaLogger
    from apidelta.config.rules import BreakingChangeRules
    from apidelta.model.difference import ApiDifference, ChangeDetail

logger: ApiDeltaLogger = get_logger(__name__)

Verdict = tuple[bool, Severity]


def _switch(flag: bool, breaking: Severity, lenient: Severity) -> Verdict:
    return (True, breaking) if flag else (False, lenient)


def classify_detail(detail: ChangeDetail, rules: BreakingChangeRules) -> Verdict:
    """Classify one aspect of a modification.

    Args:
        detail (ChangeDetail): The detail to classify.
        rules (BreakingChangeRules): Breaking-change policy.

    Returns:
        tuple[bool, Severity]: ``(is_breaking, severity)``.
    """
    match detail.kind:
        case DetailKind.SIGNATURE_CHANGED:
            return _switch(rules.treat_signature_change_as_breaking, Severity.ERROR, Severity.WARNING)
        case DetailKind.OPTIONAL_PARAMETER_ADDED:
            return _switch(
                rules.treat_added_optional_parameter_as_breaking, Severity.WARNING, Severity.INFO
            )
        case DetailKind.PARAMETER_RENAMED:
            return _switch(
                rules.treat_parameter_name_change_as_breaking, Severity.WARNING, Severity.INFO
            )
        case DetailKind.ACCESSIBILITY_REDUCED:
            return _switch(
                rules.treat_reduced_accessibility_as_breaking, Severity.ERROR, Severity.WARNING
            )
        case DetailKind.ACCESSIBILITY_WIDENED:
            return (False, Severity.INFO)
        case DetailKind.INTERFACE_ADDED:
            return _switch(rules.treat_added_interface_as_breaking, Severity.WARNING, Severity.INFO)
        case DetailKind.INTERFACE_REMOVED:
            return _switch(rules.treat_removed_interface_as_breaking, Severity.ERROR, Severity.WARNING)
        case DetailKind.OBSOLETE_ADDED:
            return (False, Severity.WARNING)
        case DetailKind.OBSOLETE_REMOVED:
            return (False, Severity.INFO)


def classify(difference: ApiDifference, rules: BreakingChangeRules) -> Verdict:
    """Classify a difference.

    Modified and moved differences are breaking iff any of their details is,
    and take the maximum detail severity (a bare move is Info).

    Args:
        difference (ApiDifference): The (unclassified) difference.
        rules (BreakingChangeRules): Breaking-change policy.

    Returns:
        tuple[bool, Severity]: ``(is_breaking, severity)``.
    """
    match difference.change_kind:
        case ChangeKind.REMOVED:
            if difference.is_type_level:
                return _switch(rules.treat_type_removal_as_breaking, Severity.CRITICAL, Severity.WARNING)
            return _switch(rules.treat_member_removal_as_breaking, Severity.ERROR, Severity.WARNING)
        case ChangeKind.ADDED:
            flag: bool = (
                rules.treat_added_type_as_breaking
                if difference.is_type_level
                else rules.treat_added_member_as_breaking
            )
            return _switch(flag, Severity.WARNING, Severity.INFO)
        case ChangeKind.MODIFIED | ChangeKind.MOVED:
            return _combine(classify_detail(d, rules) for d in difference.details)
        case ChangeKind.EXCLUDED:
            return (False, Severity.INFO)


def classify_exclusion(verdict: ExclusionVerdict) -> Verdict | None:
    """Verdict for an exclusion lookup; None for elements that are not excluded."""
    match verdict:
        case ExclusionVerdict.NOT_EXCLUDED:
            return None
        case ExclusionVerdict.EXCLUDED:
            return (False, Severity.INFO)
        case ExclusionVerdict.UNEXPECTEDLY_INCLUDED:
            return (False, Severity.WARNING)


def _combine(verdicts: Iterable[Verdict]) -> Verdict:
    breaking: bool = False
    severity: Severity = Severity.INFO
    for is_breaking, level in verdicts:
        breaking = breaking or is_breaking
        severity = max(severity, level)
    return breaking, severity


def annotate(difference: ApiDifference, rules: BreakingChangeRules) -> ApiDifference:
    """Return a classified copy of ``difference`` (details annotated too)."""
    details: tuple[ChangeDetail, ...] = tuple(
        _annotate_detail(d, rules) for d in difference.details
    )
    is_breaking, severity = classify(difference, rules)
    return difference.annotated(is_breaking=is_breaking, severity=severity, details=details)


def _annotate_detail(detail: ChangeDetail, rules: BreakingChangeRules) -> ChangeDetail:
    is_breaking, severity = classify_detail(detail, rules)
    return replace(detail, is_breaking=is_breaking, severity=severity)


def classify_all(
    differences: Iterable[ApiDifference], rules: BreakingChangeRules
) -> list[ApiDifference]:
    """Annotate every difference; already-classified ones are re-derived, not re-used."""
    annotated: list[ApiDifference] = [annotate(d, rules) for d in differences]
    logger.debug(
        "Classified %d differences (%d breaking)",
        len(annotated),
        sum(1 for d in annotated if d.is_breaking),
    )
    return annotated
