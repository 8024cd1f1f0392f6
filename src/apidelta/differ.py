# topmark:header:start
#
#   project      : ApiDelta
#   file         : differ.py
#   file_relpath : src/apidelta/differ.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Matcher & differ: pair source and target descriptors and emit differences.

Algorithm (one pass over materialized, in-scope snapshots):

1. **Types.** For every source type, in snapshot order:

   * the identity mapper's candidates are tried in order and the first target
     type with the same generic arity wins (first match,
     configuration-order-sensitive);
   * an excluded type without a match becomes an *excluded* difference; with a
     match (under its own name or a mapped one) it is an anomaly (diagnostic)
     and the matched target type is withheld from diffing;
   * any other type without a match is *removed*; if explicit mappings produced the
     candidates, a resolution diagnostic is recorded as well.

   A matched pair whose full names differ is *moved*; a pair that only differs
   in kind, delegate signature, accessibility, interfaces or obsolete marker is
   *modified*. Members of removed, added or excluded types are not reported
   individually.

2. **Members** of every matched pair are grouped by ``(kind, name)``. Within a
   group, overloads pair up by signature key first; leftovers pair up in
   declaration order as *modified* (signature change or optional parameter
   added); whatever remains is *removed* (source side) or *added* (target side).

3. **Target-only types** not reached from any source type are *added*.

The differ emits unclassified differences; severity and the breaking verdict
are assigned afterwards by `apidelta.classifier`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apidelta.config.logging import get_logger
from apidelta.diagnostic.model import DiagnosticKind
from apidelta.exclusions import ExclusionVerdict
from apidelta.model.descriptor import MemberKind
from apidelta.model.difference import ApiDifference, ChangeDetail, ChangeKind, DetailKind, Severity

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from apidelta.config.logging import ApiDeltaLogger
    from apidelta.diagnostic.model import DiagnosticLog
    from apidelta.exclusions import ExclusionRegistry
    from apidelta.mapping import IdentityMapper, TypeIdentity
    from apidelta.model.descriptor import MemberDescriptor, SignatureKey

logger: ApiDeltaLogger = get_logger(__name__)

GroupKey = tuple[MemberKind, str]

_VALUE_KINDS: frozenset[MemberKind] = frozenset(
    {MemberKind.PROPERTY, MemberKind.FIELD, MemberKind.EVENT}
)


def group_members(members: Iterable[MemberDescriptor]) -> dict[GroupKey, list[MemberDescriptor]]:
    """Group members by ``(kind, name)``, keeping declaration order (names are case-sensitive)."""
    groups: dict[GroupKey, list[MemberDescriptor]] = {}
    for member in members:
        groups.setdefault((member.kind, member.name), []).append(member)
    return groups


def partition(
    descriptors: Iterable[MemberDescriptor],
) -> tuple[list[MemberDescriptor], dict[str, list[MemberDescriptor]]]:
    """Split a snapshot into its types and its members keyed by declaring type."""
    types: list[MemberDescriptor] = []
    members: dict[str, list[MemberDescriptor]] = {}
    for descriptor in descriptors:
        if descriptor.is_type:
            types.append(descriptor)
        else:
            members.setdefault(descriptor.declaring_type, []).append(descriptor)
    return types, members


def render_member(descriptor: MemberDescriptor) -> str:
    """Compact signature text used in change details."""
    if descriptor.kind in _VALUE_KINDS:
        return f"{descriptor.signature.return_type} {descriptor.name}".strip()
    return descriptor.signature.render(descriptor.name)


class SnapshotDiffer:
    """Pairs two in-scope snapshots and produces unclassified differences.

    Args:
        mapper (IdentityMapper): Candidate resolution and type-reference translation.
        registry (ExclusionRegistry): Exclusion lookups.
        diagnostics (DiagnosticLog): Receives anomalies and resolution diagnostics.
    """

    def __init__(
        self,
        mapper: IdentityMapper,
        registry: ExclusionRegistry,
        diagnostics: DiagnosticLog,
    ) -> None:
        self.mapper = mapper
        self.registry = registry
        self.diagnostics = diagnostics

    # --- helpers ---

    def _norm(self, name: str) -> str:
        return self.mapper.normalize(name)

    def _key(self, descriptor: MemberDescriptor) -> SignatureKey:
        return_type, params, arity = descriptor.signature.key
        return (self._norm(return_type), tuple(self._norm(p) for p in params), arity)

    def _anomaly(self, descriptor: MemberDescriptor) -> None:
        self.diagnostics.add(
            DiagnosticKind.UNEXPECTEDLY_INCLUDED,
            descriptor.full_name,
            f"{descriptor.kind.label} {descriptor.full_name} is excluded "
            "but present in the target snapshot",
            severity=Severity.WARNING,
        )

    # --- entry point ---

    def diff(
        self,
        source: Sequence[MemberDescriptor],
        target: Sequence[MemberDescriptor],
    ) -> list[ApiDifference]:
        """Compare two in-scope snapshots.

        Args:
            source (Sequence[MemberDescriptor]): Source (old) snapshot.
            target (Sequence[MemberDescriptor]): Target (new) snapshot.

        Returns:
            list[ApiDifference]: Unclassified differences.
        """
        src_types, src_members = partition(source)
        tgt_types, tgt_members = partition(target)

        tgt_index: dict[str, list[MemberDescriptor]] = {}
        for t in tgt_types:
            tgt_index.setdefault(self._norm(t.full_name), []).append(t)

        withheld: set[MemberDescriptor] = set()
        differences: list[ApiDifference] = []

        for s in src_types:
            t, candidates = self._match_type(s, tgt_index, withheld)
            if self.registry.is_excluded(s):
                verdict: ExclusionVerdict = self.registry.classify_descriptor(
                    s, present=t is not None
                )
                if verdict == ExclusionVerdict.UNEXPECTEDLY_INCLUDED and t is not None:
                    self._anomaly(s)
                    withheld.add(t)
                else:
                    differences.append(ApiDifference(ChangeKind.EXCLUDED, s.kind, source=s))
                continue

            if t is None:
                if any(c.via_mapping for c in candidates):
                    self.diagnostics.add(
                        DiagnosticKind.RESOLUTION_AMBIGUITY,
                        s.full_name,
                        "none of the mapped candidates exists in the target snapshot: "
                        + ", ".join(c.full_name for c in candidates),
                        severity=Severity.WARNING,
                    )
                differences.append(ApiDifference(ChangeKind.REMOVED, s.kind, source=s))
                continue

            withheld.add(t)
            differences.extend(
                self._diff_type_pair(
                    s, t, src_members.get(s.full_name, ()), tgt_members.get(t.full_name, ())
                )
            )

        for t in tgt_types:
            if t in withheld:
                continue
            if self.registry.is_excluded(t):
                self._anomaly(t)
                continue
            differences.append(ApiDifference(ChangeKind.ADDED, t.kind, target=t))

        logger.debug(
            "Diffed %d/%d source and %d/%d target types: %d differences",
            len(src_types),
            len(source),
            len(tgt_types),
            len(target),
            len(differences),
        )
        return differences

    # --- types ---

    def _match_type(
        self,
        s: MemberDescriptor,
        tgt_index: dict[str, list[MemberDescriptor]],
        taken: set[MemberDescriptor],
    ) -> tuple[MemberDescriptor | None, tuple[TypeIdentity, ...]]:
        """Return the first matching target type (or None) and the candidates tried."""
        candidates: tuple[TypeIdentity, ...] = self.mapper.candidates_for(s)
        arity: int = s.signature.generic_arity
        for candidate in candidates:
            for t in tgt_index.get(self._norm(candidate.full_name), ()):
                if t in taken or t.signature.generic_arity != arity:
                    continue
                logger.trace("Matched %s -> %s", s.full_name, t.full_name)
                return t, candidates
        return None, candidates

    def _diff_type_pair(
        self,
        s: MemberDescriptor,
        t: MemberDescriptor,
        s_members: Iterable[MemberDescriptor],
        t_members: Iterable[MemberDescriptor],
    ) -> list[ApiDifference]:
        differences: list[ApiDifference] = []
        details: list[ChangeDetail] = self._type_details(s, t)
        if self._norm(s.full_name) != self._norm(t.full_name):
            differences.append(
                ApiDifference(ChangeKind.MOVED, s.kind, source=s, target=t, details=tuple(details))
            )
        elif details:
            differences.append(
                ApiDifference(
                    ChangeKind.MODIFIED, s.kind, source=s, target=t, details=tuple(details)
                )
            )
        differences.extend(self._diff_members(list(s_members), list(t_members)))
        return differences

    def _type_details(self, s: MemberDescriptor, t: MemberDescriptor) -> list[ChangeDetail]:
        details: list[ChangeDetail] = []
        if s.kind != t.kind:
            details.append(ChangeDetail(DetailKind.SIGNATURE_CHANGED, s.kind.label, t.kind.label))
        elif s.kind == MemberKind.DELEGATE:
            signature: ChangeDetail | None = self._signature_detail(s, self.mapper.translate(s), t)
            if signature is not None:
                details.append(signature)

        details.extend(_accessibility_details(s, t))

        translated: tuple[str, ...] = self.mapper.translate(s).interfaces
        s_ifaces: dict[str, str] = {self._norm(i): i for i in translated}
        t_ifaces: dict[str, str] = {self._norm(i): i for i in t.interfaces}
        for key, name in s_ifaces.items():
            if key not in t_ifaces:
                details.append(ChangeDetail(DetailKind.INTERFACE_REMOVED, old_value=name))
        for key, name in t_ifaces.items():
            if key not in s_ifaces:
                details.append(ChangeDetail(DetailKind.INTERFACE_ADDED, new_value=name))

        details.extend(_obsolete_details(s, t))
        return details

    # --- members ---

    def _diff_members(
        self,
        src: list[MemberDescriptor],
        tgt: list[MemberDescriptor],
    ) -> list[ApiDifference]:
        differences: list[ApiDifference] = []
        consumed: set[MemberDescriptor] = set()
        tgt_groups: dict[GroupKey, list[MemberDescriptor]] = group_members(tgt)

        # Exclusions first: an excluded member never reaches overload matching.
        remaining: list[MemberDescriptor] = []
        for m in src:
            if not self.registry.is_excluded(m):
                remaining.append(m)
                continue
            group: list[MemberDescriptor] = [
                t for t in tgt_groups.get((m.kind, m.name), ()) if t not in consumed
            ]
            verdict: ExclusionVerdict = self.registry.classify_descriptor(m, present=bool(group))
            if verdict == ExclusionVerdict.UNEXPECTEDLY_INCLUDED:
                self._anomaly(m)
                key: SignatureKey = self._key(self.mapper.translate(m))
                twin: MemberDescriptor = next(
                    (t for t in group if self._key(t) == key), group[0]
                )
                consumed.add(twin)
            else:
                differences.append(ApiDifference(ChangeKind.EXCLUDED, m.kind, source=m))

        for group_key, s_list in group_members(remaining).items():
            t_list: list[MemberDescriptor] = [
                t for t in tgt_groups.get(group_key, ()) if t not in consumed
            ]
            pending: list[tuple[MemberDescriptor, MemberDescriptor]] = []

            # Overloads with identical signature keys.
            for s in s_list:
                ts: MemberDescriptor = self.mapper.translate(s)
                key = self._key(ts)
                match: MemberDescriptor | None = next(
                    (t for t in t_list if self._key(t) == key), None
                )
                if match is None:
                    pending.append((s, ts))
                    continue
                t_list.remove(match)
                consumed.add(match)
                details: list[ChangeDetail] = self._member_details(s, ts, match)
                if details:
                    differences.append(
                        ApiDifference(
                            ChangeKind.MODIFIED,
                            s.kind,
                            source=s,
                            target=match,
                            details=tuple(details),
                        )
                    )

            # Leftover overloads pair up in declaration order.
            for (s, ts), t in zip(pending, t_list):
                consumed.add(t)
                differences.append(
                    ApiDifference(
                        ChangeKind.MODIFIED,
                        s.kind,
                        source=s,
                        target=t,
                        details=tuple(self._member_details(s, ts, t)),
                    )
                )
            for s, _ts in pending[len(t_list) :]:
                differences.append(ApiDifference(ChangeKind.REMOVED, s.kind, source=s))

        for t in tgt:
            if t in consumed:
                continue
            if self.registry.is_excluded(t):
                self._anomaly(t)
                continue
            differences.append(ApiDifference(ChangeKind.ADDED, t.kind, target=t))

        return differences

    def _member_details(
        self, s: MemberDescriptor, ts: MemberDescriptor, t: MemberDescriptor
    ) -> list[ChangeDetail]:
        details: list[ChangeDetail] = []
        signature: ChangeDetail | None = self._signature_detail(s, ts, t)
        if signature is not None:
            details.append(signature)
        if signature is None or signature.kind == DetailKind.OPTIONAL_PARAMETER_ADDED:
            for old, new in zip(ts.signature.parameters, t.signature.parameters):
                if (
                    old.name
                    and new.name
                    and old.name != new.name
                    and self._norm(old.type_name) == self._norm(new.type_name)
                ):
                    details.append(ChangeDetail(DetailKind.PARAMETER_RENAMED, old.name, new.name))
        details.extend(_accessibility_details(s, t))
        details.extend(_obsolete_details(s, t))
        return details

    def _signature_detail(
        self, s: MemberDescriptor, ts: MemberDescriptor, t: MemberDescriptor
    ) -> ChangeDetail | None:
        """Compare the (translated) source signature with the target signature."""
        if self._key(ts) == self._key(t):
            return None
        s_ret, s_params, s_arity = self._key(ts)
        t_ret, t_params, t_arity = self._key(t)
        n: int = len(s_params)
        if (
            s_ret == t_ret
            and s_arity == t_arity
            and len(t_params) > n
            and t_params[:n] == s_params
            and all(p.is_optional for p in t.signature.parameters[n:])
        ):
            return ChangeDetail(
                DetailKind.OPTIONAL_PARAMETER_ADDED, render_member(s), render_member(t)
            )
        return ChangeDetail(DetailKind.SIGNATURE_CHANGED, render_member(s), render_member(t))


def _accessibility_details(s: MemberDescriptor, t: MemberDescriptor) -> list[ChangeDetail]:
    if t.accessibility < s.accessibility:
        return [
            ChangeDetail(
                DetailKind.ACCESSIBILITY_REDUCED, s.accessibility.label, t.accessibility.label
            )
        ]
    if t.accessibility > s.accessibility:
        return [
            ChangeDetail(
                DetailKind.ACCESSIBILITY_WIDENED, s.accessibility.label, t.accessibility.label
            )
        ]
    return []


def _obsolete_details(s: MemberDescriptor, t: MemberDescriptor) -> list[ChangeDetail]:
    if t.is_obsolete and not s.is_obsolete:
        return [ChangeDetail(DetailKind.OBSOLETE_ADDED)]
    if s.is_obsolete and not t.is_obsolete:
        return [ChangeDetail(DetailKind.OBSOLETE_REMOVED)]
    return []
