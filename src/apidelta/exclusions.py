# topmark:header:start
#
#   project      : ApiDelta
#   file         : exclusions.py
#   file_relpath : src/apidelta/exclusions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exclusion registry: intentional removals vs. genuinely missing elements.

The exclusion lists name elements that are *expected* to disappear. When the
differ cannot find a counterpart for a source element it asks the registry
before reporting a removal:

* ``NOT_EXCLUDED``: the element is not listed; report it as removed.
* ``EXCLUDED``: listed and absent from the target; report it as excluded
  (severity Info, never breaking).
* ``UNEXPECTEDLY_INCLUDED``: listed, yet present in the target snapshot. This is
  an anomaly in its own right: it is recorded as a diagnostic and the element
  takes no further part in diffing, so it is never silently treated as present.

A member is excluded when its own full name matches a member literal or
pattern, or when its declaring type is excluded.

"Present in the target" means present in the *in-scope* target snapshot, as
seen through the identity mapper, at both levels. An excluded type is present
when the differ matches it to a target type (under its own name or a mapped
one); an excluded member is present when its matched target type declares an
in-scope member of the same kind and name. An element that left the scope in
the target (e.g. turned internal) is therefore absent, and excluded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apidelta.config.logging import get_logger
from apidelta.core.enum_mixins import KeyedStrEnum
from apidelta.core.patterns import PatternSet

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apidelta.config.filters import ExclusionConfig
    from apidelta.config.logging import ApiDeltaLogger
    from apidelta.model.descriptor import MemberDescriptor

logger: ApiDeltaLogger = get_logger(__name__)


class ExclusionVerdict(KeyedStrEnum):
    """Outcome of an exclusion lookup."""

    NOT_EXCLUDED = ("not_excluded", "Not excluded")
    EXCLUDED = ("excluded", "Excluded")
    UNEXPECTEDLY_INCLUDED = ("unexpectedly_included", "Excluded but present in target")


class ExclusionRegistry:
    """Answers exclusion questions for one comparison.

    Args:
        config (ExclusionConfig): Exclusion configuration.
        target_names (Iterable[str]): Full names of the in-scope elements of the
            target snapshot (types and members).
        ignore_case (bool): Compare names case-insensitively.

    Raises:
        ConfigurationError: If a literal or pattern is empty.
    """

    def __init__(
        self,
        config: ExclusionConfig,
        target_names: Iterable[str] = (),
        *,
        ignore_case: bool = False,
    ) -> None:
        self.config = config
        self.ignore_case = ignore_case
        self._types = PatternSet.compile(
            (*config.excluded_types, *config.excluded_type_patterns), ignore_case=ignore_case
        )
        self._members = PatternSet.compile(
            (*config.excluded_members, *config.excluded_member_patterns), ignore_case=ignore_case
        )
        self._target_names: frozenset[str] = frozenset(self._norm(n) for n in target_names)

    def _norm(self, name: str) -> str:
        return name.casefold() if self.ignore_case else name

    def is_type_excluded(self, type_full_name: str) -> bool:
        """Return True if the type ``type_full_name`` is listed."""
        return bool(type_full_name) and self._types.matches(type_full_name)

    def is_member_excluded(self, member_full_name: str, declaring_type: str | None = None) -> bool:
        """Return True if the member is listed or its declaring type is excluded.

        Args:
            member_full_name (str): ``"<declaring type>.<member name>"``.
            declaring_type (str | None): Declaring type full name; derived from
                ``member_full_name`` (text before the last dot) when omitted.
        """
        if self._members.matches(member_full_name):
            return True
        owner: str = (
            declaring_type if declaring_type is not None else member_full_name.rpartition(".")[0]
        )
        return self.is_type_excluded(owner)

    def is_excluded(self, descriptor: MemberDescriptor) -> bool:
        """Return True if ``descriptor`` is listed (directly or via its declaring type)."""
        if descriptor.is_type:
            return self.is_type_excluded(descriptor.full_name)
        return self.is_member_excluded(descriptor.full_name, descriptor.declaring_type)

    def is_present_in_target(self, full_name: str) -> bool:
        """Return True if an element named ``full_name`` exists in the target snapshot."""
        return self._norm(full_name) in self._target_names

    def classify(
        self,
        identity: str,
        *,
        is_type: bool,
        declaring_type: str | None = None,
        present: bool | None = None,
    ) -> ExclusionVerdict:
        """Classify an identity against the exclusion lists and the target snapshot.

        Args:
            identity (str): Full name of the element.
            is_type (bool): Whether the element is a type.
            declaring_type (str | None): Declaring type of a member, if known.
            present (bool | None): Whether the element exists in the target, when
                the caller already knows (e.g. a member of a moved type); looked
                up by full name when None.

        Returns:
            ExclusionVerdict: The verdict.
        """
        excluded: bool = (
            self.is_type_excluded(identity)
            if is_type
            else self.is_member_excluded(identity, declaring_type)
        )
        if not excluded:
            return ExclusionVerdict.NOT_EXCLUDED
        if present is None:
            present = self.is_present_in_target(identity)
        if present:
            logger.debug("Excluded element present in target: %s", identity)
            return ExclusionVerdict.UNEXPECTEDLY_INCLUDED
        return ExclusionVerdict.EXCLUDED

    def classify_descriptor(
        self, descriptor: MemberDescriptor, *, present: bool | None = None
    ) -> ExclusionVerdict:
        """`classify` for a descriptor."""
        return self.classify(
            descriptor.full_name,
            is_type=descriptor.is_type,
            declaring_type=None if descriptor.is_type else descriptor.declaring_type,
            present=present,
        )
