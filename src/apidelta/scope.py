# topmark:header:start
#
#   project      : ApiDelta
#   file         : scope.py
#   file_relpath : src/apidelta/scope.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scope filter: which descriptors take part in a comparison.

A descriptor is in scope when all of the following hold:

* its namespace matches at least one ``includeNamespaces`` pattern (vacuously
  true when the list is empty) and no ``excludeNamespaces`` pattern;
* its type full name (the declaring type's, for members) matches at least one
  ``includeTypes`` pattern (vacuously true when empty) and no ``excludeTypes``
  pattern;
* it is externally visible, unless ``includeInternals`` is set;
* it is not compiler-generated, unless ``includeCompilerGenerated`` is set;
* it is not obsolete when ``exclusions.excludeObsolete`` is set.

The filter is applied independently to the source and the target streams
before matching; it has no memory between calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apidelta.config.logging import get_logger
from apidelta.core.patterns import PatternSet

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from apidelta.config.filters import ExclusionConfig, FilterConfig
    from apidelta.config.logging import ApiDeltaLogger
    from apidelta.model.descriptor import MemberDescriptor

logger: ApiDeltaLogger = get_logger(__name__)


class ScopeFilter:
    """Decides whether a descriptor is in comparison scope.

    Args:
        filters (FilterConfig): Scope filter configuration.
        exclude_obsolete (bool): Drop obsolete descriptors.
        ignore_case (bool): Match patterns case-insensitively.

    Raises:
        ConfigurationError: If a filter pattern is malformed.
    """

    def __init__(
        self,
        filters: FilterConfig,
        *,
        exclude_obsolete: bool = False,
        ignore_case: bool = False,
    ) -> None:
        self.filters = filters
        self.exclude_obsolete = exclude_obsolete
        self._include_ns = PatternSet.compile(filters.include_namespaces, ignore_case=ignore_case)
        self._exclude_ns = PatternSet.compile(filters.exclude_namespaces, ignore_case=ignore_case)
        self._include_types = PatternSet.compile(filters.include_types, ignore_case=ignore_case)
        self._exclude_types = PatternSet.compile(filters.exclude_types, ignore_case=ignore_case)

    @classmethod
    def from_config(
        cls, filters: FilterConfig, exclusions: ExclusionConfig, *, ignore_case: bool = False
    ) -> ScopeFilter:
        """Build a filter from the filter and exclusion sections."""
        return cls(filters, exclude_obsolete=exclusions.exclude_obsolete, ignore_case=ignore_case)

    def rejection_reason(self, descriptor: MemberDescriptor) -> str | None:
        """Return why ``descriptor`` is out of scope, or None when it is in scope."""
        namespace: str = descriptor.namespace
        if self._include_ns and not self._include_ns.matches(namespace):
            return "namespace not included"
        if self._exclude_ns.matches(namespace):
            return "namespace excluded"

        type_name: str = descriptor.type_full_name
        if self._include_types and not self._include_types.matches(type_name):
            return "type not included"
        if self._exclude_types.matches(type_name):
            return "type excluded"

        if not self.filters.include_internals and not descriptor.accessibility.is_externally_visible:
            return f"{descriptor.accessibility.label} element"
        if not self.filters.include_compiler_generated and descriptor.is_compiler_generated:
            return "compiler-generated"
        if self.exclude_obsolete and descriptor.is_obsolete:
            return "obsolete"
        return None

    def is_in_scope(self, descriptor: MemberDescriptor) -> bool:
        """Return True if ``descriptor`` takes part in the comparison."""
        reason: str | None = self.rejection_reason(descriptor)
        if reason is not None:
            logger.trace("Out of scope (%s): %s", reason, descriptor.full_name)
            return False
        return True

    def apply(self, descriptors: Iterable[MemberDescriptor]) -> Iterator[MemberDescriptor]:
        """Yield the in-scope descriptors of ``descriptors``, order preserved."""
        return (d for d in descriptors if self.is_in_scope(d))
