# topmark:header:start
#
#   project      : ApiDelta
#   file         : mapping.py
#   file_relpath : src/apidelta/mapping.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Identity mapper: where might a source type live in the target snapshot?

Given a source type identity (namespace + type name), the mapper produces the
ordered list of *candidate* target identities. Resolution order:

1. An exact ``typeMappings`` entry wins outright; no other candidate is produced.
2. ``namespaceMappings``: an exact key match yields one candidate per target
   namespace, in configured order. Otherwise the first key (in configured
   order) that is a dotted prefix of the namespace applies, and the remaining
   suffix is preserved (``Old`` → ``New`` maps ``Old.Sub`` to ``New.Sub``).
3. Without an explicit mapping, the identity candidate (same namespace, same
   name) is produced.
4. With ``autoMapSameNameTypes``, target types that share the simple name are
   appended as a last resort (generic type definitions are never auto-mapped).

Explicit mappings therefore always rank ahead of the heuristic; the matcher
takes the *first* candidate that exists in the target snapshot.

The mapper also rewrites type *references* (return types, parameter types,
implemented interfaces) from source to target vocabulary, so that members whose
signatures differ only by a mapped type compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from apidelta.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apidelta.config.logging import ApiDeltaLogger
    from apidelta.config.mapping import MappingConfig
    from apidelta.model.descriptor import MemberDescriptor

logger: ApiDeltaLogger = get_logger(__name__)


def join_name(namespace: str, name: str) -> str:
    """Join a namespace and a (possibly dotted) name; the global namespace is empty."""
    return f"{namespace}.{name}" if namespace else name


def simple_name(full_name: str) -> str:
    """Last dotted segment of ``full_name``."""
    return full_name.rsplit(".", 1)[-1]


@dataclass(frozen=True, slots=True)
class TypeIdentity:
    """A namespace-qualified type identity.

    Attributes:
        namespace (str): Containing namespace (empty for the global namespace).
        name (str): Type name relative to the namespace (nested types keep their
            outer type prefix).
        via_mapping (bool): True if the candidate was produced by an explicit mapping.
        via_heuristic (bool): True if the candidate was produced by the same-name heuristic.
    """

    namespace: str
    name: str
    via_mapping: bool = False
    via_heuristic: bool = False

    @property
    def full_name(self) -> str:
        """Fully qualified type name."""
        return join_name(self.namespace, self.name)

    @classmethod
    def of(cls, descriptor: MemberDescriptor) -> TypeIdentity:
        """Identity of a type descriptor."""
        namespace: str = descriptor.namespace
        full: str = descriptor.full_name
        prefix: str = f"{namespace}." if namespace else ""
        name: str = full[len(prefix) :] if prefix and full.startswith(prefix) else full
        return cls(namespace=namespace, name=name)

    @classmethod
    def from_full_name(cls, full_name: str, **flags: bool) -> TypeIdentity:
        """Split a full name at its last dot (best effort for mapped names)."""
        namespace, _, name = full_name.rpartition(".")
        return cls(namespace=namespace, name=name, **flags)


class IdentityMapper:
    """Resolves source type identities to ordered target candidates.

    Args:
        config (MappingConfig): Mapping configuration; validated on construction.
        target_type_names (Iterable[str]): Full names of the target snapshot's
            types, used by the same-name heuristic only.

    Raises:
        ConfigurationError: If ``config`` is invalid (empty entries, cycles).
    """

    def __init__(self, config: MappingConfig, target_type_names: Iterable[str] = ()) -> None:
        config.validate()
        self.config = config
        norm = config.normalize

        self._type_map: dict[str, str] = {norm(k): v for k, v in config.type_mappings.items()}
        self._ns_exact: dict[str, tuple[str, ...]] = {
            norm(k): v for k, v in config.namespace_mappings.items()
        }
        # Prefix rules keep configured order: first applicable key wins.
        self._ns_prefix: list[tuple[str, str, tuple[str, ...]]] = [
            (norm(k) + ".", k, v) for k, v in config.namespace_mappings.items()
        ]

        self._by_simple_name: dict[str, list[str]] = {}
        if config.auto_map_same_name_types:
            for full in sorted(set(target_type_names)):
                short: str = simple_name(full)
                if "`" in short:
                    continue
                self._by_simple_name.setdefault(norm(short), []).append(full)

    # --- names ---

    def normalize(self, name: str) -> str:
        """Comparison form of ``name`` (case-folded when ``ignoreCase`` is set)."""
        return self.config.normalize(name)

    def map_namespace(self, namespace: str) -> tuple[str, ...] | None:
        """Return the mapped target namespaces for ``namespace``, or None if unmapped."""
        key: str = self.normalize(namespace)
        exact: tuple[str, ...] | None = self._ns_exact.get(key)
        if exact is not None:
            return exact
        for prefix, original_key, targets in self._ns_prefix:
            if key.startswith(prefix):
                suffix: str = namespace[len(original_key) :]
                return tuple(f"{t}{suffix}" for t in targets)
        return None

    def map_type_name(self, full_name: str) -> str | None:
        """Return the explicit type mapping for ``full_name``, or None."""
        return self._type_map.get(self.normalize(full_name))

    # --- candidates ---

    def resolve_candidates(self, namespace: str, type_name: str) -> tuple[TypeIdentity, ...]:
        """Return the ordered candidate target identities for a source type.

        Args:
            namespace (str): Source namespace.
            type_name (str): Type name relative to ``namespace``.

        Returns:
            tuple[TypeIdentity, ...]: Candidates, most specific first; never empty.
        """
        full: str = join_name(namespace, type_name)

        mapped_type: str | None = self.map_type_name(full)
        if mapped_type is not None:
            logger.trace("Type mapping %s -> %s", full, mapped_type)
            return (TypeIdentity.from_full_name(mapped_type, via_mapping=True),)

        candidates: list[TypeIdentity] = []
        targets: tuple[str, ...] | None = self.map_namespace(namespace)
        if targets is not None:
            candidates.extend(TypeIdentity(t, type_name, via_mapping=True) for t in targets)
        else:
            candidates.append(TypeIdentity(namespace, type_name))

        if self.config.auto_map_same_name_types and "`" not in type_name:
            seen: set[str] = {self.normalize(c.full_name) for c in candidates}
            for target_full in self._by_simple_name.get(self.normalize(simple_name(type_name)), ()):
                if self.normalize(target_full) in seen:
                    continue
                seen.add(self.normalize(target_full))
                candidates.append(TypeIdentity.from_full_name(target_full, via_heuristic=True))

        logger.trace("Candidates for %s: %s", full, [c.full_name for c in candidates])
        return tuple(candidates)

    def candidates_for(self, descriptor: MemberDescriptor) -> tuple[TypeIdentity, ...]:
        """Candidates for a type descriptor."""
        identity = TypeIdentity.of(descriptor)
        return self.resolve_candidates(identity.namespace, identity.name)

    # --- type references ---

    def rewrite_type_name(self, full_name: str) -> str:
        """Translate a referenced type name into target vocabulary.

        Uses the explicit type mapping when present, otherwise the *first*
        target of the applicable namespace mapping. Unmapped names are returned
        unchanged. The same-name heuristic is never applied to references.
        """
        mapped_type: str | None = self.map_type_name(full_name)
        if mapped_type is not None:
            return mapped_type
        namespace, _, name = full_name.rpartition(".")
        if not namespace:
            return full_name
        targets: tuple[str, ...] | None = self.map_namespace(namespace)
        if not targets:
            return full_name
        return join_name(targets[0], name)

    def translate(self, descriptor: MemberDescriptor) -> MemberDescriptor:
        """Return ``descriptor`` with all type references in target vocabulary."""
        if not self.config.has_explicit_mappings:
            return descriptor
        return descriptor.with_type_references(self.rewrite_type_name)
