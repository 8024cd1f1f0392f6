# topmark:header:start
#
#   project      : ApiDelta
#   file         : descriptor.py
#   file_relpath : src/apidelta/model/descriptor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical, assembly-agnostic description of one API element.

A descriptor snapshot is a flat sequence of `MemberDescriptor` values: one per
type and one per member of each type. Descriptors are produced by an external
introspector (see `apidelta.snapshot`) and are never mutated afterwards.

Identity:
    Two descriptors are *the same element* when their ``full_name`` and their
    structural signature key (``return_type``, ordered parameter types, generic
    arity) are equal. Parameter names and optionality are carried on the
    signature but do not take part in identity; attributes, accessibility and
    implemented interfaces do not either. Equality and hashing follow identity,
    so descriptors can be used directly as set members and dict keys.

Serialized form (camelCase keys, as written by the introspector):

    {
      "kind": "Method",
      "name": "Parse",
      "fullName": "MyLib.Parser.Parse",
      "namespace": "MyLib",
      "declaringType": "MyLib.Parser",
      "accessibility": "Public",
      "signature": {
        "returnType": "System.Int32",
        "parameters": [{"name": "text", "type": "System.String", "optional": false}],
        "genericArity": 0
      },
      "attributes": ["System.ObsoleteAttribute"],
      "interfaces": []
    }
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Final

from apidelta.core.enum_mixins import KeyedStrEnum, normalize_token
from apidelta.core.errors import DescriptorError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

# Dotted identifiers inside a rendered type reference, e.g. the two names in
# "System.Collections.Generic.List<MyLib.Widget>".
_TYPE_NAME_RE: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_][\w`]*(?:\.[A-Za-z_][\w`]*)*")

OBSOLETE_ATTRIBUTE: Final[str] = "System.ObsoleteAttribute"
COMPILER_GENERATED_ATTRIBUTE: Final[str] = "System.Runtime.CompilerServices.CompilerGeneratedAttribute"


class MemberKind(KeyedStrEnum):
    """Kind of API element described by a `MemberDescriptor`."""

    CLASS = ("Class", "class")
    INTERFACE = ("Interface", "interface")
    STRUCT = ("Struct", "struct")
    ENUM = ("Enum", "enum")
    DELEGATE = ("Delegate", "delegate")
    METHOD = ("Method", "method")
    PROPERTY = ("Property", "property")
    FIELD = ("Field", "field")
    EVENT = ("Event", "event")
    CONSTRUCTOR = ("Constructor", "constructor", ("ctor",))

    @property
    def is_type(self) -> bool:
        """True for type kinds (class, interface, struct, enum, delegate)."""
        return self in _TYPE_KINDS


_TYPE_KINDS: Final[frozenset[MemberKind]] = frozenset(
    {
        MemberKind.CLASS,
        MemberKind.INTERFACE,
        MemberKind.STRUCT,
        MemberKind.ENUM,
        MemberKind.DELEGATE,
    }
)


class Accessibility(IntEnum):
    """Declared accessibility, ordered from least to most accessible.

    The order is total: a change to a lower value is a *reduction*, a change to
    a higher value a *widening*.
    """

    PRIVATE = 0
    PROTECTED = 1
    INTERNAL = 2
    PROTECTED_INTERNAL = 3
    PROTECTED_OR_PRIVATE = 4
    PUBLIC = 5

    @property
    def label(self) -> str:
        """Source-level spelling, e.g. ``"protected internal"``."""
        return _ACCESSIBILITY_LABELS[self]

    @property
    def is_externally_visible(self) -> bool:
        """True if consumers outside the library can reach the element."""
        return self in (Accessibility.PUBLIC, Accessibility.PROTECTED, Accessibility.PROTECTED_INTERNAL)

    @classmethod
    def parse(cls, raw: str | None) -> Accessibility | None:
        """Parse an accessibility token (member name, label or metadata alias)."""
        if raw is None:
            return None
        return _ACCESSIBILITY_TOKENS.get(normalize_token(raw))


_ACCESSIBILITY_LABELS: Final[dict[Accessibility, str]] = {
    Accessibility.PRIVATE: "private",
    Accessibility.PROTECTED: "protected",
    Accessibility.INTERNAL: "internal",
    Accessibility.PROTECTED_INTERNAL: "protected internal",
    Accessibility.PROTECTED_OR_PRIVATE: "private protected",
    Accessibility.PUBLIC: "public",
}

_ACCESSIBILITY_TOKENS: Final[dict[str, Accessibility]] = {
    **{normalize_token(a.name): a for a in Accessibility},
    **{normalize_token(label): a for a, label in _ACCESSIBILITY_LABELS.items()},
    # Metadata spellings (e.g. MethodAttributes.Family)
    "family": Accessibility.PROTECTED,
    "assembly": Accessibility.INTERNAL,
    "famorassem": Accessibility.PROTECTED_INTERNAL,
    "famandassem": Accessibility.PROTECTED_OR_PRIVATE,
    "protectedprivate": Accessibility.PROTECTED_OR_PRIVATE,
}


def attribute_matches(attribute: str, wanted: str) -> bool:
    """Return True if ``attribute`` names the attribute type ``wanted``.

    Both the full name and the simple name are accepted, with or without the
    conventional ``Attribute`` suffix (``Obsolete`` matches
    ``System.ObsoleteAttribute``).
    """

    def simple(name: str) -> str:
        short: str = name.rsplit(".", 1)[-1]
        return short[: -len("Attribute")] if short.endswith("Attribute") else short

    return attribute == wanted or simple(attribute) == simple(wanted)


def rewrite_type_reference(text: str, rewrite: Callable[[str], str]) -> str:
    """Apply ``rewrite`` to every dotted type name inside a rendered type reference."""
    if not text:
        return text
    return _TYPE_NAME_RE.sub(lambda m: rewrite(m.group(0)), text)


@dataclass(frozen=True, slots=True)
class Parameter:
    """A formal parameter.

    Attributes:
        name (str): Parameter name (not part of identity).
        type_name (str): Rendered parameter type.
        is_optional (bool): Whether the parameter declares a default value.
    """

    name: str
    type_name: str
    is_optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the serialized (camelCase) form."""
        return {"name": self.name, "type": self.type_name, "optional": self.is_optional}


SignatureKey = tuple[str, tuple[str, ...], int]


@dataclass(frozen=True, slots=True)
class Signature:
    """Structural signature of a descriptor.

    Attributes:
        return_type (str): Return type (methods, delegates), value type
            (properties, fields, events) or empty (types, constructors).
        parameters (tuple[Parameter, ...]): Ordered formal parameters.
        generic_arity (int): Number of generic type parameters.
    """

    return_type: str = ""
    parameters: tuple[Parameter, ...] = ()
    generic_arity: int = 0

    @property
    def parameter_types(self) -> tuple[str, ...]:
        """Ordered parameter types."""
        return tuple(p.type_name for p in self.parameters)

    @property
    def parameter_names(self) -> tuple[str, ...]:
        """Ordered parameter names."""
        return tuple(p.name for p in self.parameters)

    @property
    def key(self) -> SignatureKey:
        """Identity key: return type, ordered parameter types and generic arity."""
        return (self.return_type, self.parameter_types, self.generic_arity)

    def render(self, name: str) -> str:
        """Render a compact, human-readable signature for ``name``."""
        generic: str = ""
        if self.generic_arity:
            generic = "<" + ", ".join(f"T{i}" for i in range(self.generic_arity)) + ">"
        params: str = ", ".join(
            f"{p.type_name} {p.name}".strip() + (" = default" if p.is_optional else "")
            for p in self.parameters
        )
        prefix: str = f"{self.return_type} " if self.return_type else ""
        return f"{prefix}{name}{generic}({params})"

    def rewrite_types(self, rewrite: Callable[[str], str]) -> Signature:
        """Return a copy with every referenced type name passed through ``rewrite``."""
        return Signature(
            return_type=rewrite_type_reference(self.return_type, rewrite),
            parameters=tuple(
                replace(p, type_name=rewrite_type_reference(p.type_name, rewrite))
                for p in self.parameters
            ),
            generic_arity=self.generic_arity,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the serialized (camelCase) form."""
        return {
            "returnType": self.return_type,
            "parameters": [p.to_dict() for p in self.parameters],
            "genericArity": self.generic_arity,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Signature:
        """Parse the serialized form; missing keys take their defaults.

        Raises:
            DescriptorError: If a parameter entry is not a mapping with a type.
        """
        if not data:
            return cls()
        params: list[Parameter] = []
        for index, raw in enumerate(data.get("parameters") or ()):
            if not isinstance(raw, Mapping) or not raw.get("type"):
                raise DescriptorError(f"parameter #{index} has no type")
            entry: Mapping[str, Any] = raw
            params.append(
                Parameter(
                    name=str(entry.get("name") or ""),
                    type_name=str(entry["type"]),
                    is_optional=bool(entry.get("optional", False)),
                )
            )
        arity: object = data.get("genericArity", 0)
        if not isinstance(arity, int) or isinstance(arity, bool) or arity < 0:
            raise DescriptorError(f"invalid generic arity {arity!r}")
        return cls(
            return_type=str(data.get("returnType") or ""),
            parameters=tuple(params),
            generic_arity=arity,
        )


@dataclass(frozen=True, slots=True, eq=False)
class MemberDescriptor:
    """Immutable description of one type or member.

    Attributes:
        kind (MemberKind): Element kind.
        name (str): Simple name (``Parse``, ``Parser``, ``.ctor``).
        full_name (str): Fully qualified name; for members
            ``"<declaring type full name>.<name>"``.
        namespace (str): Containing namespace (empty for the global namespace).
        declaring_type (str): Full name of the declaring type; empty for top-level types.
        accessibility (Accessibility): Declared accessibility.
        signature (Signature): Structural signature.
        attributes (frozenset[str]): Attribute type names applied to the element.
        interfaces (tuple[str, ...]): Implemented interface full names (types only).
    """

    kind: MemberKind
    name: str
    full_name: str
    namespace: str = ""
    declaring_type: str = ""
    accessibility: Accessibility = Accessibility.PUBLIC
    signature: Signature = field(default_factory=Signature)
    attributes: frozenset[str] = frozenset()
    interfaces: tuple[str, ...] = ()

    # --- identity ---

    @property
    def identity(self) -> tuple[str, SignatureKey]:
        """Identity key: full name plus signature key."""
        return (self.full_name, self.signature.key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MemberDescriptor):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    # --- derived views ---

    @property
    def is_type(self) -> bool:
        """True if this descriptor describes a type."""
        return self.kind.is_type

    @property
    def type_full_name(self) -> str:
        """Full name of the type this element belongs to (itself for types)."""
        return self.full_name if self.is_type else self.declaring_type

    @property
    def is_obsolete(self) -> bool:
        """True if the element carries the obsolete attribute."""
        return any(attribute_matches(a, OBSOLETE_ATTRIBUTE) for a in self.attributes)

    @property
    def is_compiler_generated(self) -> bool:
        """True if the element is compiler-generated.

        Detected by the compiler-generated attribute or by the naming patterns
        compilers use for closures, iterators and anonymous types.
        """
        if any(attribute_matches(a, COMPILER_GENERATED_ATTRIBUTE) for a in self.attributes):
            return True
        name: str = self.name
        return (
            "<" in name
            or name.startswith("__")
            or "DisplayClass" in name
            or "AnonymousType" in name
        )

    def display_signature(self) -> str:
        """Human-readable signature used by renderers."""
        if self.is_type:
            arity: int = self.signature.generic_arity
            generic: str = f"`{arity}" if arity and "`" not in self.full_name else ""
            return f"{self.accessibility.label} {self.kind.label} {self.full_name}{generic}"
        if self.kind in (MemberKind.PROPERTY, MemberKind.FIELD, MemberKind.EVENT):
            return f"{self.accessibility.label} {self.signature.return_type} {self.full_name}".replace(
                "  ", " "
            )
        return f"{self.accessibility.label} {self.signature.render(self.full_name)}"

    # --- contract ---

    def contract_problems(self) -> list[str]:
        """Return descriptor-contract violations (empty when well-formed)."""
        problems: list[str] = []
        if not self.name:
            problems.append("missing name")
        if not self.full_name:
            problems.append("missing full name")
        if not self.is_type and not self.declaring_type:
            problems.append(f"{self.kind.label} without declaring type")
        return problems

    # --- serialization ---

    def to_dict(self) -> dict[str, Any]:
        """Return the serialized (camelCase) form."""
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "name": self.name,
            "fullName": self.full_name,
            "namespace": self.namespace,
            "declaringType": self.declaring_type,
            "accessibility": self.accessibility.name.title().replace("_", ""),
            "signature": self.signature.to_dict(),
            "attributes": sorted(self.attributes),
        }
        if self.interfaces:
            data["interfaces"] = list(self.interfaces)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MemberDescriptor:
        """Build a descriptor from its serialized form.

        Args:
            data (Mapping[str, Any]): Serialized descriptor.

        Returns:
            MemberDescriptor: The parsed descriptor.

        Raises:
            DescriptorError: If required fields are missing or malformed.
        """
        kind: MemberKind | None = MemberKind.parse(_opt_str(data.get("kind")))
        if kind is None:
            raise DescriptorError(f"missing or unknown kind {data.get('kind')!r}")

        raw_access: object = data.get("accessibility", "Public")
        access: Accessibility | None = Accessibility.parse(_opt_str(raw_access))
        if access is None:
            raise DescriptorError(f"unknown accessibility {raw_access!r}")

        raw_sig: object = data.get("signature")
        if raw_sig is not None and not isinstance(raw_sig, Mapping):
            raise DescriptorError("signature must be an object")

        descriptor = cls(
            kind=kind,
            name=_opt_str(data.get("name")) or "",
            full_name=_opt_str(data.get("fullName")) or "",
            namespace=_opt_str(data.get("namespace")) or "",
            declaring_type=_opt_str(data.get("declaringType")) or "",
            accessibility=access,
            signature=Signature.from_dict(raw_sig),
            attributes=frozenset(_str_list(data.get("attributes"))),
            interfaces=tuple(_str_list(data.get("interfaces"))),
        )
        problems: list[str] = descriptor.contract_problems()
        if problems:
            raise DescriptorError("; ".join(problems))
        return descriptor

    # --- mapping support ---

    def with_type_references(self, rewrite: Callable[[str], str]) -> MemberDescriptor:
        """Return a copy whose signature and interface references pass through ``rewrite``."""
        return replace(
            self,
            signature=self.signature.rewrite_types(rewrite),
            interfaces=tuple(rewrite_type_reference(i, rewrite) for i in self.interfaces),
        )


def _opt_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _str_list(value: object) -> Iterable[str]:
    if not isinstance(value, (list, tuple)):
        return ()
    return [str(v) for v in value if v is not None]  # pyright: ignore[reportUnknownVariableType]
