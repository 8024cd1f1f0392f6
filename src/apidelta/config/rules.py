# topmark:header:start
#
#   project      : ApiDelta
#   file         : rules.py
#   file_relpath : src/apidelta/config/rules.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Breaking-change policy: which kinds of change count as breaking.

Design:
    * ``MutableBreakingChangeRules`` uses tri-state options (``bool | None``) to
      represent explicit True/False vs. *unset*. This enables non-destructive
      merges when composing multiple sources (defaults → config file → CLI).
    * ``BreakingChangeRules`` is the fully-resolved, immutable runtime view with
      plain booleans, so the classifier never branches on ``None``.
    * ``MutableBreakingChangeRules.resolve(base)`` fills unset fields from
      ``base`` and returns a frozen ``BreakingChangeRules``.

Document mapping (JSON or TOML, camelCase keys):

    [breakingChangeRules]
    treatTypeRemovalAsBreaking = true
    treatMemberRemovalAsBreaking = true
    treatSignatureChangeAsBreaking = true
    treatReducedAccessibilityAsBreaking = true
    treatAddedInterfaceAsBreaking = false
    treatRemovedInterfaceAsBreaking = true
    treatParameterNameChangeAsBreaking = false
    treatAddedOptionalParameterAsBreaking = false
    treatAddedMemberAsBreaking = false
    treatAddedTypeAsBreaking = false
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any, Final

from apidelta.config.getters import check_unknown_keys, get_bool_or_none
from apidelta.config.keys import Keys

if TYPE_CHECKING:
    from collections.abc import Mapping

# Attribute name -> document key. Order mirrors the defaults template.
RULE_KEYS: Final[dict[str, str]] = {
    "treat_type_removal_as_breaking": Keys.TREAT_TYPE_REMOVAL_AS_BREAKING,
    "treat_member_removal_as_breaking": Keys.TREAT_MEMBER_REMOVAL_AS_BREAKING,
    "treat_signature_change_as_breaking": Keys.TREAT_SIGNATURE_CHANGE_AS_BREAKING,
    "treat_reduced_accessibility_as_breaking": Keys.TREAT_REDUCED_ACCESSIBILITY_AS_BREAKING,
    "treat_added_interface_as_breaking": Keys.TREAT_ADDED_INTERFACE_AS_BREAKING,
    "treat_removed_interface_as_breaking": Keys.TREAT_REMOVED_INTERFACE_AS_BREAKING,
    "treat_parameter_name_change_as_breaking": Keys.TREAT_PARAMETER_NAME_CHANGE_AS_BREAKING,
    "treat_added_optional_parameter_as_breaking": Keys.TREAT_ADDED_OPTIONAL_PARAMETER_AS_BREAKING,
    "treat_added_member_as_breaking": Keys.TREAT_ADDED_MEMBER_AS_BREAKING,
    "treat_added_type_as_breaking": Keys.TREAT_ADDED_TYPE_AS_BREAKING,
}


@dataclass(frozen=True, slots=True)
class BreakingChangeRules:
    """Immutable, runtime breaking-change policy used by the classifier.

    Attributes:
        treat_type_removal_as_breaking (bool): Removing a type is breaking.
        treat_member_removal_as_breaking (bool): Removing a member is breaking.
        treat_signature_change_as_breaking (bool): Changing a signature (or a
            type's kind) is breaking.
        treat_reduced_accessibility_as_breaking (bool): Reducing accessibility is breaking.
        treat_added_interface_as_breaking (bool): Implementing an additional interface
            is breaking.
        treat_removed_interface_as_breaking (bool): Dropping an implemented interface
            is breaking.
        treat_parameter_name_change_as_breaking (bool): Renaming a parameter is
            breaking (named-argument call sites).
        treat_added_optional_parameter_as_breaking (bool): Appending an optional
            parameter is breaking (binary compatibility).
        treat_added_member_as_breaking (bool): Adding a member is breaking.
        treat_added_type_as_breaking (bool): Adding a type is breaking.
    """

    treat_type_removal_as_breaking: bool = True
    treat_member_removal_as_breaking: bool = True
    treat_signature_change_as_breaking: bool = True
    treat_reduced_accessibility_as_breaking: bool = True
    treat_added_interface_as_breaking: bool = False
    treat_removed_interface_as_breaking: bool = True
    treat_parameter_name_change_as_breaking: bool = False
    treat_added_optional_parameter_as_breaking: bool = False
    treat_added_member_as_breaking: bool = False
    treat_added_type_as_breaking: bool = False

    def thaw(self) -> MutableBreakingChangeRules:
        """Return a mutable builder initialized from these rules."""
        return MutableBreakingChangeRules(**{f.name: getattr(self, f.name) for f in fields(self)})

    def to_dict(self) -> dict[str, bool]:
        """Return all switches keyed by their document key."""
        return {key: bool(getattr(self, attr)) for attr, key in RULE_KEYS.items()}


@dataclass
class MutableBreakingChangeRules:
    """Mutable builder for `BreakingChangeRules`, suitable for config loading/merging.

    Every attribute mirrors `BreakingChangeRules`; ``None`` means "inherit".
    Builders are merged in a **last-wins** manner.
    """

    treat_type_removal_as_breaking: bool | None = None
    treat_member_removal_as_breaking: bool | None = None
    treat_signature_change_as_breaking: bool | None = None
    treat_reduced_accessibility_as_breaking: bool | None = None
    treat_added_interface_as_breaking: bool | None = None
    treat_removed_interface_as_breaking: bool | None = None
    treat_parameter_name_change_as_breaking: bool | None = None
    treat_added_optional_parameter_as_breaking: bool | None = None
    treat_added_member_as_breaking: bool | None = None
    treat_added_type_as_breaking: bool | None = None

    def merge_with(self, other: MutableBreakingChangeRules) -> MutableBreakingChangeRules:
        """Return a new builder by applying ``other`` over ``self`` (last-wins).

        ``None`` fields in ``other`` do not override explicit values in ``self``.
        """
        merged: dict[str, bool | None] = {}
        for attr in RULE_KEYS:
            override: bool | None = getattr(other, attr)
            merged[attr] = override if override is not None else getattr(self, attr)
        return MutableBreakingChangeRules(**merged)

    def resolve(self, base: BreakingChangeRules) -> BreakingChangeRules:
        """Resolve tri-state fields against a base frozen rule set."""
        resolved: dict[str, bool] = {}
        for attr in RULE_KEYS:
            value: bool | None = getattr(self, attr)
            resolved[attr] = getattr(base, attr) if value is None else value
        return BreakingChangeRules(**resolved)

    def freeze(self) -> BreakingChangeRules:
        """Freeze to concrete rules using the documented defaults for unset fields."""
        return self.resolve(BreakingChangeRules())

    @classmethod
    def from_table(cls, tbl: Mapping[str, Any] | None) -> MutableBreakingChangeRules:
        """Create a builder from a ``breakingChangeRules`` table.

        Unspecified keys become ``None`` (inherit at freeze time).

        Raises:
            ConfigurationError: On unknown keys or non-boolean values.
        """
        if not tbl:
            return cls()
        section: str = Keys.SECTION_BREAKING_CHANGE_RULES
        check_unknown_keys(tbl, RULE_KEYS.values(), section=section)
        return cls(
            **{attr: get_bool_or_none(tbl, key, section=section) for attr, key in RULE_KEYS.items()}
        )

    def to_table(self) -> dict[str, bool]:
        """Serialize only explicitly set keys."""
        out: dict[str, bool] = {}
        for attr, key in RULE_KEYS.items():
            value: bool | None = getattr(self, attr)
            if value is not None:
                out[key] = value
        return out
