# topmark:header:start
#
#   project      : ApiDelta
#   file         : keys.py
#   file_relpath : src/apidelta/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical section and key names for ApiDelta configuration documents.

The same camelCase keys are used in JSON (``apidelta.json``) and TOML
(``apidelta.toml``) configuration documents.

Design notes:
    - Keys defined here represent the *external configuration API*.
    - Renaming or removing a key is a breaking change.
    - CLI option names are defined on the Click commands, not here.
"""

from __future__ import annotations

from typing import Final


class Keys:
    """Section names and keys used by ApiDelta configuration documents.

    The ordering of constants mirrors ``apidelta-default.toml``.
    """

    # --- top-level sections ---
    SECTION_MAPPINGS: Final[str] = "mappings"
    SECTION_EXCLUSIONS: Final[str] = "exclusions"
    SECTION_BREAKING_CHANGE_RULES: Final[str] = "breakingChangeRules"
    SECTION_FILTERS: Final[str] = "filters"

    # --- top-level scalars ---
    OUTPUT_FORMAT: Final[str] = "outputFormat"
    OUTPUT_PATH: Final[str] = "outputPath"
    FAIL_ON_BREAKING_CHANGES: Final[str] = "failOnBreakingChanges"

    # --- [mappings] ---
    NAMESPACE_MAPPINGS: Final[str] = "namespaceMappings"
    TYPE_MAPPINGS: Final[str] = "typeMappings"
    AUTO_MAP_SAME_NAME_TYPES: Final[str] = "autoMapSameNameTypes"
    IGNORE_CASE: Final[str] = "ignoreCase"

    # --- [exclusions] ---
    EXCLUDED_TYPES: Final[str] = "excludedTypes"
    EXCLUDED_MEMBERS: Final[str] = "excludedMembers"
    EXCLUDED_TYPE_PATTERNS: Final[str] = "excludedTypePatterns"
    EXCLUDED_MEMBER_PATTERNS: Final[str] = "excludedMemberPatterns"
    EXCLUDE_OBSOLETE: Final[str] = "excludeObsolete"

    # --- [breakingChangeRules] ---
    TREAT_TYPE_REMOVAL_AS_BREAKING: Final[str] = "treatTypeRemovalAsBreaking"
    TREAT_MEMBER_REMOVAL_AS_BREAKING: Final[str] = "treatMemberRemovalAsBreaking"
    TREAT_SIGNATURE_CHANGE_AS_BREAKING: Final[str] = "treatSignatureChangeAsBreaking"
    TREAT_REDUCED_ACCESSIBILITY_AS_BREAKING: Final[str] = "treatReducedAccessibilityAsBreaking"
    TREAT_ADDED_INTERFACE_AS_BREAKING: Final[str] = "treatAddedInterfaceAsBreaking"
    TREAT_REMOVED_INTERFACE_AS_BREAKING: Final[str] = "treatRemovedInterfaceAsBreaking"
    TREAT_PARAMETER_NAME_CHANGE_AS_BREAKING: Final[str] = "treatParameterNameChangeAsBreaking"
    TREAT_ADDED_OPTIONAL_PARAMETER_AS_BREAKING: Final[str] = (
        "treatAddedOptionalParameterAsBreaking"
    )
    TREAT_ADDED_MEMBER_AS_BREAKING: Final[str] = "treatAddedMemberAsBreaking"
    TREAT_ADDED_TYPE_AS_BREAKING: Final[str] = "treatAddedTypeAsBreaking"

    # --- [filters] ---
    INCLUDE_NAMESPACES: Final[str] = "includeNamespaces"
    EXCLUDE_NAMESPACES: Final[str] = "excludeNamespaces"
    INCLUDE_TYPES: Final[str] = "includeTypes"
    EXCLUDE_TYPES: Final[str] = "excludeTypes"
    INCLUDE_INTERNALS: Final[str] = "includeInternals"
    INCLUDE_COMPILER_GENERATED: Final[str] = "includeCompilerGenerated"


TOP_LEVEL_KEYS: Final[frozenset[str]] = frozenset(
    {
        Keys.SECTION_MAPPINGS,
        Keys.SECTION_EXCLUSIONS,
        Keys.SECTION_BREAKING_CHANGE_RULES,
        Keys.SECTION_FILTERS,
        Keys.OUTPUT_FORMAT,
        Keys.OUTPUT_PATH,
        Keys.FAIL_ON_BREAKING_CHANGES,
    }
)
