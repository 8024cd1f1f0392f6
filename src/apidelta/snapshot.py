# topmark:header:start
#
#   project      : ApiDelta
#   file         : snapshot.py
#   file_relpath : src/apidelta/snapshot.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Descriptor snapshot documents.

A snapshot is the JSON output of an external introspector, either an object

    {"assembly": "MyLib, Version=1.0.0.0", "members": [ {...}, {...} ]}

or a bare list of descriptor objects. Well-formed entries are parsed into
`MemberDescriptor` values; malformed entries are kept as raw mappings so the
engine can report them as contract violations instead of aborting the run.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from apidelta.config.logging import get_logger
from apidelta.core.errors import DescriptorError, SnapshotError
from apidelta.model.descriptor import MemberDescriptor

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apidelta.config.logging import ApiDeltaLogger
    from apidelta.engine import DescriptorInput

logger: ApiDeltaLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """One loaded snapshot.

    Attributes:
        label (str): Display name (assembly name, or the file stem).
        entries (tuple[DescriptorInput, ...]): Parsed descriptors and raw
            malformed entries, in document order.
    """

    label: str
    entries: tuple[DescriptorInput, ...]

    @property
    def descriptors(self) -> tuple[MemberDescriptor, ...]:
        """The entries that parsed cleanly."""
        return tuple(e for e in self.entries if isinstance(e, MemberDescriptor))

    @property
    def malformed_count(self) -> int:
        """Number of entries kept raw because they could not be parsed."""
        return len(self.entries) - len(self.descriptors)


def parse_snapshot(data: object, *, label: str) -> Snapshot:
    """Build a `Snapshot` from a decoded JSON document.

    Args:
        data (object): Decoded document (object with ``members`` or a list).
        label (str): Fallback label when the document names no assembly.

    Returns:
        Snapshot: The snapshot.

    Raises:
        SnapshotError: If the document shape is not a snapshot.
    """
    raw_entries: object
    if isinstance(data, Mapping):
        doc = cast("Mapping[str, Any]", data)
        raw_entries = doc.get("members", [])
        assembly: object = doc.get("assembly")
        if isinstance(assembly, str) and assembly.strip():
            label = assembly.strip()
    else:
        raw_entries = data

    if not isinstance(raw_entries, list):
        raise SnapshotError(f"{label}: expected a list of descriptors")

    entries: list[DescriptorInput] = []
    for index, raw in enumerate(cast("list[object]", raw_entries)):
        if not isinstance(raw, Mapping):
            raise SnapshotError(f"{label}: entry #{index} is not an object")
        entry = cast("Mapping[str, Any]", raw)
        try:
            entries.append(MemberDescriptor.from_dict(entry))
        except DescriptorError as exc:
            logger.debug("%s: keeping malformed entry #%d raw (%s)", label, index, exc)
            entries.append(entry)

    snapshot = Snapshot(label=label, entries=tuple(entries))
    logger.debug(
        "Snapshot %s: %d entries (%d malformed)",
        label,
        len(snapshot.entries),
        snapshot.malformed_count,
    )
    return snapshot


def load_snapshot(path: Path | str) -> Snapshot:
    """Read a snapshot document from ``path``.

    Raises:
        SnapshotError: If the file cannot be read or is not valid snapshot JSON.
    """
    path = Path(path)
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"cannot read snapshot {path}: {exc}") from exc
    try:
        data: object = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"invalid JSON in snapshot {path}: {exc}") from exc
    logger.debug("Loaded snapshot document %s", path)
    return parse_snapshot(data, label=path.stem)


def dump_snapshot(descriptors: Iterable[MemberDescriptor], *, assembly: str = "") -> str:
    """Serialize descriptors as a snapshot document (pretty-printed JSON)."""
    doc: dict[str, Any] = {"assembly": assembly, "members": [d.to_dict() for d in descriptors]}
    return json.dumps(doc, indent=2)
