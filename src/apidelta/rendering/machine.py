# topmark:header:start
#
#   project      : ApiDelta
#   file         : machine.py
#   file_relpath : src/apidelta/rendering/machine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Machine-readable reports (JSON and XML).

Both formats carry the same information: the labels, the comparison timestamp,
the summary counters, every difference with its details, and the diagnostics.
Key names are camelCase in both (JSON keys, XML attributes).

JSON shape:

    {
      "source": "...", "target": "...", "comparedAt": "...",
      "hasBreakingChanges": true,
      "summary": {"added": 0, "removed": 1, ..., "total": 3},
      "differences": [{"changeKind": "removed", ...}],
      "diagnostics": [{"kind": "unexpectedly_included", ...}]
    }
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from apidelta.model.result import ComparisonResult


def render_json(result: ComparisonResult) -> str:
    """Render ``result`` as pretty-printed JSON."""
    return json.dumps(result.to_dict(), indent=2) + "\n"


def _attrs(data: dict[str, Any], *keys: str) -> dict[str, str]:
    out: dict[str, str] = {}
    for key in keys:
        value: Any = data.get(key)
        if value is None:
            continue
        out[key] = str(value).lower() if isinstance(value, bool) else str(value)
    return out


def build_xml_tree(result: ComparisonResult) -> ET.Element:
    """Return the report as an ElementTree element."""
    data: dict[str, Any] = result.to_dict()
    root = ET.Element(
        "ComparisonResult",
        _attrs(data, "source", "target", "comparedAt", "hasBreakingChanges"),
    )
    ET.SubElement(root, "Summary", {k: str(v) for k, v in data["summary"].items()})

    differences = ET.SubElement(root, "Differences")
    for diff in data["differences"]:
        node = ET.SubElement(
            differences,
            "Difference",
            _attrs(diff, "changeKind", "elementKind", "elementName", "severity", "isBreaking"),
        )
        ET.SubElement(node, "Description").text = diff["description"]
        if diff["source"] is not None:
            ET.SubElement(node, "Source").text = diff["source"]
        if diff["target"] is not None:
            ET.SubElement(node, "Target").text = diff["target"]
        if diff["details"]:
            details = ET.SubElement(node, "Details")
            for detail in diff["details"]:
                ET.SubElement(
                    details,
                    "Detail",
                    _attrs(detail, "kind", "oldValue", "newValue", "severity", "isBreaking"),
                )

    diagnostics = ET.SubElement(root, "Diagnostics")
    for diagnostic in data["diagnostics"]:
        ET.SubElement(
            diagnostics,
            "Diagnostic",
            _attrs(diagnostic, "kind", "severity", "subject"),
        ).text = diagnostic["message"]
    return root


def render_xml(result: ComparisonResult) -> str:
    """Render ``result`` as an indented XML document."""
    root: ET.Element = build_xml_tree(result)
    ET.indent(root)
    return ET.tostring(root, encoding="unicode", xml_declaration=True) + "\n"
