# topmark:header:start
#
#   project      : ApiDelta
#   file         : __init__.py
#   file_relpath : src/apidelta/model/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value types shared by the comparison engine and the renderers.

- ``descriptor``: `MemberDescriptor` and its signature/accessibility types.
- ``difference``: `ApiDifference`, change kinds, details and severities.
- ``result``: `ComparisonResult` and `ComparisonSummary`.
"""

from __future__ import annotations
