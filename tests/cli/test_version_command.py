# topmark:header:start
#
#   project      : ApiDelta
#   file         : test_version_command.py
#   file_relpath : tests/cli/test_version_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `apidelta version`."""

from __future__ import annotations

import json

import pytest

from apidelta.constants import APIDELTA_VERSION
from tests.cli.conftest import assert_SUCCESS, run_cli

pytestmark = pytest.mark.cli


def test_version_plain() -> None:
    """Plain output is the bare version string."""
    result = run_cli(["version"])
    assert_SUCCESS(result)
    assert result.stdout.strip() == APIDELTA_VERSION


def test_version_json() -> None:
    """``--json`` prints a one-key object."""
    result = run_cli(["version", "--json"])
    assert_SUCCESS(result)
    assert json.loads(result.stdout) == {"version": APIDELTA_VERSION}
