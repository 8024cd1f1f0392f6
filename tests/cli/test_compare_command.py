# topmark:header:start
#
#   project      : ApiDelta
#   file         : test_compare_command.py
#   file_relpath : tests/cli/test_compare_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `apidelta compare`: reports, exit codes and option layering."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from apidelta.core.exit_codes import ExitCode
from tests.cli.conftest import (
    assert_BREAKING,
    assert_CLICK_USAGE,
    assert_CONFIG_ERROR,
    assert_SUCCESS,
    assert_USAGE_ERROR,
    run_cli,
    write_snapshot,
    write_text,
)
from tests.factories import interface_scenario, library_v1, renamed_namespace_scenario

pytestmark = pytest.mark.cli


@pytest.fixture
def interface_files(tmp_path: Path) -> tuple[str, str]:
    """Snapshots where one interface method is removed and one added."""
    source, target = interface_scenario()
    return (
        write_snapshot(tmp_path, "old", source, assembly="TestAssembly 1.0"),
        write_snapshot(tmp_path, "new", target, assembly="TestAssembly 2.0"),
    )


@pytest.fixture
def renamed_files(tmp_path: Path) -> tuple[str, str]:
    """Snapshots where a namespace was renamed."""
    source, target = renamed_namespace_scenario()
    return write_snapshot(tmp_path, "old", source), write_snapshot(tmp_path, "new", target)


def test_breaking_changes_exit_1(interface_files: tuple[str, str]) -> None:
    """The console report lists the changes and the run fails."""
    result = run_cli(["compare", *interface_files])
    assert_BREAKING(result)
    assert "API comparison: TestAssembly 1.0 -> TestAssembly 2.0" in result.stdout
    assert "Removed (1)" in result.stdout
    assert "Added (1)" in result.stdout
    assert result.stdout.rstrip().endswith(
        "Summary: 1 added, 1 removed, 0 modified, 0 moved, 0 excluded (1 breaking)"
    )


def test_no_fail_on_breaking(interface_files: tuple[str, str]) -> None:
    """Reporting without failing the build."""
    assert_SUCCESS(run_cli(["compare", *interface_files, "--no-fail-on-breaking"]))


def test_identical_snapshots(tmp_path: Path) -> None:
    """Nothing to report exits 0."""
    path = write_snapshot(tmp_path, "lib", library_v1())
    result = run_cli(["compare", path, path])
    assert_SUCCESS(result)
    assert "No API differences found." in result.stdout


def test_json_output(interface_files: tuple[str, str]) -> None:
    """``-o json`` prints the machine-readable report on stdout."""
    result = run_cli(["compare", *interface_files, "-o", "json"])
    assert_BREAKING(result)
    data = json.loads(result.stdout)
    assert data["summary"]["removed"] == 1
    assert data["hasBreakingChanges"] is True


def test_output_path(interface_files: tuple[str, str], tmp_path: Path) -> None:
    """``--output-path`` writes the report to a file instead of stdout."""
    target = tmp_path / "reports" / "api.md"
    result = run_cli(["compare", *interface_files, "-o", "md", "--output-path", str(target)])
    assert_BREAKING(result)
    assert result.stdout == ""
    assert "Report written to" in result.stderr
    assert target.read_text(encoding="utf-8").startswith("# API comparison")


def test_quiet_prints_summary_only(interface_files: tuple[str, str]) -> None:
    """``-q`` reduces the console report to the summary line."""
    for argv in (["compare", "-q", *interface_files], ["-q", "compare", *interface_files]):
        result = run_cli(argv)
        assert_BREAKING(result)
        assert result.stdout.splitlines() == [
            "Summary: 1 added, 1 removed, 0 modified, 0 moved, 0 excluded (1 breaking)"
        ]


def test_verbose_and_quiet_conflict(interface_files: tuple[str, str]) -> None:
    """``-v`` and ``-q`` are mutually exclusive."""
    assert_USAGE_ERROR(run_cli(["compare", "-v", "-q", *interface_files]))


def test_verbose_shows_signatures(interface_files: tuple[str, str]) -> None:
    """``-v`` adds old/new signature lines."""
    result = run_cli(["compare", "-v", *interface_files])
    assert "old: public System.Void TestAssembly.IPublicInterface.RemovedMethod()" in result.stdout


def test_missing_snapshot(interface_files: tuple[str, str], tmp_path: Path) -> None:
    """A snapshot path that does not exist exits 66."""
    result = run_cli(["compare", interface_files[0], str(tmp_path / "absent.json")])
    assert result.exit_code == ExitCode.FILE_NOT_FOUND
    assert "snapshot not found" in result.stderr


def test_malformed_snapshot(interface_files: tuple[str, str], tmp_path: Path) -> None:
    """A snapshot that is not JSON exits 65."""
    bad = write_text(tmp_path, "bad.json", "{ not json")
    result = run_cli(["compare", interface_files[0], bad])
    assert result.exit_code == ExitCode.SNAPSHOT_ERROR


def test_missing_and_invalid_config(interface_files: tuple[str, str], tmp_path: Path) -> None:
    """Configuration problems exit 78 before anything is compared."""
    assert_CONFIG_ERROR(run_cli(["compare", *interface_files, "-c", str(tmp_path / "none.toml")]))

    cyclic = write_text(
        tmp_path, "cycle.toml", '[mappings.namespaceMappings]\nA = ["B"]\nB = ["A"]\n'
    )
    result = run_cli(["compare", *interface_files, "-c", cyclic])
    assert_CONFIG_ERROR(result)
    assert "circular namespace mapping" in result.stderr


def test_config_document_mapping(renamed_files: tuple[str, str], tmp_path: Path) -> None:
    """A namespace mapping from the config document turns the rename into a move."""
    config = write_text(
        tmp_path,
        "apidelta.toml",
        '[mappings.namespaceMappings]\n"TestAssembly.Old" = ["TestAssembly.RenamedNamespace"]\n',
    )
    result = run_cli(["compare", *renamed_files, "-c", config, "-o", "json"])
    assert_SUCCESS(result)
    data = json.loads(result.stdout)
    assert [d["changeKind"] for d in data["differences"]] == ["moved"]


def test_config_output_format_is_overridden(
    interface_files: tuple[str, str], tmp_path: Path
) -> None:
    """Command-line options win over the config document."""
    config = write_text(tmp_path, "apidelta.json", '{"outputFormat": "xml"}')
    from_doc = run_cli(["compare", *interface_files, "-c", config])
    assert from_doc.stdout.startswith("<?xml")
    overridden = run_cli(["compare", *interface_files, "-c", config, "-o", "json"])
    assert json.loads(overridden.stdout)["summary"]["total"] == 2


def test_exclude_type_option(renamed_files: tuple[str, str]) -> None:
    """``-e`` turns the removal into an intentional exclusion."""
    result = run_cli(["compare", *renamed_files, "-e", "TestAssembly.Old.*", "-o", "json"])
    assert_SUCCESS(result)
    kinds = sorted(d["changeKind"] for d in json.loads(result.stdout)["differences"])
    assert kinds == ["added", "excluded"]


def test_filter_namespace_option(renamed_files: tuple[str, str]) -> None:
    """``-f`` limits the comparison to matching namespaces."""
    result = run_cli(
        ["compare", *renamed_files, "-f", "TestAssembly.RenamedNamespace", "-o", "json"]
    )
    assert_SUCCESS(result)
    kinds = [d["changeKind"] for d in json.loads(result.stdout)["differences"]]
    assert kinds == ["added"]


def test_unknown_output_format(interface_files: tuple[str, str]) -> None:
    """Click rejects unknown report formats."""
    assert_CLICK_USAGE(run_cli(["compare", *interface_files, "-o", "pdf"]))
