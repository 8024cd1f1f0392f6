# topmark:header:start
#
#   project      : ApiDelta
#   file         : conftest.py
#   file_relpath : tests/rendering/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared comparison results for the renderer tests.

`sample_result()` compares `library_v1()` with a hand-edited successor that
exercises every section a report can contain except *moved*:

* removed: ``MyLib.Legacy.Widget`` (critical, breaking)
* modified: ``MyLib.Parser.Parse`` return type (error, breaking) and
  ``MyLib.Parser.Reset`` marked obsolete (warning)
* added: ``MyLib.Tokenizer`` (info)
* excluded: ``MyLib.Parser.Dispose`` (info)
* one diagnostic: ``MyLib.ParsedHandler`` is excluded but still present
"""

from __future__ import annotations

from apidelta.config.filters import MutableExclusionConfig
from apidelta.engine import compare_snapshots
from apidelta.model.result import ComparisonResult
from tests.conftest import fixture, make_config
from tests.factories import INT32, STRING, library_v1, method, param, type_


def sample_result() -> ComparisonResult:
    """Return the mixed comparison described in the module docstring."""
    source = library_v1()
    parser = source[0]
    target = [
        d
        for d in source
        if d.type_full_name != "MyLib.Legacy.Widget"
        and d.name not in ("Reset", "Dispose")
        and d.identity != method(parser, "Parse", param(STRING), returns=INT32).identity
    ]
    target += [
        method(parser, "Parse", param(STRING, "text"), returns="System.Int64"),
        method(parser, "Reset", obsolete=True),
        type_("MyLib.Tokenizer"),
    ]
    config = make_config(
        exclusions=MutableExclusionConfig(
            excluded_members=["MyLib.Parser.Dispose"], excluded_types=["MyLib.ParsedHandler"]
        )
    )
    return compare_snapshots(
        source, target, config, source_label="MyLib 1.0", target_label="MyLib 2.0"
    )


def empty_result() -> ComparisonResult:
    """Return a comparison without differences."""
    return ComparisonResult.build([], source_label="v1", target_label="v2")


@fixture()
def result() -> ComparisonResult:
    """The mixed sample comparison."""
    return sample_result()
