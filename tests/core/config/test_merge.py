# tests/core/config/test_merge.py
"""
Testes da política canônica de deep-merge (deep_merge).

Política (v1):
    - dict → merge recursivo
    - list → sobrescrita total
    - escalar → sobrescrita direta
    - conflito de tipos → ConfigTypeConflictError
"""

import pytest

from atlas_doubles.core.config.errors import ConfigTypeConflictError
from atlas_doubles.core.config.merge import deep_merge


def test_nested_dicts_are_merged():
    base = {"doubles": {"signature_policy": "strict", "snapshot_args": False}, "trace": {"enabled": True}}
    override = {"doubles": {"signature_policy": "permissive"}}

    out = deep_merge(base, override)

    assert out == {
        "doubles": {"signature_policy": "permissive", "snapshot_args": False},
        "trace": {"enabled": True},
    }


def test_lists_are_replaced_not_merged():
    out = deep_merge({"extra": {"tags": ["a", "b"]}}, {"extra": {"tags": ["c"]}})
    assert out["extra"]["tags"] == ["c"]


def test_new_keys_are_added():
    out = deep_merge({"doubles": {}}, {"report": {"path": "out"}})
    assert out == {"doubles": {}, "report": {"path": "out"}}


def test_inputs_are_not_mutated():
    base = {"doubles": {"signature_policy": "strict"}}
    override = {"doubles": {"signature_policy": "permissive"}}

    deep_merge(base, override)

    assert base == {"doubles": {"signature_policy": "strict"}}
    assert override == {"doubles": {"signature_policy": "permissive"}}


def test_type_conflict_raises():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"trace": {"enabled": True}}, {"trace": "off"})

    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"doubles": {"snapshot_args": False}}, {"doubles": {"snapshot_args": "yes"}})


def test_non_dict_root_raises():
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"a": 1}, ["a"])  # type: ignore[arg-type]


def test_type_conflict_reports_dotted_key_path():
    with pytest.raises(ConfigTypeConflictError, match=r"'doubles\.snapshot_args'"):
        deep_merge({"doubles": {"snapshot_args": False}}, {"doubles": {"snapshot_args": "yes"}})


def test_nested_override_copies_are_independent():
    override = {"extra": {"tags": ["a"]}}
    out = deep_merge({"extra": {"tags": []}}, override)

    out["extra"]["tags"].append("b")

    assert override == {"extra": {"tags": ["a"]}}
