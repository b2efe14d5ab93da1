# tests/core/config/test_hashing.py
"""
Testes do hash canônico das settings (compute_config_hash).

Os testes asseguram que:
- o hash é determinístico e independe da ordem das chaves
- qualquer alteração de valor altera o hash
- apenas dicionários são aceitos
"""

import pytest

from atlas_doubles.core.config.hashing import compute_config_hash


def test_hash_is_sha256_hex():
    h = compute_config_hash({"doubles": {"signature_policy": "strict"}})
    assert len(h) == 64
    int(h, 16)


def test_hash_ignores_key_order():
    a = {"doubles": {"signature_policy": "strict", "snapshot_args": False}, "trace": {"enabled": True}}
    b = {"trace": {"enabled": True}, "doubles": {"snapshot_args": False, "signature_policy": "strict"}}
    assert compute_config_hash(a) == compute_config_hash(b)


def test_hash_changes_with_values():
    a = {"doubles": {"signature_policy": "strict"}}
    b = {"doubles": {"signature_policy": "permissive"}}
    assert compute_config_hash(a) != compute_config_hash(b)


def test_non_dict_is_rejected():
    with pytest.raises(TypeError):
        compute_config_hash([("doubles", {})])  # type: ignore[arg-type]
