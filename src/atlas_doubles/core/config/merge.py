# src/atlas_doubles/core/config/merge.py
"""
Utilitário canônico de deep-merge das settings do Atlas Doubles.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado durante o processo
    - A mesma entrada sempre produz a mesma saída
    - Conflitos estruturais interrompem o merge
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _type_name(value: Any) -> str:
    return type(value).__name__


def _merge_value(path: str, base_value: Any, override_value: Any) -> Any:
    # dict -> merge recursivo
    if isinstance(base_value, dict) and isinstance(override_value, dict):
        return _merge_dicts(path, base_value, override_value)

    # list -> sobrescrita total
    if isinstance(override_value, list):
        return deepcopy(override_value)

    # conflito de tipo (ex.: `trace: off` sobre `trace: {enabled: true}`)
    if type(base_value) is not type(override_value):
        raise ConfigTypeConflictError(
            f"Conflito de tipo na chave '{path}': "
            f"{_type_name(base_value)} vs {_type_name(override_value)}"
        )

    # escalar -> sobrescrita
    return deepcopy(override_value)


def _merge_dicts(prefix: str, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, override_value in override.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if key in merged:
            merged[key] = _merge_value(path, merged[key], override_value)
        else:
            merged[key] = deepcopy(override_value)
    return merged


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina os defaults do pacote com os overrides locais do projeto de testes.

    Retorna um novo dicionário; nenhum dos inputs é mutado. Conflitos de
    tipo são reportados com o caminho pontilhado da chave
    (ex.: `doubles.snapshot_args`).

    Raises:
        ConfigTypeConflictError: Se base e override divergirem em tipo em alguma chave,
            ou se algum deles não for um dicionário.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{_type_name(base)} vs {_type_name(override)}"
        )
    return _merge_dicts("", base, override)
