# src/atlas_doubles/core/config/settings.py
"""
Settings tipadas do registry de test doubles.

Este módulo converte a configuração resolvida (dict) em um objeto
imutável e validado, consumido pelo `DoubleRegistry` e pelos Scopes.

Chaves reconhecidas (v1):
    - doubles.signature_policy → "strict" | "permissive"
    - doubles.snapshot_args    → bool
    - trace.enabled            → bool

Decisões arquiteturais:
    - Valores inválidos são erro fatal (`InvalidSettingError`)
    - Chaves desconhecidas são preservadas em `config`, mas ignoradas
    - O hash da configuração é calculado aqui e acompanha as settings
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import InvalidSettingError
from .hashing import compute_config_hash
from .loader import load_config

SIGNATURE_STRICT = "strict"
SIGNATURE_PERMISSIVE = "permissive"
SIGNATURE_POLICIES = (SIGNATURE_STRICT, SIGNATURE_PERMISSIVE)


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name, {})
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise InvalidSettingError(
            f"Seção '{name}' deve ser dict, recebido: {type(section).__name__}"
        )
    return section


def _require_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise InvalidSettingError(
            f"Setting '{key}' deve ser bool, recebido: {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class DoublesSettings:
    """
    Settings efetivas do Atlas Doubles.

    Campos:
        - signature_policy: política de validação de argumentos nas chamadas
        - snapshot_args: se os argumentos são copiados (deepcopy) no CallRecord
        - trace_enabled: se os Scopes registram eventos no ScopeTrace
        - config: configuração resolvida de origem
        - config_hash: identidade estrutural de `config`
    """

    signature_policy: str = SIGNATURE_STRICT
    snapshot_args: bool = False
    trace_enabled: bool = True
    config: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
    config_hash: str = ""

    @property
    def strict_signatures(self) -> bool:
        return self.signature_policy == SIGNATURE_STRICT

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "DoublesSettings":
        """
        Valida e converte a configuração resolvida em settings tipadas.

        Raises:
            InvalidSettingError: Se alguma setting reconhecida for inválida.
        """
        if not isinstance(config, dict):
            raise InvalidSettingError(
                f"Config deve ser dict, recebido: {type(config).__name__}"
            )

        doubles_cfg = _section(config, "doubles")
        trace_cfg = _section(config, "trace")

        policy = doubles_cfg.get("signature_policy", SIGNATURE_STRICT)
        if policy not in SIGNATURE_POLICIES:
            raise InvalidSettingError(
                f"Setting 'doubles.signature_policy' inválida: {policy!r} "
                f"(aceitos: {', '.join(SIGNATURE_POLICIES)})"
            )

        return cls(
            signature_policy=policy,
            snapshot_args=_require_bool(doubles_cfg.get("snapshot_args", False), "doubles.snapshot_args"),
            trace_enabled=_require_bool(trace_cfg.get("enabled", True), "trace.enabled"),
            config=config,
            config_hash=compute_config_hash(config),
        )


def load_settings(
    *,
    local_path: Optional[str] = None,
    defaults_path: Optional[str] = None,
) -> DoublesSettings:
    """Carrega defaults + override local e retorna as settings validadas."""
    config = load_config(defaults_path=defaults_path, local_path=local_path)
    return DoublesSettings.from_config(config)
