# src/atlas_doubles/core/config/__init__.py

"""
Camada de configuração do Atlas Doubles.

Este pacote carrega, mescla, valida e identifica as settings que
controlam o comportamento do registry de test doubles.

A configuração é:
    - declarativa (YAML ou JSON)
    - determinística (mesma entrada, mesmas settings)
    - identificada por hash para rastreabilidade no ScopeTrace

Componentes:
    - loader   → defaults + override local
    - merge    → política de deep-merge
    - hashing  → hash canônico SHA-256
    - settings → `DoublesSettings` tipadas e validadas
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import DEFAULTS_PATH, load_config
from .merge import deep_merge
from .settings import (
    SIGNATURE_PERMISSIVE,
    SIGNATURE_STRICT,
    DoublesSettings,
    load_settings,
)

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidSettingError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "DEFAULTS_PATH",
    "load_config",
    "deep_merge",
    "SIGNATURE_PERMISSIVE",
    "SIGNATURE_STRICT",
    "DoublesSettings",
    "load_settings",
]
