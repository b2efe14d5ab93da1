"""
# Doubles Core — Atlas Doubles

Este pacote define os **contratos canônicos** do facility de test doubles.

## Componentes

- **types**
  - `DoubleKind`: classificação (stub, mock)
  - `CallRecord`: registro imutável de uma chamada
  - `Raise`: valor programado que levanta exceção

- **target**
  - `Target` / `resolve_target`: identificação e substituição do atributo alvo

- **double**
  - `Double`: substituto chamável instalado no owner do alvo

- **scope**
  - `Scope`: fronteira de vida dos doubles de um caso de teste

- **registry**
  - `DoubleRegistry`: abertura de Scopes, instalação e `invoke`

## Invariantes

- Um alvo possui no máximo um double ativo por Scope
- Todo alvo substituído é restaurado no teardown do Scope, com ou sem falha
- Erros de uso são exceções nomeadas, nunca fallback silencioso
"""

from .double import Double
from .registry import DoubleRegistry
from .scope import Scope
from .target import Target, resolve_target
from .types import CallRecord, DoubleKind, Raise

__all__ = [
    "CallRecord",
    "Double",
    "DoubleKind",
    "DoubleRegistry",
    "Raise",
    "Scope",
    "Target",
    "resolve_target",
]
