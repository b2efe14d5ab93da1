"""
Tipos canônicos dos test doubles do Atlas Doubles.

Componentes principais:
    - DoubleKind → enum de classificação (STUB, MOCK)
    - CallRecord → registro imutável de uma invocação interceptada
    - Raise      → marcador de valor programado que levanta exceção

Invariantes:
    - Enums possuem valores textuais canônicos (serializáveis no ScopeTrace)
    - CallRecord nunca é alterado após criado
    - Nenhuma lógica de interceptação vive neste módulo
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Tuple


class DoubleKind(str, Enum):
    """
    Tipos de test double.

    Tipos definidos:
        - STUB: retorna o mesmo valor em toda chamada, ignorando argumentos
        - MOCK: retorna uma sequência finita de valores, um por chamada
    """
    STUB = "stub"
    MOCK = "mock"


@dataclass(frozen=True)
class CallRecord:
    """
    Registro imutável de uma chamada recebida por um double.

    Campos:
        - ordinal: posição da chamada no call log (começa em 1)
        - args: argumentos posicionais recebidos
        - kwargs: argumentos nomeados recebidos (somente leitura)

    Invariantes:
        - `ordinal` corresponde à posição do registro no call log
        - `kwargs` é um mapeamento somente leitura
    """
    ordinal: int
    args: Tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.kwargs, MappingProxyType):
            object.__setattr__(self, "kwargs", MappingProxyType(dict(self.kwargs)))

    def matches(self, /, *args: Any, **kwargs: Any) -> bool:
        return self.args == args and dict(self.kwargs) == kwargs


@dataclass(frozen=True)
class Raise:
    """
    Valor programado que, ao ser alcançado, levanta `exception`.

    Permite programar uma dependência que falha em uma chamada específica:

        scope.mock("app.client.fetch", [payload, Raise(TimeoutError("slow"))])
    """
    exception: BaseException
