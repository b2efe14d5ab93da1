"""
Atlas Doubles — Canonical Exceptions (v1)

Este módulo define as exceções tipadas levantadas pelo registry de test
doubles e pelos Scopes.

Objetivo:
- Cada violação de uso possui uma exceção própria e nomeada, para que o
  autor do teste distinga "ordenei mal os valores do mock" de
  "fiz stub duas vezes do mesmo alvo"
- Facilitar o mapeamento determinístico para DoublesErrorPayload
- Nenhuma falha é silenciada nem convertida em fallback

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- `code` é o identificador estável usado em payloads, traces e relatórios.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from .errors import DoublesErrorPayload


@dataclass(eq=False)
class DoublesException(Exception):
    """Base class para exceções internas do Atlas Doubles.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    code: ClassVar[str] = "DOUBLES_ERROR"

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    @classmethod
    def from_payload(cls, payload: DoublesErrorPayload) -> "DoublesException":
        return cls(
            message=payload.message,
            details=dict(payload.details),
            hint=payload.hint,
        )

    def to_payload(self) -> DoublesErrorPayload:
        return DoublesErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Registro
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class DuplicateRegistration(DoublesException):
    """Alvo já possui um double ativo no mesmo Scope."""

    code: ClassVar[str] = "DUPLICATE_REGISTRATION"


@dataclass(eq=False)
class TargetNotFound(DoublesException, LookupError):
    """Identificador de alvo não pôde ser resolvido para um atributo existente."""

    code: ClassVar[str] = "TARGET_NOT_FOUND"


@dataclass(eq=False)
class TargetNotCallable(DoublesException):
    """Atributo resolvido não é chamável e não pode ser substituído por um double."""

    code: ClassVar[str] = "TARGET_NOT_CALLABLE"


# ---------------------------------------------------------------------------
# Invocação
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ExhaustedSequence(DoublesException):
    """Mock chamado mais vezes do que valores programados."""

    code: ClassVar[str] = "EXHAUSTED_SEQUENCE"


@dataclass(eq=False)
class SignatureMismatch(DoublesException, TypeError):
    """Chamada ao double não seria aceita pela assinatura do alvo real."""

    code: ClassVar[str] = "SIGNATURE_MISMATCH"


# ---------------------------------------------------------------------------
# Introspecção
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class UnknownTarget(DoublesException, LookupError):
    """Introspecção sobre alvo que nunca teve double registrado no Scope."""

    code: ClassVar[str] = "UNKNOWN_TARGET"


@dataclass(eq=False)
class CallNotRecorded(DoublesException, IndexError):
    """Ordinal de chamada solicitado não existe no call log."""

    code: ClassVar[str] = "CALL_NOT_RECORDED"


# ---------------------------------------------------------------------------
# Ciclo de vida do Scope
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ScopeClosedError(DoublesException):
    """Registro tentado em um Scope já encerrado."""

    code: ClassVar[str] = "SCOPE_CLOSED"


@dataclass(eq=False)
class ScopeOrderError(DoublesException):
    """Teardown fora da ordem de abertura (Scope interno ainda aberto)."""

    code: ClassVar[str] = "SCOPE_ORDER"
