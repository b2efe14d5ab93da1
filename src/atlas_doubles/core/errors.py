"""
Atlas Doubles — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Atlas Doubles.
Erros de uso do registry fazem parte do contrato do facility e devem ser:

- explícitos
- serializáveis
- rastreáveis (ScopeTrace, relatório do Scope)
- acionáveis (hint indica onde corrigir o teste)

Nenhum uso incorreto é silenciado.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DoublesErrorPayload:
    """
    Payload canônico de erro do Atlas Doubles.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao autor do teste
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Registro
DUPLICATE_REGISTRATION = "DUPLICATE_REGISTRATION"
TARGET_NOT_FOUND = "TARGET_NOT_FOUND"
TARGET_NOT_CALLABLE = "TARGET_NOT_CALLABLE"

# Invocação
EXHAUSTED_SEQUENCE = "EXHAUSTED_SEQUENCE"
SIGNATURE_MISMATCH = "SIGNATURE_MISMATCH"

# Introspecção
UNKNOWN_TARGET = "UNKNOWN_TARGET"
CALL_NOT_RECORDED = "CALL_NOT_RECORDED"

# Ciclo de vida
SCOPE_CLOSED = "SCOPE_CLOSED"
SCOPE_ORDER = "SCOPE_ORDER"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def duplicate_registration(
    *,
    target: str,
    scope_id: str,
    active_kind: str,
    hint: str = "Remova o registro duplicado ou encerre o Scope antes de registrar o alvo novamente.",
) -> DoublesErrorPayload:
    return DoublesErrorPayload(
        type=DUPLICATE_REGISTRATION,
        message=f"Alvo já possui double ativo neste Scope: {target}",
        details={
            "target": target,
            "scope_id": scope_id,
            "active_kind": active_kind,
        },
        hint=hint,
    )


def target_not_found(
    *,
    target: str,
    reason: str,
    hint: str = "Verifique o caminho pontilhado (módulo.atributo) ou o par (owner, atributo) informado.",
) -> DoublesErrorPayload:
    return DoublesErrorPayload(
        type=TARGET_NOT_FOUND,
        message=f"Alvo não encontrado: {target}",
        details={"target": target, "reason": reason},
        hint=hint,
    )


def target_not_callable(
    *,
    target: str,
    actual_type: str,
    hint: str = "Apenas atributos chamáveis podem receber stub ou mock.",
) -> DoublesErrorPayload:
    return DoublesErrorPayload(
        type=TARGET_NOT_CALLABLE,
        message=f"Alvo não é chamável: {target}",
        details={"target": target, "actual_type": actual_type},
        hint=hint,
    )


def exhausted_sequence(
    *,
    target: str,
    programmed: int,
    attempted_call: int,
    hint: str = "Programe um valor para cada chamada esperada ou revise quantas vezes a unidade chama o alvo.",
) -> DoublesErrorPayload:
    return DoublesErrorPayload(
        type=EXHAUSTED_SEQUENCE,
        message=f"Sequência do mock esgotada para {target}",
        details={
            "target": target,
            "programmed": programmed,
            "attempted_call": attempted_call,
        },
        hint=hint,
    )


def signature_mismatch(
    *,
    target: str,
    signature: str,
    reason: str,
    hint: str = "A unidade chamou o alvo com argumentos que o alvo real rejeitaria; use signature_policy: permissive para aceitar qualquer chamada.",
) -> DoublesErrorPayload:
    return DoublesErrorPayload(
        type=SIGNATURE_MISMATCH,
        message=f"Chamada incompatível com a assinatura de {target}{signature}",
        details={"target": target, "signature": signature, "reason": reason},
        hint=hint,
    )


def unknown_target(
    *,
    target: str,
    scope_id: str,
    registered: list,
    hint: str = "Registre um stub ou mock para o alvo antes de inspecionar suas chamadas.",
) -> DoublesErrorPayload:
    return DoublesErrorPayload(
        type=UNKNOWN_TARGET,
        message=f"Nenhum double registrado para {target} neste Scope",
        details={"target": target, "scope_id": scope_id, "registered": registered},
        hint=hint,
    )


def call_not_recorded(
    *,
    target: str,
    ordinal: int,
    call_count: int,
) -> DoublesErrorPayload:
    return DoublesErrorPayload(
        type=CALL_NOT_RECORDED,
        message=f"Chamada #{ordinal} não registrada para {target}",
        details={"target": target, "ordinal": ordinal, "call_count": call_count},
        hint="Ordinais começam em 1 e vão até o número de chamadas registradas.",
    )


def scope_closed(*, scope_id: str, operation: str) -> DoublesErrorPayload:
    return DoublesErrorPayload(
        type=SCOPE_CLOSED,
        message=f"Scope {scope_id} já foi encerrado",
        details={"scope_id": scope_id, "operation": operation},
        hint="Abra um novo Scope para registrar doubles.",
    )


def scope_order(*, scope_id: str, open_inner: str) -> DoublesErrorPayload:
    return DoublesErrorPayload(
        type=SCOPE_ORDER,
        message=f"Scope {scope_id} encerrado antes do Scope interno {open_inner}",
        details={"scope_id": scope_id, "open_inner": open_inner},
        hint="Encerre Scopes na ordem inversa de abertura.",
    )


def scope_not_current(*, scope_id: str, open_inner: str, operation: str) -> DoublesErrorPayload:
    return DoublesErrorPayload(
        type=SCOPE_ORDER,
        message=f"Scope {scope_id} não é o Scope atual: o Scope interno {open_inner} ainda está aberto",
        details={"scope_id": scope_id, "open_inner": open_inner, "operation": operation},
        hint="Registre doubles apenas no Scope mais interno, ou encerre o Scope interno antes.",
    )


def exception_to_payload(exc: BaseException) -> DoublesErrorPayload:
    """Converte qualquer exceção em payload serializável (sem stack trace)."""
    to_payload = getattr(exc, "to_payload", None)
    if callable(to_payload):
        return to_payload()
    return DoublesErrorPayload(
        type=exc.__class__.__name__,
        message=str(exc) or exc.__class__.__name__,
        details={"exception_class": exc.__class__.__name__},
    )
