# src/atlas_doubles/core/traceability/trace.py
"""
ScopeTrace v1 — rastreabilidade de um Scope de test doubles.

Este módulo define a estrutura e as operações canônicas do ScopeTrace,
o registro ordenado de tudo o que aconteceu com os doubles de um Scope:
registro, cada invocação interceptada, esgotamento de sequência,
chamadas rejeitadas pela assinatura e restauração do alvo original.

O ScopeTrace consolida, de forma determinística e auditável:
    - metadados do Scope (scope_id, nome, abertura e encerramento)
    - hash das settings com que o Scope foi aberto
    - estado incremental de cada double
    - Event Log ordenado de eventos explícitos

Princípios fundamentais:
    - Nenhum evento é emitido implicitamente
    - A ordem do Event Log reflete a ordem real das chamadas
    - O ScopeTrace é serializável e reconstruível (round-trip)
    - Argumentos de chamadas são registrados por `repr`, nunca por referência

Decisões arquiteturais:
    - UTC é o timezone canônico para todos os timestamps
    - O formato de persistência é JSON determinístico
    - O trace não conhece o registry; quem registra eventos é o Scope

Limites explícitos:
    - Não intercepta chamadas
    - Não decide políticas (assinatura, snapshot de argumentos)
    - Não realiza migração de versões de schema
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

EVENT_SCOPE_OPENED = "scope_opened"
EVENT_DOUBLE_REGISTERED = "double_registered"
EVENT_DOUBLE_INVOKED = "double_invoked"
EVENT_DOUBLE_EXHAUSTED = "double_exhausted"
EVENT_SIGNATURE_MISMATCH = "signature_mismatch"
EVENT_DOUBLE_RESTORED = "double_restored"
EVENT_RESTORE_FAILED = "restore_failed"
EVENT_SCOPE_CLOSED = "scope_closed"


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """
    Normaliza um timestamp para timezone-aware em UTC.

    Timestamps timezone-naive são assumidos como UTC; timestamps com
    timezone são convertidos.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ScopeTrace:
    """
    ScopeTrace v1 — registro de um Scope de test doubles.

    Campos principais:
        - scope: metadados (scope_id, name, opened_at, closed_at)
        - inputs: identidade das settings (config_hash)
        - doubles: estado incremental de cada double, indexado pelo nome do alvo
        - events: Event Log ordenado

    Invariantes:
        - `doubles` é sempre um dicionário indexado pelo nome do alvo
        - `events` é sempre uma lista ordenada
        - A estrutura completa é serializável em JSON
    """

    scope: Dict[str, Any]
    inputs: Dict[str, Any]
    doubles: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Cópia serializável e independente do estado interno."""
        return {
            "scope": dict(self.scope),
            "inputs": dict(self.inputs),
            "doubles": {k: dict(v) for k, v in self.doubles.items()},
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScopeTrace":
        """Reconstrução estrutural e permissiva; campos ausentes iniciam vazios."""
        return cls(
            scope=dict(data.get("scope", {})),
            inputs=dict(data.get("inputs", {})),
            doubles={k: dict(v) for k, v in (data.get("doubles", {}) or {}).items()},
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


TraceLike = Union[ScopeTrace, Dict[str, Any]]


def _get_trace(trace: TraceLike) -> Tuple[ScopeTrace, bool]:
    if isinstance(trace, ScopeTrace):
        return trace, False
    return ScopeTrace.from_dict(trace), True


def _sync_back(original: TraceLike, trace: ScopeTrace, is_dict: bool) -> None:
    if is_dict:
        original.clear()  # type: ignore[union-attr]
        original.update(trace.to_dict())  # type: ignore[union-attr]


def create_trace(
    *,
    scope_id: str,
    opened_at: datetime,
    config_hash: str,
    name: Optional[str] = None,
) -> ScopeTrace:
    """
    Cria o ScopeTrace inicial de um Scope.

    ⚠️ Importante: esta função **não emite eventos implicitamente**.
    O evento `scope_opened` é responsabilidade de quem abre o Scope.

    Args:
        scope_id (str): Identificador único do Scope.
        opened_at (datetime): Timestamp de abertura.
        config_hash (str): Hash das settings efetivas.
        name (Optional[str]): Nome legível (ex.: nodeid do teste).

    Returns:
        ScopeTrace: Trace inicializado, sem doubles e sem eventos.
    """
    return ScopeTrace(
        scope={
            "scope_id": scope_id,
            "name": name,
            "opened_at": _iso(opened_at),
            "closed_at": None,
        },
        inputs={"config_hash": config_hash},
        doubles={},
        events=[],
    )


def add_event(
    trace: TraceLike,
    *,
    event_type: str,
    ts: datetime,
    target: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Adiciona um evento explícito ao Event Log.

    Cada chamada adiciona exatamente um evento; eventos não são
    reordenados nem deduplicados.

    Args:
        trace (TraceLike): Trace a ser atualizado (objeto ou dict).
        event_type (str): Tipo do evento (ex.: double_invoked).
        ts (datetime): Timestamp do evento.
        target (Optional[str]): Nome do alvo associado, se aplicável.
        payload (Optional[Dict[str, Any]]): Dados adicionais serializáveis.
    """
    t, is_dict = _get_trace(trace)
    ev: Dict[str, Any] = {"event_type": event_type, "timestamp": _iso(ts)}
    if target is not None:
        ev["target"] = target
    if payload is not None:
        ev["payload"] = payload
    t.events.append(ev)
    _sync_back(trace, t, is_dict)


def double_registered(
    trace: TraceLike,
    *,
    target: str,
    kind: str,
    ts: datetime,
    programmed: Optional[int] = None,
) -> None:
    """Marca o double como ativo e registra `double_registered`."""
    t, is_dict = _get_trace(trace)
    t.doubles[target] = {
        "target": target,
        "kind": kind,
        "status": "active",
        "registered_at": _iso(ts),
        "programmed": programmed,
        "calls": 0,
    }
    add_event(t, event_type=EVENT_DOUBLE_REGISTERED, ts=ts, target=target, payload={"kind": kind, "programmed": programmed})
    _sync_back(trace, t, is_dict)


def double_invoked(
    trace: TraceLike,
    *,
    target: str,
    ordinal: int,
    args_repr: str,
    kwargs_repr: str,
    ts: datetime,
) -> None:
    t, is_dict = _get_trace(trace)
    state = t.doubles.setdefault(target, {"target": target})
    state["calls"] = ordinal
    add_event(
        t,
        event_type=EVENT_DOUBLE_INVOKED,
        ts=ts,
        target=target,
        payload={"ordinal": ordinal, "args": args_repr, "kwargs": kwargs_repr},
    )
    _sync_back(trace, t, is_dict)


def double_failed(
    trace: TraceLike,
    *,
    target: str,
    event_type: str,
    ts: datetime,
    error: Dict[str, Any],
) -> None:
    """
    Registra uma chamada rejeitada pelo double.

    Usado para `double_exhausted` e `signature_mismatch`. O estado do double
    guarda o último erro; o número de chamadas registradas não muda.
    """
    t, is_dict = _get_trace(trace)
    state = t.doubles.setdefault(target, {"target": target})
    state["last_error"] = error
    add_event(t, event_type=event_type, ts=ts, target=target, payload={"error": error})
    _sync_back(trace, t, is_dict)


def double_restored(
    trace: TraceLike,
    *,
    target: str,
    ts: datetime,
    calls: int,
) -> None:
    t, is_dict = _get_trace(trace)
    state = t.doubles.setdefault(target, {"target": target})
    state.update({"status": "restored", "restored_at": _iso(ts), "calls": calls})
    add_event(t, event_type=EVENT_DOUBLE_RESTORED, ts=ts, target=target, payload={"calls": calls})
    _sync_back(trace, t, is_dict)


def scope_closed(trace: TraceLike, *, ts: datetime, outcome: str) -> None:
    """Registra o encerramento do Scope (`outcome`: passed | failed)."""
    t, is_dict = _get_trace(trace)
    t.scope["closed_at"] = _iso(ts)
    t.scope["outcome"] = outcome
    add_event(t, event_type=EVENT_SCOPE_CLOSED, ts=ts, payload={"outcome": outcome})
    _sync_back(trace, t, is_dict)


def save_trace(trace: TraceLike, path: Path) -> None:
    """
    Persiste um ScopeTrace em JSON determinístico (chaves ordenadas).

    Raises:
        OSError: Em caso de falha ao criar diretórios ou escrever o arquivo.
        TypeError: Se algum payload não for serializável.
    """
    data = trace.to_dict() if isinstance(trace, ScopeTrace) else trace
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")


def load_trace(path: Path) -> ScopeTrace:
    data = json.loads(path.read_text(encoding="utf-8"))
    return ScopeTrace.from_dict(data)
