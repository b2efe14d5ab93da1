"""
Rastreabilidade de Scopes do Atlas Doubles.

Exposição pública do ScopeTrace (Event Log ordenado de registro,
invocação e restauração de doubles) e de sua persistência em JSON.
"""

from .trace import (
    EVENT_DOUBLE_EXHAUSTED,
    EVENT_DOUBLE_INVOKED,
    EVENT_DOUBLE_REGISTERED,
    EVENT_DOUBLE_RESTORED,
    EVENT_RESTORE_FAILED,
    EVENT_SCOPE_CLOSED,
    EVENT_SCOPE_OPENED,
    EVENT_SIGNATURE_MISMATCH,
    ScopeTrace,
    add_event,
    create_trace,
    load_trace,
    save_trace,
)

__all__ = [
    "EVENT_DOUBLE_EXHAUSTED",
    "EVENT_DOUBLE_INVOKED",
    "EVENT_DOUBLE_REGISTERED",
    "EVENT_DOUBLE_RESTORED",
    "EVENT_RESTORE_FAILED",
    "EVENT_SCOPE_CLOSED",
    "EVENT_SCOPE_OPENED",
    "EVENT_SIGNATURE_MISMATCH",
    "ScopeTrace",
    "add_event",
    "create_trace",
    "load_trace",
    "save_trace",
]
