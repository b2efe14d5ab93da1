# src/atlas_doubles/__init__.py
"""
Atlas Doubles — stubs e mocks com escopo para testes unitários.

Este pacote raiz define o namespace público do Atlas Doubles, um facility
para isolar a unidade sob teste de suas dependências:

    - stub: a dependência retorna sempre o mesmo valor
    - mock: a dependência retorna uma sequência programada de valores
    - toda chamada interceptada é registrada (CallRecord) para asserções
    - todo alvo substituído é restaurado ao fim do Scope, com ou sem falha

Arquitetura em alto nível:
    - core.config       → settings (YAML/JSON, deep-merge, hashing)
    - core.doubles      → DoubleRegistry, Scope, Double
    - core.traceability → ScopeTrace
    - assertions        → expect_called, expect_args
    - report            → call log em DataFrame e relatório Markdown
    - pytest_plugin     → fixtures `doubles`, `doubles_registry`

Exemplo:

    registry = DoubleRegistry()
    with registry.scope() as scope:
        scope.mock("calc.x_fn", [3000, 5000])
        assert calc.xy_fn(50, 60) == 3062
"""
# src/atlas_doubles/__init__.py
from .assertions import expect_args, expect_called, expect_not_called
from .core.config import DoublesSettings, load_settings
from .core.doubles import CallRecord, Double, DoubleKind, DoubleRegistry, Raise, Scope
from .core.exceptions import (
    CallNotRecorded,
    DoublesException,
    DuplicateRegistration,
    ExhaustedSequence,
    ScopeClosedError,
    ScopeOrderError,
    SignatureMismatch,
    TargetNotCallable,
    TargetNotFound,
    UnknownTarget,
)

__version__ = "0.1.0"

__all__ = [
    "CallNotRecorded",
    "CallRecord",
    "Double",
    "DoubleKind",
    "DoubleRegistry",
    "DoublesException",
    "DoublesSettings",
    "DuplicateRegistration",
    "ExhaustedSequence",
    "Raise",
    "Scope",
    "ScopeClosedError",
    "ScopeOrderError",
    "SignatureMismatch",
    "TargetNotCallable",
    "TargetNotFound",
    "UnknownTarget",
    "expect_args",
    "expect_called",
    "expect_not_called",
    "load_settings",
]
