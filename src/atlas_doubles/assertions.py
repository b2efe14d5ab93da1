"""
Helpers de asserção sobre call logs.

Mensagens de falha citam o alvo, o esperado e o observado, para que o
autor do teste não precise inspecionar o Scope manualmente.

Exemplo::

    expect_called(scope, "calc.x_fn", 2)
    expect_args(scope, "calc.x_fn", 1, 50)
"""

from __future__ import annotations

from typing import Any

from atlas_doubles.core.doubles.scope import Scope


def expect_called(scope: Scope, target: Any, n: int, /) -> None:
    """Falha se o double de `target` não recebeu exatamente `n` chamadas."""
    double = scope.double(target)
    actual = double.call_count
    if actual != n:
        raise AssertionError(
            f"{double.target.name}: esperado {n} chamada(s), recebido {actual}"
        )


def expect_not_called(scope: Scope, target: Any, /) -> None:
    expect_called(scope, target, 0)


def expect_args(scope: Scope, target: Any, ordinal: int, /, *args: Any, **kwargs: Any) -> None:
    """
    Falha se a chamada `ordinal` (começa em 1) não recebeu exatamente `args`/`kwargs`.

    Os três primeiros parâmetros são apenas posicionais, para que `kwargs`
    possa conter nomes como `target` ou `scope` do alvo real.

    Raises:
        AssertionError: Se os argumentos divergirem.
        CallNotRecorded: Se a chamada `ordinal` não existir.
    """
    record = scope.call_args(target, ordinal)
    if not record.matches(*args, **kwargs):
        name = scope.double(target).target.name
        raise AssertionError(
            f"{name} chamada #{ordinal}: esperado args={args!r} kwargs={kwargs!r}, "
            f"recebido args={record.args!r} kwargs={dict(record.kwargs)!r}"
        )
