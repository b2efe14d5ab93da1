# tests/core/doubles/test_invoke_passthrough.py
"""
Testes do ponto de interceptação explícito `DoubleRegistry.invoke`.

Os testes asseguram que:
- sem double ativo, invoke chama o alvo real, sem registro
- com double ativo, invoke é equivalente a chamar o alvo pelo owner
- o double mais interno (Scope aninhado) é o que responde
"""

import pytest

from atlas_doubles.core.exceptions import ExhaustedSequence, TargetNotFound


def test_invoke_without_double_calls_real_target(registry):
    assert registry.invoke("tests.fixtures.units.calc.x_fn", 5) == 6
    assert registry.invoke("tests.fixtures.units.calc.xy_fn", 5, 10) == 18


def test_invoke_with_active_double_records_call(registry, calc):
    with registry.scope() as scope:
        scope.mock("tests.fixtures.units.calc.x_fn", [3000, 5000])

        assert registry.invoke("tests.fixtures.units.calc.x_fn", 50) == 3000
        # chamada direta e via invoke compartilham o mesmo call log
        assert calc.x_fn(50) == 5000
        with pytest.raises(ExhaustedSequence):
            registry.invoke("tests.fixtures.units.calc.x_fn", 50)

        assert scope.call_count("tests.fixtures.units.calc.x_fn") == 2


def test_invoke_after_teardown_uses_real_target(registry):
    with registry.scope() as scope:
        scope.stub("tests.fixtures.units.calc.y_fn", 0)
        assert registry.invoke("tests.fixtures.units.calc.y_fn", 1) == 0

    assert registry.invoke("tests.fixtures.units.calc.y_fn", 1) == 3
    assert scope.call_count("tests.fixtures.units.calc.y_fn") == 1


def test_invoke_unknown_target_raises(registry):
    with pytest.raises(TargetNotFound):
        registry.invoke("tests.fixtures.units.calc.nope", 1)


def test_active_returns_innermost_double(registry):
    assert registry.active("tests.fixtures.units.calc.x_fn") is None

    with registry.scope() as outer:
        outer_double = outer.stub("tests.fixtures.units.calc.x_fn", 1)
        assert registry.active("tests.fixtures.units.calc.x_fn") is outer_double

        with registry.scope() as inner:
            inner_double = inner.stub("tests.fixtures.units.calc.x_fn", 2)
            assert registry.active("tests.fixtures.units.calc.x_fn") is inner_double
            assert registry.invoke("tests.fixtures.units.calc.x_fn", 0) == 2

        assert registry.active("tests.fixtures.units.calc.x_fn") is outer_double

    assert registry.active("tests.fixtures.units.calc.x_fn") is None
    assert registry.active("tests.fixtures.units.calc.missing") is None
