# tests/core/doubles/test_mock_sequence.py
"""
Testes de mocks (sequência programada) do DoubleRegistry.

Os testes asseguram que:
- a N-ésima chamada retorna o N-ésimo valor programado
- chamar além do fim da sequência levanta ExhaustedSequence
- a sequência não é reciclada nem substituída por um default
- a chamada rejeitada não é registrada nem avança o cursor

Limites explícitos:
    - Não valida política de assinatura (ver test_signature_policy.py)
"""

import pytest

from atlas_doubles.core.doubles.types import DoubleKind, Raise
from atlas_doubles.core.exceptions import ExhaustedSequence


def test_mock_example_with_unstubbed_dependency(registry, calc):
    """
    Verifica o exemplo canônico: Mock(x_fn, [3000, 5000]) com y_fn real (y + 2).

    xy_fn(50, 60) retorna 3062 e depois 5062; a terceira chamada falha
    com ExhaustedSequence.
    """
    with registry.scope() as scope:
        scope.mock("tests.fixtures.units.calc.x_fn", [3000, 5000])

        assert calc.xy_fn(50, 60) == 3062
        assert calc.xy_fn(50, 60) == 5062

        with pytest.raises(ExhaustedSequence) as excinfo:
            calc.xy_fn(50, 60)

        assert excinfo.value.details["programmed"] == 2
        assert excinfo.value.details["attempted_call"] == 3
        assert excinfo.value.details["target"] == "tests.fixtures.units.calc.x_fn"


def test_exhausted_call_is_not_recorded(registry, calc):
    with registry.scope() as scope:
        double = scope.mock("tests.fixtures.units.calc.x_fn", [1])

        assert calc.x_fn(0) == 1
        with pytest.raises(ExhaustedSequence):
            calc.x_fn(0)
        with pytest.raises(ExhaustedSequence):
            calc.x_fn(0)

        assert double.call_count == 1
        assert double.cursor == 1


def test_empty_sequence_fails_on_first_call(registry, calc):
    with registry.scope() as scope:
        scope.mock("tests.fixtures.units.calc.x_fn", [])
        with pytest.raises(ExhaustedSequence):
            calc.x_fn(1)
        assert scope.call_count("tests.fixtures.units.calc.x_fn") == 0


def test_mock_accepts_any_iterable_and_rejects_strings(registry):
    with registry.scope() as scope:
        double = scope.mock("tests.fixtures.units.calc.collect", (n for n in (3, 4)))
        assert double.kind is DoubleKind.MOCK
        assert double.values == (3, 4)

        with pytest.raises(TypeError):
            scope.mock("tests.fixtures.units.calc.y_fn", "abc")


def test_mock_values_follow_call_order_across_callers(registry, calc):
    with registry.scope() as scope:
        scope.mock("tests.fixtures.units.calc.collect", [10, 20, 30])

        assert calc.collect_all([[1], [1, 2], [1, 2, 3]]) == [10, 20, 30]
        assert [r.args for r in scope.calls("tests.fixtures.units.calc.collect")] == [
            ([1],),
            ([1, 2],),
            ([1, 2, 3],),
        ]


def test_mock_can_script_a_failing_call(registry, calc):
    with registry.scope() as scope:
        scope.mock(
            "tests.fixtures.units.calc.fetch",
            [{"values": [1, 1]}, Raise(ConnectionError("reset by peer"))],
        )

        assert calc.load_total("https://example.test/1") == 2
        with pytest.raises(ConnectionError):
            calc.load_total("https://example.test/2")

        assert scope.call_count("tests.fixtures.units.calc.fetch") == 2


def test_reset_rewinds_sequence_and_clears_log(registry, calc):
    with registry.scope() as scope:
        scope.mock("tests.fixtures.units.calc.x_fn", [1, 2])
        assert calc.x_fn(0) == 1

        scope.reset("tests.fixtures.units.calc.x_fn")

        assert scope.call_count("tests.fixtures.units.calc.x_fn") == 0
        assert calc.x_fn(0) == 1
        assert calc.x_fn(0) == 2
