# tests/core/doubles/test_registry_duplicate_registration.py
"""
Testes de rejeição de registro duplicado.

Os testes asseguram que:
- registrar um segundo double para um alvo já ativo no mesmo Scope falha
- a falha acontece no momento do registro, não na invocação
- o double original permanece ativo e intacto após a rejeição
- o mesmo alvo pode ser registrado novamente em outro Scope
"""

import pytest

from atlas_doubles.core.exceptions import DuplicateRegistration


def test_stub_then_stub_same_target_is_rejected(registry, calc):
    with registry.scope(scope_id="dup-1") as scope:
        scope.stub("tests.fixtures.units.calc.x_fn", 1)

        with pytest.raises(DuplicateRegistration) as excinfo:
            scope.stub("tests.fixtures.units.calc.x_fn", 2)

        err = excinfo.value
        assert err.code == "DUPLICATE_REGISTRATION"
        assert err.details == {
            "target": "tests.fixtures.units.calc.x_fn",
            "scope_id": "dup-1",
            "active_kind": "stub",
        }

        # o primeiro double continua valendo
        assert calc.x_fn(0) == 1
        assert scope.call_count("tests.fixtures.units.calc.x_fn") == 1


def test_mock_then_stub_same_target_is_rejected(registry):
    with registry.scope() as scope:
        scope.mock("tests.fixtures.units.calc.y_fn", [1, 2])

        with pytest.raises(DuplicateRegistration) as excinfo:
            scope.stub("tests.fixtures.units.calc.y_fn", 3)

        assert excinfo.value.details["active_kind"] == "mock"


def test_duplicate_detected_across_target_forms(registry, calc):
    """
    Verifica que a identidade do alvo independe da forma usada para nomeá-lo.

    Caminho pontilhado, par (owner, atributo) e a função original apontam
    para o mesmo alvo.
    """
    original = calc.x_fn
    with registry.scope() as scope:
        scope.stub("tests.fixtures.units.calc.x_fn", 1)

        with pytest.raises(DuplicateRegistration):
            scope.stub((calc, "x_fn"), 2)
        with pytest.raises(DuplicateRegistration):
            scope.mock(original, [2])


def test_same_target_in_sequential_scopes_is_allowed(registry, calc):
    with registry.scope() as first:
        first.stub("tests.fixtures.units.calc.x_fn", 1)
        assert calc.x_fn(0) == 1

    with registry.scope() as second:
        second.stub("tests.fixtures.units.calc.x_fn", 2)
        assert calc.x_fn(0) == 2


def test_distinct_targets_in_same_scope_are_independent(registry, calc):
    with registry.scope() as scope:
        scope.stub("tests.fixtures.units.calc.x_fn", 1)
        scope.stub("tests.fixtures.units.calc.y_fn", 2)

        calc.x_fn(0)
        calc.x_fn(0)
        calc.y_fn(0)

        assert scope.call_count("tests.fixtures.units.calc.x_fn") == 2
        assert scope.call_count("tests.fixtures.units.calc.y_fn") == 1
        assert [d.target.name for d in scope.doubles] == [
            "tests.fixtures.units.calc.x_fn",
            "tests.fixtures.units.calc.y_fn",
        ]
