# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Doubles.

Este módulo define fixtures reutilizáveis que fornecem:
- settings mínimas e determinísticas (sem leitura de arquivo)
- relógio fixo para timestamps previsíveis no ScopeTrace
- um DoubleRegistry isolado por teste
- o módulo de unidades sob teste (`tests.fixtures.units.calc`)
- YAMLs de configuração semelhantes ao uso real

Decisões arquiteturais:
    - Cada teste recebe seu próprio registry; nenhum estado é global
    - Todo registry criado aqui é encerrado no teardown do fixture,
      mesmo quando o teste falha
    - O plugin pytest do próprio pacote é habilitado para testar as
      fixtures públicas (`doubles`, `doubles_registry`)

Invariantes:
    - Nenhum fixture deixa alvos substituídos após o teste
    - Timestamps são UTC e avançam um segundo por leitura
"""

from datetime import datetime, timedelta, timezone

import pytest

pytest_plugins = ["atlas_doubles.pytest_plugin", "pytester"]


@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    Fixture que fornece um YAML de defaults semelhante ao distribuído pelo pacote.

    Returns:
        str: Conteúdo YAML representando a configuração base.
    """
    return """\
doubles:
  signature_policy: strict
  snapshot_args: false
trace:
  enabled: true
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """
    Fixture que fornece um YAML de override local.

    Representa apenas overrides: relaxa a política de assinatura e liga o
    snapshot de argumentos, preservando `trace.enabled` dos defaults.
    """
    return """\
doubles:
  signature_policy: permissive
  snapshot_args: true
"""


@pytest.fixture
def fixed_clock():
    """
    Relógio determinístico: começa em 2026-01-16T00:00:00Z e avança 1s por chamada.

    Returns:
        Callable[[], datetime]: fonte de timestamps para o registry.
    """
    start = datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc)
    ticks = {"n": 0}

    def _clock() -> datetime:
        ts = start + timedelta(seconds=ticks["n"])
        ticks["n"] += 1
        return ts

    return _clock


@pytest.fixture
def strict_settings():
    from atlas_doubles.core.config.settings import DoublesSettings

    return DoublesSettings.from_config(
        {
            "doubles": {"signature_policy": "strict", "snapshot_args": False},
            "trace": {"enabled": True},
        }
    )


@pytest.fixture
def permissive_settings():
    from atlas_doubles.core.config.settings import DoublesSettings

    return DoublesSettings.from_config(
        {
            "doubles": {"signature_policy": "permissive", "snapshot_args": False},
            "trace": {"enabled": True},
        }
    )


@pytest.fixture
def registry(strict_settings, fixed_clock):
    """
    DoubleRegistry isolado com política estrita e relógio fixo.

    O teardown encerra qualquer Scope deixado aberto pelo teste, para que
    nenhum alvo substituído vaze para o teste seguinte.
    """
    from atlas_doubles.core.doubles.registry import DoubleRegistry

    reg = DoubleRegistry(settings=strict_settings, clock=fixed_clock)
    yield reg
    reg.teardown_all(outcome="failed")


@pytest.fixture
def calc():
    """Módulo de unidades sob teste (x_fn, y_fn, xy_fn, Account, ...)."""
    from tests.fixtures.units import calc as module

    return module
