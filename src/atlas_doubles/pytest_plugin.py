"""
Plugin pytest do Atlas Doubles.

Habilitação (conftest.py do projeto de testes):

    pytest_plugins = ["atlas_doubles.pytest_plugin"]

Fixtures:
    - doubles_settings → settings da sessão (defaults + `atlas_doubles_config`)
    - doubles_registry → um `DoubleRegistry` novo por teste
    - doubles          → um `Scope` aberto por teste, encerrado após o teste
                         com ou sem falha

Configuração (ini):
    [pytest]
    atlas_doubles_config = tests/doubles.local.yaml

O caminho é relativo ao rootdir do pytest.
"""

from __future__ import annotations

import pytest

from atlas_doubles.core.config.settings import load_settings
from atlas_doubles.core.doubles.registry import DoubleRegistry

INI_CONFIG = "atlas_doubles_config"


def pytest_addoption(parser):
    parser.addini(
        INI_CONFIG,
        help="Arquivo YAML/JSON com overrides das settings do Atlas Doubles.",
        default="",
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"_atlas_doubles_{rep.when}", rep)


@pytest.fixture(scope="session")
def doubles_settings(pytestconfig):
    local = pytestconfig.getini(INI_CONFIG)
    local_path = str(pytestconfig.rootpath / local) if local else None
    return load_settings(local_path=local_path)


@pytest.fixture
def doubles_registry(doubles_settings):
    registry = DoubleRegistry(settings=doubles_settings)
    yield registry
    registry.teardown_all()


@pytest.fixture
def doubles(request, doubles_registry):
    scope = doubles_registry.scope(name=request.node.nodeid)
    yield scope
    rep = getattr(request.node, "_atlas_doubles_call", None)
    outcome = "failed" if rep is None or rep.failed else "passed"
    doubles_registry.teardown_all(outcome=outcome)
