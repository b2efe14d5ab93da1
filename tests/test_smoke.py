# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Atlas Doubles.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o pacote pode ser importado sem falhas estruturais
- a API pública esperada está exposta no pacote raiz

Limites explícitos:
    - Não testar comportamento de doubles
    - Não acumular asserts funcionais
"""


def test_smoke():
    import atlas_doubles

    assert atlas_doubles.__version__
    for name in atlas_doubles.__all__:
        assert hasattr(atlas_doubles, name), name
