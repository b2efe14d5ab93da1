# src/atlas_doubles/core/__init__.py
"""
Core do Atlas Doubles.

Este pacote reúne a implementação canônica do facility de test doubles,
independente de test runner.

Componentes principais:
    - config       → carregamento, merge, hashing e validação das settings
    - doubles      → Double, Scope, DoubleRegistry e resolução de alvos
    - traceability → ScopeTrace (Event Log ordenado de cada Scope)
    - errors       → payload canônico e catálogo de códigos de erro
    - exceptions   → exceções tipadas levantadas pelo registry

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo uso incorreto levanta exceção nomeada
    - Restauração garantida: nenhum double sobrevive ao seu Scope
    - Estado é isolado por registry; não há estado global

Limites explícitos:
    - Não depende de pytest (ver `atlas_doubles.pytest_plugin`)
    - Não gera relatórios (ver `atlas_doubles.report`)
"""
