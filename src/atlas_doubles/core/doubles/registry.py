"""
Registro canônico de test doubles.

Este módulo define o `DoubleRegistry`, responsável por associar alvos a
doubles ativos enquanto um Scope está aberto e por garantir que o alvo
original seja restaurado exatamente no encerramento do Scope.

Responsabilidades do módulo:
    - Abrir Scopes (um por caso de teste) e controlar sua ordem de encerramento
    - Instalar e desinstalar doubles nos owners dos alvos
    - Expor o ponto de interceptação explícito (`invoke`)

Decisões arquiteturais:
    - Execução síncrona e single-thread: nenhum lock é utilizado
    - Paralelismo entre testes exige um registry por worker
    - Scopes podem ser aninhados; o double do Scope interno sombreia o do
      externo e, ao ser restaurado, devolve o double externo ao owner
    - Erros de uso são exceções nomeadas, levantadas no ponto da violação

Invariantes:
    - Scopes são encerrados na ordem inversa de abertura
    - Para cada alvo, a pilha de doubles ativos reflete a ordem de registro
    - Restaurar um double já restaurado não tem efeito

Limites explícitos:
    - Não executa testes
    - Não decide políticas de assinatura (ver `DoublesSettings`)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from atlas_doubles.core.config.settings import DoublesSettings, load_settings
from atlas_doubles.core.errors import scope_order
from atlas_doubles.core.exceptions import ScopeOrderError, TargetNotCallable, TargetNotFound
from atlas_doubles.core.traceability.trace import utc_now

from .double import Double
from .scope import Scope
from .target import resolve_target


@dataclass
class DoubleRegistry:
    """
    Registry de test doubles de um worker de testes.

    Uso típico:

        registry = DoubleRegistry()
        with registry.scope("test_xy") as scope:
            scope.mock("calc.x_fn", [3000, 5000])
            ...

    Campos:
        - settings: settings efetivas (política de assinatura, trace)
        - clock: fonte de timestamps do ScopeTrace (UTC)
    """

    settings: DoublesSettings = field(default_factory=load_settings)
    clock: Callable[[], datetime] = field(default=utc_now, repr=False)

    _active: Dict[Tuple[int, str], List[Double]] = field(default_factory=dict, init=False, repr=False)
    _scopes: List[Scope] = field(default_factory=list, init=False, repr=False)

    # -----------------------------
    # Scopes
    # -----------------------------
    def scope(self, name: Optional[str] = None, *, scope_id: Optional[str] = None) -> Scope:
        """Abre um novo Scope; use como context manager para garantir o teardown."""
        opened = Scope(
            registry=self,
            scope_id=scope_id or f"scope-{uuid.uuid4().hex[:12]}",
            settings=self.settings,
            clock=self.clock,
            name=name,
        )
        self._scopes.append(opened)
        return opened

    @property
    def current_scope(self) -> Optional[Scope]:
        return self._scopes[-1] if self._scopes else None

    @property
    def open_scopes(self) -> List[Scope]:
        return list(self._scopes)

    def teardown_all(self, outcome: str = "passed") -> None:
        """Encerra todos os Scopes abertos, do mais interno para o mais externo."""
        while self._scopes:
            self._scopes[-1].teardown(outcome=outcome)

    def _close(self, scope: Scope) -> None:
        if scope not in self._scopes:
            return
        if self._scopes[-1] is not scope:
            raise ScopeOrderError.from_payload(
                scope_order(scope_id=scope.scope_id, open_inner=self._scopes[-1].scope_id)
            )
        self._scopes.pop()

    # -----------------------------
    # Instalação
    # -----------------------------
    def _activate(self, double: Double) -> None:
        double.target.install(double)
        double.active = True
        self._active.setdefault(double.target.key, []).append(double)

    def _deactivate(self, double: Double) -> None:
        if not double.active:
            return
        try:
            double.target.restore(double._local)
        finally:
            # o double sai da pilha mesmo se o owner rejeitar a restauração
            double.active = False
            stack = self._active.get(double.target.key, [])
            if double in stack:
                stack.remove(double)
            if not stack:
                self._active.pop(double.target.key, None)

    # -----------------------------
    # Interceptação
    # -----------------------------
    def active(self, target: Any) -> Optional[Double]:
        """Double ativo mais interno para `target`, ou None."""
        try:
            resolved = resolve_target(target)
        except (TargetNotFound, TargetNotCallable):
            return None
        stack = self._active.get(resolved.key)
        return stack[-1] if stack else None

    def invoke(self, target: Any, *args: Any, **kwargs: Any) -> Any:
        """
        Chama `target` através do registry.

        Com double ativo, a chamada é registrada e o valor programado é
        retornado; sem double, o alvo real é chamado sem modificação.

        Raises:
            TargetNotFound / TargetNotCallable: Se o alvo não puder ser resolvido.
            ExhaustedSequence / SignatureMismatch: Propagadas do double ativo.
        """
        resolved = resolve_target(target)
        stack = self._active.get(resolved.key)
        if stack:
            return stack[-1](*args, **kwargs)
        return resolved.current()(*args, **kwargs)
