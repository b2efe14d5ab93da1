"""
Scope — fronteira de vida dos test doubles de um caso de teste.

O Scope é o handle devolvido por `DoubleRegistry.scope()`. Todo double é
registrado através dele e todo double registrado nele é restaurado no
teardown, que roda mesmo quando o corpo do teste falha:

    with registry.scope("test_xy") as scope:
        scope.stub("calc.x_fn", 10)
        scope.stub("calc.y_fn", 20)
        assert calc.xy_fn(5, 10) == 30

Responsabilidades do módulo:
    - Registrar stubs e mocks (com rejeição de duplicidade no Scope)
    - Expor introspecção somente leitura dos call logs
    - Restaurar todos os alvos no teardown, na ordem inversa de registro
    - Registrar eventos explícitos no ScopeTrace

Invariantes:
    - Um alvo possui no máximo um double ativo por Scope
    - O teardown é idempotente: cada alvo é restaurado no máximo uma vez
    - Call logs continuam disponíveis após o teardown
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional, Tuple

from atlas_doubles.core.config.settings import DoublesSettings
from atlas_doubles.core.errors import (
    call_not_recorded,
    duplicate_registration,
    exception_to_payload,
    scope_closed as scope_closed_error,
    scope_not_current,
    unknown_target,
)
from atlas_doubles.core.exceptions import (
    CallNotRecorded,
    DoublesException,
    DuplicateRegistration,
    ScopeClosedError,
    ScopeOrderError,
    TargetNotCallable,
    TargetNotFound,
    UnknownTarget,
)
from atlas_doubles.core.traceability import trace as tr

from .double import Double
from .target import resolve_target, signature_for
from .types import CallRecord, DoubleKind

if TYPE_CHECKING:  # pragma: no cover
    from .registry import DoubleRegistry


class Scope:
    """Escopo de um caso de teste: registra doubles e garante a restauração."""

    def __init__(
        self,
        *,
        registry: "DoubleRegistry",
        scope_id: str,
        settings: DoublesSettings,
        clock: Callable[[], datetime],
        name: Optional[str] = None,
    ):
        self.registry = registry
        self.scope_id = scope_id
        self.name = name
        self.settings = settings
        self._clock = clock
        self._doubles: Dict[Tuple[int, str], Double] = {}
        self._order: List[Tuple[int, str]] = []
        self._closed = False

        self.trace: Optional[tr.ScopeTrace] = None
        if settings.trace_enabled:
            opened_at = clock()
            self.trace = tr.create_trace(
                scope_id=scope_id,
                opened_at=opened_at,
                config_hash=settings.config_hash,
                name=name,
            )
            tr.add_event(self.trace, event_type=tr.EVENT_SCOPE_OPENED, ts=opened_at, payload={"name": name})

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<Scope {self.scope_id} doubles={len(self._doubles)} {state}>"

    def __enter__(self) -> "Scope":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.teardown(outcome="failed" if exc_type is not None else "passed")
        return False

    @property
    def closed(self) -> bool:
        return self._closed

    # -----------------------------
    # Registro
    # -----------------------------
    def stub(self, target: Any, value: Any) -> Double:
        """
        Substitui `target` por um double que sempre retorna `value`.

        Raises:
            DuplicateRegistration: Se `target` já possui double ativo neste Scope.
            ScopeClosedError: Se o Scope já foi encerrado.
            ScopeOrderError: Se um Scope aberto depois deste ainda está aberto.
            TargetNotFound / TargetNotCallable: Se o alvo não puder ser resolvido.
        """
        return self._register(target, DoubleKind.STUB, (value,))

    def mock(self, target: Any, values: Iterable[Any]) -> Double:
        """
        Substitui `target` por um double que retorna `values[N-1]` na N-ésima chamada.

        Chamadas além do fim de `values` levantam `ExhaustedSequence`.
        Uma sequência vazia é permitida: a primeira chamada já falha.

        Raises:
            DuplicateRegistration: Se `target` já possui double ativo neste Scope.
            ScopeClosedError: Se o Scope já foi encerrado.
            ScopeOrderError: Se um Scope aberto depois deste ainda está aberto.
            TypeError: Se `values` for uma string ou não for iterável.
        """
        if isinstance(values, (str, bytes)):
            raise TypeError("mock values devem ser uma sequência de valores, não uma string")
        return self._register(target, DoubleKind.MOCK, tuple(values))

    def _register(self, spec: Any, kind: DoubleKind, values: Tuple[Any, ...]) -> Double:
        if self._closed:
            raise ScopeClosedError.from_payload(
                scope_closed_error(scope_id=self.scope_id, operation=kind.value)
            )

        current = self.registry.current_scope
        if current is not self:
            raise ScopeOrderError.from_payload(
                scope_not_current(
                    scope_id=self.scope_id,
                    open_inner=current.scope_id if current is not None else "<none>",
                    operation=kind.value,
                )
            )

        target = resolve_target(spec)
        existing = self._doubles.get(target.key)
        if existing is not None and existing.active:
            raise DuplicateRegistration.from_payload(
                duplicate_registration(
                    target=target.name,
                    scope_id=self.scope_id,
                    active_kind=existing.kind.value,
                )
            )

        local = target.read_local()
        original = target.current()
        double = Double(
            target=target,
            kind=kind,
            values=values,
            original=original,
            local=local,
            scope=self,
            signature=signature_for(target, original),
            check_signature=self.settings.strict_signatures,
            snapshot_args=self.settings.snapshot_args,
        )

        self.registry._activate(double)
        if target.key not in self._doubles:
            self._order.append(target.key)
        self._doubles[target.key] = double

        if self.trace is not None:
            tr.double_registered(
                self.trace,
                target=target.name,
                kind=kind.value,
                ts=self._clock(),
                programmed=len(values) if kind is DoubleKind.MOCK else None,
            )
        return double

    # -----------------------------
    # Introspecção
    # -----------------------------
    def _lookup(self, spec: Any) -> Double:
        try:
            target = resolve_target(spec)
        except (TargetNotFound, TargetNotCallable):
            target = None

        double = self._doubles.get(target.key) if target is not None else None
        if double is None:
            raise UnknownTarget.from_payload(
                unknown_target(
                    target=target.name if target is not None else (spec if isinstance(spec, str) else repr(spec)),
                    scope_id=self.scope_id,
                    registered=[d.target.name for d in self.doubles],
                )
            )
        return double

    @property
    def doubles(self) -> List[Double]:
        """Doubles deste Scope, na ordem de registro."""
        return [self._doubles[k] for k in self._order]

    def double(self, target: Any) -> Double:
        return self._lookup(target)

    def call_count(self, target: Any) -> int:
        return self._lookup(target).call_count

    def calls(self, target: Any) -> Tuple[CallRecord, ...]:
        return self._lookup(target).calls

    def call_args(self, target: Any, ordinal: int) -> CallRecord:
        """
        Registro da chamada `ordinal` (começa em 1) recebida pelo double.

        Raises:
            UnknownTarget: Se nenhum double foi registrado para o alvo neste Scope.
            CallNotRecorded: Se não existe chamada com esse ordinal.
        """
        double = self._lookup(target)
        calls = double.calls
        if not isinstance(ordinal, int) or ordinal < 1 or ordinal > len(calls):
            raise CallNotRecorded.from_payload(
                call_not_recorded(target=double.target.name, ordinal=ordinal, call_count=len(calls))
            )
        return calls[ordinal - 1]

    def reset(self, target: Any) -> None:
        self._lookup(target).reset()

    # -----------------------------
    # Teardown
    # -----------------------------
    def teardown(self, outcome: str = "passed") -> None:
        """
        Restaura todos os alvos substituídos neste Scope e encerra o Scope.

        A restauração segue a ordem inversa de registro. Chamadas repetidas
        não têm efeito. Uma restauração que falha não interrompe as demais:
        todos os alvos são tentados, o Scope é encerrado e a primeira falha
        é relançada ao final.

        Raises:
            ScopeOrderError: Se um Scope aberto depois deste ainda não foi encerrado.
        """
        if self._closed:
            return
        self.registry._close(self)

        failures: List[BaseException] = []
        try:
            for key in reversed(self._order):
                double = self._doubles[key]
                if not double.active:
                    continue
                try:
                    self.registry._deactivate(double)
                except Exception as e:  # noqa: BLE001
                    failures.append(e)
                    if self.trace is not None:
                        tr.add_event(
                            self.trace,
                            event_type=tr.EVENT_RESTORE_FAILED,
                            ts=self._clock(),
                            target=double.target.name,
                            payload={"error": exception_to_payload(e).to_dict()},
                        )
                    continue
                if self.trace is not None:
                    tr.double_restored(self.trace, target=double.target.name, ts=self._clock(), calls=double.call_count)
        finally:
            self._closed = True
            if self.trace is not None:
                tr.scope_closed(self.trace, ts=self._clock(), outcome=outcome if not failures else "failed")

        if failures:
            raise failures[0]

    # -----------------------------
    # Eventos (chamados pelo Double)
    # -----------------------------
    def _on_invoked(self, double: Double, record: CallRecord) -> None:
        if self.trace is None:
            return
        tr.double_invoked(
            self.trace,
            target=double.target.name,
            ordinal=record.ordinal,
            args_repr=repr(record.args),
            kwargs_repr=repr(dict(record.kwargs)),
            ts=self._clock(),
        )

    def _on_exhausted(self, double: Double, exc: DoublesException) -> None:
        if self.trace is None:
            return
        tr.double_failed(
            self.trace,
            target=double.target.name,
            event_type=tr.EVENT_DOUBLE_EXHAUSTED,
            ts=self._clock(),
            error=exception_to_payload(exc).to_dict(),
        )

    def _on_signature_mismatch(self, double: Double, exc: DoublesException) -> None:
        if self.trace is None:
            return
        tr.double_failed(
            self.trace,
            target=double.target.name,
            event_type=tr.EVENT_SIGNATURE_MISMATCH,
            ts=self._clock(),
            error=exception_to_payload(exc).to_dict(),
        )
