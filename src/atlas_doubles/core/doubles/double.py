"""
Double — substituto chamável instalado no lugar de um alvo.

Um `Double` é instalado como o próprio atributo do owner durante o Scope.
Ao ser chamado, valida os argumentos (conforme a política de assinatura),
registra um `CallRecord` e retorna o valor programado.

Comportamento por tipo:
    - STUB: o mesmo valor em toda chamada
    - MOCK: o N-ésimo valor da sequência na N-ésima chamada; além do fim da
      sequência, `ExhaustedSequence` (sem reciclar e sem default)

Chamadas rejeitadas (assinatura incompatível, sequência esgotada) não são
registradas no call log e não avançam o cursor.

Após a restauração, uma referência retida ao double (ex.: `from mod import fn`
executado durante o Scope) repassa a chamada ao alvo original sem registrar.
"""

from __future__ import annotations

import copy
import inspect
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

from atlas_doubles.core.errors import exhausted_sequence, signature_mismatch
from atlas_doubles.core.exceptions import ExhaustedSequence, SignatureMismatch

from .target import Target
from .types import CallRecord, DoubleKind, Raise

if TYPE_CHECKING:  # pragma: no cover
    from .scope import Scope


class Double:
    """Test double ativo para um único alvo dentro de um Scope."""

    def __init__(
        self,
        *,
        target: Target,
        kind: DoubleKind,
        values: Sequence[Any],
        original: Any,
        local: Any,
        scope: "Scope",
        signature: Optional[inspect.Signature] = None,
        check_signature: bool = True,
        snapshot_args: bool = False,
    ):
        self.target = target
        self.kind = kind
        self._values: Tuple[Any, ...] = tuple(values)
        self._original = original
        self._local = local
        self._scope = scope
        self._signature = signature
        self._check_signature = check_signature
        self._snapshot_args = snapshot_args
        self._calls: List[CallRecord] = []
        self._cursor = 0
        self.active = False

        self.__name__ = getattr(original, "__name__", target.attribute)
        self.__qualname__ = getattr(original, "__qualname__", target.attribute)
        self.__doc__ = getattr(original, "__doc__", None)
        if signature is not None:
            self.__signature__ = signature

    def __repr__(self) -> str:
        state = "active" if self.active else "restored"
        return f"<Double {self.kind.value} {self.target.name} calls={len(self._calls)} {state}>"

    @property
    def __double_target__(self) -> Target:
        return self.target

    # -----------------------------
    # Introspecção
    # -----------------------------
    @property
    def calls(self) -> Tuple[CallRecord, ...]:
        return tuple(self._calls)

    @property
    def call_count(self) -> int:
        return len(self._calls)

    @property
    def cursor(self) -> int:
        """Quantidade de valores da sequência já consumidos."""
        return self._cursor

    @property
    def values(self) -> Tuple[Any, ...]:
        return self._values

    @property
    def original(self) -> Any:
        return self._original

    def programmed_value(self, ordinal: int) -> Any:
        """Valor programado para a chamada `ordinal` (começa em 1)."""
        if self.kind is DoubleKind.STUB:
            return self._values[0]
        return self._values[ordinal - 1]

    def reset(self) -> None:
        """Limpa o call log e volta o cursor ao início da sequência."""
        self._calls.clear()
        self._cursor = 0

    # -----------------------------
    # Interceptação
    # -----------------------------
    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if not self.active:
            return self._original(*args, **kwargs)
        return self._respond(args, kwargs)

    def _verify_arguments(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> None:
        if not self._check_signature or self._signature is None:
            return
        try:
            self._signature.bind(*args, **kwargs)
        except TypeError as e:
            exc = SignatureMismatch.from_payload(
                signature_mismatch(target=self.target.name, signature=str(self._signature), reason=str(e))
            )
            self._scope._on_signature_mismatch(self, exc)
            raise exc from None

    def _respond(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        self._verify_arguments(args, kwargs)

        ordinal = len(self._calls) + 1
        if self.kind is DoubleKind.MOCK and ordinal > len(self._values):
            exc = ExhaustedSequence.from_payload(
                exhausted_sequence(
                    target=self.target.name,
                    programmed=len(self._values),
                    attempted_call=ordinal,
                )
            )
            self._scope._on_exhausted(self, exc)
            raise exc

        if self._snapshot_args:
            args = copy.deepcopy(args)
            kwargs = copy.deepcopy(kwargs)

        record = CallRecord(ordinal=ordinal, args=args, kwargs=kwargs)
        self._calls.append(record)
        if self.kind is DoubleKind.MOCK:
            self._cursor += 1
        self._scope._on_invoked(self, record)

        value = self.programmed_value(ordinal)
        if isinstance(value, Raise):
            raise value.exception
        return value
