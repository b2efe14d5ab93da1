"""
Resolução e substituição de alvos.

Um alvo é um atributo chamável de um owner (módulo, classe ou objeto).
A interceptação acontece substituindo esse atributo no owner, de modo que
a unidade sob teste continua chamando `modulo.funcao(...)` sem qualquer
alteração de código.

Formas aceitas de identificar um alvo:
    - "pacote.modulo.atributo" (maior prefixo importável + cadeia de getattr)
    - (owner, "atributo")
    - a própria função original (via `__module__` + `__qualname__`)
    - um `Target` já resolvido
"""

from __future__ import annotations

import importlib
import inspect
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from atlas_doubles.core.errors import target_not_callable, target_not_found
from atlas_doubles.core.exceptions import TargetNotCallable, TargetNotFound

MISSING: Any = object()


def _owner_name(owner: Any) -> str:
    if inspect.ismodule(owner):
        return owner.__name__
    if inspect.isclass(owner):
        return f"{owner.__module__}.{owner.__qualname__}"
    return f"<{type(owner).__qualname__} object at {id(owner):#x}>"


@dataclass(frozen=True)
class Target:
    """Alvo resolvido: owner + nome do atributo substituível."""

    owner: Any = field(compare=False, repr=False)
    attribute: str
    name: str
    owner_id: int = field(default=0, repr=False)

    @property
    def key(self) -> Tuple[int, str]:
        return (self.owner_id, self.attribute)

    def read_local(self) -> Any:
        """
        Valor do atributo definido diretamente no owner, ou `MISSING`.

        `MISSING` indica que o atributo é herdado (ex.: método de classe base)
        e deve ser removido, não reatribuído, na restauração.
        """
        try:
            namespace = vars(self.owner)
        except TypeError:
            # owner sem __dict__ (ex.: __slots__): o valor visível é o local
            return getattr(self.owner, self.attribute, MISSING)
        return namespace.get(self.attribute, MISSING)

    def current(self) -> Any:
        return getattr(self.owner, self.attribute)

    def install(self, replacement: Any) -> None:
        setattr(self.owner, self.attribute, replacement)

    def restore(self, local: Any) -> None:
        if local is MISSING:
            delattr(self.owner, self.attribute)
        else:
            setattr(self.owner, self.attribute, local)


def _make_target(owner: Any, attribute: str, name: Optional[str] = None) -> Target:
    return Target(
        owner=owner,
        attribute=attribute,
        name=name or f"{_owner_name(owner)}.{attribute}",
        owner_id=id(owner),
    )


def _import_owner(path: str, full_name: str) -> Any:
    parts = path.split(".")
    for i in range(len(parts), 0, -1):
        module_name = ".".join(parts[:i])
        try:
            obj = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            missing = exc.name or ""
            if module_name == missing or module_name.startswith(missing + "."):
                continue
            raise
        for part in parts[i:]:
            try:
                obj = getattr(obj, part)
            except AttributeError:
                raise TargetNotFound.from_payload(
                    target_not_found(target=full_name, reason=f"'{part}' não existe em {_owner_name(obj)}")
                ) from None
        return obj

    raise TargetNotFound.from_payload(
        target_not_found(target=full_name, reason=f"nenhum prefixo importável em '{path}'")
    )


def resolve_target(spec: Any) -> Target:
    """
    Resolve um identificador de alvo para um `Target`.

    Raises:
        TargetNotFound: Se o owner ou o atributo não existir.
        TargetNotCallable: Se o atributo existir mas não for chamável.
    """
    if isinstance(spec, Target):
        return spec

    double_target = getattr(spec, "__double_target__", None)
    if isinstance(double_target, Target):
        return double_target

    if isinstance(spec, tuple) and len(spec) == 2 and isinstance(spec[1], str):
        owner, attribute = spec
        target = _make_target(owner, attribute)
    elif isinstance(spec, str):
        if "." not in spec:
            raise TargetNotFound.from_payload(
                target_not_found(target=spec, reason="identificador deve ter a forma 'modulo.atributo'")
            )
        owner_path, attribute = spec.rsplit(".", 1)
        owner = _import_owner(owner_path, spec)
        target = _make_target(owner, attribute, name=spec)
    elif callable(spec) and hasattr(spec, "__module__") and hasattr(spec, "__qualname__"):
        qualname = spec.__qualname__
        if "<locals>" in qualname or spec.__module__ is None:
            raise TargetNotFound.from_payload(
                target_not_found(target=repr(spec), reason="função local não é endereçável por nome")
            )
        return resolve_target(f"{spec.__module__}.{qualname}")
    else:
        raise TargetNotFound.from_payload(
            target_not_found(target=repr(spec), reason=f"identificador não suportado: {type(spec).__name__}")
        )

    if not hasattr(target.owner, target.attribute):
        raise TargetNotFound.from_payload(
            target_not_found(target=target.name, reason=f"atributo '{target.attribute}' ausente")
        )

    value = target.current()
    if not callable(value):
        raise TargetNotCallable.from_payload(
            target_not_callable(target=target.name, actual_type=type(value).__name__)
        )

    return target


def signature_for(target: Target, original: Any) -> Optional[inspect.Signature]:
    """
    Assinatura contra a qual chamadas ao double são validadas.

    Métodos comuns substituídos em uma classe (inclusive herdados) são
    chamados pelo double sem `self`, então o primeiro parâmetro é
    descartado. Retorna `None` quando o alvo não possui assinatura
    introspectável (ex.: alguns builtins).
    """
    try:
        sig = inspect.signature(original)
    except (TypeError, ValueError):
        return None

    if inspect.isclass(target.owner):
        raw = inspect.getattr_static(target.owner, target.attribute, None)
        if inspect.isfunction(raw):
            params = list(sig.parameters.values())[1:]
            sig = sig.replace(parameters=params)

    return sig
