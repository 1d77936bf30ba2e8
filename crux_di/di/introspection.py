"""Reflection helpers used by the container bootstrap.

Two concerns live here:

- Pre-flight classification of a candidate type so that an instantiation
  failure carries a precise :class:`ErrorCode`.
- Discovery of the injectable fields declared on a class body and the
  normalisation of their annotations into matchable classes.

Nothing in this module mutates objects; writes happen in ``container``.
"""
from __future__ import annotations

import inspect
import sys
import types
import typing
from typing import Annotated, Any, ClassVar, Dict, Final, List, Mapping, NamedTuple, Optional, Union

from ..base.errors import ContainerError, ErrorCode

FIELD_INJECT = "inject"
FIELD_FINAL = "final"
FIELD_CLASSVAR = "classvar"
FIELD_UNMATCHABLE = "unmatchable"

_UNION_ORIGINS = (Union, types.UnionType)
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_QUALIFIER_KINDS = {"Final": FIELD_FINAL, "ClassVar": FIELD_CLASSVAR}


class FieldSpec(NamedTuple):
    """A single annotation declared on a class body.

    ``declared_type`` is a class only when ``kind == FIELD_INJECT``.
    """

    name: str
    declared_type: Optional[type]
    kind: str


def qualified_name(obj: Any) -> str:
    """Return ``module.QualName`` for classes and ``repr`` for anything else."""
    if isinstance(obj, type):
        return f"{obj.__module__}.{obj.__qualname__}"
    return repr(obj)


def check_constructible(candidate: Any) -> bool:
    """Raise :class:`ContainerError` if ``candidate`` cannot be built without arguments.

    Checks, in order: the candidate is a class, it is neither abstract nor a
    ``typing.Protocol``, and its constructor signature has no required
    parameter. Returns ``False`` when the signature cannot be introspected;
    such classes are left to fail (or not) when called.
    """
    name = qualified_name(candidate)
    if not isinstance(candidate, type):
        raise ContainerError(
            code=ErrorCode.NOT_A_TYPE,
            message=f"candidate {candidate!r} is not a class",
            bean_type=name,
        )
    if inspect.isabstract(candidate) or candidate.__dict__.get("_is_protocol", False):
        raise ContainerError(
            code=ErrorCode.ABSTRACT_TYPE,
            message="abstract classes and protocols cannot be instantiated",
            bean_type=name,
        )
    try:
        sig = inspect.signature(candidate)
    except (TypeError, ValueError):
        return False
    required = [
        p.name
        for p in sig.parameters.values()
        if p.default is inspect.Parameter.empty and p.kind not in _VARIADIC
    ]
    if required:
        raise ContainerError(
            code=ErrorCode.MISSING_CONSTRUCTOR,
            message=f"no no-argument constructor; required parameters: {', '.join(required)}",
            bean_type=name,
        )
    return True


def _own_annotations(cls: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(cls))
    except NameError:
        # eagerly evaluated annotations naming an undefined symbol
        return {}


def _resolve(raw: Any, cls: type, namespace: Mapping[str, Any]) -> Any:
    """Evaluate one annotation string; return ``None`` when it cannot be resolved.

    Names defined in the owning module win over candidate class names; the
    candidate map only supplies names the module does not define.
    """
    if not isinstance(raw, str):
        return raw
    module = sys.modules.get(cls.__module__)
    globalns = {**namespace, **(vars(module) if module is not None else {})}

    def _holder() -> None:
        return None

    _holder.__annotations__ = {"value": raw}
    try:
        return typing.get_type_hints(_holder, globalns=globalns)["value"]
    except (NameError, TypeError, AttributeError, SyntaxError):
        return None


def _classify(hint: Any) -> tuple[Optional[type], str]:
    if hint is ClassVar or typing.get_origin(hint) is ClassVar:
        return None, FIELD_CLASSVAR
    if hint is Final or typing.get_origin(hint) is Final:
        return None, FIELD_FINAL
    if typing.get_origin(hint) is Annotated:
        hint = typing.get_args(hint)[0]
    if typing.get_origin(hint) in _UNION_ORIGINS:
        members = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(members) != 1:
            return None, FIELD_UNMATCHABLE
        hint = members[0]
    # parameterised generics (list[int]) report isinstance(..., type) on older interpreters
    if isinstance(hint, type) and typing.get_origin(hint) is None:
        return hint, FIELD_INJECT
    return None, FIELD_UNMATCHABLE


def declared_fields(cls: type, namespace: Mapping[str, Any]) -> List[FieldSpec]:
    """Return the annotations declared directly on ``cls`` (inherited ones excluded).

    Each annotation string is evaluated on its own against the globals of
    the module defining ``cls``, falling back to ``namespace`` (candidate
    classes keyed by ``__name__``) for names the module lacks; this lets
    components defined in a function body refer to each other. An
    annotation that cannot be evaluated is reported as ``FIELD_UNMATCHABLE``
    without affecting its siblings or subclasses.
    """
    specs: List[FieldSpec] = []
    for name, raw in _own_annotations(cls).items():
        if isinstance(raw, str):
            qualifier = raw.split("[", 1)[0].rsplit(".", 1)[-1].strip()
            if qualifier in _QUALIFIER_KINDS:
                specs.append(FieldSpec(name, None, _QUALIFIER_KINDS[qualifier]))
                continue
        declared, kind = _classify(_resolve(raw, cls, namespace))
        specs.append(FieldSpec(name, declared, kind))
    return specs


def is_assignable(bean: Any, declared_type: Any) -> bool:
    """Return True when ``bean`` can be stored in a field typed ``declared_type``.

    Types that cannot take part in an ``isinstance`` check (e.g. protocols
    without ``@runtime_checkable``) match nothing.
    """
    if not isinstance(declared_type, type):
        return False
    try:
        return isinstance(bean, declared_type)
    except TypeError:
        return False


__all__ = [
    "FIELD_INJECT",
    "FIELD_FINAL",
    "FIELD_CLASSVAR",
    "FIELD_UNMATCHABLE",
    "FieldSpec",
    "qualified_name",
    "check_constructible",
    "declared_fields",
    "is_assignable",
]
