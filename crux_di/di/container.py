"""Minimal field-injection dependency injection container.

The container builds exactly one instance per candidate class and then wires
the annotated fields of every instance from that pool. Bootstrap runs once,
inside the constructor, in two phases:

1. instantiate-all: every candidate is called without arguments.
2. inject-all: for every field declared on each bean's own class, the first
   pooled bean that is an instance of the field's declared type is written
   straight into the bean (``object.__setattr__``).

A field without a matching bean keeps its default. When several beans match,
the first one in pool order wins; which one that is depends on the order of
the candidates handed in and is not otherwise specified. Cycles between
beans need no special handling because every bean exists before injection
starts.

Any instantiation or write failure aborts construction with a
:class:`~crux_di.base.errors.ContainerError`; no partially wired container is
ever returned. After construction the pool never changes, so lookups from
several threads are safe without locking.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Type, TypeVar

from ..base.dto import BeanInfo, ContainerSnapshot
from ..base.errors import ContainerError, ErrorCode, classify_exception
from ..base.logging import LogContext, get_logger, log_event
from ..config import ContainerSettings, get_container_settings
from .introspection import (
    FIELD_CLASSVAR,
    FIELD_FINAL,
    FIELD_INJECT,
    check_constructible,
    declared_fields,
    is_assignable,
    qualified_name,
)

T = TypeVar("T")


class DIContainer:
    """Singleton bean container wired by declared field types.

    Example::

        class Repo: ...

        class Service:
            repo: Repo = None

        container = DIContainer({Repo, Service})
        assert container.get_bean(Service).repo is container.get_bean(Repo)
    """

    def __init__(self, types: Iterable[Any], settings: Optional[ContainerSettings] = None) -> None:
        """Instantiate and wire every candidate type.

        Args:
            types: Candidate classes, each constructible without arguments.
                Duplicates are ignored; iteration order becomes pool order.
            settings: Optional settings; defaults are merged from the environment.

        Raises:
            ContainerError: If a candidate cannot be instantiated or a field
                write fails. The original exception is chained and kept on ``raw``.
        """
        self._settings = settings or get_container_settings()
        # only an explicitly chosen level replaces the one already on the base logger
        explicit = "log_level" in self._settings.model_fields_set
        self._logger = get_logger(
            "crux_di.container",
            json_mode=self._settings.json_logs,
            level=self._settings.level_no if explicit else None,
        )
        self._beans: Tuple[Any, ...] = ()
        self._snapshot = ContainerSnapshot()

        candidates = _unique(types)
        log_event(self._logger, "container.bootstrap.start", candidates=len(candidates))
        try:
            self._beans = tuple(self._instantiate(c) for c in candidates)
            namespace = {c.__name__: c for c in candidates}
            self._snapshot = ContainerSnapshot(beans=[self._inject(b, namespace) for b in self._beans])
        except ContainerError as exc:
            log_event(
                self._logger,
                "container.bootstrap.failed",
                LogContext(bean_type=exc.bean_type, field_name=exc.field_name),
                level=logging.ERROR,
                code=exc.code.value,
                error=exc.message,
            )
            raise
        log_event(self._logger, "container.bootstrap.ready", beans=len(self._beans))

    # ---- Bootstrap ----
    def _instantiate(self, candidate: Any) -> Any:
        verified = check_constructible(candidate)
        try:
            bean = candidate()
        except Exception as exc:
            code = ErrorCode.CONSTRUCTOR_FAILED
            if not verified and classify_exception(exc) is not ErrorCode.UNKNOWN:
                code = classify_exception(exc)
            raise ContainerError(
                code=code,
                message=f"constructor raised {type(exc).__name__}: {exc}",
                bean_type=qualified_name(candidate),
                raw=exc,
            ) from exc
        log_event(
            self._logger,
            "container.bean.created",
            LogContext(bean_type=qualified_name(candidate), phase="instantiate"),
            level=logging.DEBUG,
        )
        return bean

    def _inject(self, bean: Any, namespace: Dict[str, type]) -> BeanInfo:
        owner = qualified_name(type(bean))
        injected: Dict[str, str] = {}
        unresolved: List[str] = []
        skipped: List[str] = []
        for spec in declared_fields(type(bean), namespace):
            ctx = LogContext(bean_type=owner, field_name=spec.name, phase="inject")
            if spec.kind in (FIELD_FINAL, FIELD_CLASSVAR):
                skipped.append(spec.name)
                log_event(self._logger, "container.field.skipped", ctx, level=logging.DEBUG, kind=spec.kind)
                continue
            matches = self.get_beans(spec.declared_type) if spec.kind == FIELD_INJECT else []
            if not matches:
                unresolved.append(spec.name)
                log_event(self._logger, "container.field.unresolved", ctx, level=logging.DEBUG)
                continue
            if len(matches) > 1:
                log_event(
                    self._logger,
                    "container.field.ambiguous",
                    ctx,
                    level=logging.WARNING if self._settings.warn_on_ambiguous else logging.DEBUG,
                    candidates=[qualified_name(type(m)) for m in matches],
                )
            target = matches[0]
            self._write(bean, spec.name, target, owner)
            injected[spec.name] = qualified_name(type(target))
            log_event(self._logger, "container.field.injected", ctx, level=logging.DEBUG, value=injected[spec.name])
        return BeanInfo(type_name=owner, injected=injected, unresolved=unresolved, skipped=skipped)

    @staticmethod
    def _write(bean: Any, name: str, value: Any, owner: str) -> None:
        try:
            object.__setattr__(bean, name, value)
        except (AttributeError, TypeError) as exc:
            raise ContainerError(
                code=ErrorCode.FIELD_WRITE_FAILED,
                message=f"cannot write field: {exc}",
                bean_type=owner,
                field_name=name,
                raw=exc,
            ) from exc

    # ---- Lookup ----
    def get_bean(self, bean_type: Type[T]) -> Optional[T]:
        """Return the first bean that is an instance of ``bean_type``.

        Args:
            bean_type: Class, ABC or runtime-checkable protocol to match.

        Returns:
            A pooled bean, or ``None`` when no bean matches. If several beans
            match, which one is returned is unspecified.
        """
        for bean in self._beans:
            if is_assignable(bean, bean_type):
                return bean
        return None

    def get_beans(self, bean_type: Type[T]) -> List[T]:
        """Return every bean that is an instance of ``bean_type``, in pool order."""
        return [bean for bean in self._beans if is_assignable(bean, bean_type)]

    @property
    def instances(self) -> Tuple[Any, ...]:
        """The instance pool, in pool order."""
        return self._beans

    def describe(self) -> ContainerSnapshot:
        """Return the wiring snapshot recorded during bootstrap."""
        return self._snapshot

    def __contains__(self, bean_type: object) -> bool:
        return self.get_bean(bean_type) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._beans)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._beans)

    def __repr__(self) -> str:
        return f"DIContainer(beans={len(self._beans)})"


def _unique(types: Iterable[Any]) -> List[Any]:
    seen: set[int] = set()
    out: List[Any] = []
    for candidate in types:
        if id(candidate) in seen:
            continue
        seen.add(id(candidate))
        out.append(candidate)
    return out


def build_container(types: Iterable[Any], config: Optional[Dict[str, Any]] = None) -> DIContainer:
    """Construct and return a new DIContainer.

    Args:
        types: Candidate classes to instantiate and wire.
        config: Optional settings overrides merged over defaults and environment.

    Returns:
        DIContainer: The bootstrapped container.
    """
    return DIContainer(types, settings=get_container_settings(config))


__all__ = ["DIContainer", "build_container"]
