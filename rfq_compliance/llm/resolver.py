"""Locate a model client constructor on a loaded SDK.

SDK releases have exposed the constructor in several places. Each place is a
named ``LookupStrategy``; strategies run in order and the first hit wins.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from rfq_compliance.errors import NoUsableExportError
from rfq_compliance.utils.logging import get_logger


logger = get_logger(__name__)

CONSTRUCTOR_EXPORT = "GoogleGenerativeAI"
CONSTRUCTOR_ALIASES: tuple[str, ...] = ("GenerativeModel", "GoogleGenAI", "GenAI")


class SDKNamespace:
    """Read-only key/value view over a module, an object or a mapping."""

    def __init__(self, target: Any):
        self._target = target

    @property
    def target(self) -> Any:
        return self._target

    @property
    def is_callable(self) -> bool:
        return callable(self._target) and not isinstance(self._target, Mapping)

    def get(self, key: str) -> Any:
        if isinstance(self._target, Mapping):
            return self._target.get(key)
        return getattr(self._target, key, None)

    def child(self, key: str) -> "SDKNamespace | None":
        value = self.get(key)
        return None if value is None else SDKNamespace(value)

    def keys(self) -> list[str]:
        if isinstance(self._target, Mapping):
            return sorted(str(k) for k in self._target)
        return sorted(k for k in dir(self._target) if not k.startswith("_"))


@dataclass(frozen=True)
class ConstructorHandle:
    """A resolved constructor and the strategy that found it."""

    strategy: str
    factory: Callable[..., Any]


@dataclass(frozen=True)
class LookupStrategy:
    """One place a constructor may live."""

    name: str
    lookup: Callable[[SDKNamespace], Callable[..., Any] | None]


def _callable_export(namespace: SDKNamespace | None, key: str) -> Callable[..., Any] | None:
    if namespace is None:
        return None
    value = namespace.get(key)
    return value if callable(value) else None


def _callable_self(namespace: SDKNamespace | None) -> Callable[..., Any] | None:
    if namespace is None or not namespace.is_callable:
        return None
    return namespace.target


def _first_alias(namespace: SDKNamespace, aliases: tuple[str, ...]) -> Callable[..., Any] | None:
    for alias in aliases:
        factory = _callable_export(namespace, alias)
        if factory is not None:
            return factory
    return None


def default_strategies(
    export_name: str = CONSTRUCTOR_EXPORT,
    aliases: tuple[str, ...] = CONSTRUCTOR_ALIASES,
) -> tuple[LookupStrategy, ...]:
    """The known SDK packaging conventions, most specific first."""
    return (
        LookupStrategy("named-export", lambda ns: _callable_export(ns, export_name)),
        LookupStrategy("callable-namespace", _callable_self),
        LookupStrategy(
            "default-named-export",
            lambda ns: _callable_export(ns.child("default"), export_name),
        ),
        LookupStrategy("callable-default", lambda ns: _callable_self(ns.child("default"))),
        LookupStrategy("alias-export", lambda ns: _first_alias(ns, aliases)),
    )


def find_constructor(
    namespace: Any,
    strategies: tuple[LookupStrategy, ...] | None = None,
) -> ConstructorHandle | None:
    """Run the strategies against ``namespace``; None if nothing matches."""
    if namespace is None:
        return None
    view = namespace if isinstance(namespace, SDKNamespace) else SDKNamespace(namespace)
    for strategy in strategies or default_strategies():
        factory = strategy.lookup(view)
        if factory is not None:
            return ConstructorHandle(strategy=strategy.name, factory=factory)
    return None


def resolve(
    namespace: Any,
    strategies: tuple[LookupStrategy, ...] | None = None,
) -> Callable[..., Any]:
    """Return the client constructor exposed by ``namespace``.

    Raises:
        NoUsableExportError: If none of the strategies match.
    """
    handle = find_constructor(namespace, strategies)
    if handle is None:
        if namespace is None:
            raise NoUsableExportError([])
        view = namespace if isinstance(namespace, SDKNamespace) else SDKNamespace(namespace)
        raise NoUsableExportError(view.keys())
    logger.info("Model client constructor resolved", strategy=handle.strategy)
    return handle.factory
