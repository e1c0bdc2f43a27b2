"""Interface introspection.

Enumerates the methods of an abstract interface (an ABC or a Protocol) and
describes each one as a MethodSignature: parameters without ``self``,
resolved parameter annotations and the declared result slots.
"""

import inspect
import typing
from abc import ABC
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, NoReturn, Protocol, get_args, get_origin

from mockx.coercion import unalias
from mockx.errors import InterfaceError
from mockx.logging import get_logger

__all__ = ["MethodSignature", "method_signatures", "resolve_hints", "return_slots"]

logger = get_logger(__name__)

# Bases whose members are never part of an interface
_EXCLUDED_BASES = frozenset({object, ABC, Generic, Protocol})


@dataclass(frozen=True)
class MethodSignature:
    """Description of one interface method.

    Attributes:
        name: Method name
        signature: Call signature without the ``self``/``cls`` parameter
        param_types: Resolved annotation per parameter name
        return_types: One annotation per result slot
        is_async: Declared with ``async def``
        is_property: Declared as a property getter
    """

    name: str
    signature: inspect.Signature
    param_types: dict[str, Any] = field(default_factory=dict)
    return_types: tuple[Any, ...] = (Any,)
    is_async: bool = False
    is_property: bool = False

    @property
    def result_count(self) -> int:
        return len(self.return_types)


def return_slots(annotation: Any) -> tuple[Any, ...]:
    """Split a return annotation into result slots.

    ``None`` declares no results. A fixed tuple of two or more elements,
    like ``tuple[bool, Exception | None]``, declares one slot per element.
    Everything else declares a single slot.
    ``type`` aliases are resolved first.
    """
    annotation = unalias(annotation)
    if annotation is None or annotation is type(None) or annotation is NoReturn:
        return ()
    if annotation is getattr(typing, "Never", NoReturn):
        return ()
    if get_origin(annotation) is tuple:
        args = get_args(annotation)
        if len(args) >= 2 and Ellipsis not in args:
            return args
    return (annotation,)


def resolve_hints(func: Callable[..., Any]) -> dict[str, Any]:
    """Resolve the annotations of a function.

    Annotations that cannot be resolved (for example names only imported
    under TYPE_CHECKING) are replaced with Any.
    """
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError) as e:
        logger.warning(
            "signature.unresolved_hints",
            function=getattr(func, "__qualname__", repr(func)),
            error=str(e),
        )

    try:
        raw = inspect.get_annotations(func)
    except NameError:
        return {}
    return {
        name: Any if isinstance(annotation, str) else annotation
        for name, annotation in raw.items()
    }


def method_signatures(interface: type) -> list[MethodSignature]:
    """List every public method declared on an interface and its bases.

    Args:
        interface: The interface class (not an instance)

    Returns:
        Method signatures in definition order, subclasses first

    Raises:
        InterfaceError: If interface is not a class
    """
    if not isinstance(interface, type):
        raise InterfaceError(
            f"Expected an interface class, got {type(interface).__name__}: "
            f"{interface!r}"
        )

    methods: dict[str, MethodSignature] = {}
    shadowed: set[str] = set()

    for klass in interface.__mro__:
        if klass in _EXCLUDED_BASES:
            continue
        for name, attr in vars(klass).items():
            if name.startswith("_") or name in shadowed:
                continue
            shadowed.add(name)
            method = _describe(name, attr)
            if method is not None:
                methods[name] = method

    return list(methods.values())


def _describe(name: str, attr: Any) -> MethodSignature | None:
    is_property = False
    if isinstance(attr, property):
        if attr.fget is None:
            return None
        func, bound = attr.fget, True
        is_property = True
    elif isinstance(attr, staticmethod):
        func, bound = attr.__func__, False
    elif isinstance(attr, classmethod):
        func, bound = attr.__func__, True
    elif inspect.isfunction(attr):
        func, bound = attr, True
    else:
        return None

    signature = inspect.signature(func)
    params = list(signature.parameters.values())
    if bound and params:
        params = params[1:]
    signature = signature.replace(parameters=params)

    hints = resolve_hints(func)
    param_types = {
        param.name: hints.get(param.name, Any) for param in params
    }

    return MethodSignature(
        name=name,
        signature=signature,
        param_types=param_types,
        return_types=return_slots(hints.get("return", Any)),
        is_async=inspect.iscoroutinefunction(func),
        is_property=is_property,
    )
