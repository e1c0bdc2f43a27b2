"""Zero values and type coercion for untyped mock values.

Arguments and results travel through the registry as plain ``Any`` values.
This module maps them back onto declared annotations:

- zero_value(tp): the canonical default for an annotation
- coerce(value, tp): None becomes the zero value, everything else is
  checked against the annotation
- reference(tp, value) / value(tp, value): recovery helpers for adapter code
"""

import collections
import collections.abc as cabc
import dataclasses
import types
import typing
from typing import Annotated, Any, Literal, TypeVar, Union, get_args, get_origin

from mockx.errors import TypeMismatchError

__all__ = ["coerce", "matches", "reference", "unalias", "value", "zero_value"]

T = TypeVar("T")

_NONE_TYPE = type(None)
_UNION_TYPES = (Union, types.UnionType)

_PRIMITIVE_ZEROS: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
}

# Abstract collection types map to the builtin that satisfies them
_CONTAINER_FACTORIES: dict[Any, cabc.Callable[[], Any]] = {
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    bytearray: bytearray,
    tuple: tuple,
    collections.deque: collections.deque,
    collections.OrderedDict: collections.OrderedDict,
    cabc.Iterable: list,
    cabc.Collection: list,
    cabc.Sequence: list,
    cabc.MutableSequence: list,
    cabc.Mapping: dict,
    cabc.MutableMapping: dict,
    cabc.Set: frozenset,
    cabc.MutableSet: set,
}


def unalias(tp: Any) -> Any:
    """Resolve ``type X = ...`` aliases to the annotation they stand for.

    Subscripted generic aliases are resolved through their origin, with the
    arguments substituted when the alias parameters line up with the value's.
    """
    while True:
        if isinstance(tp, typing.TypeAliasType):
            tp = tp.__value__
            continue
        origin = get_origin(tp)
        if not isinstance(origin, typing.TypeAliasType):
            return tp
        resolved = origin.__value__
        params = getattr(resolved, "__parameters__", ())
        if params and tuple(params) == origin.__type_params__:
            resolved = resolved[get_args(tp)]
        tp = resolved


def _scalar(tp: Any) -> Any:
    # Strip aliases, Annotated and Optional down to the underlying type
    tp = unalias(tp)
    origin = get_origin(tp)
    if origin is Annotated:
        return _scalar(get_args(tp)[0])
    if origin in _UNION_TYPES:
        members = [arg for arg in get_args(tp) if arg is not _NONE_TYPE]
        if len(members) == 1:
            return _scalar(members[0])
    return tp


def zero_value(tp: Any) -> Any:
    """Return the zero value of an annotation.

    Primitives get their falsy value and containers an empty instance.
    Optionals, exceptions, callables and plain classes are reference-like,
    so their zero value is None.

    Args:
        tp: A resolved type annotation

    Returns:
        A fresh zero value (containers are never shared between calls)
    """
    tp = unalias(tp)
    if tp is None or tp is _NONE_TYPE or tp is Any:
        return None
    if isinstance(tp, TypeVar):
        return None
    if isinstance(tp, typing.NewType):
        return zero_value(tp.__supertype__)

    origin = get_origin(tp)
    args = get_args(tp)

    if origin is Annotated:
        return zero_value(args[0])
    if origin in _UNION_TYPES:
        if _NONE_TYPE in args:
            return None
        return zero_value(args[0])
    if origin is Literal:
        return args[0]
    if origin is tuple:
        if not args or Ellipsis in args:
            return ()
        return tuple(zero_value(arg) for arg in args)
    if origin is not None:
        tp = origin

    if tp in _PRIMITIVE_ZEROS:
        return _PRIMITIVE_ZEROS[tp]
    if tp in _CONTAINER_FACTORIES:
        return _CONTAINER_FACTORIES[tp]()
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _zero_dataclass(tp)
    return None


def _zero_dataclass(cls: type) -> Any:
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        hints = {}

    kwargs: dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        if not field.init:
            continue
        if field.default is not dataclasses.MISSING:
            kwargs[field.name] = field.default
        elif field.default_factory is not dataclasses.MISSING:
            kwargs[field.name] = field.default_factory()
        else:
            kwargs[field.name] = zero_value(hints.get(field.name, Any))
    return cls(**kwargs)


def matches(value: Any, tp: Any) -> bool:
    """Check whether a value is compatible with an annotation.

    Annotations that cannot be checked at runtime (Any, type variables,
    unresolved strings, non-runtime protocols) accept every value. Generic
    aliases are checked against their origin only, so ``list[int]`` accepts
    any list. ``float`` accepts ints and ``complex`` accepts ints and floats.
    """
    tp = unalias(tp)
    if tp is Any or tp is object:
        return True
    if tp is None or tp is _NONE_TYPE:
        return value is None
    if isinstance(tp, (str, typing.ForwardRef, TypeVar)):
        return True
    if isinstance(tp, typing.NewType):
        return matches(value, tp.__supertype__)

    origin = get_origin(tp)
    if origin is Annotated:
        return matches(value, get_args(tp)[0])
    if origin in _UNION_TYPES:
        return any(matches(value, arg) for arg in get_args(tp))
    if origin is Literal:
        return value in get_args(tp)
    if origin is not None:
        tp = origin

    if tp is float:
        return isinstance(value, (int, float))
    if tp is complex:
        return isinstance(value, (int, float, complex))
    if not isinstance(tp, type):
        return True
    try:
        return isinstance(value, tp)
    except TypeError:
        # Protocols without @runtime_checkable
        return True


def coerce(value: Any, tp: Any, *, strict: bool = True, where: str = "") -> Any:
    """Convert an untyped value to its declared annotation.

    Args:
        value: The untyped value
        tp: The declared annotation
        strict: Check the value against the annotation
        where: Description of the slot, used in error messages

    Returns:
        The zero value of ``tp`` when ``value`` is None, ``float(value)`` for
        ints declared as float (plain, optional or annotated), otherwise ``value`` unchanged

    Raises:
        TypeMismatchError: If strict and the value does not match
    """
    if value is None:
        return zero_value(tp)
    widen = isinstance(value, int) and not isinstance(value, bool)
    if widen and _scalar(tp) is float:
        return float(value)
    if strict and not matches(value, tp):
        raise TypeMismatchError(tp, value, where)
    return value


def reference(tp: type[T] | Any, untyped: Any) -> T | None:
    """Recover a nullable value, falling back to None on mismatch.

    Use for result slots that may legitimately be None, like an error:

        ok, err = values
        return value(bool, ok), reference(Exception, err)
    """
    if untyped is not None and matches(untyped, tp):
        return typing.cast(T, untyped)
    return None


def value(tp: type[T] | Any, untyped: Any) -> T:
    """Recover a non-nullable value.

    Raises:
        TypeMismatchError: If ``untyped`` is not an instance of ``tp``
    """
    if not matches(untyped, tp):
        raise TypeMismatchError(tp, untyped)
    return typing.cast(T, untyped)
