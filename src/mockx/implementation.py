"""Registered method implementations.

An Implementation wraps a callable together with the parameter and result
types it was declared with, so the registry can coerce untyped arguments on
the way in and split and coerce results on the way out.
"""

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from mockx.coercion import coerce, zero_value
from mockx.errors import ArgumentMismatchError
from mockx.signature import MethodSignature, resolve_hints, return_slots

__all__ = ["Implementation", "Source"]

type Source = Literal["init", "impl", "returns"]


def _pack(values: Sequence[Any], count: int) -> Any:
    if count == 0:
        return None
    if count == 1:
        return values[0]
    return tuple(values)


@dataclass(frozen=True)
class Implementation:
    """A callable registered for one method name.

    Attributes:
        fn: The callable invoked on dispatch
        signature: Signature used to check argument counts, or None to
            accept any arguments
        param_types: Annotation per parameter name
        return_types: One annotation per result slot
        is_async: fn is a coroutine function
        source: Which registry operation produced this implementation
    """

    fn: Callable[..., Any]
    signature: inspect.Signature | None
    param_types: dict[str, Any] = field(default_factory=dict)
    return_types: tuple[Any, ...] = (Any,)
    is_async: bool = False
    source: Source = "impl"

    @classmethod
    def zero(cls, method: MethodSignature) -> "Implementation":
        """Build the default implementation for an interface method.

        The callable ignores its arguments and returns a fresh zero value per
        result slot. The method's signature is kept so calls are still
        arity-checked and coerced.
        """
        return_types = method.return_types

        def default(*args: Any) -> Any:
            zeros = [zero_value(tp) for tp in return_types]
            return _pack(zeros, len(return_types))

        return cls(
            fn=default,
            signature=method.signature,
            param_types=dict(method.param_types),
            return_types=return_types,
            source="init",
        )

    @classmethod
    def from_callable(
        cls, fn: Callable[..., Any], previous: "Implementation | None" = None
    ) -> "Implementation":
        """Wrap a user-supplied callable.

        Parameter and return annotations come from ``fn``. Without a return
        annotation the result slots of ``previous`` are kept, or a single
        untyped slot when there is no previous registration.

        Raises:
            TypeError: If fn is not callable
        """
        if not callable(fn):
            raise TypeError(
                f"Implementation must be callable, got {type(fn).__name__}"
            )

        try:
            signature: inspect.Signature | None = inspect.signature(fn)
        except (TypeError, ValueError):
            # Some builtins expose no signature
            signature = None

        hints = resolve_hints(fn) if signature is not None else {}
        if "return" in hints:
            return_types = return_slots(hints["return"])
        elif previous is not None:
            return_types = previous.return_types
        else:
            return_types = (Any,)

        param_types = {}
        if signature is not None:
            param_types = {
                name: hints.get(name, Any) for name in signature.parameters
            }

        return cls(
            fn=fn,
            signature=signature,
            param_types=param_types,
            return_types=return_types,
            is_async=inspect.iscoroutinefunction(fn),
            source="impl",
        )

    @classmethod
    def fixed(
        cls,
        method: str,
        values: Sequence[Any],
        previous: "Implementation",
        *,
        strict: bool = True,
    ) -> "Implementation":
        """Build an implementation that always returns the same values.

        Each value is coerced to the result slot it fills. A None value is
        replaced with a fresh zero value of its slot on every call. The result
        accepts any arguments.

        Raises:
            ArgumentMismatchError: If the value count differs from the slot count
            TypeMismatchError: If a value does not match its slot
        """
        return_types = previous.return_types
        if len(values) != len(return_types):
            raise ArgumentMismatchError(
                f"Method {method!r} declares {len(return_types)} return "
                f"value(s), got {len(values)}"
            )

        coerced = [
            coerce(v, tp, strict=strict, where=f"return value {i} of {method!r}")
            for i, (v, tp) in enumerate(zip(values, return_types, strict=True))
        ]
        blanks = [v is None for v in values]

        def fixed_return(*args: Any, **kwargs: Any) -> Any:
            fresh = [
                zero_value(tp) if blank else v
                for v, tp, blank in zip(coerced, return_types, blanks, strict=True)
            ]
            return _pack(fresh, len(return_types))

        return cls(
            fn=fixed_return,
            signature=None,
            return_types=return_types,
            source="returns",
        )

    def bind(
        self, method: str, args: Sequence[Any], *, strict: bool = True
    ) -> list[Any]:
        """Check and coerce call arguments.

        Args:
            method: Method name, used in error messages
            args: Untyped positional arguments
            strict: Check values against parameter annotations

        Returns:
            Coerced arguments, in order

        Raises:
            ArgumentMismatchError: If the arguments do not fit the signature
            TypeMismatchError: If an argument does not match its annotation
        """
        if self.signature is None:
            return list(args)

        try:
            self.signature.bind(*args)
        except TypeError as e:
            raise ArgumentMismatchError(
                f"Cannot call {method!r} with {len(args)} argument(s): {e}"
            ) from e

        params = list(self.signature.parameters.values())
        positional = [
            p
            for p in params
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        ]
        variadic = next((p for p in params if p.kind is p.VAR_POSITIONAL), None)

        coerced = []
        for index, arg in enumerate(args):
            if index < len(positional):
                param = positional[index]
            elif variadic is not None:
                param = variadic
            else:
                raise ArgumentMismatchError(
                    f"Cannot call {method!r}: too many arguments, "
                    f"expected at most {len(positional)}"
                )
            coerced.append(
                coerce(
                    arg,
                    self.param_types.get(param.name, Any),
                    strict=strict,
                    where=f"argument {param.name!r} of {method!r}",
                )
            )
        return coerced

    def split(self, method: str, result: Any, *, strict: bool = True) -> list[Any]:
        """Split a raw result into one coerced value per result slot.

        Raises:
            ArgumentMismatchError: If a multi-slot result is not a tuple of
                the declared length
            TypeMismatchError: If a value does not match its slot
        """
        count = len(self.return_types)
        if count == 0:
            return []
        if count == 1:
            values = [result]
        elif isinstance(result, tuple) and len(result) == count:
            values = list(result)
        else:
            raise ArgumentMismatchError(
                f"Method {method!r} must return a tuple of {count} values, "
                f"got {result!r}"
            )

        return [
            coerce(v, tp, strict=strict, where=f"return value {i} of {method!r}")
            for i, (v, tp) in enumerate(zip(values, self.return_types, strict=True))
        ]
