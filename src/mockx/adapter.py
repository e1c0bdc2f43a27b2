"""Synthesized adapters.

Hand-written adapters forward each interface method to Mockx.call() and
unpack the results. mock_of() builds that class at runtime instead:

    sorting = mock_of(Sorting)
    sorting.returns("is_sorted", False, None)
    searcher = Searcher(sorting)
"""

from collections.abc import Callable
from typing import Any

from mockx.config import MockxSettings
from mockx.errors import ArgumentMismatchError, InterfaceError
from mockx.registry import Mockx
from mockx.signature import MethodSignature, method_signatures

__all__ = ["adapter_class", "mock_of"]

# Interface members with these names would hide the registry API
_RESERVED = frozenset(name for name in dir(Mockx) if not name.startswith("_"))


def mock_of(interface: type, *, settings: MockxSettings | None = None) -> Any:
    """Create a ready-to-use mock of an interface.

    The returned object is an instance of both ``interface`` and Mockx, with
    every interface method registered to return zero values.

    Args:
        interface: The ABC or Protocol class to mock
        settings: Optional per-mock settings

    Returns:
        The mock instance

    Raises:
        InterfaceError: If interface is not a class or one of its methods is
            named like a Mockx method
    """
    mock = adapter_class(interface)(settings=settings)
    mock.init(interface)
    return mock


def adapter_class(interface: type) -> type[Mockx]:
    """Build the adapter class for an interface.

    Each method forwards its arguments to call() (acall() for coroutine
    methods) and unpacks the results: no result slots return None, one slot
    returns the value, several return a tuple. Properties forward to call()
    with no arguments.
    """
    signatures = method_signatures(interface)

    clashes = sorted(m.name for m in signatures if m.name in _RESERVED)
    if clashes:
        raise InterfaceError(
            f"{interface.__name__} cannot be adapted, methods {clashes} "
            f"collide with the Mockx API"
        )

    namespace: dict[str, Any] = {m.name: _forwarder(m) for m in signatures}
    namespace["__init__"] = _adapter_init
    namespace["__module__"] = interface.__module__
    namespace["__qualname__"] = f"{interface.__qualname__}Mock"

    return type(f"{interface.__name__}Mock", (interface, Mockx), namespace)


def _adapter_init(self: Mockx, *, settings: MockxSettings | None = None) -> None:
    Mockx.__init__(self, settings=settings)


def _unpack(values: list[Any]) -> Any:
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return tuple(values)


def _positional(method: MethodSignature, args: Any, kwargs: Any) -> tuple[Any, ...]:
    """Bind a call to the method signature and return it as positional args.

    Defaults are filled in, so the recorded arguments always list every
    positional parameter.
    """
    try:
        bound = method.signature.bind(*args, **kwargs)
    except TypeError as e:
        raise ArgumentMismatchError(f"{method.name}(): {e}") from e
    bound.apply_defaults()
    if bound.kwargs:
        raise ArgumentMismatchError(
            f"{method.name}(): keyword-only parameters "
            f"{sorted(bound.kwargs)} cannot be forwarded"
        )
    return bound.args


def _forwarder(method: MethodSignature) -> Callable[..., Any] | property:
    name = method.name

    if method.is_property:

        def getter(self: Mockx) -> Any:
            return _unpack(self.call(name))

        return property(getter, doc=f"Mocked property {name!r}.")

    if method.is_async:

        async def forward_async(self: Mockx, *args: Any, **kwargs: Any) -> Any:
            values = await self.acall(name, *_positional(method, args, kwargs))
            return _unpack(values)

        forward: Callable[..., Any] = forward_async
    else:

        def forward_sync(self: Mockx, *args: Any, **kwargs: Any) -> Any:
            return _unpack(self.call(name, *_positional(method, args, kwargs)))

        forward = forward_sync

    forward.__name__ = name
    forward.__qualname__ = name
    forward.__doc__ = f"Mocked method {name!r}."
    return forward
