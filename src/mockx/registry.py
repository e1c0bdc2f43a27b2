"""The mock registry.

Mockx holds the method registry and the last-call argument log for one test
double. Consumers subclass it next to the interface they fake and forward
each method to ``call``:

    class CalculatorMock(Calculator, Mockx):
        def add(self, a: int, b: int) -> int:
            values = self.call("add", a, b)
            return value(int, values[0])

    calculator = CalculatorMock()
    calculator.init(Calculator)
    calculator.returns("add", 64)

``mockx.mock_of`` writes these forwarding methods for you.

A registry is not thread-safe. Use one instance per test.
"""

import inspect
from collections.abc import Callable
from typing import Any

from mockx.config import MockxSettings, get_settings
from mockx.errors import (
    AsyncImplementationError,
    MethodNotCalledError,
    MethodNotRegisteredError,
)
from mockx.implementation import Implementation
from mockx.logging import get_logger
from mockx.signature import method_signatures

__all__ = ["Mockx"]

logger = get_logger(__name__)


class Mockx:
    """Registry of mock method implementations with argument tracking.

    Every misuse (calling an unregistered method, reading arguments of a
    method that was never called, passing values of the wrong type) raises
    a MockxError. These mark broken test setup and are never caught here.
    """

    def __init__(self, *, settings: MockxSettings | None = None) -> None:
        """Create an empty registry.

        Args:
            settings: Overrides the process-wide MockxSettings
        """
        self._mockx_methods: dict[str, Implementation] = {}
        self._mockx_args: dict[str, list[Any]] = {}
        self._mockx_settings = settings or get_settings()

    def init(self, interface: type) -> None:
        """Register a zero-value implementation for every interface method.

        Existing registrations with the same names are overwritten. This is
        optional: without it, every method used must be registered through
        impl() first.

        Args:
            interface: The ABC or Protocol class being mocked

        Raises:
            InterfaceError: If interface is not a class
        """
        for method in method_signatures(interface):
            self._register(method.name, Implementation.zero(method))

    def call(self, method: str, *args: Any) -> list[Any]:
        """Invoke the implementation registered for a method.

        The arguments are recorded before dispatch, replacing the previous
        record for this method.

        Args:
            method: Method name
            *args: Arguments, coerced to the implementation's parameter types

        Returns:
            One value per declared result slot

        Raises:
            MethodNotRegisteredError: If nothing is registered for method
            AsyncImplementationError: If the implementation is a coroutine
                function (use acall)
            ArgumentMismatchError: If the argument count does not fit
            TypeMismatchError: If an argument or result has the wrong type
        """
        implementation = self._lookup(method)
        if implementation.is_async:
            raise AsyncImplementationError(method)

        arguments = self._dispatch_args(method, implementation, args)
        result = implementation.fn(*arguments)
        return implementation.split(method, result, strict=self._strict)

    async def acall(self, method: str, *args: Any) -> list[Any]:
        """Async twin of call() for coroutine interface methods.

        Awaits the implementation's result when it is awaitable, so both
        plain and coroutine implementations are accepted.
        """
        implementation = self._lookup(method)
        arguments = self._dispatch_args(method, implementation, args)
        result = implementation.fn(*arguments)
        if inspect.isawaitable(result):
            result = await result
        return implementation.split(method, result, strict=self._strict)

    def impl(self, method: str, fn: Callable[..., Any]) -> None:
        """Register a function as the implementation of a method.

        The function is not checked against the interface. Its own
        annotations decide how later calls are coerced. Without a return
        annotation it keeps the result slots of the previous registration.

        Raises:
            TypeError: If fn is not callable
        """
        previous = self._mockx_methods.get(method)
        self._register(method, Implementation.from_callable(fn, previous))

    def returns(self, method: str, *values: Any) -> None:
        """Make a method return the given values, whatever its arguments.

        Each value is coerced to its declared result type. None becomes the
        zero value of that type.

        Raises:
            MethodNotRegisteredError: If nothing is registered for method
            ArgumentMismatchError: If the value count differs from the
                declared result count
            TypeMismatchError: If a value has the wrong type
        """
        previous = self._lookup(method)
        self._register(
            method,
            Implementation.fixed(method, values, previous, strict=self._strict),
        )

    def args(self, method: str) -> list[Any]:
        """Return the arguments of the most recent call to a method.

        Raises:
            MethodNotCalledError: If the method was never called
        """
        if method not in self._mockx_args:
            raise MethodNotCalledError(method)
        return list(self._mockx_args[method])

    @property
    def _strict(self) -> bool:
        return self._mockx_settings.strict_types

    def _lookup(self, method: str) -> Implementation:
        if method not in self._mockx_methods:
            raise MethodNotRegisteredError(method)
        return self._mockx_methods[method]

    def _register(self, method: str, implementation: Implementation) -> None:
        self._mockx_methods[method] = implementation
        logger.debug(
            "mockx.method_registered",
            method=method,
            source=implementation.source,
        )

    def _dispatch_args(
        self, method: str, implementation: Implementation, args: tuple[Any, ...]
    ) -> list[Any]:
        self._mockx_args[method] = list(args)
        logger.debug("mockx.method_called", method=method, arg_count=len(args))
        return implementation.bind(method, args, strict=self._strict)
