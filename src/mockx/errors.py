"""Error types raised by mockx.

Every error here marks a defect in test setup. None of them are caught
inside the library.
"""

from typing import get_origin


class MockxError(Exception):
    """Base error for mock registry misuse."""

    pass


class SetupError(MockxError):
    """The mock was not set up for the requested operation."""

    pass


class MethodNotRegisteredError(SetupError):
    """Method has no registered implementation."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(
            f"Could not call method {method!r}, not registered in mockx instance."
        )


class InterfaceError(SetupError):
    """The interface descriptor is not a class."""

    pass


class AsyncImplementationError(SetupError):
    """A coroutine implementation was dispatched synchronously."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(
            f"Implementation of {method!r} is a coroutine function, use acall()."
        )


class QueryError(MockxError):
    """Recorded call data was requested but does not exist."""

    pass


class MethodNotCalledError(QueryError):
    """Arguments were requested for a method that was never called."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(
            f"Cannot get args for method {method!r}, method was not called."
        )


class TypeMismatchError(MockxError, TypeError):
    """A value is incompatible with its declared type."""

    def __init__(self, expected: object, actual: object, where: str = "") -> None:
        self.expected = expected
        self.actual = actual
        location = f" for {where}" if where else ""
        super().__init__(
            f"Expected {_type_name(expected)}{location}, "
            f"got {type(actual).__name__}: {actual!r}"
        )


class ArgumentMismatchError(MockxError, TypeError):
    """The number of values does not fit the declared signature."""

    pass


def _type_name(tp: object) -> str:
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__name__
    return repr(tp)
