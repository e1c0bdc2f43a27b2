"""Lightweight mocks for abstract interfaces.

Register per-method behavior at runtime, record call arguments and
configure return values without writing a fake class per test double:

    from mockx import mock_of

    greeter = mock_of(Greeter)
    greeter.returns("greet", "Hello, Python!")
    greeter.greet("Mockx")    # "Hello, Python!"
    greeter.args("greet")     # ["Mockx"]
"""

from mockx.adapter import adapter_class, mock_of
from mockx.coercion import coerce, reference, value, zero_value
from mockx.config import MockxSettings, get_settings
from mockx.errors import (
    ArgumentMismatchError,
    AsyncImplementationError,
    InterfaceError,
    MethodNotCalledError,
    MethodNotRegisteredError,
    MockxError,
    QueryError,
    SetupError,
    TypeMismatchError,
)
from mockx.implementation import Implementation
from mockx.logging import configure_logging
from mockx.registry import Mockx
from mockx.signature import MethodSignature, method_signatures

__all__ = [
    "ArgumentMismatchError",
    "AsyncImplementationError",
    "Implementation",
    "InterfaceError",
    "MethodNotCalledError",
    "MethodNotRegisteredError",
    "MethodSignature",
    "Mockx",
    "MockxError",
    "MockxSettings",
    "QueryError",
    "SetupError",
    "TypeMismatchError",
    "adapter_class",
    "coerce",
    "configure_logging",
    "get_settings",
    "method_signatures",
    "mock_of",
    "reference",
    "value",
    "zero_value",
]
