"""Tests for synthesized adapters."""

from abc import ABC, abstractmethod
from typing import Protocol

import pytest

from mockx import ArgumentMismatchError, InterfaceError, Mockx, MockxSettings, mock_of
from mockx.adapter import adapter_class

from tests.interfaces import Calculator, Embedder, Greeter, Searcher, Sorting


class Repository(ABC):
    @abstractmethod
    def find(self, key: str, limit: int = 10) -> list[str]: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...

    @abstractmethod
    def configure(self, *, verbose: bool) -> None: ...


class Clashing(Protocol):
    def call(self, url: str) -> bytes: ...


class TestMockOf:
    """Tests for mock_of."""

    def test_instance_of_interface_and_mockx(self) -> None:
        calculator = mock_of(Calculator)

        assert isinstance(calculator, Calculator)
        assert isinstance(calculator, Mockx)
        assert type(calculator).__name__ == "CalculatorMock"

    def test_defaults_after_creation(self) -> None:
        calculator = mock_of(Calculator)

        assert calculator.add(1, 2) == 0

    def test_full_lifecycle(self) -> None:
        calculator = mock_of(Calculator)

        calculator.impl("add", lambda a, b: a + b)
        assert calculator.add(1, 2) == 3

        calculator.returns("add", 64)
        assert calculator.add(1, 2) == 64
        assert calculator.args("add") == [1, 2]

    def test_protocol_interface(self) -> None:
        greeter = mock_of(Greeter)
        greeter.returns("greet", "Hello, Python!")

        assert greeter.greet("Mockx") == "Hello, Python!"

    def test_multiple_results_unpacked(self) -> None:
        sorting = mock_of(Sorting)

        sorting.returns("is_sorted", False, None)
        assert Searcher(sorting).search([3, 1, 2, 5, 4], 3) == 0

        sorting.returns("is_sorted", True, None)
        assert Searcher(sorting).search([3, 1, 2, 5, 4], 3) == -1

    def test_no_results_returns_none(self) -> None:
        repository = mock_of(Repository)

        assert repository.delete("k") is None
        assert repository.args("delete") == ["k"]

    def test_keywords_and_defaults_recorded_positionally(self) -> None:
        repository = mock_of(Repository)

        repository.find(key="k")

        assert repository.args("find") == ["k", 10]

    def test_bad_arguments(self) -> None:
        repository = mock_of(Repository)

        with pytest.raises(ArgumentMismatchError, match="find"):
            repository.find()

    def test_keyword_only_not_forwarded(self) -> None:
        repository = mock_of(Repository)

        with pytest.raises(ArgumentMismatchError, match="keyword-only"):
            repository.configure(verbose=True)

    def test_property(self) -> None:
        embedder = mock_of(Embedder)

        assert embedder.dimension == 0

        embedder.returns("dimension", 768)
        assert embedder.dimension == 768

    def test_settings_passed_through(self) -> None:
        calculator = mock_of(Calculator, settings=MockxSettings(strict_types=False))
        calculator.impl("add", lambda a, b: "not a number")

        assert calculator.add(1, 2) == "not a number"

    def test_name_clash_rejected(self) -> None:
        with pytest.raises(InterfaceError, match="call"):
            adapter_class(Clashing)

    def test_independent_instances(self) -> None:
        first = mock_of(Calculator)
        second = mock_of(Calculator)

        first.returns("add", 1)

        assert first.add(0, 0) == 1
        assert second.add(0, 0) == 0
