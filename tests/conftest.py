"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest
import structlog

from mockx import MockxSettings, get_settings

from tests.interfaces import Calculator, CalculatorMock


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None, None, None]:
    """Drop cached settings and structlog configuration between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def lenient_settings() -> MockxSettings:
    """Settings with isinstance checks disabled."""
    return MockxSettings(strict_types=False)


@pytest.fixture
def calculator() -> CalculatorMock:
    """A Calculator mock populated with zero-value defaults."""
    mock = CalculatorMock()
    mock.init(Calculator)
    return mock
