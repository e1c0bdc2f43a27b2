"""Mockx configuration using pydantic-settings.

All settings can be overridden via environment variables with the MOCKX_
prefix. For example, MOCKX_STRICT_TYPES=false disables isinstance checks
during coercion.

Usage:
    from mockx.config import get_settings

    if get_settings().strict_types:
        ...
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["MockxSettings", "get_settings"]


class MockxSettings(BaseSettings):
    """Configuration shared by all mock registries.

    A registry reads these once at construction. Pass an explicit instance
    to ``Mockx(settings=...)`` to override them for a single test double.
    """

    model_config = SettingsConfigDict(env_prefix="MOCKX_")

    # =========================================================================
    # Coercion
    # =========================================================================

    strict_types: bool = Field(
        default=True,
        description=(
            "Check arguments and return values against their declared types. "
            "When disabled only None-to-zero mapping and int-to-float "
            "widening are applied."
        ),
    )

    # =========================================================================
    # Logging
    # =========================================================================

    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    log_format: Literal["json", "console"] = Field(
        default="console",
        description='Log output format: "json" or "console"',
    )


@lru_cache(maxsize=1)
def get_settings() -> MockxSettings:
    """Return the process-wide settings, read from the environment once."""
    return MockxSettings()
