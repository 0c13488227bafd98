"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the runtime.

Usage:
    from treewire.config import RuntimeSettings

    # Load from environment variables (TREEWIRE_*)
    settings = RuntimeSettings()

    # Or override with explicit values (optimized build)
    settings = RuntimeSettings(debug=False, sink="null")
"""

from __future__ import annotations

from typing import Literal

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for the config module. "
        "Install with: pip install pydantic-settings"
    ) from e


class RuntimeSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for a component runtime.

    Attributes:
        debug: Development build. When False, non-fatal diagnostics
            (warnings) are dropped and injected bindings carry no mutation guard.
        silent: Suppress warnings even in development builds.
        sink: Where diagnostics go (logging, warnings, null).
        log_level: Level for the logging sink's logger.

    Environment Variables:
        TREEWIRE_DEBUG
        TREEWIRE_SILENT
        TREEWIRE_SINK
        TREEWIRE_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="TREEWIRE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = True
    silent: bool = False
    sink: Literal["logging", "warnings", "null"] = "logging"
    log_level: str = "WARNING"
