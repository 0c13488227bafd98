"""Configuration module using Pydantic Settings.

Provides typed runtime configuration with environment variable support.

Usage:
    from treewire.config import RuntimeSettings

    settings = RuntimeSettings(debug=False)
"""

from treewire.config.settings import RuntimeSettings

__all__ = [
    "RuntimeSettings",
]
