"""Configuration management for kumiko.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, design documents or defaults.

Key classes:
- CuttingParams: Physical cutting parameters (bit, depths, stock, grid)
- StripConfig: Strip derivation settings
- ExportConfig: Vector export settings
- LoggingConfig: Logging settings
- KumikoSettings: Main application settings
"""

from kumiko.config.settings import (
    MIN_LENGTH_MM,
    CuttingParams,
    ExportConfig,
    ExportPass,
    KumikoSettings,
    LoggingConfig,
    NotchStyle,
    StripConfig,
    get_default_settings,
    parse_params,
)

__all__ = [
    "MIN_LENGTH_MM",
    "CuttingParams",
    "ExportConfig",
    "ExportPass",
    "KumikoSettings",
    "LoggingConfig",
    "NotchStyle",
    "StripConfig",
    "get_default_settings",
    "parse_params",
]
