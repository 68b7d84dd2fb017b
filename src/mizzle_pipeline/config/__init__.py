"""Config – 12-factor settings and loaders."""

from mizzle_pipeline.config.settings import (
    EnvSettingsLoader,
    PipelineSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from mizzle_pipeline.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "PipelineSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
