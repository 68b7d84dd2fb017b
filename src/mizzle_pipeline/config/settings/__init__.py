"""Config settings – 12-factor env-based configuration."""
from mizzle_pipeline.config.settings.base import Settings
from mizzle_pipeline.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from mizzle_pipeline.config.settings.factory import SettingsFactory
from mizzle_pipeline.config.settings.pipeline import PipelineSettings

__all__ = ["EnvSettingsLoader", "PipelineSettings", "Settings", "SettingsFactory", "SettingsLoader"]
