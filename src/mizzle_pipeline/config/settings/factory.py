"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from mizzle_pipeline.config.settings.base import Settings
from mizzle_pipeline.config.settings.loaders import SettingsLoader
from mizzle_pipeline.config.validation import ConfigError, MissingRequiredSettingError
from mizzle_pipeline.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

logger = get_logger(__name__)


class SettingsFactory:
    """Build a settings object from several sources.

    Each loader produces a full instance; their values are layered in order
    so the last loader wins, then *overrides* are applied on top.  A loader
    that raises contributes nothing and is logged at debug level.

    Usage::

        settings = SettingsFactory.create(
            PipelineSettings,
            loaders=[EnvSettingsLoader()],
            overrides={"log_level": "debug"},
        )
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """Raise :class:`MissingRequiredSettingError` when a required field
        has no value from any source, and :class:`ConfigError` when the
        merged values are rejected by the settings class.
        """
        values: dict[str, Any] = {}
        for loader in loaders or ():
            values.update(SettingsFactory._collect(loader, settings_cls))
        values.update(overrides or {})

        missing = [name for name in settings_cls.required_fields() if name not in values]
        if missing:
            raise MissingRequiredSettingError(missing[0])

        try:
            return settings_cls(**values)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Cannot build {settings_cls.__name__}: {exc}", cause=exc) from exc

    @staticmethod
    def _collect(loader: SettingsLoader, settings_cls: type[Settings]) -> dict[str, Any]:
        try:
            loaded = loader.load(settings_cls)
        except Exception as exc:  # noqa: BLE001
            logger.debug("settings.loader_skipped", loader=type(loader).__name__, error=repr(exc))
            return {}
        return {f.name: getattr(loaded, f.name) for f in dataclasses.fields(loaded)}


__all__ = ["SettingsFactory"]
