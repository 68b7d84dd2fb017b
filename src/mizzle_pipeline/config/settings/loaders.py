"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Mapping, TypeVar

from mizzle_pipeline.config.settings.base import Settings
from mizzle_pipeline.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class SettingsLoader(abc.ABC):
    """Reads a :class:`Settings` subclass from one source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Read each field from ``<PREFIX>_<FIELD>``.

    Values are strings and are converted according to the field's
    annotation: ``bool`` (``1/true/yes/on``), ``int``, ``float`` and
    comma-separated ``list``.  Anything else is passed through.
    *environ* defaults to :data:`os.environ`.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        required = set(settings_class.required_fields())
        values: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            key = settings_class.env_key(field.name)
            if key not in environ:
                if field.name in required:
                    raise MissingRequiredSettingError(key)
                continue
            raw = environ[key]
            try:
                values[field.name] = self._coerce(raw, field.type)
            except ValueError as exc:
                raise InvalidSettingValueError(key, raw, str(exc)) from exc

        try:
            return settings_class(**values)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Cannot build {settings_class.__name__} from environment: {exc}", cause=exc) from exc

    @staticmethod
    def _coerce(raw: str, annotation: Any) -> Any:
        # annotations are strings under ``from __future__ import annotations``
        name = annotation if isinstance(annotation, str) else getattr(annotation, "__name__", str(annotation))
        if name == "bool":
            return raw.strip().lower() in _TRUTHY
        if name == "int":
            return int(raw)
        if name == "float":
            return float(raw)
        if name.startswith("list") or getattr(annotation, "__origin__", None) is list:
            return [item.strip() for item in raw.split(",") if item.strip()]
        return raw


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
