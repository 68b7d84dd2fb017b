"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass
class Settings:
    """Dataclass base for settings read from the environment.

    Subclasses set ``_prefix``; field ``foo`` is then read from
    ``<PREFIX>_FOO``.  Fields without a default are required.  Override
    :meth:`_validate` to check or normalise values after construction.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Hook run after every construction."""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        if not cls._prefix:
            return field_name.upper()
        return f"{cls._prefix}_{field_name}".upper()

    @classmethod
    def required_fields(cls) -> list[str]:
        return [
            f.name
            for f in dataclasses.fields(cls)
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        ]

    def as_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


__all__ = ["Settings"]
