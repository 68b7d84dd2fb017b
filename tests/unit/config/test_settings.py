"""Unit tests – Settings, EnvSettingsLoader and SettingsFactory."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import pytest

from mizzle_pipeline.config import (
    ConfigError,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    Settings,
    SettingsFactory,
    SettingsLoader,
)


@dataclass
class ServiceSettings(Settings):
    _prefix: ClassVar[str] = "SVC"
    host: str = "localhost"
    port: int = 8080
    debug: bool = False
    ratio: float = 0.5
    tags: list[str] | None = None


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"
    api_key: str


class BrokenLoader(SettingsLoader):
    def load(self, settings_class):  # type: ignore[override]
        raise RuntimeError("vault sealed")


class TestEnvSettingsLoader:
    def test_defaults_when_environment_empty(self) -> None:
        s = EnvSettingsLoader({}).load(ServiceSettings)
        assert s == ServiceSettings()

    def test_coerces_values(self) -> None:
        environ = {
            "SVC_HOST": "db.internal",
            "SVC_PORT": "5432",
            "SVC_DEBUG": "yes",
            "SVC_RATIO": "0.25",
            "SVC_TAGS": "a, b,,c",
        }
        s = EnvSettingsLoader(environ).load(ServiceSettings)
        assert s.host == "db.internal"
        assert s.port == 5432
        assert s.debug is True
        assert s.ratio == 0.25
        assert s.tags == ["a", "b", "c"]

    @pytest.mark.parametrize("raw", ["0", "false", "no", "off", "whatever"])
    def test_false_booleans(self, raw: str) -> None:
        assert EnvSettingsLoader({"SVC_DEBUG": raw}).load(ServiceSettings).debug is False

    def test_bad_int_is_invalid_setting(self) -> None:
        with pytest.raises(InvalidSettingValueError) as info:
            EnvSettingsLoader({"SVC_PORT": "eighty"}).load(ServiceSettings)
        assert info.value.setting_name == "SVC_PORT"
        assert info.value.value == "eighty"

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as info:
            EnvSettingsLoader({}).load(RequiredSettings)
        assert info.value.setting_name == "REQ_API_KEY"

    def test_reads_os_environ_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REQ_API_KEY", "k-1")
        assert EnvSettingsLoader().load(RequiredSettings).api_key == "k-1"


class TestSettingsFactory:
    def test_no_loaders_uses_defaults(self) -> None:
        assert SettingsFactory.create(ServiceSettings) == ServiceSettings()

    def test_overrides_win(self) -> None:
        s = SettingsFactory.create(
            ServiceSettings,
            loaders=[EnvSettingsLoader({"SVC_PORT": "9000"})],
            overrides={"port": 1234},
        )
        assert s.port == 1234

    def test_later_loader_wins(self) -> None:
        s = SettingsFactory.create(
            ServiceSettings,
            loaders=[
                EnvSettingsLoader({"SVC_HOST": "first"}),
                EnvSettingsLoader({"SVC_HOST": "second"}),
            ],
        )
        assert s.host == "second"

    def test_failing_loader_skipped(self) -> None:
        s = SettingsFactory.create(
            ServiceSettings,
            loaders=[BrokenLoader(), EnvSettingsLoader({"SVC_PORT": "81"})],
        )
        assert s.port == 81

    def test_missing_required_after_merge(self) -> None:
        with pytest.raises(MissingRequiredSettingError):
            SettingsFactory.create(RequiredSettings, loaders=[EnvSettingsLoader({})])

    def test_required_from_overrides(self) -> None:
        s = SettingsFactory.create(RequiredSettings, overrides={"api_key": "k"})
        assert s.api_key == "k"

    def test_construction_failure_wrapped(self) -> None:
        with pytest.raises(ConfigError):
            SettingsFactory.create(ServiceSettings, overrides={"nope": 1})


class TestConfigErrors:
    def test_invalid_setting_message(self) -> None:
        err = InvalidSettingValueError("PORT", "abc", "must be an integer")
        payload = err.to_dict()
        assert payload["code"] == "invalid_setting_value"
        assert "PORT" in payload["message"]
        assert "'abc'" in payload["message"]

    def test_missing_setting_code(self) -> None:
        err = MissingRequiredSettingError("API_KEY")
        assert err.code == "missing_required_setting"
        assert isinstance(err, ConfigError)


class TestSettingsBase:
    def test_env_key(self) -> None:
        assert ServiceSettings.env_key("port") == "SVC_PORT"
        assert Settings.env_key("port") == "PORT"

    def test_required_fields(self) -> None:
        assert RequiredSettings.required_fields() == ["api_key"]
        assert ServiceSettings.required_fields() == []

    def test_as_dict(self) -> None:
        assert ServiceSettings(port=1).as_dict()["port"] == 1
