"""Unit tests for the error hierarchy."""

from __future__ import annotations

import pytest

from mizzle_pipeline.config import ConfigError
from mizzle_pipeline.kernel.errors import InvalidChainUse, MizzleError, PipelineError, ValidationError


class TestMizzleError:
    def test_message_is_stored(self) -> None:
        err = MizzleError("something went wrong")
        assert err.message == "something went wrong"
        assert str(err) == "something went wrong"

    def test_default_code(self) -> None:
        assert MizzleError("m").code == "mizzle_error"

    def test_custom_code(self) -> None:
        assert MizzleError("m", code="custom").code == "custom"

    def test_to_dict_basic(self) -> None:
        err = MizzleError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {
            "error": "MizzleError",
            "code": "my_code",
            "message": "m",
            "detail": {"key": "val"},
        }

    def test_to_dict_omits_empty_detail(self) -> None:
        assert "detail" not in MizzleError("m").to_dict()

    def test_to_dict_includes_cause_repr(self) -> None:
        err = MizzleError("wrapper", cause=ValueError("original"))
        assert "original" in err.to_dict()["cause"]

    def test_cause_sets_dunder_cause(self) -> None:
        cause = RuntimeError("root")
        assert MizzleError("wrap", cause=cause).__cause__ is cause

    def test_repr(self) -> None:
        assert repr(MizzleError("m", code="c")) == "MizzleError('m', code='c')"


class TestInvalidChainUse:
    def test_defaults(self) -> None:
        err = InvalidChainUse()
        assert err.message == "next() called multiple times"
        assert err.code == "invalid_chain_use"

    def test_hierarchy(self) -> None:
        assert issubclass(InvalidChainUse, PipelineError)
        assert issubclass(PipelineError, MizzleError)


class TestValidationError:
    def test_carries_errors(self) -> None:
        err = ValidationError(["name is required", "age must be positive"])
        assert err.errors == ["name is required", "age must be positive"]
        assert err.message == "Validation failed"
        assert err.code == "validation_error"

    def test_default_errors(self) -> None:
        assert ValidationError().errors == ["Validation failed"]
        assert ValidationError([]).errors == ["Validation failed"]

    def test_to_dict_includes_errors(self) -> None:
        payload = ValidationError(["bad"]).to_dict()
        assert payload["errors"] == ["bad"]
        assert payload["code"] == "validation_error"

    def test_caught_as_root(self) -> None:
        with pytest.raises(MizzleError):
            raise ValidationError(["bad"])

    def test_config_errors_share_root(self) -> None:
        assert issubclass(ConfigError, MizzleError)
