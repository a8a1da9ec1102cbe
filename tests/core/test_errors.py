"""Tests for continuator.core.errors module."""

import pytest

from continuator.core.errors import (
    ConfigError,
    ContinuatorError,
    ErrorCategory,
    ErrorContext,
)


class TestErrorCategory:
    """Test ErrorCategory enum."""

    def test_values(self):
        assert ErrorCategory.REGISTRY.value == "REGISTRY"
        assert ErrorCategory.PIPELINE.value == "PIPELINE"
        assert ErrorCategory.CONFIG.value == "CONFIG"

    def test_is_str(self):
        assert isinstance(ErrorCategory.INTERNAL, str)


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_create_empty_context(self):
        ctx = ErrorContext()
        assert ctx.pipeline is None
        assert ctx.step is None
        assert ctx.metadata == {}
        assert ctx.to_dict() == {}

    def test_to_dict_only_set_fields(self):
        ctx = ErrorContext(pipeline="etl", position=2, metadata={"target": "missing"})
        assert ctx.to_dict() == {"pipeline": "etl", "position": 2, "target": "missing"}

    def test_position_zero_is_kept(self):
        assert ErrorContext(position=0).to_dict() == {"position": 0}


class TestContinuatorError:
    """Test the base error type."""

    def test_defaults(self):
        err = ContinuatorError("Something failed")
        assert str(err) == "Something failed"
        assert err.message == "Something failed"
        assert err.category == ErrorCategory.INTERNAL
        assert err.cause is None

    def test_explicit_category(self):
        err = ContinuatorError("x", category=ErrorCategory.UNKNOWN)
        assert err.category == ErrorCategory.UNKNOWN

    def test_cause_sets_dunder_cause(self):
        original = KeyError("k")
        err = ContinuatorError("wrapped", cause=original)
        assert err.cause is original
        assert err.__cause__ is original

    def test_with_context_is_fluent(self):
        err = ContinuatorError("x")
        assert err.with_context(pipeline="etl") is err

    def test_with_context_typed_and_metadata(self):
        err = ContinuatorError("x").with_context(step="parse", position=1, target="nowhere")
        assert err.context.step == "parse"
        assert err.context.position == 1
        assert err.context.metadata == {"target": "nowhere"}

    def test_with_context_metadata_key_goes_to_metadata(self):
        err = ContinuatorError("x").with_context(metadata="literal")
        assert err.context.metadata == {"metadata": "literal"}

    def test_to_dict(self):
        err = ContinuatorError("failed", cause=ValueError("bad")).with_context(pipeline="etl")
        data = err.to_dict()
        assert data["error_type"] == "ContinuatorError"
        assert data["message"] == "failed"
        assert data["category"] == "INTERNAL"
        assert data["context"] == {"pipeline": "etl"}
        assert data["cause"] == "bad"

    def test_to_dict_without_context(self):
        assert "context" not in ContinuatorError("x").to_dict()

    def test_repr(self):
        assert repr(ContinuatorError("oops")) == "ContinuatorError('oops', category=INTERNAL)"

    def test_raise_and_catch(self):
        with pytest.raises(ContinuatorError, match="nope"):
            raise ContinuatorError("nope")


class TestConfigError:
    def test_category(self):
        err = ConfigError("missing")
        assert err.category == ErrorCategory.CONFIG
        assert isinstance(err, ContinuatorError)
