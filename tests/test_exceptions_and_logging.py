"""Exceptions and logging tests.

These tests verify:
- Exception hierarchy and messages
- Structured logging functions and field normalization
- Resolver log output for recovered failures
"""

from __future__ import annotations

import logging

import pytest

from route_binding import (
    BindingConfigError,
    BindingKind,
    CompositeShapeError,
    EntityNotFoundError,
    InvalidConfigurationError,
    LogContext,
    RouteBindingError,
    log_debug,
    log_error,
    log_info,
    log_trace,
    log_warn,
)
from route_binding.logging import TRACE, _normalize_fields, get_logger


class TestExceptions:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "exc_class",
        [InvalidConfigurationError, EntityNotFoundError, BindingConfigError],
    )
    def test_inherit_from_base(self, exc_class):
        """Test all errors derive from RouteBindingError."""
        assert issubclass(exc_class, RouteBindingError)

    def test_builtin_bases(self):
        """Test errors also match the matching builtin exception types."""
        assert issubclass(InvalidConfigurationError, ValueError)
        assert issubclass(EntityNotFoundError, LookupError)
        assert issubclass(CompositeShapeError, RouteBindingError)

    def test_entity_not_found_for_identifier(self):
        """Test the unknown-identifier message and attributes."""
        error = EntityNotFoundError.for_identifier(r"App\Models\User")

        assert str(error) == r"Route-Model-Binding : Model not found : [App\Models\User]"
        assert error.identifier == r"App\Models\User"
        assert error.field is None

    def test_entity_not_found_for_lookup(self):
        """Test the failed-lookup message and attributes."""
        error = EntityNotFoundError.for_lookup(None, "slug", "abc")

        assert str(error) == "No query results for [entity] where slug = 'abc'"
        assert error.field == "slug"
        assert error.value == "abc"

    def test_composite_shape_error(self):
        """Test the shape error message mentions both counts."""
        error = CompositeShapeError(expected=2, actual=3)

        assert "same count as the wildcards" in str(error)
        assert "expected 2, got 3" in str(error)

    def test_composite_shape_error_non_sequence(self):
        """Test the shape error for non-sequence results."""
        error = CompositeShapeError(expected=2, actual=None)

        assert "a non-sequence value" in str(error)
        assert error.actual is None


class TestLoggingFunctions:
    """Tests for structured logging functions."""

    @pytest.mark.parametrize(
        ("log_fn", "level"),
        [
            (log_error, logging.ERROR),
            (log_warn, logging.WARNING),
            (log_info, logging.INFO),
            (log_debug, logging.DEBUG),
            (log_trace, TRACE),
        ],
    )
    def test_levels(self, caplog, log_fn, level):
        """Test each function logs at its level with fields attached."""
        with caplog.at_level(TRACE, logger="route_binding"):
            log_fn("message", {"count": 3})

        record = caplog.records[-1]
        assert record.levelno == level
        assert record.getMessage() == "message"
        assert record.fields == {"count": "3"}

    def test_without_fields(self, caplog):
        """Test logging without fields attaches an empty dict."""
        with caplog.at_level(logging.INFO, logger="route_binding"):
            log_info("plain")

        assert caplog.records[-1].fields == {}

    def test_disabled_level_skipped(self, caplog):
        """Test records below the logger level are not emitted."""
        with caplog.at_level(logging.INFO, logger="route_binding"):
            log_debug("hidden")

        assert not [r for r in caplog.records if r.getMessage() == "hidden"]

    def test_trace_level_name(self):
        """Test the TRACE level is registered."""
        assert logging.getLevelName(TRACE) == "TRACE"
        assert get_logger().name == "route_binding"


class TestFieldNormalization:
    """Tests for log field normalization."""

    def test_none(self):
        assert _normalize_fields(None) is None

    def test_dict_values_stringified(self):
        assert _normalize_fields({"a": 1, "b": True}) == {"a": "1", "b": "True"}

    def test_log_context_drops_none(self):
        """Test LogContext fields are flattened and None values dropped."""
        context = LogContext(parameter="user", binding_kind=BindingKind.EXPLICIT)

        assert _normalize_fields(context) == {
            "parameter": "user",
            "binding_kind": "explicit",
        }


class TestResolverLogging:
    """Tests for resolver log output."""

    def test_recovered_failure_logged_as_warning(self, caplog, resolver):
        """Test a handler-recovered failure is logged with binding context."""

        def fail(value):
            raise RuntimeError("boom")

        resolver.bind("user", fail, lambda e: "guest")

        with caplog.at_level(logging.WARNING, logger="route_binding"):
            resolver.resolve_bindings({"user": "1"})

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "boom" in warnings[0].getMessage()
        assert warnings[0].fields["parameter"] == "user"
        assert warnings[0].fields["binding_kind"] == "explicit"

    def test_registration_logged_at_debug(self, caplog, resolver):
        """Test registrations are logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="route_binding"):
            resolver.bind("user", r"App\Models\User")

        assert any(r"App\Models\User" in r.getMessage() for r in caplog.records)
