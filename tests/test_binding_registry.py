"""Tests for binding registry infrastructure.

Tests binder parsing, binding definition types, the method dispatch
wrapper, and the default route-key lookup.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from route_binding import EntityNotFoundError, InMemoryRepository
from route_binding.registry import (
    CallableBinder,
    CompositeBinding,
    DefaultLookupResolver,
    EntityBinder,
    EntityMethodBinder,
    EntityMethodCall,
    ExplicitBinding,
    ImplicitBindingRule,
    InvalidBinder,
    RouteBindable,
    capitalize_key,
    parse_binder,
)

# =============================================================================
# Test Entities
# =============================================================================


class CountryRepository(InMemoryRepository):
    """Repository keyed on country code."""

    route_key_name = "code"
    records = [
        {"code": "X1", "name": "Xland"},
        {"code": "Y2", "name": "Yland"},
    ]


class MultiMethodRepo:
    """Entity with several lookup methods."""

    def find_by_slug(self, value):
        return {"slug": value}

    def find_pair(self, first, second):
        return [first, second]

    not_callable = "plain attribute"


# =============================================================================
# parse_binder Tests
# =============================================================================


class TestParseBinder:
    """Tests for parse_binder."""

    def test_entity_string(self):
        """Test a plain string becomes an EntityBinder."""
        binder = parse_binder(r"App\Models\User")

        assert binder == EntityBinder(identifier=r"App\Models\User")

    def test_entity_method_string(self):
        """Test 'Class@method' becomes an EntityMethodBinder."""
        binder = parse_binder(r"App\Repos\UserRepo@findForRoute")

        assert binder == EntityMethodBinder(
            identifier=r"App\Repos\UserRepo", method="findForRoute"
        )

    def test_splits_on_first_separator_only(self):
        """Test only the first '@' separates identifier and method."""
        binder = parse_binder("Repo@find@extra")

        assert isinstance(binder, EntityMethodBinder)
        assert binder.identifier == "Repo"
        assert binder.method == "find@extra"

    def test_callable(self):
        """Test callables become CallableBinder."""

        def bind(value):
            return value

        binder = parse_binder(bind)

        assert isinstance(binder, CallableBinder)
        assert binder.callback is bind
        assert binder.describe().endswith("bind")

    @pytest.mark.parametrize("value", ["", "@method", "Class@", 42, None, ["a", "b"]])
    def test_invalid_values(self, value):
        """Test unsupported shapes become InvalidBinder instead of raising."""
        binder = parse_binder(value)

        assert isinstance(binder, InvalidBinder)
        assert binder.value == value

    def test_already_parsed_binder_passes_through(self):
        """Test parsing an already-parsed binder returns it unchanged."""
        binder = EntityBinder(identifier="Repo")

        assert parse_binder(binder) is binder

    def test_describe(self):
        """Test describe() renders a readable binder name."""
        assert EntityBinder("Repo").describe() == "Repo"
        assert EntityMethodBinder("Repo", "find").describe() == "Repo@find"
        assert InvalidBinder(42).describe() == "<invalid int>"


# =============================================================================
# Binding Definition Tests
# =============================================================================


class TestCapitalizeKey:
    """Tests for capitalize_key."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("model", "Model"),
            ("myTest", "MyTest"),
            ("my_test", "My_test"),
            ("URL", "URL"),
            ("x", "X"),
            ("", ""),
        ],
    )
    def test_upper_cases_first_character_only(self, key, expected):
        """Test only the first character changes case."""
        assert capitalize_key(key) == expected


class TestImplicitBindingRule:
    """Tests for ImplicitBindingRule."""

    def test_defaults(self):
        """Test default affixes and method."""
        rule = ImplicitBindingRule(namespace=r"App\Models")

        assert rule.prefix == ""
        assert rule.suffix == ""
        assert rule.method is None
        assert rule.error_handler is None

    def test_candidate_identifier(self):
        """Test candidate identifier composition."""
        rule = ImplicitBindingRule(
            namespace=r"App\Repositories", prefix="My", suffix="Repo"
        )

        assert rule.candidate_identifier("test", "\\") == r"App\Repositories\MyTestRepo"

    def test_candidate_identifier_with_dotted_separator(self):
        """Test the separator is configurable."""
        rule = ImplicitBindingRule(namespace="app.models")

        assert rule.candidate_identifier("user", ".") == "app.models.User"

    def test_pattern(self):
        """Test the debugging pattern."""
        rule = ImplicitBindingRule(namespace=r"App\Repos", suffix="Repository")

        assert rule.pattern("\\") == r"App\Repos\{Key}Repository"


class TestCompositeBinding:
    """Tests for CompositeBinding."""

    def test_matches_exact_order(self):
        """Test matching requires identical names in identical order."""
        binding = CompositeBinding(keys=("post", "comment"), binder=EntityBinder("X"))

        assert binding.matches(("post", "comment")) is True
        assert binding.matches(("comment", "post")) is False
        assert binding.matches(("post",)) is False
        assert binding.matches(("post", "comment", "extra")) is False

    def test_is_frozen(self):
        """Test definitions are immutable."""
        binding = ExplicitBinding(key="user", binder=EntityBinder("X"))

        with pytest.raises(AttributeError):
            binding.key = "other"  # type: ignore[misc]


# =============================================================================
# EntityMethodCall Tests
# =============================================================================


class TestEntityMethodCall:
    """Tests for EntityMethodCall."""

    def test_calls_named_method(self):
        """Test the wrapper forwards to the named method."""
        call = EntityMethodCall(MultiMethodRepo(), "find_by_slug")

        assert call("hello") == {"slug": "hello"}

    def test_forwards_all_arguments(self):
        """Test positional arguments are forwarded in order."""
        call = EntityMethodCall(MultiMethodRepo(), "find_pair")

        assert call("a", "b") == ["a", "b"]

    def test_missing_method_raises_on_call(self):
        """Test a missing method only fails when called."""
        call = EntityMethodCall(MultiMethodRepo(), "does_not_exist")

        with pytest.raises(AttributeError, match="does_not_exist"):
            call("value")

    def test_non_callable_attribute_raises(self):
        """Test a non-callable attribute is rejected."""
        call = EntityMethodCall(MultiMethodRepo(), "not_callable")

        with pytest.raises(AttributeError, match="not_callable"):
            call()

    def test_unwrap_returns_original(self):
        """Test unwrap returns the wrapped instance."""
        repo = MultiMethodRepo()
        call = EntityMethodCall(repo, "find_by_slug")

        assert call.unwrap() is repo
        assert call.instance is repo
        assert call.method_name == "find_by_slug"

    def test_repr(self):
        """Test repr names the class and method."""
        call = EntityMethodCall(MultiMethodRepo(), "find_by_slug")

        assert repr(call) == "EntityMethodCall(MultiMethodRepo, method_name='find_by_slug')"


# =============================================================================
# DefaultLookupResolver Tests
# =============================================================================


class TestDefaultLookupResolver:
    """Tests for the default route-key lookup."""

    def test_queries_route_key_field(self):
        """Test the lookup queries the entity's route-key field."""
        lookup = DefaultLookupResolver(CountryRepository(), "X1")

        assert lookup() == {"code": "X1", "name": "Xland"}

    def test_lookup_is_lazy(self):
        """Test nothing is queried until the resolver is called."""
        entity = MagicMock()
        entity.get_route_key_name.return_value = "slug"

        lookup = DefaultLookupResolver(entity, "abc")
        entity.get_route_key_name.assert_not_called()

        lookup()

        entity.where.assert_called_once_with("slug", "abc")
        entity.where.return_value.first_or_fail.assert_called_once_with()

    def test_missing_record_raises(self):
        """Test a lookup with no match raises EntityNotFoundError."""
        lookup = DefaultLookupResolver(CountryRepository(), "ZZ")

        with pytest.raises(EntityNotFoundError) as exc_info:
            lookup()

        assert exc_info.value.field == "code"
        assert exc_info.value.value == "ZZ"
        assert exc_info.value.identifier == "CountryRepository"

    def test_properties(self):
        """Test the resolver exposes instance and value."""
        repo = CountryRepository()
        lookup = DefaultLookupResolver(repo, "X1")

        assert lookup.instance is repo
        assert lookup.value == "X1"

    def test_repository_satisfies_protocol(self):
        """Test InMemoryRepository is RouteBindable."""
        assert isinstance(CountryRepository(), RouteBindable)
        assert not isinstance(MultiMethodRepo(), RouteBindable)
