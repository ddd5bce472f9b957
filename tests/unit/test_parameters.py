"""
Unit tests for detourcfg parameters and the parameter registry.
"""

import threading

import pytest

from detourcfg.config.parameters import Literal, Parameter, ParameterRegistry, Reference, as_detour
from detourcfg.config.values import ConfigArray
from detourcfg.utils.exceptions import (
    ConfigurationError,
    DuplicateParameterError,
    InvalidParameterError,
    TypeMismatchError,
)


class TestParameter:
    """Test Parameter construction and detour normalisation."""

    def test_parameter_without_detour(self):
        """Test a parameter with no fallback."""
        param = Parameter("host")
        assert param.path == "host"
        assert param.detour is None
        assert str(param) == "host"

    def test_literal_default(self):
        """Test plain values become Literal detours."""
        param = Parameter("port", 8080)
        assert param.detour == Literal(8080)

    def test_parameter_detour_becomes_reference(self):
        """Test a Parameter detour is stored as a Reference to its path."""
        base = Parameter("base.port")
        param = Parameter("port", base)
        assert param.detour == Reference("base.port")

    def test_list_default_becomes_array(self):
        """Test list defaults are normalised into ConfigArray."""
        param = Parameter("peers", ["a", "b"])
        assert isinstance(param.detour.value, ConfigArray)
        assert param.detour.value == ("a", "b")

    def test_explicit_detour_targets_are_kept(self):
        """Test Literal and Reference pass through unchanged."""
        assert as_detour(Literal("x")) == Literal("x")
        assert as_detour(Reference("y")) == Reference("y")
        assert as_detour(None) is None

    def test_key_is_case_insensitive(self):
        """Test the identity key folds case."""
        assert Parameter("Host").key == Parameter("HOST").key == "host"

    def test_identity_equality(self):
        """Test parameters compare by identity, not by path."""
        first = Parameter("host")
        second = Parameter("host")
        assert first == first
        assert first != second
        assert len({first, second}) == 2

    def test_parameter_is_immutable(self):
        """Test parameters cannot be modified after construction."""
        param = Parameter("host")
        with pytest.raises(AttributeError):
            param.path = "other"

    @pytest.mark.parametrize("path", ["", None, 42])
    def test_invalid_path(self, path):
        """Test empty or non-string paths are rejected."""
        with pytest.raises(InvalidParameterError):
            Parameter(path)

    def test_invalid_reference(self):
        """Test references need a key."""
        with pytest.raises(InvalidParameterError):
            Reference("")


class TestParameterRegistry:
    """Test ParameterRegistry registration and lookup."""

    def test_define_returns_parameter(self):
        """Test define accepts a path and detour."""
        registry = ParameterRegistry()
        param = registry.define("port", 8080)
        assert isinstance(param, Parameter)
        assert registry.lookup("port") is param

    def test_define_parameter_instance(self):
        """Test define accepts a prebuilt Parameter."""
        registry = ParameterRegistry()
        param = Parameter("host")
        assert registry.define(param) is param
        assert param in registry

    def test_define_parameter_with_extra_detour(self):
        """Test a detour cannot be passed alongside a Parameter instance."""
        registry = ParameterRegistry()
        with pytest.raises(InvalidParameterError):
            registry.define(Parameter("host"), "localhost")
        assert len(registry) == 0

    def test_constructor_registers_parameters(self):
        """Test parameters passed to the constructor are defined."""
        registry = ParameterRegistry([Parameter("a"), Parameter("b")])
        assert registry.keys() == ["a", "b"]

    def test_case_insensitive_lookup(self):
        """Test lookups ignore case."""
        registry = ParameterRegistry()
        param = registry.define("Host")
        assert registry.lookup("host") is param
        assert registry.lookup("HOST") is param
        assert registry.lookup("Host") is param

    def test_duplicate_differing_in_case(self):
        """Test keys differing only in case collide."""
        registry = ParameterRegistry()
        original = registry.define("Host", "localhost")

        with pytest.raises(DuplicateParameterError) as exc_info:
            registry.define("HOST", "example.com")

        assert exc_info.value.config_key == "HOST"
        assert exc_info.value.existing_key == "Host"
        assert len(registry) == 1
        assert registry.lookup("host") is original

    def test_lookup_missing(self):
        """Test unknown, empty and None keys yield None."""
        registry = ParameterRegistry()
        registry.define("host")
        assert registry.lookup("port") is None
        assert registry.lookup("") is None
        assert registry.lookup(None) is None

    def test_contains(self):
        """Test membership by path and by parameter identity."""
        registry = ParameterRegistry()
        param = registry.define("host")
        assert "HOST" in registry
        assert param in registry
        assert Parameter("host") not in registry
        assert 42 not in registry

    def test_iteration_order(self):
        """Test iteration follows registration order."""
        registry = ParameterRegistry()
        for path in ["c", "a", "b"]:
            registry.define(path)
        assert [p.path for p in registry] == ["c", "a", "b"]

    def test_all_parameters(self, registry, populated_store):
        """Test every parameter maps to its resolved value or None."""
        mapping = registry.all_parameters(populated_store)

        assert len(mapping) == len(registry)
        assert mapping[registry.lookup("host")] == "db.internal"
        assert mapping[registry.lookup("bind.address")] == "db.internal"
        assert mapping[registry.lookup("admin.port")] == 9090
        assert mapping[registry.lookup("tls.enabled")] is False

    def test_all_parameters_unresolved(self, registry, store):
        """Test unresolvable parameters map to None."""
        mapping = registry.all_parameters(store)
        assert mapping[registry.lookup("host")] is None
        assert mapping[registry.lookup("peers")] is None

    def test_all_parameters_with_cycle(self, store):
        """Test cyclic parameters map to None instead of raising."""
        registry = store.registry
        registry.define("loop.a", Reference("loop.b"))
        registry.define("loop.b", Reference("loop.a"))

        mapping = registry.all_parameters(store)
        assert mapping[registry.lookup("loop.a")] is None
        assert mapping[registry.lookup("loop.b")] is None

    def test_concurrent_registration(self):
        """Test only one of several racing definitions of a key succeeds."""
        registry = ParameterRegistry()
        errors = []

        def define():
            try:
                registry.define("shared")
            except DuplicateParameterError as e:
                errors.append(e)

        threads = [threading.Thread(target=define) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 1
        assert len(errors) == 7


class TestLiteral:
    """Test Literal value normalisation."""

    def test_list_literal_becomes_array(self):
        """Test an explicitly built Literal normalises its value."""
        literal = Literal(["a", "b"])
        assert isinstance(literal.value, ConfigArray)
        assert literal.value == ("a", "b")

    def test_literal_array_default_resolves(self, store):
        """Test a Literal list default reads back through the typed accessors."""
        store.registry.define("upstreams", Literal(["a", "b"]))
        assert store.get_array("upstreams") == ("a", "b")
        assert store.get_string("upstreams") == '["a","b"]'

    def test_literal_requires_value(self):
        """Test a Literal cannot hold None."""
        with pytest.raises(ConfigurationError):
            Literal(None)

    def test_literal_rejects_unsupported_type(self):
        """Test a Literal rejects values outside the value set."""
        with pytest.raises(TypeMismatchError):
            Literal({"a": 1})
