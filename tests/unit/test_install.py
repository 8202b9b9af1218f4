"""Tests for wiring advsearch into a hook registry."""

import pytest

from advsearch import install
from advsearch.core.config import Config
from advsearch.core.exceptions import ConfigurationError
from advsearch.hooks import HookRegistry, names
from advsearch.search.gate import QueryScopeGate
from advsearch.search.taxonomy import TaxonomyRegistry

from tests.fakes import FakeQuery, FakeRequest


class TestInstall:
    """Tests for advsearch.install."""

    def test_returns_installed_gate(self, hooks: HookRegistry, taxonomy_registry):
        gate = install(hooks, taxonomy_registry, FakeRequest())

        assert isinstance(gate, QueryScopeGate)
        assert hooks.has_action(names.PRE_GET_POSTS, gate.on_query_prepare)

    def test_uses_configured_exclusions(self, hooks: HookRegistry):
        registry = TaxonomyRegistry()
        registry.register("category", ["post"])
        registry.register("internal_flag", ["post"])
        config = Config()
        config.scope.excluded_taxonomies = ("internal_flag",)
        gate = install(hooks, registry, FakeRequest(), config)

        hooks.do_action(names.PRE_GET_POSTS, FakeQuery(phrase="x"))

        context = gate.active_handle.callbacks[names.POSTS_WHERE].__self__.context
        assert context.taxonomy_names == ("category",)

    def test_invalid_config_rejected(self, hooks: HookRegistry, taxonomy_registry):
        with pytest.raises(ConfigurationError):
            install(hooks, taxonomy_registry, FakeRequest(), Config(dialect="postgres"))

        assert not hooks.has_action(names.PRE_GET_POSTS)
