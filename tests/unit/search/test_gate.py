"""Tests for the query-scope gate and registration handle."""

import itertools

import pytest
from unittest.mock import MagicMock

from advsearch.core.config import Config
from advsearch.hooks import HookRegistry, names
from advsearch.search.gate import QueryScopeGate, RegistrationHandle
from advsearch.search.rewriter import PredicateRewriter
from advsearch.search.scope import SearchScopeResolver
from advsearch.search.taxonomy import TaxonomyDiscoverer

from tests.fakes import FakeQuery, FakeRequest, StaticTaxonomySource, default_where

STAGES = (names.POSTS_JOIN, names.POSTS_WHERE, names.POSTS_DISTINCT)


def make_gate(hooks: HookRegistry, admin: bool = False, config: Config | None = None):
    config = config or Config()
    resolver = SearchScopeResolver(
        hooks, TaxonomyDiscoverer(StaticTaxonomySource(["product_cat"])), config
    )
    return QueryScopeGate(hooks, resolver, FakeRequest(admin=admin), config)


def registered(hooks: HookRegistry) -> list[bool]:
    return [hooks.has_filter(name) for name in STAGES]


class TestRegistrationHandle:
    """Tests for RegistrationHandle."""

    def test_attach_and_release(self, hooks: HookRegistry):
        callbacks = {name: (lambda v: v) for name in STAGES}
        handle = RegistrationHandle(hooks, callbacks)

        handle.attach()
        assert handle.active
        assert registered(hooks) == [True, True, True]

        handle.release()
        assert not handle.active
        assert registered(hooks) == [False, False, False]

    def test_release_is_idempotent(self, hooks: HookRegistry):
        handle = RegistrationHandle(hooks, {names.POSTS_WHERE: str.upper})
        handle.attach()

        handle.release()
        handle.release()

        assert not handle.active

    def test_release_before_attach(self, hooks: HookRegistry):
        handle = RegistrationHandle(hooks, {names.POSTS_WHERE: str.upper})

        handle.release()

        assert not handle.active
        assert not hooks.has_filter(names.POSTS_WHERE)

    def test_attach_twice_registers_once(self, hooks: HookRegistry):
        handle = RegistrationHandle(hooks, {names.POSTS_WHERE: str.upper})

        handle.attach()
        handle.attach()

        assert hooks.apply_filters(names.POSTS_WHERE, "a") == "A"
        handle.release()
        assert not hooks.has_filter(names.POSTS_WHERE)

    def test_release_leaves_other_callbacks(self, hooks: HookRegistry):
        hooks.add_filter(names.POSTS_WHERE, str.strip)
        handle = RegistrationHandle(hooks, {names.POSTS_WHERE: str.upper})
        handle.attach()

        handle.release()

        assert hooks.has_filter(names.POSTS_WHERE, str.strip)


class TestGateScope:
    """Tests for which queries the gate rewrites."""

    def test_in_scope_query_registers(self, hooks: HookRegistry):
        gate = make_gate(hooks)
        query = FakeQuery(phrase="mouse")

        handle = gate.on_query_prepare(query)

        assert handle is not None and handle.active
        assert gate.active_handle is handle
        assert registered(hooks) == [True, True, True]

    def test_narrows_post_type(self, hooks: HookRegistry):
        hooks.add_filter(names.SEARCHABLE_POST_TYPES, lambda types: [*types, "product"])
        gate = make_gate(hooks)
        query = FakeQuery(phrase="mouse")

        gate.on_query_prepare(query)

        assert query.set_calls == [("post_type", ["post", "page", "product"])]

    @pytest.mark.parametrize(
        "admin, main, search",
        [
            combo
            for combo in itertools.product([False, True], repeat=3)
            if combo != (False, True, True)
        ],
    )
    def test_out_of_scope_is_noop(self, hooks: HookRegistry, admin, main, search):
        """Admin requests, secondary queries and non-searches are left alone."""
        gate = make_gate(hooks, admin=admin)
        query = FakeQuery(phrase="mouse", main=main, search=search)

        assert gate.on_query_prepare(query) is None
        assert query.set_calls == []
        assert query.get("post_type") == "post"
        assert registered(hooks) == [False, False, False]
        assert gate.active_handle is None

    def test_uses_host_flags_not_phrase(self, hooks: HookRegistry):
        """A query flagged as a search with an empty phrase is still gated in."""
        gate = make_gate(hooks)

        handle = gate.on_query_prepare(FakeQuery(phrase="", search=True))

        assert handle is not None

    def test_rewriter_wired_with_config(self, hooks: HookRegistry):
        config = Config(table_prefix="shop_", dialect="sqlite")
        gate = make_gate(hooks, config=config)

        handle = gate.on_query_prepare(FakeQuery(phrase="mouse"))

        where_stage = handle.callbacks[names.POSTS_WHERE]
        rewriter = where_stage.__self__
        assert isinstance(rewriter, PredicateRewriter)
        assert rewriter.tables.posts == "shop_posts"
        assert rewriter.dialect == "sqlite"
        assert rewriter.handle is handle
        assert rewriter.context.phrase == "mouse"
        assert rewriter.context.taxonomy_names == ("product_cat",)


class TestGateLifecycle:
    """Tests for one-shot registration across queries."""

    def test_where_stage_releases(self, hooks: HookRegistry):
        gate = make_gate(hooks)
        gate.on_query_prepare(FakeQuery(phrase="mouse"))

        hooks.apply_filters(names.POSTS_JOIN, "")
        hooks.apply_filters(names.POSTS_WHERE, default_where("mouse"))

        assert registered(hooks) == [False, False, False]
        assert gate.active_handle is None

    def test_empty_phrase_still_releases(self, hooks: HookRegistry):
        gate = make_gate(hooks)
        gate.on_query_prepare(FakeQuery(phrase="", search=True))

        where = hooks.apply_filters(names.POSTS_WHERE, " AND 1=1")

        assert where == " AND 1=1"
        assert registered(hooks) == [False, False, False]

    def test_release_without_join_stage(self, hooks: HookRegistry):
        """WHERE releases everything even if JOIN never ran."""
        gate = make_gate(hooks)
        gate.on_query_prepare(FakeQuery(phrase="mouse"))

        hooks.apply_filters(names.POSTS_WHERE, "")

        assert not hooks.has_filter(names.POSTS_JOIN)

    def test_later_query_is_untouched(self, hooks: HookRegistry):
        gate = make_gate(hooks)
        gate.on_query_prepare(FakeQuery(phrase="mouse"))
        hooks.apply_filters(names.POSTS_JOIN, "")
        hooks.apply_filters(names.POSTS_WHERE, default_where("mouse"))
        hooks.apply_filters(names.POSTS_DISTINCT, "")

        # A widget query later on the same request
        assert hooks.apply_filters(names.POSTS_WHERE, default_where("x")) == default_where("x")
        assert hooks.apply_filters(names.POSTS_DISTINCT, "") == ""

    def test_second_cycle_replaces_first(self, hooks: HookRegistry):
        """At most one registration is active at a time."""
        gate = make_gate(hooks)
        first = gate.on_query_prepare(FakeQuery(phrase="mouse"))
        second = gate.on_query_prepare(FakeQuery(phrase="keyboard"))

        assert not first.active
        assert second.active
        assert gate.active_handle is second
        where = hooks.apply_filters(names.POSTS_WHERE, default_where("keyboard"))
        assert "'%keyboard%'" in where
        assert "mouse" not in where


class TestGateInstall:
    """Tests for subscribing to query preparation."""

    def test_install_subscribes_at_priority(self):
        hooks = MagicMock()
        gate = make_gate(hooks, config=Config(gate_priority=5))

        gate.install()

        hooks.add_action.assert_called_once_with(
            names.PRE_GET_POSTS, gate.on_query_prepare, 5
        )

    def test_action_dispatch(self, hooks: HookRegistry):
        gate = make_gate(hooks)
        gate.install()

        hooks.do_action(names.PRE_GET_POSTS, FakeQuery(phrase="mouse"))

        assert gate.active_handle is not None

    def test_uninstall(self, hooks: HookRegistry):
        gate = make_gate(hooks)
        gate.install()
        gate.on_query_prepare(FakeQuery(phrase="mouse"))

        gate.uninstall()

        assert not hooks.has_action(names.PRE_GET_POSTS)
        assert registered(hooks) == [False, False, False]
        assert gate.active_handle is None
