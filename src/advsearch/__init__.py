"""advsearch: extend keyword search to post meta and taxonomy terms.

Wire the search rewrite into a host's hook registry:

    from advsearch import install
    from advsearch.hooks import HookRegistry
    from advsearch.search import TaxonomyRegistry

    hooks = HookRegistry()
    gate = install(hooks, TaxonomyRegistry(), request)
"""

from __future__ import annotations

from advsearch.core.config import Config
from advsearch.search.gate import QueryScopeGate
from advsearch.search.ports import HookPipeline, RequestContext, TaxonomySource
from advsearch.search.scope import SearchScopeResolver
from advsearch.search.taxonomy import TaxonomyDiscoverer

__version__ = "1.0.0"


def install(
    hooks: HookPipeline,
    taxonomies: TaxonomySource,
    request: RequestContext,
    config: Config | None = None,
) -> QueryScopeGate:
    """Create a gate for one request and subscribe it to query preparation.

    Args:
        hooks: Host filter/action registry.
        taxonomies: Source of taxonomies registered per post type.
        request: The current request.
        config: Optional configuration; validated before use.

    Returns:
        The installed gate.
    """
    config = (config or Config()).validate()
    discoverer = TaxonomyDiscoverer(taxonomies, config.scope.excluded_taxonomies)
    resolver = SearchScopeResolver(hooks, discoverer, config)
    gate = QueryScopeGate(hooks, resolver, request, config)
    gate.install()
    return gate


__all__ = ["Config", "QueryScopeGate", "install", "__version__"]
