"""Test fakes for running the gate and rewriter without a host.

Example:
    from tests.fakes import FakeQuery, StaticTaxonomySource

    query = FakeQuery(phrase="mouse")
    source = StaticTaxonomySource(["category", 42, "product_cat"])
"""

from .host import (
    DEFAULT_WHERE_TEMPLATE,
    FakeQuery,
    FakeRequest,
    StaticTaxonomySource,
    default_where,
)

__all__ = [
    "DEFAULT_WHERE_TEMPLATE",
    "FakeQuery",
    "FakeRequest",
    "StaticTaxonomySource",
    "default_where",
]
