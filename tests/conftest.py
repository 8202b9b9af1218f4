"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path

from advsearch.core.config import Config
from advsearch.core.types import SearchContext, TableNames
from advsearch.hooks import HookRegistry
from advsearch.search.taxonomy import TaxonomyRegistry
from advsearch.store.database import Database
from advsearch.store.posts import PostRepository


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for tests."""
    return tmp_path / "test.db"


@pytest.fixture
def db(test_db_path: Path) -> Database:
    """Provide a connected database instance."""
    database = Database(test_db_path)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def post_repo(db: Database) -> PostRepository:
    """Provide a PostRepository instance."""
    return PostRepository(db)


@pytest.fixture
def hooks() -> HookRegistry:
    """Provide an empty hook registry."""
    return HookRegistry()


@pytest.fixture
def taxonomy_registry() -> TaxonomyRegistry:
    """Provide a registry with the platform's built-in taxonomies."""
    registry = TaxonomyRegistry()
    registry.register("category", ["post"])
    registry.register("post_tag", ["post"])
    registry.register("nav_menu", ["nav_menu_item"])
    registry.register("link_category", ["link"])
    registry.register("post_format", ["post"])
    return registry


@pytest.fixture
def config() -> Config:
    """Provide a default Config instance."""
    return Config()


@pytest.fixture
def tables() -> TableNames:
    """Provide default table names."""
    return TableNames.from_prefix("wp_")


@pytest.fixture
def full_context() -> SearchContext:
    """Context searching body, meta and taxonomy."""
    return SearchContext(
        phrase="wireless mouse",
        document_types=("post", "page"),
        metadata_keys=("sku",),
        taxonomy_names=("product_cat",),
    )
