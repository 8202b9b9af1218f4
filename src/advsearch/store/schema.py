"""Database schema for the platform tables advsearch reads.

Only the columns the search touches are modelled. Table names carry the
configured prefix.
"""

from advsearch.core.types import TableNames

SCHEMA_TEMPLATE = """\
CREATE TABLE IF NOT EXISTS {posts} (
    ID INTEGER PRIMARY KEY AUTOINCREMENT,
    post_title TEXT NOT NULL DEFAULT '',
    post_content TEXT NOT NULL DEFAULT '',
    post_type TEXT NOT NULL DEFAULT 'post',
    post_status TEXT NOT NULL DEFAULT 'publish'
);

CREATE TABLE IF NOT EXISTS {postmeta} (
    meta_id INTEGER PRIMARY KEY AUTOINCREMENT,
    post_id INTEGER NOT NULL REFERENCES {posts}(ID),
    meta_key TEXT,
    meta_value TEXT
);

CREATE INDEX IF NOT EXISTS idx_{postmeta}_post_id ON {postmeta}(post_id);

CREATE TABLE IF NOT EXISTS {terms} (
    term_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    slug TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS {term_taxonomy} (
    term_taxonomy_id INTEGER PRIMARY KEY AUTOINCREMENT,
    term_id INTEGER NOT NULL REFERENCES {terms}(term_id),
    taxonomy TEXT NOT NULL,
    UNIQUE(term_id, taxonomy)
);

CREATE TABLE IF NOT EXISTS {term_relationships} (
    object_id INTEGER NOT NULL,
    term_taxonomy_id INTEGER NOT NULL REFERENCES {term_taxonomy}(term_taxonomy_id),
    PRIMARY KEY (object_id, term_taxonomy_id)
);
"""


def get_schema(tables: TableNames) -> str:
    """Get the schema SQL for a set of table names."""
    return SCHEMA_TEMPLATE.format(
        posts=tables.posts,
        postmeta=tables.postmeta,
        terms=tables.terms,
        term_taxonomy=tables.term_taxonomy,
        term_relationships=tables.term_relationships,
    )
