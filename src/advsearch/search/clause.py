"""Locate and replace the host's default search clause inside WHERE.

The host renders a search as

    (wp_posts.post_title LIKE '%x%') OR (wp_posts.post_content LIKE '%x%')

somewhere inside a WHERE fragment that may also hold clauses added by the
host or other plugins. Only that two-field clause is swapped out; anything
else in the fragment is left as it was. If the host renders a different
shape, nothing matches and the fragment comes back unchanged.
"""

from __future__ import annotations

import re
from functools import lru_cache

# Single-quoted literal with doubled or backslash-escaped quotes inside
_LITERAL = r"'(?:[^'\\]|''|\\.)*'"
_ESCAPE = r"(?:\s+ESCAPE\s+'\\\\?')?"


@lru_cache(maxsize=32)
def default_search_pattern(posts_table: str) -> re.Pattern[str]:
    """Compiled pattern for the default title/content clause of a posts table."""
    table = re.escape(posts_table)
    return re.compile(
        rf"\(\s*{table}\.post_title\s+LIKE\s*{_LITERAL}{_ESCAPE}\s*\)"
        rf"\s+OR\s+"
        rf"\(\s*{table}\.post_content\s+LIKE\s*{_LITERAL}{_ESCAPE}\s*\)"
    )


def replace_default_search_clause(
    where: str,
    posts_table: str,
    replacement: str,
) -> tuple[str, bool]:
    """Replace the first default search clause with `(replacement)`.

    Args:
        where: WHERE fragment as the host built it.
        posts_table: Physical posts table name used by the host.
        replacement: Predicate to put in place of the default clause.

    Returns:
        Tuple of (new WHERE fragment, whether a replacement happened).
    """
    pattern = default_search_pattern(posts_table)
    # Callable replacement so backslashes in the predicate are not template escapes
    new_where, count = pattern.subn(lambda _m: f"({replacement})", where, count=1)
    return new_where, count > 0
