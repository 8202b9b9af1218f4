"""Hook names used by advsearch."""

# Host query lifecycle
PRE_GET_POSTS = "pre_get_posts"
POSTS_JOIN = "posts_join"
POSTS_WHERE = "posts_where"
POSTS_DISTINCT = "posts_distinct"

# Extension points
SEARCHABLE_POST_TYPES = "advsearch_searchable_post_types"
SEARCHABLE_META_KEYS = "advsearch_searchable_meta_keys"
SEARCHABLE_TAXONOMIES = "advsearch_searchable_taxonomies"
