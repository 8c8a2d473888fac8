"""Search API defaults and response text."""

# =============================================================================
# Request Defaults
# =============================================================================
# The filter works best with a generous candidate pool, so searches fetch
# DEFAULT_TOP_K raw verses before filtering.

DEFAULT_TOP_K = 50
MAX_TOP_K = 200
DEFAULT_RANDOM_COUNT = 10
MAX_RANDOM_COUNT = 50

# =============================================================================
# Response Text
# =============================================================================

SEMANTIC_SEARCH_INTENT = "semantic_search"
RANDOM_EXPLORATION_INTENT = "random_exploration"
RANDOM_QUERY_LABEL = "Random Vedic Wisdom"
SEARCH_SUMMARY_TEMPLATE = 'Found {count} relevant verses related to "{query}"'
RANDOM_SUMMARY_TEMPLATE = "Discover {count} randomly selected verses from the Rig Veda"
RANDOM_VERSE_CONFIDENCE = 1.0

# =============================================================================
# Similarity Conversion
# =============================================================================
# Cosine distance runs from 0 to 2. Verses at distance 1 or beyond get this
# floor instead of 0.0, which the filter would read as a missing score.

MIN_SIMILARITY_SCORE = 0.001
