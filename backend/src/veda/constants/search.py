"""Adaptive result filter configuration.

These values drive the confidence-based filter applied to raw semantic search
results. They were tuned by hand against Rig Veda verse searches and are kept
exactly as-is so filter output stays reproducible. Recalibrate them against
real queries rather than reasoning about them in isolation.
"""

# =============================================================================
# Empty Distribution Defaults
# =============================================================================
# Returned when there are no scores to analyze at all.

DEFAULT_THRESHOLD = 0.65
DEFAULT_MAX_RESULTS = 15

# =============================================================================
# Distribution Shape
# =============================================================================
# Quartiles are read by plain indexing into the descending score list, so Q1
# sits on the high-confidence side and Q3 on the low side. Only the first
# GAP_SCAN_LIMIT adjacent pairs are scanned for a natural cutoff.

Q1_FRACTION = 0.25
Q2_FRACTION = 0.5
Q3_FRACTION = 0.75
GAP_SCAN_LIMIT = 20

# =============================================================================
# Sharp High-Confidence Cutoff
# =============================================================================

SHARP_TOP_SCORE = 0.5
SHARP_MIN_GAP = 0.05
SHARP_THRESHOLD_FLOOR = 0.2
SHARP_MAX_RESULTS = 15
SHARP_POSITION_PADDING = 5

# =============================================================================
# Early Moderate Gap
# =============================================================================

EARLY_MIN_GAP = 0.04
EARLY_MAX_POSITION = 25
EARLY_THRESHOLD_FLOOR = 0.15
EARLY_MAX_RESULTS = 20
EARLY_POSITION_PADDING = 8

# =============================================================================
# Dense Upper Cluster
# =============================================================================

DENSE_MIN_Q1 = 0.35
DENSE_MAX_SPREAD = 0.15
DENSE_THRESHOLD_FLOOR = 0.18
DENSE_Q3_OFFSET = 0.02
DENSE_MAX_RESULTS = 18
DENSE_COUNT_PADDING = 5

# =============================================================================
# Wide Spread
# =============================================================================

WIDE_MIN_RANGE = 0.15
WIDE_THRESHOLD_FLOOR = 0.15
WIDE_MAX_RESULTS = 25
WIDE_COUNT_PADDING = 10

# =============================================================================
# Flat Distribution
# =============================================================================

FLAT_THRESHOLD_FLOOR = 0.1
FLAT_MAX_RESULTS = 30

# =============================================================================
# Query Complexity
# =============================================================================
# Short queries match broadly, so they get a stricter cutoff and fewer results.
# Long queries are specific, so they get a looser cutoff and more room.

SHORT_QUERY_MAX_WORDS = 2
LONG_QUERY_MIN_WORDS = 6
SHORT_QUERY_THRESHOLD_ADJUSTMENT = 0.02
SHORT_QUERY_MAX_RESULTS_ADJUSTMENT = -3
LONG_QUERY_THRESHOLD_ADJUSTMENT = -0.02
LONG_QUERY_MAX_RESULTS_ADJUSTMENT = 5

# =============================================================================
# Final Bounds
# =============================================================================

MIN_CONFIDENCE_FLOOR = 0.1
MIN_CONFIDENCE_CEILING = 0.5
MAX_RESULTS_FLOOR = 8
MAX_RESULTS_CEILING = 30

# =============================================================================
# Fallback
# =============================================================================
# When the primary filter leaves fewer than FALLBACK_MIN_RESULTS verses out of
# at least that many fetched, the filter is re-run with a looser cutoff.

FALLBACK_MIN_RESULTS = 5
FALLBACK_THRESHOLD_RELAXATION = 0.1
FALLBACK_THRESHOLD_FLOOR = 0.08
FALLBACK_MAX_RESULTS_FLOOR = 8

# =============================================================================
# Confidence Attachment
# =============================================================================

DEFAULT_CONFIDENCE = 0.5
HIGH_CONFIDENCE_THRESHOLD = 0.75
