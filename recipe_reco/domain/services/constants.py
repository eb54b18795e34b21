# Constants for the recommendation pipeline.
DEFAULT_LIMIT = 10    # Recommendations returned when the caller does not ask for a count
ANCHOR_LIMIT = 5      # Most viewed recipes of a user used as content-based anchors
NEIGHBOR_LIMIT = 10   # Most similar users kept for collaborative scoring

# Seasonal score range supplied by the seasonality collaborator
SEASONAL_SCORE_MIN = 0
SEASONAL_SCORE_MAX = 100

# Interaction strength multiplier for saved recipes
SAVED_MULTIPLIER = 2.0
