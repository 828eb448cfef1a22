# Fallback bounds for chart constants when no catalog is at hand.
# The catalog derives the real ones from its chart data.
MINIMUM_CONSTANT = 1.0
MAXIMUM_CONSTANT = 12.0

# Rating is averaged over the best 30 plus the recent 10.
BEST_COUNT = 30
RECENT_COUNT = 10
RATING_DIVISOR = BEST_COUNT + RECENT_COUNT
# Ranks shown below the best 30.
OVERFLOW_COUNT = 9
