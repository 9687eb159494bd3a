"""Fixed protocol parameters."""

PRECISION = 10**18
ADDITIONAL_FEED_PRECISION = 10**10  # for an 8-decimal feed

# Adjusted collateral = value * LIQUIDATION_THRESHOLD / LIQUIDATION_PRECISION,
# i.e. positions must be 200% collateralised.
LIQUIDATION_THRESHOLD = 50
LIQUIDATION_PRECISION = 100
LIQUIDATION_BONUS = 10

MIN_HEALTH_FACTOR = 10**18

MAX_UINT256 = 2**256 - 1

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Default age limit (seconds) applied when staleness checking is enabled.
FEED_TIMEOUT = 3 * 60 * 60
