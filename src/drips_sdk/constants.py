"""Protocol constants for drips-sdk (mirroring DripsHub)."""

# Drips receiver limits (enforced by contract)
MAX_DRIPS_RECEIVERS = 100
MAX_SPLITS_RECEIVERS = 200

# Sum of all splits weights is at most this value.
TOTAL_SPLITS_WEIGHT = 1_000_000

# amount_per_sec is expressed in smallest unit per second times this value.
AMT_PER_SEC_EXTRA_DECIMALS = 18
AMT_PER_SEC_MULTIPLIER = 10**AMT_PER_SEC_EXTRA_DECIMALS

# Packed DripsConfig layout, least significant segment first.
DURATION_BITS = 32
START_BITS = 32
AMT_PER_SEC_BITS = 160
RESERVED_BITS = 32

DURATION_OFFSET = 0
START_OFFSET = DURATION_OFFSET + DURATION_BITS
AMT_PER_SEC_OFFSET = START_OFFSET + START_BITS
RESERVED_OFFSET = AMT_PER_SEC_OFFSET + AMT_PER_SEC_BITS

MAX_UINT32 = 2**32 - 1
MAX_UINT128 = 2**128 - 1
MAX_UINT160 = 2**160 - 1
MAX_UINT256 = 2**256 - 1

# Default for get_balances_for_user: every receivable cycle.
MAX_CYCLES = MAX_UINT32
