# Gas forwarded to each inner call of a multicall. Reads only, nothing is spent.
DEFAULT_GAS_QUOTE = 2_000_000
SINGLE_CALL_GAS_LIMIT = 1_000_000

# A call that produced no data: pool not deployed, reverted, or not a contract.
NO_DATA_RESULT = b""

BLOCK_TAG_LATEST = "latest"

FEE_TIER_LOWEST = 100
FEE_TIER_LOW = 500
FEE_TIER_MEDIUM = 3000
FEE_TIER_HIGH = 10000

# Fees are in hundredths of a bip
FEE_DENOMINATOR = 1_000_000

FEE_TIERS: tuple[int, ...] = (
    FEE_TIER_LOWEST,
    FEE_TIER_LOW,
    FEE_TIER_MEDIUM,
    FEE_TIER_HIGH,
)
