from pool_discovery.core.constants.chains import (
    CHAIN_ID_ARBITRUM,
    CHAIN_ID_BASE,
    CHAIN_ID_ETHEREUM,
    CHAIN_ID_POLYGON,
)

# Uniswap V3 periphery PoolAddress.POOL_INIT_CODE_HASH
POOL_INIT_CODE_HASH = (
    "0xe34f199b19b2b4f47f68442619d555527d244f78a3297ea89325f843f87b8b54"
)

UNISWAP_V3_FACTORY: dict[int, str] = {
    CHAIN_ID_ETHEREUM: "0x1F98431c8aD98523631AE4a59f267346ea31F984",
    CHAIN_ID_ARBITRUM: "0x1F98431c8aD98523631AE4a59f267346ea31F984",
    CHAIN_ID_POLYGON: "0x1F98431c8aD98523631AE4a59f267346ea31F984",
    CHAIN_ID_BASE: "0x33128a8fC17869897dcE68Ed026d694621f6FDfD",
}

UNISWAP_INTERFACE_MULTICALL: dict[int, str] = {
    CHAIN_ID_ETHEREUM: "0x1F98415757620B543A52E61c46B32eB19261F984",
    CHAIN_ID_ARBITRUM: "0xadF885960B47eA2CD9B55E6DAc6B42b7Cb2806dB",
    CHAIN_ID_POLYGON: "0x1F98415757620B543A52E61c46B32eB19261F984",
    CHAIN_ID_BASE: "0x091e99cb1C49331a94dD62755D168E941AbD0693",
}
