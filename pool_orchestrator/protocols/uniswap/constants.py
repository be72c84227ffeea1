"""
Uniswap V3 constants

Tick spacing per fee tier and the tick domain for the concentrated-liquidity pools
this package drives.
"""

# Tick spacing for each fee tier (fee in hundredths of a bip: 3000 = 0.30%)
TICK_SPACING_BY_FEE = {
    100: 1,
    500: 10,
    3000: 60,
    10000: 200,
}

# Tick domain (TickMath.MIN_TICK / MAX_TICK)
MIN_TICK = -887272
MAX_TICK = 887272

# sqrtPriceX96 fixed-point base
Q96 = 2**96

# Event emitted by NonfungiblePositionManager on mint / increaseLiquidity
INCREASE_LIQUIDITY_SIGNATURE = "IncreaseLiquidity(uint256,uint128,uint256,uint256)"

# Contract names handed to the external deployer
WETH9 = "WETH9"
SWAP_ROUTER = "SwapRouter"
NFT_DESCRIPTOR = "NFTDescriptor"
TOKEN_POSITION_DESCRIPTOR = "NonfungibleTokenPositionDescriptor"
POSITION_MANAGER = "NonfungiblePositionManager"

# Label passed to the token position descriptor (bytes32)
NATIVE_CURRENCY_LABEL = "ETH"
