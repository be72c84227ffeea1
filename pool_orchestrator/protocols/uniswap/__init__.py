"""
Uniswap V3 contract interfaces used by the orchestrator
"""

from .abi import (
    ERC20_ABI,
    V3_POOL_ABI,
    V3_POSITION_MANAGER_ABI,
    V3_SWAP_ROUTER_ABI,
)
from .constants import (
    TICK_SPACING_BY_FEE,
    MIN_TICK,
    MAX_TICK,
    Q96,
    INCREASE_LIQUIDITY_SIGNATURE,
)

__all__ = [
    "ERC20_ABI",
    "V3_POOL_ABI",
    "V3_POSITION_MANAGER_ABI",
    "V3_SWAP_ROUTER_ABI",
    "TICK_SPACING_BY_FEE",
    "MIN_TICK",
    "MAX_TICK",
    "Q96",
    "INCREASE_LIQUIDITY_SIGNATURE",
]
