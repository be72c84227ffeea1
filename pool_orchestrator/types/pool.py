"""
Pool type definitions
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolState:
    """
    Immutable snapshot of a concentrated-liquidity pool, re-read per workflow

    Token ordering is the one reported by the pool itself and is authoritative
    over any cached configuration.

    Attributes:
        address: Pool contract address
        token0: Canonical token0 address
        token1: Canonical token1 address
        fee: Fee tier in hundredths of a bip
        tick_spacing: Minimum tick granularity for the fee tier
        current_tick: Current tick from slot0
        sqrt_price_x96: sqrt(token1/token0) as Q64.96
        liquidity: Active in-range liquidity
        decimals0: token0 decimals
        decimals1: token1 decimals
    """
    address: str
    token0: str
    token1: str
    fee: int
    tick_spacing: int
    current_tick: int
    sqrt_price_x96: int
    liquidity: int
    decimals0: int = 18
    decimals1: int = 18

    @property
    def has_liquidity(self) -> bool:
        return self.liquidity > 0

    def decimals_of(self, token: str) -> int:
        """Decimals of one of the pool's tokens"""
        if token.lower() == self.token0.lower():
            return self.decimals0
        if token.lower() == self.token1.lower():
            return self.decimals1
        raise ValueError(f"Token {token} is not part of pool {self.address}")

    def __str__(self) -> str:
        return (
            f"PoolState({self.address[:10]}..., fee={self.fee}, "
            f"tick={self.current_tick}, spacing={self.tick_spacing}, liquidity={self.liquidity})"
        )
