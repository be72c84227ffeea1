"""
Position type definitions
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class MintEvent:
    """Decoded IncreaseLiquidity event"""
    token_id: int
    liquidity: int
    amount0: int
    amount1: int


@dataclass(frozen=True)
class PositionRecord:
    """
    Persisted record of a minted position

    Every numeric field is stored as a decimal string so that uint256 values
    survive JSON round trips without precision loss.
    """
    token_id: str
    token0: str
    token1: str
    fee: str
    tick_lower: str
    tick_upper: str
    liquidity: str
    amount0: str
    amount1: str

    @classmethod
    def from_mint(
        cls,
        event: MintEvent,
        token0: str,
        token1: str,
        fee: int,
        tick_lower: int,
        tick_upper: int,
    ) -> "PositionRecord":
        return cls(
            token_id=str(event.token_id),
            token0=token0,
            token1=token1,
            fee=str(fee),
            tick_lower=str(tick_lower),
            tick_upper=str(tick_upper),
            liquidity=str(event.liquidity),
            amount0=str(event.amount0),
            amount1=str(event.amount1),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "tokenId": self.token_id,
            "token0": self.token0,
            "token1": self.token1,
            "fee": self.fee,
            "tickLower": self.tick_lower,
            "tickUpper": self.tick_upper,
            "liquidity": self.liquidity,
            "amount0": self.amount0,
            "amount1": self.amount1,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PositionRecord":
        return cls(
            token_id=str(data["tokenId"]),
            token0=data["token0"],
            token1=data["token1"],
            fee=str(data["fee"]),
            tick_lower=str(data["tickLower"]),
            tick_upper=str(data["tickUpper"]),
            liquidity=str(data["liquidity"]),
            amount0=str(data["amount0"]),
            amount1=str(data["amount1"]),
        )
