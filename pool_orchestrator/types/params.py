"""
Transaction parameter value objects

Both types are frozen: recomputing parameters yields a new instance.
"""

from dataclasses import dataclass
from typing import Tuple

from ..errors import TransactionError


@dataclass(frozen=True)
class MintParameters:
    """NonfungiblePositionManager.mint parameters"""
    token0: str
    token1: str
    fee: int
    tick_lower: int
    tick_upper: int
    amount0_desired: int
    amount1_desired: int
    recipient: str
    deadline: int
    amount0_min: int = 0
    amount1_min: int = 0

    def validate(self, tick_spacing: int, now: int) -> None:
        """
        Check the submission invariants

        Raises:
            TransactionError: If ticks are unordered or misaligned, or the deadline has passed
        """
        if self.tick_lower >= self.tick_upper:
            raise TransactionError.invalid_params(
                "mint", f"tickLower {self.tick_lower} must be below tickUpper {self.tick_upper}"
            )
        if self.tick_lower % tick_spacing or self.tick_upper % tick_spacing:
            raise TransactionError.invalid_params(
                "mint",
                f"ticks [{self.tick_lower}, {self.tick_upper}] are not multiples of spacing {tick_spacing}",
            )
        if self.deadline <= now:
            raise TransactionError.invalid_params("mint", f"deadline {self.deadline} is not in the future")

    def as_tuple(self) -> Tuple:
        """ABI struct order"""
        return (
            self.token0,
            self.token1,
            self.fee,
            self.tick_lower,
            self.tick_upper,
            self.amount0_desired,
            self.amount1_desired,
            self.amount0_min,
            self.amount1_min,
            self.recipient,
            self.deadline,
        )


@dataclass(frozen=True)
class SwapParameters:
    """SwapRouter.exactInputSingle parameters"""
    token_in: str
    token_out: str
    fee: int
    recipient: str
    deadline: int
    amount_in: int
    amount_out_minimum: int = 0
    # 0 = unconstrained
    sqrt_price_limit_x96: int = 0

    def validate(self, now: int) -> None:
        if self.amount_in <= 0:
            raise TransactionError.invalid_params("swap", "amountIn must be positive")
        if self.deadline <= now:
            raise TransactionError.invalid_params("swap", f"deadline {self.deadline} is not in the future")

    def as_tuple(self) -> Tuple:
        """ABI struct order"""
        return (
            self.token_in,
            self.token_out,
            self.fee,
            self.recipient,
            self.deadline,
            self.amount_in,
            self.amount_out_minimum,
            self.sqrt_price_limit_x96,
        )
