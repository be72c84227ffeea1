"""
Parameter calculator

Pure functions that turn a pool snapshot into mint parameters: price ratio
from sqrtPriceX96, tick alignment, proportional and full-range amounts.
No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN, localcontext
from enum import Enum
from typing import Tuple

from ..errors import ConfigurationError
from ..protocols.uniswap.constants import Q96, MIN_TICK, MAX_TICK, TICK_SPACING_BY_FEE
from ..types import PoolState

# Enough digits for uint256 amounts times an 18-decimal ratio
_PRECISION = 100


class RangeStrategy(Enum):
    """
    How mint tick bounds are chosen

    AUTO: full range when the pool has no liquidity yet, narrow otherwise
    NARROW: one tick-spacing wide range around the current tick
    FULL_RANGE: the whole tick domain for the pool's spacing
    """
    AUTO = "auto"
    NARROW = "narrow"
    FULL_RANGE = "full-range"

    @classmethod
    def parse(cls, value: str) -> "RangeStrategy":
        normalized = value.strip().lower().replace("_", "-")
        for strategy in cls:
            if strategy.value == normalized:
                return strategy
        choices = ", ".join(s.value for s in cls)
        raise ConfigurationError.invalid("MINT_STRATEGY", f"'{value}' is not one of: {choices}")


@dataclass(frozen=True)
class MintPlan:
    """Tick bounds and desired amounts chosen for a mint"""
    strategy: RangeStrategy
    tick_lower: int
    tick_upper: int
    amount0: int
    amount1: int


def price_ratio(sqrt_price_x96: int) -> Decimal:
    """
    token1-per-token0 price from a Q64.96 square-root price

    price_ratio(2**96) == 1 exactly; price_ratio(0) == 0.
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return (Decimal(sqrt_price_x96) / Decimal(Q96)) ** 2


def align_tick(tick: int, spacing: int) -> int:
    """Largest multiple of spacing that is <= tick"""
    if spacing <= 0:
        raise ValueError(f"tick spacing must be positive, got {spacing}")
    return (tick // spacing) * spacing


def narrow_range(current_tick: int, spacing: int) -> Tuple[int, int]:
    """Single-spacing range containing the current tick"""
    tick_lower = align_tick(current_tick, spacing)
    return tick_lower, tick_lower + spacing


def full_range_ticks(spacing: int) -> Tuple[int, int]:
    """Widest valid range for a tick spacing (spacing 60 -> [-887220, 887220])"""
    if spacing <= 0:
        raise ValueError(f"tick spacing must be positive, got {spacing}")
    return -(-MIN_TICK // spacing) * spacing, (MAX_TICK // spacing) * spacing


def full_range_parameters(fee: int, amount: int) -> Tuple[int, int, int, int]:
    """
    Full-range bounds for a fee tier plus an equal amount pair

    Returns:
        (tick_lower, tick_upper, amount0, amount1)
    """
    if fee not in TICK_SPACING_BY_FEE:
        raise ConfigurationError.invalid("fee", f"unknown fee tier {fee}")
    tick_lower, tick_upper = full_range_ticks(TICK_SPACING_BY_FEE[fee])
    return tick_lower, tick_upper, amount, amount


def proportional_amounts(
    base_amount: int,
    ratio: Decimal,
    decimals0: int = 18,
    decimals1: int = 18,
) -> Tuple[int, int]:
    """
    Amounts matching the current price

    ``ratio`` is the raw smallest-unit price from ``price_ratio``. It is turned
    into a UI price (token1 per whole token0), cut to token1's decimal
    precision, and scaled back so amount1 = base * ratio rounded toward zero.
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        ui_price = ratio.scaleb(decimals0 - decimals1)
        ui_price = ui_price.quantize(Decimal(1).scaleb(-decimals1), rounding=ROUND_DOWN)
        amount1 = (Decimal(base_amount) * ui_price.scaleb(decimals1 - decimals0)).to_integral_value(
            rounding=ROUND_DOWN
        )
    return base_amount, int(amount1)


def to_raw_amount(ui_amount: Decimal, decimals: int) -> int:
    """UI amount to smallest units, rounded toward zero"""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return int((ui_amount * Decimal(10) ** decimals).to_integral_value(rounding=ROUND_DOWN))


def select_strategy(strategy: RangeStrategy, pool: PoolState) -> RangeStrategy:
    """Resolve AUTO against the pool's current liquidity"""
    if strategy is RangeStrategy.AUTO:
        return RangeStrategy.NARROW if pool.has_liquidity else RangeStrategy.FULL_RANGE
    return strategy


def plan_mint(
    pool: PoolState,
    strategy: RangeStrategy,
    base_amount: Decimal,
    full_range_amount: Decimal,
) -> MintPlan:
    """
    Choose ticks and amounts for a mint against a pool snapshot

    Amounts are given in UI units and scaled by each token's decimals.
    Narrow plans use base_amount of token0 and the price-proportional amount
    of token1. Full-range plans use full_range_amount of each token and the
    pool's own tick spacing.
    """
    resolved = select_strategy(strategy, pool)

    if resolved is RangeStrategy.NARROW:
        tick_lower, tick_upper = narrow_range(pool.current_tick, pool.tick_spacing)
        amount0, amount1 = proportional_amounts(
            to_raw_amount(base_amount, pool.decimals0),
            price_ratio(pool.sqrt_price_x96),
            pool.decimals0,
            pool.decimals1,
        )
    else:
        tick_lower, tick_upper = full_range_ticks(pool.tick_spacing)
        amount0 = to_raw_amount(full_range_amount, pool.decimals0)
        amount1 = to_raw_amount(full_range_amount, pool.decimals1)

    return MintPlan(
        strategy=resolved,
        tick_lower=tick_lower,
        tick_upper=tick_upper,
        amount0=amount0,
        amount1=amount1,
    )
