"""
Components used by the workflows

- PoolStateReader: Pool snapshot and live balances
- calculator: Tick ranges and mint amounts (pure)
- BalanceValidator: Balance precondition checks
- GasPricingPolicy: Escalated gas price and per-operation limits
- TransactionSubmitter: Sequential sign / send / confirm
- EventExtractor: IncreaseLiquidity decoding
- PositionLedger: Append-only position records
"""

from .pool_reader import PoolStateReader
from .calculator import (
    RangeStrategy,
    MintPlan,
    price_ratio,
    align_tick,
    narrow_range,
    full_range_ticks,
    full_range_parameters,
    proportional_amounts,
    to_raw_amount,
    plan_mint,
)
from .balance import BalanceValidator
from .gas import GasPricingPolicy, GasPlan, escalate
from .submitter import TransactionSubmitter
from .events import EventExtractor, INCREASE_LIQUIDITY_TOPIC
from .ledger import PositionLedger

__all__ = [
    "PoolStateReader",
    # Parameter calculator
    "RangeStrategy",
    "MintPlan",
    "price_ratio",
    "align_tick",
    "narrow_range",
    "full_range_ticks",
    "full_range_parameters",
    "proportional_amounts",
    "to_raw_amount",
    "plan_mint",
    # Preconditions and submission
    "BalanceValidator",
    "GasPricingPolicy",
    "GasPlan",
    "escalate",
    "TransactionSubmitter",
    # Results
    "EventExtractor",
    "INCREASE_LIQUIDITY_TOPIC",
    "PositionLedger",
]
