"""
Pool Orchestrator - Position and swap workflows for a deployed
concentrated-liquidity pool

Provides:
- Mint workflow: pool snapshot, tick range, balance checks, approvals,
  mint, IncreaseLiquidity decoding, position ledger
- Swap workflow: forward and reverse exact-input swaps with balance deltas
- Periphery deployment ordering against an injected contract deployer
"""

from .config import Config, setup_logging
from .types import (
    PoolState,
    MintParameters,
    SwapParameters,
    MintEvent,
    PositionRecord,
    DeploymentRecord,
    PoolRecord,
    TxResult,
    TxStatus,
    MintOutcome,
    SwapOutcome,
    BalanceDelta,
)
from .errors import (
    OrchestratorError,
    RpcError,
    InsufficientFunds,
    PoolUnavailable,
    TransactionError,
    SignerError,
    ConfigurationError,
    ErrorCode,
    Notice,
)
from .modules import RangeStrategy
from .workflows import MintWorkflow, SwapWorkflow

__version__ = "0.1.0"

__all__ = [
    # Config
    "Config",
    "setup_logging",
    # Types
    "PoolState",
    "MintParameters",
    "SwapParameters",
    "MintEvent",
    "PositionRecord",
    "DeploymentRecord",
    "PoolRecord",
    "TxResult",
    "TxStatus",
    "MintOutcome",
    "SwapOutcome",
    "BalanceDelta",
    "RangeStrategy",
    # Errors
    "OrchestratorError",
    "RpcError",
    "InsufficientFunds",
    "PoolUnavailable",
    "TransactionError",
    "SignerError",
    "ConfigurationError",
    "ErrorCode",
    "Notice",
    # Workflows
    "MintWorkflow",
    "SwapWorkflow",
]
