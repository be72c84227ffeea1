"""
Type definitions for the pool orchestrator
"""

from .pool import PoolState
from .params import MintParameters, SwapParameters
from .position import MintEvent, PositionRecord
from .deployment import DeploymentRecord, PoolRecord
from .result import (
    TxResult,
    TxStatus,
    MintState,
    SwapState,
    WorkflowOutcome,
    MintOutcome,
    SwapOutcome,
    BalanceDelta,
)

__all__ = [
    "PoolState",
    "MintParameters",
    "SwapParameters",
    "MintEvent",
    "PositionRecord",
    "DeploymentRecord",
    "PoolRecord",
    "TxResult",
    "TxStatus",
    "MintState",
    "SwapState",
    "WorkflowOutcome",
    "MintOutcome",
    "SwapOutcome",
    "BalanceDelta",
]
