"""
Workflows driving the components

- MintWorkflow: Add liquidity and record the position
- SwapWorkflow: Forward and reverse exact-input swaps
- deploy_swap_router / deploy_position_manager: Periphery deployment order and records
"""

from .mint import MintWorkflow
from .swap import SwapWorkflow
from .deploy import ContractDeployer, deploy_swap_router, deploy_position_manager, encode_bytes32

__all__ = [
    "MintWorkflow",
    "SwapWorkflow",
    "ContractDeployer",
    "deploy_swap_router",
    "deploy_position_manager",
    "encode_bytes32",
]
