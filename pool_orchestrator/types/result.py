"""
Result type definitions for transactions and workflows
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Dict, Any

from ..errors import OrchestratorError, Notice
from .params import MintParameters, SwapParameters
from .pool import PoolState
from .position import MintEvent, PositionRecord


class TxStatus(Enum):
    """Transaction status"""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class TxResult:
    """
    Confirmed transaction result

    Attributes:
        status: Transaction status
        tx_hash: Transaction hash (0x-prefixed hex)
        block_number: Block the transaction was included in
        gas_used: Gas consumed
        effective_gas_price: Price actually paid per gas unit
        receipt: Raw receipt as returned by the node
    """
    status: TxStatus
    tx_hash: Optional[str] = None
    block_number: Optional[int] = None
    gas_used: Optional[int] = None
    effective_gas_price: Optional[int] = None
    receipt: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status == TxStatus.SUCCESS

    @classmethod
    def from_receipt(cls, tx_hash: str, receipt: Dict[str, Any]) -> "TxResult":
        """Create result from a transaction receipt"""
        return cls(
            status=TxStatus.SUCCESS if receipt.get("status") == 1 else TxStatus.FAILED,
            tx_hash=tx_hash,
            block_number=receipt.get("blockNumber"),
            gas_used=receipt.get("gasUsed"),
            effective_gas_price=receipt.get("effectiveGasPrice"),
            receipt=dict(receipt),
        )

    def __str__(self) -> str:
        hash_display = f"{self.tx_hash[:18]}..." if self.tx_hash else "no hash"
        return f"TxResult({self.status.value}, {hash_display}, block={self.block_number})"


class MintState(Enum):
    """Mint workflow states"""
    READ_POOL_STATE = "read_pool_state"
    COMPUTE_PARAMETERS = "compute_parameters"
    VALIDATE_BALANCES = "validate_balances"
    APPROVE_TOKENS = "approve_tokens"
    SUBMIT_MINT = "submit_mint"
    AWAIT_CONFIRMATION = "await_confirmation"
    EXTRACT_EVENT = "extract_event"
    PERSIST_POSITION = "persist_position"
    DONE = "done"
    FAILED = "failed"


class SwapState(Enum):
    """Swap workflow states"""
    READ_POOL_STATE = "read_pool_state"
    VALIDATE_LIQUIDITY = "validate_liquidity"
    APPROVE_TOKEN = "approve_token"
    SUBMIT_SWAP = "submit_swap"
    AWAIT_CONFIRMATION = "await_confirmation"
    COMPUTE_BALANCE_DELTA = "compute_balance_delta"
    DONE = "done"
    FAILED = "failed"


@dataclass
class WorkflowOutcome:
    """
    Terminal result of one workflow instance

    Attributes:
        name: Instance label used in logs
        state: DONE, or FAILED
        failed_at: State that was active when the failure happened
        error: The error that stopped the workflow
        notices: Non-fatal conditions raised along the way
        transactions: Confirmed transactions in submission order
    """
    name: str
    state: Enum
    failed_at: Optional[Enum] = None
    error: Optional[OrchestratorError] = None
    notices: List[Notice] = field(default_factory=list)
    transactions: List[TxResult] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_fatal(self) -> bool:
        return self.error is not None and self.error.fatal


@dataclass
class MintOutcome(WorkflowOutcome):
    """Mint workflow result"""
    pool: Optional[PoolState] = None
    params: Optional[MintParameters] = None
    event: Optional[MintEvent] = None
    record: Optional[PositionRecord] = None


@dataclass(frozen=True)
class BalanceDelta:
    """Token movement observed around a swap"""
    spent: int
    received: int

    @property
    def effective_price(self) -> Optional[Decimal]:
        """Input units per output unit, None when nothing was received"""
        if self.received <= 0:
            return None
        return Decimal(self.spent) / Decimal(self.received)

    @property
    def effective_price_wad(self) -> Optional[int]:
        """Effective price scaled by 1e18, integer division"""
        if self.received <= 0:
            return None
        return self.spent * 10**18 // self.received


@dataclass
class SwapOutcome(WorkflowOutcome):
    """Swap workflow result"""
    pool: Optional[PoolState] = None
    params: Optional[SwapParameters] = None
    delta: Optional[BalanceDelta] = None
