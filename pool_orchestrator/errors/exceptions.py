"""
Exception definitions for the pool orchestrator
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Any, Dict


class ErrorCode(Enum):
    """
    Unified error codes for orchestration steps

    1xxx - RPC errors
    2xxx - Transaction errors
    3xxx - Balance errors
    4xxx - Pool errors
    5xxx - Event / record errors
    6xxx - Signer errors
    9xxx - Configuration errors
    """
    # RPC errors
    RPC_CONNECTION_FAILED = "1001"
    RPC_CALL_FAILED = "1002"

    # Transaction errors
    TX_SEND_FAILED = "2001"
    TX_REVERTED = "2002"
    TX_CONFIRMATION_TIMEOUT = "2003"
    TX_INVALID_PARAMS = "2004"

    # Balance errors
    INSUFFICIENT_BALANCE = "3001"

    # Pool errors
    POOL_NO_LIQUIDITY = "4001"
    TOKEN_ORDER_MISMATCH = "4002"

    # Event / record errors
    MINT_EVENT_NOT_FOUND = "5001"

    # Signer errors
    SIGNER_NOT_CONFIGURED = "6001"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class OrchestratorError(Exception):
    """
    Base exception for all orchestrator errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        fatal: Whether the process must exit non-zero once this is raised
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        fatal: bool = True,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.fatal = fatal
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class RpcError(OrchestratorError):
    """
    Remote read failed

    Raised when:
    - The RPC endpoint cannot be reached
    - A view call on the pool or a token reverts or times out
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CALL_FAILED,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            fatal=True,
            original_error=original_error,
            details={"endpoint": endpoint} if endpoint else None,
        )
        self.endpoint = endpoint

    @classmethod
    def connection_failed(cls, endpoint: str, error: Exception = None) -> "RpcError":
        return cls(
            f"Failed to connect to RPC endpoint: {endpoint}",
            ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
            endpoint=endpoint,
        )

    @classmethod
    def call_failed(cls, call: str, error: Exception) -> "RpcError":
        return cls(f"Remote call {call} failed: {error}", original_error=error)


class InsufficientFunds(OrchestratorError):
    """
    Live balance below the desired amount - fatal, raised before any approval
    """

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        required: Optional[int] = None,
        available: Optional[int] = None,
    ):
        super().__init__(
            message,
            ErrorCode.INSUFFICIENT_BALANCE,
            fatal=True,
            details={
                "token": token,
                "required": str(required) if required is not None else None,
                "available": str(available) if available is not None else None,
            },
        )
        self.token = token
        self.required = required
        self.available = available

    @classmethod
    def token_balance(cls, token: str, required: int, available: int) -> "InsufficientFunds":
        return cls(
            f"Insufficient {token} balance: need {required}, have {available}",
            token=token,
            required=required,
            available=available,
        )


class PoolUnavailable(OrchestratorError):
    """
    Pool cannot serve the requested operation

    Raised when:
    - The pool has zero active liquidity before a swap
    """

    def __init__(
        self,
        message: str,
        pool_address: Optional[str] = None,
        code: ErrorCode = ErrorCode.POOL_NO_LIQUIDITY,
    ):
        super().__init__(
            message,
            code,
            fatal=True,
            details={"pool_address": pool_address},
        )
        self.pool_address = pool_address

    @classmethod
    def no_liquidity(cls, pool_address: str) -> "PoolUnavailable":
        return cls(
            f"Pool {pool_address} has no liquidity; add liquidity before swapping",
            pool_address=pool_address,
        )


class TransactionError(OrchestratorError):
    """
    Transaction execution errors

    Not fatal: the step is marked failed and independent steps still run.
    ``revert_data`` holds machine-readable revert data when the node returns it.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TX_SEND_FAILED,
        tx_hash: Optional[str] = None,
        revert_data: Optional[Any] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            code,
            fatal=False,
            original_error=original_error,
            details={"tx_hash": tx_hash, "revert_data": revert_data},
        )
        self.tx_hash = tx_hash
        self.revert_data = revert_data

    @classmethod
    def send_failed(cls, label: str, error: Exception) -> "TransactionError":
        return cls(f"Failed to send {label}: {error}", original_error=error)

    @classmethod
    def reverted(
        cls,
        label: str,
        reason: str,
        tx_hash: Optional[str] = None,
        revert_data: Optional[Any] = None,
        error: Optional[Exception] = None,
    ) -> "TransactionError":
        return cls(
            f"{label} reverted: {reason}",
            ErrorCode.TX_REVERTED,
            tx_hash=tx_hash,
            revert_data=revert_data,
            original_error=error,
        )

    @classmethod
    def confirmation_timeout(cls, label: str, tx_hash: str, timeout: float) -> "TransactionError":
        return cls(
            f"{label} not confirmed within {timeout}s",
            ErrorCode.TX_CONFIRMATION_TIMEOUT,
            tx_hash=tx_hash,
        )

    @classmethod
    def invalid_params(cls, label: str, reason: str) -> "TransactionError":
        return cls(f"Invalid {label} parameters: {reason}", ErrorCode.TX_INVALID_PARAMS)


class SignerError(OrchestratorError):
    """Signing-related errors"""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.SIGNER_NOT_CONFIGURED):
        super().__init__(message, code, fatal=True)

    @classmethod
    def not_configured(cls) -> "SignerError":
        return cls("No signer configured. Set EVM_PRIVATE_KEY or a keystore path and password.")


class ConfigurationError(OrchestratorError):
    """
    Configuration-related errors

    Raised when:
    - A required prior-stage deployment record is absent
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, fatal=True)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)


@dataclass(frozen=True)
class Notice:
    """
    Non-fatal condition recorded by a workflow step

    Used for TOKEN_ORDER_MISMATCH and MINT_EVENT_NOT_FOUND: the workflow logs
    a warning and carries on.
    """
    code: ErrorCode
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"
