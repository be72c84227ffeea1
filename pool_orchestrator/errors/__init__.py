"""
Error definitions for the pool orchestrator
"""

from .exceptions import (
    ErrorCode,
    OrchestratorError,
    RpcError,
    InsufficientFunds,
    PoolUnavailable,
    TransactionError,
    SignerError,
    ConfigurationError,
    Notice,
)

__all__ = [
    "ErrorCode",
    "OrchestratorError",
    "RpcError",
    "InsufficientFunds",
    "PoolUnavailable",
    "TransactionError",
    "SignerError",
    "ConfigurationError",
    "Notice",
]
