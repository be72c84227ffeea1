"""
Infrastructure layer for the pool orchestrator

Provides:
- EVMSigner: EVM transaction signing using web3.py / eth-account
- create_web3: configured Web3 instance
- CorrelationContext: per-workflow correlation IDs for logging
"""

from .evm_signer import (
    EVMSigner,
    create_web3,
    create_evm_signer,
)
from .correlation import (
    CorrelationContext,
    CorrelationIdFilter,
    get_correlation_id,
)

__all__ = [
    "EVMSigner",
    "create_web3",
    "create_evm_signer",
    "CorrelationContext",
    "CorrelationIdFilter",
    "get_correlation_id",
]
