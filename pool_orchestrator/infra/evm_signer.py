"""
EVM Transaction Signer using web3.py

Provides local signing for the single account that drives every workflow.
Only supports local private key signing (no remote signer).

Transactions from this signer are sent strictly one at a time, so the nonce
is read from the chain for each transaction rather than tracked locally.
"""

from __future__ import annotations

import logging
from typing import Optional, Dict, Any, Tuple

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3, HTTPProvider
from web3.middleware import ExtraDataToPOAMiddleware

from ..errors import SignerError, RpcError

logger = logging.getLogger(__name__)

# Chains whose blocks carry oversized extraData (PoA / PoSA)
POA_CHAIN_IDS = (56, 97, 137, 80001)


class EVMSigner:
    """
    Local EVM signer

    Usage:
        # From private key
        signer = EVMSigner.from_private_key("0x...")

        # Sign a transaction dict built by a contract function
        raw_tx, tx_hash = signer.sign_transaction(tx_dict)
    """

    def __init__(self, account: LocalAccount):
        """
        Initialize with eth_account LocalAccount

        Args:
            account: LocalAccount from eth_account
        """
        self._account = account

    @property
    def address(self) -> str:
        """Get wallet address (checksummed)"""
        return self._account.address

    def sign_transaction(self, tx_dict: Dict[str, Any]) -> Tuple[bytes, str]:
        """
        Sign a transaction

        Args:
            tx_dict: Transaction dictionary with to, data, value, gas, gasPrice, nonce, chainId

        Returns:
            (raw_tx_bytes, tx_hash_hex)
        """
        signed = self._account.sign_transaction(tx_dict)
        return signed.raw_transaction, Web3.to_hex(signed.hash)

    @classmethod
    def from_private_key(cls, private_key: str) -> "EVMSigner":
        """
        Create signer from private key

        Args:
            private_key: Hex-encoded private key (with or without 0x prefix)
        """
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key

        account = Account.from_key(private_key)
        return cls(account)

    @classmethod
    def from_keystore(cls, keystore_path: str, password: str) -> "EVMSigner":
        """
        Create signer from encrypted keystore file

        Args:
            keystore_path: Path to keystore JSON file
            password: Password to decrypt keystore
        """
        with open(keystore_path, "r") as f:
            keystore = f.read()

        private_key = Account.decrypt(keystore, password)
        return cls(Account.from_key(private_key))

    def __repr__(self) -> str:
        return f"EVMSigner(address={self.address})"


def create_web3(
    rpc_url: str,
    chain_id: Optional[int] = None,
    timeout: float = 30,
) -> Web3:
    """
    Create Web3 instance for a chain

    Args:
        rpc_url: RPC endpoint URL
        chain_id: Chain ID. If None, it is detected from the RPC.
        timeout: Request timeout in seconds

    Returns:
        Configured Web3 instance

    Raises:
        RpcError: If the chain ID cannot be detected
    """
    provider = HTTPProvider(
        rpc_url,
        request_kwargs={"timeout": timeout},
    )

    web3 = Web3(provider)

    if chain_id is None:
        try:
            chain_id = web3.eth.chain_id
        except Exception as e:
            raise RpcError.connection_failed(rpc_url, e) from e

    if chain_id in POA_CHAIN_IDS:
        web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    logger.debug(f"Connected web3 to {rpc_url} (chain {chain_id})")
    return web3


def create_evm_signer(
    private_key: Optional[str] = None,
    keystore_path: Optional[str] = None,
    keystore_password: Optional[str] = None,
) -> EVMSigner:
    """
    Create EVM signer based on configuration

    Priority:
    1. private_key: Use provided private key
    2. keystore_path + keystore_password: Load from keystore file

    Raises:
        SignerError: If no valid signer configuration found
    """
    if private_key:
        return EVMSigner.from_private_key(private_key)

    if keystore_path and keystore_password:
        return EVMSigner.from_keystore(keystore_path, keystore_password)

    raise SignerError.not_configured()
