"""
Transaction Submitter

Builds, signs and sends one transaction at a time from the configured
signer, then blocks until its receipt arrives. The nonce is read from the
chain ("pending") for every transaction; strict one-at-a-time submission
keeps it consistent. There is no automatic retry.
"""

import logging
from typing import Any, Dict

from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted

from ..errors import TransactionError
from ..infra.evm_signer import EVMSigner
from ..protocols.uniswap.abi import ERC20_ABI
from ..types import TxResult
from .gas import GasPlan

logger = logging.getLogger(__name__)


class TransactionSubmitter:
    """
    Sequential signed submission

    Usage:
        submitter = TransactionSubmitter(web3, signer, confirmation_timeout=120)
        result = submitter.submit(pm.functions.mint(params), plan.options("mint"), "mint")
    """

    def __init__(
        self,
        web3: Web3,
        signer: EVMSigner,
        confirmation_timeout: float = 120.0,
        poll_latency: float = 0.5,
    ):
        self._web3 = web3
        self._signer = signer
        self._confirmation_timeout = confirmation_timeout
        self._poll_latency = poll_latency
        self._chain_id = None

    @property
    def address(self) -> str:
        return self._signer.address

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = self._web3.eth.chain_id
        return self._chain_id

    def submit(self, contract_fn, gas_options: Dict[str, int], label: str) -> TxResult:
        """
        Send a contract call and wait for its receipt

        Args:
            contract_fn: Bound contract function, e.g. ``contract.functions.mint(params)``
            gas_options: ``{"gasPrice": ..., "gas": ...}`` from a GasPlan
            label: Name used in logs and errors

        Returns:
            TxResult of the confirmed, successful transaction

        Raises:
            TransactionError: If sending fails, the transaction reverts, or
                confirmation does not arrive within the timeout
        """
        try:
            tx = contract_fn.build_transaction({
                "from": self._signer.address,
                "nonce": self._web3.eth.get_transaction_count(self._signer.address, "pending"),
                "chainId": self.chain_id,
                **gas_options,
            })
        except ContractLogicError as e:
            raise TransactionError.reverted(label, e.message or str(e), revert_data=e.data, error=e) from e
        except Exception as e:
            raise TransactionError.send_failed(label, e) from e

        try:
            raw_tx, tx_hash = self._signer.sign_transaction(tx)
            self._web3.eth.send_raw_transaction(raw_tx)
        except ContractLogicError as e:
            raise TransactionError.reverted(label, e.message or str(e), revert_data=e.data, error=e) from e
        except Exception as e:
            raise TransactionError.send_failed(label, e) from e

        logger.info(f"{label} sent: {tx_hash} (nonce={tx['nonce']}, gasPrice={tx.get('gasPrice')})")

        try:
            receipt = self._web3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self._confirmation_timeout,
                poll_latency=self._poll_latency,
            )
        except TimeExhausted as e:
            raise TransactionError.confirmation_timeout(label, tx_hash, self._confirmation_timeout) from e
        except Exception as e:
            raise TransactionError.send_failed(label, e) from e

        result = TxResult.from_receipt(tx_hash, receipt)
        if not result.is_success:
            raise TransactionError.reverted(
                label,
                f"status {receipt.get('status')} in block {result.block_number}",
                tx_hash=tx_hash,
            )

        logger.info(f"{label} confirmed: {result}, gas used {result.gas_used}")
        return result

    def approve(self, token: str, spender: str, amount: int, gas_plan: GasPlan) -> TxResult:
        """Approve exactly ``amount`` of ``token`` for ``spender``"""
        token_contract = self._web3.eth.contract(
            address=Web3.to_checksum_address(token),
            abi=ERC20_ABI,
        )
        logger.info(f"Approving {amount} of {token} for {spender}")
        return self.submit(
            token_contract.functions.approve(Web3.to_checksum_address(spender), amount),
            gas_plan.options("approval"),
            f"approve {token[:10]}",
        )

    def contract(self, address: str, abi: Any):
        return self._web3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
