"""
Pool State Reader

Reads a consistent snapshot of a deployed pool (token order, fee, spacing,
slot0 and active liquidity) plus live token balances. Read-only.
"""

import logging
from typing import Optional

from web3 import Web3

from ..errors import RpcError, ErrorCode, Notice
from ..protocols.uniswap.abi import ERC20_ABI, V3_POOL_ABI
from ..types import PoolState

logger = logging.getLogger(__name__)


class PoolStateReader:
    """
    Pool and token view calls

    Usage:
        reader = PoolStateReader(web3)
        state = reader.read(pool_address)
        notice = reader.check_token_order(state, configured0, configured1)
    """

    def __init__(self, web3: Web3):
        self._web3 = web3

    def _pool_contract(self, pool_address: str):
        return self._web3.eth.contract(
            address=Web3.to_checksum_address(pool_address),
            abi=V3_POOL_ABI,
        )

    def _token_contract(self, token_address: str):
        return self._web3.eth.contract(
            address=Web3.to_checksum_address(token_address),
            abi=ERC20_ABI,
        )

    def read(self, pool_address: str) -> PoolState:
        """
        Read the pool snapshot

        Token ordering comes from the pool itself, never from cached records.

        Raises:
            RpcError: If any view call fails
        """
        pool = self._pool_contract(pool_address)

        try:
            token0 = pool.functions.token0().call()
            token1 = pool.functions.token1().call()
            fee = pool.functions.fee().call()
            tick_spacing = pool.functions.tickSpacing().call()
            slot0 = pool.functions.slot0().call()
            liquidity = pool.functions.liquidity().call()
        except Exception as e:
            raise RpcError.call_failed(f"pool {pool_address} state", e) from e

        decimals0 = self._decimals(token0)
        decimals1 = self._decimals(token1)

        state = PoolState(
            address=Web3.to_checksum_address(pool_address),
            token0=token0,
            token1=token1,
            fee=fee,
            tick_spacing=tick_spacing,
            current_tick=slot0[1],
            sqrt_price_x96=slot0[0],
            liquidity=liquidity,
            decimals0=decimals0,
            decimals1=decimals1,
        )
        logger.info(f"Read {state}")
        return state

    def _decimals(self, token: str) -> int:
        try:
            return self._token_contract(token).functions.decimals().call()
        except Exception as e:
            raise RpcError.call_failed(f"{token}.decimals()", e) from e

    def balance_of(self, token: str, owner: str) -> int:
        """Live token balance in smallest units, never cached"""
        try:
            return self._token_contract(token).functions.balanceOf(
                Web3.to_checksum_address(owner)
            ).call()
        except Exception as e:
            raise RpcError.call_failed(f"{token}.balanceOf({owner})", e) from e

    @staticmethod
    def check_token_order(
        state: PoolState,
        expected_token0: str,
        expected_token1: str,
    ) -> Optional[Notice]:
        """
        Compare the configured token order against the pool's canonical order

        Returns a TOKEN_ORDER_MISMATCH notice when they differ (case-insensitive),
        None otherwise. The pool's order is used downstream either way.
        """
        if (
            expected_token0.lower() == state.token0.lower()
            and expected_token1.lower() == state.token1.lower()
        ):
            return None

        notice = Notice(
            code=ErrorCode.TOKEN_ORDER_MISMATCH,
            message=(
                f"Configured token order ({expected_token0}, {expected_token1}) differs from "
                f"pool order ({state.token0}, {state.token1}); using pool order"
            ),
            details={
                "expected": [expected_token0, expected_token1],
                "actual": [state.token0, state.token1],
            },
        )
        logger.warning(str(notice))
        return notice
