"""
Event Extractor

Finds the IncreaseLiquidity event in a mint receipt and decodes it.
"""

import logging
from typing import Any, Dict, Optional

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from hexbytes import HexBytes
from web3 import Web3

from ..protocols.uniswap.constants import INCREASE_LIQUIDITY_SIGNATURE
from ..types import MintEvent

logger = logging.getLogger(__name__)

INCREASE_LIQUIDITY_TOPIC = HexBytes(Web3.keccak(text=INCREASE_LIQUIDITY_SIGNATURE))


class EventExtractor:
    """
    Decodes ``IncreaseLiquidity(uint256 indexed tokenId, uint128 liquidity,
    uint256 amount0, uint256 amount1)`` from receipt logs

    When ``emitter`` is given, logs from any other address are ignored.
    """

    def __init__(self, emitter: Optional[str] = None):
        self._emitter = emitter.lower() if emitter else None

    def extract_mint(self, receipt: Dict[str, Any]) -> Optional[MintEvent]:
        """First decodable matching event in the receipt, or None"""
        for log in receipt.get("logs", []):
            if self._emitter and str(log.get("address", "")).lower() != self._emitter:
                continue

            topics = [HexBytes(t) for t in log.get("topics", [])]
            if len(topics) < 2 or topics[0] != INCREASE_LIQUIDITY_TOPIC:
                continue

            try:
                liquidity, amount0, amount1 = decode(
                    ["uint128", "uint256", "uint256"],
                    bytes(HexBytes(log.get("data", b""))),
                )
            except DecodingError as e:
                logger.warning(f"Skipping malformed IncreaseLiquidity log: {e}")
                continue

            event = MintEvent(
                token_id=int.from_bytes(bytes(topics[1]), "big"),
                liquidity=liquidity,
                amount0=amount0,
                amount1=amount1,
            )
            logger.debug(f"Decoded {event}")
            return event

        return None
