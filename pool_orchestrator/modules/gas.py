"""
Gas Pricing Policy

Legacy gas pricing: the live network price escalated by a fixed multiplier,
and a fixed gas limit per operation kind.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_DOWN
from typing import Dict

from web3 import Web3

from ..config import GasConfig
from ..errors import RpcError, ConfigurationError

logger = logging.getLogger(__name__)


def escalate(base_price: int, multiplier: Decimal) -> int:
    """base_price * multiplier rounded toward zero (100 * 1.2 -> 120)"""
    return int((Decimal(base_price) * multiplier).to_integral_value(rounding=ROUND_DOWN))


@dataclass(frozen=True)
class GasPlan:
    """Gas price and limits fixed for one workflow instance"""
    base_price: int
    gas_price: int
    limits: Dict[str, int] = field(default_factory=dict)

    def options(self, operation: str) -> Dict[str, int]:
        """Transaction fields for an operation kind (approval, mint, swap)"""
        if operation not in self.limits:
            raise ConfigurationError.invalid("operation", f"no gas limit for '{operation}'")
        return {"gasPrice": self.gas_price, "gas": self.limits[operation]}


class GasPricingPolicy:
    """
    Reads the network gas price once per quote

    Usage:
        plan = GasPricingPolicy(config.gas).quote(web3)
        tx_options = plan.options("mint")
    """

    def __init__(self, config: GasConfig):
        self._config = config

    def quote(self, web3: Web3) -> GasPlan:
        try:
            base_price = web3.eth.gas_price
        except Exception as e:
            raise RpcError.call_failed("eth_gasPrice", e) from e

        gas_price = escalate(base_price, self._config.price_multiplier)
        logger.info(
            f"Gas price {base_price} x {self._config.price_multiplier} = {gas_price}"
        )
        return GasPlan(
            base_price=base_price,
            gas_price=gas_price,
            limits=dict(self._config.limits),
        )
