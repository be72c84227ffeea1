"""
Unit tests for the gas pricing policy
"""

import unittest
from decimal import Decimal
from unittest.mock import MagicMock, PropertyMock

from pool_orchestrator.config import GasConfig
from pool_orchestrator.errors import ConfigurationError, RpcError
from pool_orchestrator.modules.gas import GasPricingPolicy, GasPlan, escalate


def _gas_config(multiplier: str = "1.2") -> GasConfig:
    return GasConfig(
        price_multiplier=Decimal(multiplier),
        approval_limit=100_000,
        mint_limit=1_000_000,
        swap_limit=500_000,
    )


class TestEscalate(unittest.TestCase):

    def test_hundred_becomes_one_twenty(self):
        self.assertEqual(escalate(100, Decimal("1.2")), 120)

    def test_rounds_toward_zero(self):
        self.assertEqual(escalate(7, Decimal("1.2")), 8)
        self.assertEqual(escalate(1, Decimal("1.2")), 1)

    def test_large_price_is_exact(self):
        base = 1_000_000_000_000_000_001
        self.assertEqual(escalate(base, Decimal("1.2")), base * 12 // 10)


class TestGasPricingPolicy(unittest.TestCase):

    def test_quote_reads_price_once(self):
        web3 = MagicMock()
        gas_price = PropertyMock(return_value=100)
        type(web3.eth).gas_price = gas_price

        plan = GasPricingPolicy(_gas_config()).quote(web3)

        self.assertEqual(plan.base_price, 100)
        self.assertEqual(plan.gas_price, 120)
        gas_price.assert_called_once()

    def test_options_per_operation(self):
        web3 = MagicMock()
        web3.eth.gas_price = 100
        plan = GasPricingPolicy(_gas_config()).quote(web3)

        self.assertEqual(plan.options("approval"), {"gasPrice": 120, "gas": 100_000})
        self.assertEqual(plan.options("mint"), {"gasPrice": 120, "gas": 1_000_000})
        self.assertEqual(plan.options("swap"), {"gasPrice": 120, "gas": 500_000})

    def test_unknown_operation(self):
        plan = GasPlan(base_price=1, gas_price=1, limits={"mint": 1})
        with self.assertRaises(ConfigurationError):
            plan.options("burn")

    def test_rpc_failure(self):
        web3 = MagicMock()
        type(web3.eth).gas_price = PropertyMock(side_effect=ConnectionError("refused"))

        with self.assertRaises(RpcError):
            GasPricingPolicy(_gas_config()).quote(web3)
