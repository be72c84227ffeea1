"""
Unit tests for configuration, correlation IDs and the EVM signer
"""

import logging
import os
import unittest
from decimal import Decimal
from unittest.mock import MagicMock, PropertyMock, patch

from pool_orchestrator.config import (
    Config,
    GasConfig,
    LoggingConfig,
    PathsConfig,
    RpcConfig,
    TxConfig,
    WorkflowConfig,
    setup_logging,
)
from pool_orchestrator.errors import RpcError, SignerError
from pool_orchestrator.infra.correlation import (
    CorrelationContext,
    CorrelationIdFilter,
    get_correlation_id,
)
from pool_orchestrator.infra.evm_signer import EVMSigner, create_evm_signer, create_web3

# Well-known test key from the eth-account documentation
TEST_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"


class TestConfig(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        config = Config()
        self.assertEqual(config.rpc.url, "http://127.0.0.1:8545")
        self.assertIsNone(config.rpc.chain_id)
        self.assertEqual(config.gas.price_multiplier, Decimal("1.2"))
        self.assertEqual(config.gas.limits, {"approval": 100_000, "mint": 1_000_000, "swap": 500_000})
        self.assertEqual(config.tx.deadline_seconds, 1200)
        self.assertEqual(config.tx.confirmation_timeout, 120.0)
        self.assertEqual(config.workflow.mint_strategy, "auto")
        self.assertEqual(config.workflow.mint_base_amount, Decimal("0.01"))
        self.assertEqual(config.workflow.mint_full_range_amount, Decimal("0.1"))
        self.assertEqual(config.workflow.swap_amount_in, Decimal("0.01"))
        self.assertTrue(config.workflow.swap_reverse)

    @patch.dict(os.environ, {
        "EVM_RPC_URL": "http://node:8545",
        "EVM_CHAIN_ID": "31337",
        "GAS_PRICE_MULTIPLIER": "1.5",
        "GAS_LIMIT_MINT": "2000000",
        "TX_CONFIRMATION_TIMEOUT": "30",
        "SWAP_REVERSE": "false",
    }, clear=True)
    def test_environment_overrides(self):
        self.assertEqual(RpcConfig().url, "http://node:8545")
        self.assertEqual(RpcConfig().chain_id, 31337)
        self.assertEqual(GasConfig().price_multiplier, Decimal("1.5"))
        self.assertEqual(GasConfig().mint_limit, 2_000_000)
        self.assertEqual(TxConfig().confirmation_timeout, 30.0)
        self.assertFalse(WorkflowConfig().swap_reverse)

    @patch.dict(os.environ, {"GAS_LIMIT_SWAP": "lots", "GAS_PRICE_MULTIPLIER": "x"}, clear=True)
    def test_invalid_values_fall_back(self):
        self.assertEqual(GasConfig().swap_limit, 500_000)
        self.assertEqual(GasConfig().price_multiplier, Decimal("1.2"))

    @patch.dict(os.environ, {"DEPLOYMENTS_DIR": "/data/periphery", "CORE_DEPLOYMENTS_DIR": "/data/core"}, clear=True)
    def test_paths(self):
        paths = PathsConfig()
        self.assertEqual(str(paths.periphery_path), "/data/periphery/deployed-periphery.json")
        self.assertEqual(str(paths.positions_path), "/data/periphery/deployed-positions.json")
        self.assertEqual(str(paths.pool_path), "/data/core/deployed-pool.json")
        self.assertEqual(str(paths.factory_path), "/data/core/deployed-factory.json")
        self.assertEqual(str(paths.weth9_path), "/data/core/weth9-address.json")


class TestCorrelation(unittest.TestCase):

    def test_context_sets_and_resets(self):
        self.assertIsNone(get_correlation_id())
        with CorrelationContext("mint") as cid:
            self.assertTrue(cid.startswith("mint_"))
            self.assertEqual(get_correlation_id(), cid)
        self.assertIsNone(get_correlation_id())

    def test_filter_stamps_records(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        CorrelationIdFilter().filter(record)
        self.assertEqual(record.correlation_id, "-")

        with CorrelationContext("swap") as cid:
            CorrelationIdFilter().filter(record)
        self.assertEqual(record.correlation_id, cid)

    def test_setup_logging_attaches_filter(self):
        config = LoggingConfig(log_file="", log_level="DEBUG", console_output=True)
        logger = setup_logging(config, logger_name="pool_orchestrator.test_setup")

        self.assertEqual(len(logger.handlers), 1)
        self.assertTrue(any(isinstance(f, CorrelationIdFilter) for f in logger.handlers[0].filters))

        # reload does not duplicate handlers
        logger = setup_logging(config, logger_name="pool_orchestrator.test_setup")
        self.assertEqual(len(logger.handlers), 1)


class TestEVMSigner(unittest.TestCase):

    def test_from_private_key(self):
        signer = EVMSigner.from_private_key(TEST_KEY)
        self.assertEqual(signer.address, TEST_ADDRESS)

    def test_from_private_key_without_prefix(self):
        signer = EVMSigner.from_private_key(TEST_KEY[2:])
        self.assertEqual(signer.address, TEST_ADDRESS)

    def test_sign_transaction(self):
        signer = EVMSigner.from_private_key(TEST_KEY)
        raw_tx, tx_hash = signer.sign_transaction({
            "to": "0x0000000000000000000000000000000000000001",
            "value": 0,
            "gas": 21000,
            "gasPrice": 120,
            "nonce": 0,
            "chainId": 31337,
            "data": "0x",
        })
        self.assertIsInstance(raw_tx, bytes)
        self.assertTrue(tx_hash.startswith("0x"))
        self.assertEqual(len(tx_hash), 66)

    def test_create_signer_requires_key(self):
        with self.assertRaises(SignerError):
            create_evm_signer("", "", "")

    def test_create_signer_from_key(self):
        self.assertEqual(create_evm_signer(TEST_KEY).address, TEST_ADDRESS)


class TestCreateWeb3(unittest.TestCase):

    @patch("pool_orchestrator.infra.evm_signer.Web3")
    def test_chain_id_detection_failure(self, mock_web3_cls):
        instance = MagicMock()
        type(instance.eth).chain_id = PropertyMock(side_effect=ConnectionError("refused"))
        mock_web3_cls.return_value = instance

        with self.assertRaises(RpcError):
            create_web3("http://127.0.0.1:1")

    @patch("pool_orchestrator.infra.evm_signer.Web3")
    def test_poa_middleware_injected(self, mock_web3_cls):
        instance = MagicMock()
        mock_web3_cls.return_value = instance

        create_web3("http://bsc", chain_id=56)
        instance.middleware_onion.inject.assert_called_once()

        instance.reset_mock()
        create_web3("http://local", chain_id=31337)
        instance.middleware_onion.inject.assert_not_called()


if __name__ == "__main__":
    unittest.main()
