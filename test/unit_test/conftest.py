"""
Shared fixtures for unit tests.

No network access: every chain interaction is mocked.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from pool_orchestrator.types import PoolState, PoolRecord  # noqa: E402

TOKEN_A = "0x1111111111111111111111111111111111111111"
TOKEN_B = "0x2222222222222222222222222222222222222222"
POOL = "0x3333333333333333333333333333333333333333"
POSITION_MANAGER = "0x4444444444444444444444444444444444444444"
SWAP_ROUTER = "0x5555555555555555555555555555555555555555"
OWNER = "0x6666666666666666666666666666666666666666"

Q96 = 2**96


def make_pool_state(**overrides) -> PoolState:
    values = dict(
        address=POOL,
        token0=TOKEN_A,
        token1=TOKEN_B,
        fee=3000,
        tick_spacing=60,
        current_tick=0,
        sqrt_price_x96=Q96,
        liquidity=10**18,
        decimals0=18,
        decimals1=18,
    )
    values.update(overrides)
    return PoolState(**values)


@pytest.fixture
def pool_state() -> PoolState:
    return make_pool_state()


@pytest.fixture
def pool_record() -> PoolRecord:
    return PoolRecord(address=POOL, fee=3000, token0=TOKEN_A, token1=TOKEN_B)


@pytest.fixture
def mock_web3():
    web3 = MagicMock()
    web3.eth.gas_price = 100
    web3.eth.chain_id = 31337
    return web3
