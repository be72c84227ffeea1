"""
Unit tests for the swap workflow
"""

from decimal import Decimal
from unittest.mock import MagicMock

from pool_orchestrator.errors import ErrorCode, TransactionError
from pool_orchestrator.modules.gas import GasPlan
from pool_orchestrator.modules.pool_reader import PoolStateReader
from pool_orchestrator.types import SwapState, TxResult, TxStatus
from pool_orchestrator.workflows.swap import SwapWorkflow

from conftest import TOKEN_A, TOKEN_B, SWAP_ROUTER, OWNER, make_pool_state

NOW = 1_700_000_000
GAS_PLAN = GasPlan(base_price=100, gas_price=120, limits={"approval": 100_000, "mint": 1_000_000, "swap": 500_000})


class FakeChain:
    """Balances that move when a swap is submitted"""

    def __init__(self, balances, fills):
        self.balances = dict(balances)
        # (token_in, token_out) -> amount received
        self.fills = fills
        self.pending = None

    def balance_of(self, token, owner):
        return self.balances[token]

    def build_swap(self, params):
        self.pending = params
        return MagicMock(name="exactInputSingle")

    def submit(self, contract_fn, gas_options, label):
        token_in, token_out, _fee, _recipient, _deadline, amount_in, _min, _limit = self.pending
        self.balances[token_in] -= amount_in
        self.balances[token_out] += self.fills[(token_in, token_out)]
        return TxResult(status=TxStatus.SUCCESS, tx_hash=f"0x{label.replace(' ', '')}", receipt={})


def _workflow(pool_state, chain):
    reader = MagicMock()
    reader.read.return_value = pool_state
    reader.check_token_order.side_effect = PoolStateReader.check_token_order
    reader.balance_of.side_effect = chain.balance_of

    gas_policy = MagicMock()
    gas_policy.quote.return_value = GAS_PLAN

    submitter = MagicMock()
    submitter.address = OWNER
    submitter.approve.return_value = TxResult(status=TxStatus.SUCCESS, tx_hash="0xapprove")
    router = submitter.contract.return_value
    router.functions.exactInputSingle.side_effect = chain.build_swap
    submitter.submit.side_effect = chain.submit

    workflow = SwapWorkflow(
        web3=MagicMock(),
        reader=reader,
        gas_policy=gas_policy,
        submitter=submitter,
        deadline_seconds=1200,
        clock=lambda: NOW,
    )
    return workflow, submitter


class TestSwapWorkflow:

    def test_forward_and_reverse(self, pool_record):
        chain = FakeChain(
            balances={TOKEN_A: 10**18, TOKEN_B: 10**18},
            fills={(TOKEN_A, TOKEN_B): 9 * 10**15, (TOKEN_B, TOKEN_A): 8 * 10**15},
        )
        workflow, submitter = _workflow(make_pool_state(), chain)

        forward, reverse = workflow.run(pool_record, SWAP_ROUTER, Decimal("0.01"))

        assert forward.state == SwapState.DONE
        assert (forward.params.token_in, forward.params.token_out) == (TOKEN_A, TOKEN_B)
        assert forward.params.amount_in == 10**16
        assert forward.params.deadline == NOW + 1200
        assert forward.delta.spent == 10**16
        assert forward.delta.received == 9 * 10**15
        assert forward.delta.effective_price_wad == 10**16 * 10**18 // (9 * 10**15)

        assert reverse.state == SwapState.DONE
        assert (reverse.params.token_in, reverse.params.token_out) == (TOKEN_B, TOKEN_A)
        assert reverse.delta.received == 8 * 10**15

        approvals = [c.args for c in submitter.approve.call_args_list]
        assert approvals == [(TOKEN_A, SWAP_ROUTER, 10**16, GAS_PLAN), (TOKEN_B, SWAP_ROUTER, 10**16, GAS_PLAN)]
        gas_options = [c.args[1] for c in submitter.submit.call_args_list]
        assert gas_options == [{"gasPrice": 120, "gas": 500_000}] * 2

    def test_no_reverse(self, pool_record):
        chain = FakeChain({TOKEN_A: 10**18, TOKEN_B: 0}, {(TOKEN_A, TOKEN_B): 1})
        workflow, _ = _workflow(make_pool_state(), chain)

        outcomes = workflow.run(pool_record, SWAP_ROUTER, Decimal("0.01"), reverse=False)

        assert [o.name for o in outcomes] == ["forward"]

    def test_zero_liquidity_aborts_before_submission(self, pool_record):
        chain = FakeChain({TOKEN_A: 10**18, TOKEN_B: 10**18}, {})
        workflow, submitter = _workflow(make_pool_state(liquidity=0), chain)

        outcomes = workflow.run(pool_record, SWAP_ROUTER, Decimal("0.01"))

        assert len(outcomes) == 2
        for outcome in outcomes:
            assert outcome.state == SwapState.FAILED
            assert outcome.failed_at == SwapState.VALIDATE_LIQUIDITY
            assert outcome.error.code == ErrorCode.POOL_NO_LIQUIDITY
            assert outcome.is_fatal
        submitter.approve.assert_not_called()
        submitter.submit.assert_not_called()

    def test_forward_revert_does_not_stop_reverse(self, pool_record):
        chain = FakeChain(
            balances={TOKEN_A: 10**18, TOKEN_B: 10**18},
            fills={(TOKEN_B, TOKEN_A): 5},
        )
        workflow, submitter = _workflow(make_pool_state(), chain)
        submitter.submit.side_effect = _first_reverts(chain)

        forward, reverse = workflow.run(pool_record, SWAP_ROUTER, Decimal("0.01"))

        assert forward.state == SwapState.FAILED
        assert forward.failed_at == SwapState.SUBMIT_SWAP
        assert not forward.is_fatal
        assert forward.delta is None

        assert reverse.state == SwapState.DONE
        assert reverse.delta.received == 5

    def test_decimals_of_input_token(self, pool_record):
        chain = FakeChain({TOKEN_A: 10**18, TOKEN_B: 10**18}, {(TOKEN_A, TOKEN_B): 1, (TOKEN_B, TOKEN_A): 1})
        workflow, _ = _workflow(make_pool_state(decimals1=6), chain)

        forward, reverse = workflow.run(pool_record, SWAP_ROUTER, Decimal("0.01"))

        assert forward.params.amount_in == 10**16
        assert reverse.params.amount_in == 10**4


def _first_reverts(chain):
    calls = []

    def submit(contract_fn, gas_options, label):
        calls.append(label)
        if len(calls) == 1:
            raise TransactionError.reverted(label, "Too little received")
        return chain.submit(contract_fn, gas_options, label)

    return submit
