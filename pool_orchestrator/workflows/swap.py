"""
Swap workflow

READ_POOL_STATE -> VALIDATE_LIQUIDITY -> APPROVE_TOKEN -> SUBMIT_SWAP
-> AWAIT_CONFIRMATION -> COMPUTE_BALANCE_DELTA -> DONE

A forward swap (token0 -> token1) and a reverse swap (token1 -> token0) run
one after the other as independent instances: a failure in one does not
stop the other.
"""

import logging
import time
from decimal import Decimal
from typing import Callable, List

from web3 import Web3

from ..errors import OrchestratorError, TransactionError, PoolUnavailable
from ..infra.correlation import CorrelationContext
from ..modules.calculator import to_raw_amount
from ..modules.gas import GasPricingPolicy
from ..modules.pool_reader import PoolStateReader
from ..modules.submitter import TransactionSubmitter
from ..protocols.uniswap.abi import V3_SWAP_ROUTER_ABI
from ..types import BalanceDelta, PoolRecord, SwapParameters, SwapState, SwapOutcome

logger = logging.getLogger(__name__)


class SwapWorkflow:
    """
    Exact-input single-pool swaps through the router

    Usage:
        workflow = SwapWorkflow(web3, reader, gas_policy, submitter)
        forward, reverse = workflow.run(pool_record, swap_router, Decimal("0.01"))
    """

    def __init__(
        self,
        web3: Web3,
        reader: PoolStateReader,
        gas_policy: GasPricingPolicy,
        submitter: TransactionSubmitter,
        deadline_seconds: int = 1200,
        clock: Callable[[], float] = time.time,
    ):
        self._web3 = web3
        self._reader = reader
        self._gas_policy = gas_policy
        self._submitter = submitter
        self._deadline_seconds = deadline_seconds
        self._clock = clock

    def run(
        self,
        pool_record: PoolRecord,
        swap_router: str,
        amount_in: Decimal,
        reverse: bool = True,
    ) -> List[SwapOutcome]:
        """Forward swap, then the reverse swap unless disabled"""
        outcomes = [self.run_instance("forward", pool_record, swap_router, amount_in, zero_for_one=True)]
        if reverse:
            outcomes.append(
                self.run_instance("reverse", pool_record, swap_router, amount_in, zero_for_one=False)
            )
        return outcomes

    def run_instance(
        self,
        name: str,
        pool_record: PoolRecord,
        swap_router: str,
        amount_in: Decimal,
        zero_for_one: bool,
    ) -> SwapOutcome:
        with CorrelationContext(f"swap_{name}"):
            outcome = SwapOutcome(name=name, state=SwapState.READ_POOL_STATE)
            try:
                self._execute(outcome, pool_record, swap_router, amount_in, zero_for_one)
            except OrchestratorError as e:
                outcome.failed_at = outcome.state
                outcome.state = SwapState.FAILED
                outcome.error = e
                logger.error(f"Swap {name} failed at {outcome.failed_at.value}: {e}")
            return outcome

    def _execute(
        self,
        outcome: SwapOutcome,
        pool_record: PoolRecord,
        swap_router: str,
        amount_in: Decimal,
        zero_for_one: bool,
    ) -> None:
        owner = self._submitter.address

        outcome.state = SwapState.READ_POOL_STATE
        pool = self._reader.read(pool_record.address)
        outcome.pool = pool
        notice = self._reader.check_token_order(pool, pool_record.token0, pool_record.token1)
        if notice:
            outcome.notices.append(notice)

        outcome.state = SwapState.VALIDATE_LIQUIDITY
        if not pool.has_liquidity:
            raise PoolUnavailable.no_liquidity(pool.address)

        token_in, token_out = (pool.token0, pool.token1) if zero_for_one else (pool.token1, pool.token0)
        now = int(self._clock())
        params = SwapParameters(
            token_in=token_in,
            token_out=token_out,
            fee=pool.fee,
            recipient=owner,
            deadline=now + self._deadline_seconds,
            amount_in=to_raw_amount(amount_in, pool.decimals_of(token_in)),
        )
        params.validate(now)
        outcome.params = params

        balance_in_before = self._reader.balance_of(token_in, owner)
        balance_out_before = self._reader.balance_of(token_out, owner)
        logger.info(
            f"Swap {outcome.name}: {params.amount_in} of {token_in} -> {token_out} "
            f"(balances before: in={balance_in_before}, out={balance_out_before})"
        )

        outcome.state = SwapState.APPROVE_TOKEN
        gas_plan = self._gas_policy.quote(self._web3)
        outcome.transactions.append(
            self._submitter.approve(token_in, swap_router, params.amount_in, gas_plan)
        )

        outcome.state = SwapState.SUBMIT_SWAP
        if params.deadline <= int(self._clock()):
            raise TransactionError.invalid_params("swap", "deadline passed before submission")
        router = self._submitter.contract(swap_router, V3_SWAP_ROUTER_ABI)
        try:
            result = self._submitter.submit(
                router.functions.exactInputSingle(params.as_tuple()),
                gas_plan.options("swap"),
                f"swap {outcome.name}",
            )
        except TransactionError as e:
            if e.tx_hash:
                outcome.state = SwapState.AWAIT_CONFIRMATION
            raise
        outcome.state = SwapState.AWAIT_CONFIRMATION
        outcome.transactions.append(result)

        outcome.state = SwapState.COMPUTE_BALANCE_DELTA
        balance_in_after = self._reader.balance_of(token_in, owner)
        balance_out_after = self._reader.balance_of(token_out, owner)
        delta = BalanceDelta(
            spent=balance_in_before - balance_in_after,
            received=balance_out_after - balance_out_before,
        )
        outcome.delta = delta
        logger.info(
            f"Swap {outcome.name} done: spent {delta.spent}, received {delta.received}, "
            f"effective price {delta.effective_price_wad} (x1e18)"
        )

        outcome.state = SwapState.DONE
