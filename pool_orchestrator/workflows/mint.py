"""
Mint workflow

READ_POOL_STATE -> COMPUTE_PARAMETERS -> VALIDATE_BALANCES -> APPROVE_TOKENS
-> SUBMIT_MINT -> AWAIT_CONFIRMATION -> EXTRACT_EVENT -> PERSIST_POSITION -> DONE

Any error moves the instance to FAILED with the state it failed in. Nothing
already confirmed on chain is rolled back.
"""

import logging
import time
from decimal import Decimal
from typing import Callable, Optional

from web3 import Web3

from ..errors import OrchestratorError, TransactionError, ErrorCode, Notice
from ..infra.correlation import CorrelationContext
from ..modules.balance import BalanceValidator
from ..modules.calculator import RangeStrategy, plan_mint
from ..modules.events import EventExtractor
from ..modules.gas import GasPricingPolicy
from ..modules.ledger import PositionLedger
from ..modules.pool_reader import PoolStateReader
from ..modules.submitter import TransactionSubmitter
from ..protocols.uniswap.abi import V3_POSITION_MANAGER_ABI
from ..types import MintParameters, MintState, MintOutcome, PoolRecord, PositionRecord

logger = logging.getLogger(__name__)


class MintWorkflow:
    """
    Adds liquidity to a pool and records the minted position

    Usage:
        workflow = MintWorkflow(web3, reader, validator, gas_policy, submitter, extractor, ledger)
        outcome = workflow.run(pool_record, position_manager, RangeStrategy.AUTO,
                               base_amount=Decimal("0.01"), full_range_amount=Decimal("0.1"))
    """

    def __init__(
        self,
        web3: Web3,
        reader: PoolStateReader,
        validator: BalanceValidator,
        gas_policy: GasPricingPolicy,
        submitter: TransactionSubmitter,
        extractor: EventExtractor,
        ledger: PositionLedger,
        deadline_seconds: int = 1200,
        clock: Callable[[], float] = time.time,
    ):
        self._web3 = web3
        self._reader = reader
        self._validator = validator
        self._gas_policy = gas_policy
        self._submitter = submitter
        self._extractor = extractor
        self._ledger = ledger
        self._deadline_seconds = deadline_seconds
        self._clock = clock

    def run(
        self,
        pool_record: PoolRecord,
        position_manager: str,
        strategy: RangeStrategy = RangeStrategy.AUTO,
        base_amount: Decimal = Decimal("0.01"),
        full_range_amount: Decimal = Decimal("0.1"),
    ) -> MintOutcome:
        with CorrelationContext("mint"):
            outcome = MintOutcome(name="mint", state=MintState.READ_POOL_STATE)
            try:
                self._execute(outcome, pool_record, position_manager, strategy, base_amount, full_range_amount)
            except OrchestratorError as e:
                outcome.failed_at = outcome.state
                outcome.state = MintState.FAILED
                outcome.error = e
                logger.error(f"Mint failed at {outcome.failed_at.value}: {e}")
            return outcome

    def _execute(
        self,
        outcome: MintOutcome,
        pool_record: PoolRecord,
        position_manager: str,
        strategy: RangeStrategy,
        base_amount: Decimal,
        full_range_amount: Decimal,
    ) -> None:
        owner = self._submitter.address

        outcome.state = MintState.READ_POOL_STATE
        pool = self._reader.read(pool_record.address)
        outcome.pool = pool
        notice = self._reader.check_token_order(pool, pool_record.token0, pool_record.token1)
        if notice:
            outcome.notices.append(notice)

        outcome.state = MintState.COMPUTE_PARAMETERS
        plan = plan_mint(pool, strategy, base_amount, full_range_amount)
        now = int(self._clock())
        params = MintParameters(
            token0=pool.token0,
            token1=pool.token1,
            fee=pool.fee,
            tick_lower=plan.tick_lower,
            tick_upper=plan.tick_upper,
            amount0_desired=plan.amount0,
            amount1_desired=plan.amount1,
            recipient=owner,
            deadline=now + self._deadline_seconds,
        )
        params.validate(pool.tick_spacing, now)
        outcome.params = params
        logger.info(
            f"Mint plan ({plan.strategy.value}): ticks [{plan.tick_lower}, {plan.tick_upper}], "
            f"amount0={plan.amount0}, amount1={plan.amount1}"
        )

        outcome.state = MintState.VALIDATE_BALANCES
        self._validator.validate(owner, [
            (pool.token0, params.amount0_desired),
            (pool.token1, params.amount1_desired),
        ])

        outcome.state = MintState.APPROVE_TOKENS
        gas_plan = self._gas_policy.quote(self._web3)
        for token, amount in ((pool.token0, params.amount0_desired), (pool.token1, params.amount1_desired)):
            if amount > 0:
                outcome.transactions.append(
                    self._submitter.approve(token, position_manager, amount, gas_plan)
                )

        outcome.state = MintState.SUBMIT_MINT
        if params.deadline <= int(self._clock()):
            raise TransactionError.invalid_params("mint", "deadline passed before submission")
        pm = self._submitter.contract(position_manager, V3_POSITION_MANAGER_ABI)
        try:
            result = self._submitter.submit(
                pm.functions.mint(params.as_tuple()),
                gas_plan.options("mint"),
                "mint",
            )
        except TransactionError as e:
            if e.tx_hash:
                outcome.state = MintState.AWAIT_CONFIRMATION
            raise
        outcome.state = MintState.AWAIT_CONFIRMATION
        outcome.transactions.append(result)

        outcome.state = MintState.EXTRACT_EVENT
        event = self._extractor.extract_mint(result.receipt)
        if event is None:
            notice = Notice(
                code=ErrorCode.MINT_EVENT_NOT_FOUND,
                message=f"No IncreaseLiquidity event in mint receipt {result.tx_hash}; position not recorded",
                details={"tx_hash": result.tx_hash},
            )
            logger.warning(str(notice))
            outcome.notices.append(notice)
            outcome.state = MintState.DONE
            return
        outcome.event = event
        logger.info(
            f"Minted position {event.token_id}: liquidity={event.liquidity}, "
            f"amount0={event.amount0}, amount1={event.amount1}"
        )

        outcome.state = MintState.PERSIST_POSITION
        record = PositionRecord.from_mint(
            event,
            token0=pool.token0,
            token1=pool.token1,
            fee=pool.fee,
            tick_lower=params.tick_lower,
            tick_upper=params.tick_upper,
        )
        self._ledger.append(record)
        outcome.record = record

        outcome.state = MintState.DONE
