"""
Command line entry point

    pool-orchestrator add-liquidity [--strategy auto|narrow|full-range] [--amount X]
    pool-orchestrator swap [--amount X] [--no-reverse]

Exit code 0 when the run completes, including runs with warnings or a
reverted transaction; 1 on a fatal error.
"""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from .config import Config, setup_logging
from .errors import OrchestratorError
from .infra.evm_signer import create_web3, create_evm_signer
from .modules import (
    PoolStateReader,
    BalanceValidator,
    GasPricingPolicy,
    TransactionSubmitter,
    EventExtractor,
    PositionLedger,
    RangeStrategy,
)
from .store import DeploymentStore
from .types import WorkflowOutcome
from .workflows import MintWorkflow, SwapWorkflow

logger = logging.getLogger("pool_orchestrator.cli")


def _decimal_arg(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"'{value}' is not a decimal amount")
    if amount <= 0:
        raise argparse.ArgumentTypeError(f"amount must be positive, got {value}")
    return amount


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pool-orchestrator",
        description="Add liquidity to and swap through a deployed concentrated-liquidity pool",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    mint = subparsers.add_parser("add-liquidity", help="Mint a position and record it")
    mint.add_argument(
        "--strategy", "-s",
        choices=[s.value for s in RangeStrategy],
        default=None,
        help="Tick range strategy (default: MINT_STRATEGY or auto)",
    )
    mint.add_argument(
        "--amount", "-a",
        type=_decimal_arg,
        default=None,
        help="token0 amount for a narrow range (default: MINT_BASE_AMOUNT)",
    )

    swap = subparsers.add_parser("swap", help="Swap token0 -> token1, then back")
    swap.add_argument(
        "--amount", "-a",
        type=_decimal_arg,
        default=None,
        help="Input amount per swap (default: SWAP_AMOUNT_IN)",
    )
    swap.add_argument(
        "--no-reverse",
        action="store_true",
        help="Skip the reverse swap",
    )
    return parser


def _report(outcomes: List[WorkflowOutcome]) -> int:
    exit_code = 0
    for outcome in outcomes:
        for notice in outcome.notices:
            logger.warning(f"{outcome.name}: {notice}")
        if outcome.is_success:
            logger.info(f"{outcome.name}: {outcome.state.value}")
        else:
            logger.error(f"{outcome.name}: failed at {outcome.failed_at.value}: {outcome.error}")
            if outcome.is_fatal:
                exit_code = 1
    return exit_code


def run_add_liquidity(config: Config, strategy: RangeStrategy, amount: Decimal) -> int:
    store = DeploymentStore(config.paths)
    periphery = store.load_periphery("position_manager")
    pool_record = store.load_pool()

    web3 = create_web3(config.rpc.url, config.rpc.chain_id, config.rpc.timeout_seconds)
    signer = create_evm_signer(
        config.signer.private_key,
        config.signer.keystore_path,
        config.signer.keystore_password,
    )
    logger.info(f"Adding liquidity with account {signer.address}")

    reader = PoolStateReader(web3)
    workflow = MintWorkflow(
        web3=web3,
        reader=reader,
        validator=BalanceValidator(reader),
        gas_policy=GasPricingPolicy(config.gas),
        submitter=TransactionSubmitter(
            web3,
            signer,
            confirmation_timeout=config.tx.confirmation_timeout,
            poll_latency=config.tx.poll_latency,
        ),
        extractor=EventExtractor(periphery.position_manager),
        ledger=PositionLedger(config.paths.positions_path),
        deadline_seconds=config.tx.deadline_seconds,
    )
    outcome = workflow.run(
        pool_record,
        periphery.position_manager,
        strategy=strategy,
        base_amount=amount,
        full_range_amount=config.workflow.mint_full_range_amount,
    )
    if outcome.record:
        logger.info(f"Position {outcome.record.token_id} saved to {config.paths.positions_path}")
    return _report([outcome])


def run_swap(config: Config, amount: Decimal, reverse: bool) -> int:
    store = DeploymentStore(config.paths)
    periphery = store.load_periphery("swap_router")
    pool_record = store.load_pool()

    web3 = create_web3(config.rpc.url, config.rpc.chain_id, config.rpc.timeout_seconds)
    signer = create_evm_signer(
        config.signer.private_key,
        config.signer.keystore_path,
        config.signer.keystore_password,
    )
    logger.info(f"Swapping with account {signer.address}")

    workflow = SwapWorkflow(
        web3=web3,
        reader=PoolStateReader(web3),
        gas_policy=GasPricingPolicy(config.gas),
        submitter=TransactionSubmitter(
            web3,
            signer,
            confirmation_timeout=config.tx.confirmation_timeout,
            poll_latency=config.tx.poll_latency,
        ),
        deadline_seconds=config.tx.deadline_seconds,
    )
    outcomes = workflow.run(pool_record, periphery.swap_router, amount, reverse=reverse)
    return _report(outcomes)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = Config.load()
    setup_logging(config.logging)

    try:
        if args.command == "add-liquidity":
            strategy = RangeStrategy.parse(args.strategy or config.workflow.mint_strategy)
            return run_add_liquidity(config, strategy, args.amount or config.workflow.mint_base_amount)
        return run_swap(
            config,
            args.amount or config.workflow.swap_amount_in,
            reverse=config.workflow.swap_reverse and not args.no_reverse,
        )
    except OrchestratorError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
