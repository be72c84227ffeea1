"""
Periphery deployment orchestration

Decides what to deploy and in which order, and keeps the deployment records
current. Compiling, linking and broadcasting contracts is left to an
injected ContractDeployer.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol, runtime_checkable

from ..protocols.uniswap.constants import (
    WETH9,
    SWAP_ROUTER,
    NFT_DESCRIPTOR,
    TOKEN_POSITION_DESCRIPTOR,
    POSITION_MANAGER,
    NATIVE_CURRENCY_LABEL,
)
from ..store import DeploymentStore
from ..types import DeploymentRecord

logger = logging.getLogger(__name__)


@runtime_checkable
class ContractDeployer(Protocol):
    """
    Deploys a named contract artifact

    Implementations must provide:
    - deploy(): Deploy and wait for the contract, returning its address
    """

    def deploy(self, name: str, *args, libraries: Optional[Dict[str, str]] = None) -> str:
        """
        Args:
            name: Contract artifact name
            args: Constructor arguments
            libraries: Library name -> address to link before deploying

        Returns:
            Deployed contract address
        """
        ...


def encode_bytes32(label: str) -> bytes:
    """Null-terminated, right-padded bytes32 of a short UTF-8 string (at most 31 bytes)"""
    raw = label.encode("utf-8")
    if len(raw) > 31:
        raise ValueError(f"'{label}' does not fit in bytes32")
    return raw.ljust(32, b"\x00")


def deploy_swap_router(
    deployer: ContractDeployer,
    store: DeploymentStore,
    network_name: str,
) -> DeploymentRecord:
    """
    Deploy SwapRouter against the recorded factory

    WETH9 is reused from its record when present, otherwise deployed and
    recorded. Writes a fresh periphery record.

    Raises:
        ConfigurationError: If the factory record is missing
    """
    factory = store.load_factory()
    logger.info(f"Using factory at {factory}")

    weth9 = store.load_weth9()
    if weth9:
        logger.info(f"Using existing WETH9 at {weth9}")
    else:
        weth9 = deployer.deploy(WETH9)
        logger.info(f"WETH9 deployed to {weth9}")
        store.save_weth9(weth9)

    swap_router = deployer.deploy(SWAP_ROUTER, factory, weth9)
    logger.info(f"SwapRouter deployed to {swap_router}")

    record = DeploymentRecord(
        network_name=network_name,
        factory=factory,
        weth9=weth9,
        swap_router=swap_router,
    )
    store.save_periphery(record)
    return record


def deploy_position_manager(
    deployer: ContractDeployer,
    store: DeploymentStore,
) -> DeploymentRecord:
    """
    Deploy NFTDescriptor, the token position descriptor linked to it, and
    the position manager, then merge their addresses into the periphery record

    Raises:
        ConfigurationError: If the periphery record is missing
    """
    periphery = store.load_periphery()
    logger.info(f"Using factory at {periphery.factory}, WETH9 at {periphery.weth9}")

    nft_descriptor = deployer.deploy(NFT_DESCRIPTOR)
    logger.info(f"NFTDescriptor library deployed to {nft_descriptor}")

    token_descriptor = deployer.deploy(
        TOKEN_POSITION_DESCRIPTOR,
        periphery.weth9,
        encode_bytes32(NATIVE_CURRENCY_LABEL),
        libraries={NFT_DESCRIPTOR: nft_descriptor},
    )
    logger.info(f"NonfungibleTokenPositionDescriptor deployed to {token_descriptor}")

    position_manager = deployer.deploy(
        POSITION_MANAGER,
        periphery.factory,
        periphery.weth9,
        token_descriptor,
    )
    logger.info(f"NonfungiblePositionManager deployed to {position_manager}")

    record = DeploymentRecord(
        factory=periphery.factory,
        weth9=periphery.weth9,
        swap_router=periphery.swap_router,
        nft_descriptor=nft_descriptor,
        token_descriptor=token_descriptor,
        position_manager=position_manager,
        network_name=periphery.network_name,
    )
    store.save_periphery(record)
    return record
