"""
Unit tests for periphery deployment orchestration
"""

import json

import pytest

from pool_orchestrator.config import PathsConfig
from pool_orchestrator.errors import ConfigurationError, ErrorCode
from pool_orchestrator.store import DeploymentStore
from pool_orchestrator.workflows.deploy import (
    ContractDeployer,
    deploy_swap_router,
    deploy_position_manager,
    encode_bytes32,
)


class RecordingDeployer:
    """Returns sequential fake addresses and records every call"""

    def __init__(self):
        self.calls = []

    def deploy(self, name, *args, libraries=None):
        address = "0x" + f"{len(self.calls) + 1:040x}"
        self.calls.append((name, args, libraries, address))
        return address


@pytest.fixture
def paths(tmp_path):
    paths = PathsConfig(
        deployments_dir=str(tmp_path / "periphery"),
        core_deployments_dir=str(tmp_path / "core"),
        periphery_file="deployed-periphery.json",
        positions_file="deployed-positions.json",
        pool_file="deployed-pool.json",
        factory_file="deployed-factory.json",
        weth9_file="weth9-address.json",
    )
    (tmp_path / "core").mkdir()
    return paths


def _write_factory(paths, address="0xfactory"):
    paths.factory_path.write_text(json.dumps({"factory": address}))


def test_recording_deployer_satisfies_protocol():
    assert isinstance(RecordingDeployer(), ContractDeployer)


def test_encode_bytes32():
    assert encode_bytes32("ETH") == b"ETH" + b"\x00" * 29
    with pytest.raises(ValueError):
        encode_bytes32("x" * 32)
    assert encode_bytes32("x" * 31) == b"x" * 31 + b"\x00"


def test_swap_router_requires_factory(paths):
    deployer = RecordingDeployer()

    with pytest.raises(ConfigurationError) as exc:
        deploy_swap_router(deployer, DeploymentStore(paths), "localhost")

    assert exc.value.code == ErrorCode.CONFIG_MISSING
    assert deployer.calls == []


def test_swap_router_deploys_weth9_when_absent(paths):
    _write_factory(paths)
    deployer = RecordingDeployer()

    record = deploy_swap_router(deployer, DeploymentStore(paths), "localhost")

    names = [c[0] for c in deployer.calls]
    assert names == ["WETH9", "SwapRouter"]
    weth9 = deployer.calls[0][3]
    assert deployer.calls[1][1] == ("0xfactory", weth9)
    assert json.loads(paths.weth9_path.read_text()) == {"weth9": weth9}
    assert json.loads(paths.periphery_path.read_text()) == {
        "networkName": "localhost",
        "factory": "0xfactory",
        "weth9": weth9,
        "swapRouter": record.swap_router,
    }


def test_swap_router_reuses_weth9(paths):
    _write_factory(paths)
    paths.weth9_path.write_text(json.dumps({"weth9": "0xweth"}))
    deployer = RecordingDeployer()

    record = deploy_swap_router(deployer, DeploymentStore(paths), "localhost")

    assert [c[0] for c in deployer.calls] == ["SwapRouter"]
    assert deployer.calls[0][1] == ("0xfactory", "0xweth")
    assert record.weth9 == "0xweth"


def test_position_manager_requires_periphery(paths):
    deployer = RecordingDeployer()

    with pytest.raises(ConfigurationError):
        deploy_position_manager(deployer, DeploymentStore(paths))
    assert deployer.calls == []


def test_position_manager_links_descriptor_and_merges_record(paths):
    _write_factory(paths)
    paths.weth9_path.write_text(json.dumps({"weth9": "0xweth"}))
    store = DeploymentStore(paths)
    deploy_swap_router(RecordingDeployer(), store, "localhost")
    swap_router = store.load_periphery().swap_router

    deployer = RecordingDeployer()
    record = deploy_position_manager(deployer, store)

    (nft, nft_args, _, nft_addr), (desc, desc_args, desc_libs, desc_addr), (pm, pm_args, _, pm_addr) = deployer.calls
    assert (nft, desc, pm) == ("NFTDescriptor", "NonfungibleTokenPositionDescriptor", "NonfungiblePositionManager")
    assert nft_args == ()
    assert desc_args == ("0xweth", encode_bytes32("ETH"))
    assert desc_libs == {"NFTDescriptor": nft_addr}
    assert pm_args == ("0xfactory", "0xweth", desc_addr)

    on_disk = json.loads(paths.periphery_path.read_text())
    assert on_disk["swapRouter"] == swap_router
    assert on_disk["networkName"] == "localhost"
    assert on_disk["nftDescriptor"] == nft_addr
    assert on_disk["tokenDescriptor"] == desc_addr
    assert on_disk["positionManager"] == pm_addr
    assert record.position_manager == pm_addr
