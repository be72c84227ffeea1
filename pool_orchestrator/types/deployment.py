"""
Deployment record types written by earlier stages
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class DeploymentRecord:
    """
    Periphery deployment record

    Stored as ``{networkName, factory, weth9, swapRouter, nftDescriptor,
    tokenDescriptor, positionManager}``. The position manager fields are
    absent until that stage has run.
    """
    factory: str
    weth9: str
    swap_router: Optional[str] = None
    nft_descriptor: Optional[str] = None
    token_descriptor: Optional[str] = None
    position_manager: Optional[str] = None
    network_name: Optional[str] = None

    _KEYS = {
        "factory": "factory",
        "weth9": "weth9",
        "swap_router": "swapRouter",
        "nft_descriptor": "nftDescriptor",
        "token_descriptor": "tokenDescriptor",
        "position_manager": "positionManager",
        "network_name": "networkName",
    }

    def to_dict(self) -> Dict[str, str]:
        return {
            self._KEYS[name]: value
            for name, value in asdict(self).items()
            if value is not None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeploymentRecord":
        return cls(**{
            name: data.get(key)
            for name, key in cls._KEYS.items()
        })


@dataclass(frozen=True)
class PoolRecord:
    """
    Pool record written by the pool-creation stage

    Stored as ``{tokens: {token0: {address}, token1: {address}}, pool: {address, fee}}``.
    The token order here is the configured one and may be stale.
    """
    address: str
    fee: int
    token0: str
    token1: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PoolRecord":
        return cls(
            address=data["pool"]["address"],
            fee=int(data["pool"]["fee"]),
            token0=data["tokens"]["token0"]["address"],
            token1=data["tokens"]["token1"]["address"],
        )
