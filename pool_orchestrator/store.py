"""
Deployment record store

Reads the JSON records written by earlier deployment stages and writes the
periphery record this stage owns. A missing record is a configuration error
raised before any remote call is made.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .config import PathsConfig
from .errors import ConfigurationError
from .types import DeploymentRecord, PoolRecord

logger = logging.getLogger(__name__)


def _read_json(path: Path, what: str) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError.missing(f"{what} ({path})")
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError.invalid(str(path), f"not valid JSON: {e}") from e


def _write_json(path: Path, data: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    logger.info(f"Wrote {path}")


class DeploymentStore:
    """
    Access to persisted deployment records

    Usage:
        store = DeploymentStore(config.paths)
        periphery = store.load_periphery()
        pool = store.load_pool()
    """

    def __init__(self, paths: PathsConfig):
        self._paths = paths

    def load_periphery(self, *required: str) -> DeploymentRecord:
        """
        Load the periphery record

        Args:
            required: DeploymentRecord field names that must be present,
                e.g. "position_manager"
        """
        data = _read_json(self._paths.periphery_path, "periphery deployment record")
        record = DeploymentRecord.from_dict(data)
        for name in required:
            if not getattr(record, name):
                key = DeploymentRecord._KEYS[name]
                raise ConfigurationError.missing(f"{key} in {self._paths.periphery_path}")
        return record

    def save_periphery(self, record: DeploymentRecord) -> None:
        _write_json(self._paths.periphery_path, record.to_dict())

    def load_pool(self) -> PoolRecord:
        data = _read_json(self._paths.pool_path, "pool deployment record")
        try:
            return PoolRecord.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError.invalid(str(self._paths.pool_path), f"malformed pool record: {e}") from e

    def load_factory(self) -> str:
        data = _read_json(self._paths.factory_path, "factory deployment record")
        factory = data.get("factory")
        if not factory:
            raise ConfigurationError.missing(f"factory in {self._paths.factory_path}")
        return factory

    def load_weth9(self) -> Optional[str]:
        """WETH9 address, None when no record exists yet"""
        path = self._paths.weth9_path
        if not path.exists():
            return None
        return _read_json(path, "WETH9 record").get("weth9") or None

    def save_weth9(self, address: str) -> None:
        _write_json(self._paths.weth9_path, {"weth9": address})
