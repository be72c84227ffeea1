"""
Position Ledger

Append-only JSON file of minted positions: ``{"positions": [...]}``.
Existing entries and any other top-level keys are carried over exactly as
read; only the new record is serialized. The file is replaced atomically so
a crash never leaves a truncated ledger.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..errors import ConfigurationError
from ..types import PositionRecord

logger = logging.getLogger(__name__)


class PositionLedger:
    """Reads and appends through one configured path"""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {"positions": []}

        with open(self._path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError.invalid(str(self._path), f"not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError.invalid(str(self._path), "ledger must be a JSON object")
        data.setdefault("positions", [])
        if not isinstance(data["positions"], list):
            raise ConfigurationError.invalid(str(self._path), "'positions' must be a list")
        return data

    def load(self) -> List[PositionRecord]:
        """All records in insertion order; a missing file is an empty ledger"""
        return [PositionRecord.from_dict(entry) for entry in self._read_document()["positions"]]

    def append(self, record: PositionRecord) -> int:
        """
        Append one record and write the ledger back

        Other top-level keys in the file are written back unchanged.

        Returns:
            Number of records now in the ledger
        """
        document = self._read_document()
        positions = document["positions"]
        positions.append(record.to_dict())
        self._write(document)
        logger.info(f"Saved position {record.token_id} to {self._path} ({len(positions)} total)")
        return len(positions)

    def _write(self, data: Dict[str, Any]) -> None:
        directory = self._path.parent
        tmp_path = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{self._path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except OSError as e:
            self._discard(tmp_path)
            raise ConfigurationError.invalid(str(self._path), f"cannot write ledger: {e}") from e
        except BaseException:
            self._discard(tmp_path)
            raise

    @staticmethod
    def _discard(tmp_path: Optional[str]) -> None:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)
