"""
Balance Validator

Checks live balances against desired amounts before anything is approved.
"""

import logging
from typing import Dict, Iterable, Tuple

from ..errors import InsufficientFunds
from .pool_reader import PoolStateReader

logger = logging.getLogger(__name__)


class BalanceValidator:
    """Rejects a workflow when the signer cannot cover the desired amounts"""

    def __init__(self, reader: PoolStateReader):
        self._reader = reader

    def validate(self, owner: str, requirements: Iterable[Tuple[str, int]]) -> Dict[str, int]:
        """
        Query each token balance and compare against the required amount

        Args:
            owner: Account whose balances are checked
            requirements: (token, required_amount) pairs in smallest units

        Returns:
            Observed balances by token address

        Raises:
            InsufficientFunds: On the first token whose balance is below its requirement
        """
        balances: Dict[str, int] = {}
        for token, required in requirements:
            available = self._reader.balance_of(token, owner)
            balances[token] = available
            logger.debug(f"Balance {token}: have {available}, need {required}")
            if available < required:
                raise InsufficientFunds.token_balance(token, required, available)
        return balances
