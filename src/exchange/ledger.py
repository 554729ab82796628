"""Ledger — балансы units по счетам и общий supply.

Стандартная fungible-бухгалтерия:
- mint / burn / transfer атомарны: при отказе ничего не меняется
- баланс никогда не становится отрицательным
- total_supply == sum(balances) всегда
- нулевые балансы из mapping удаляются
"""

import logging
from typing import Dict, Iterator, Tuple

from src.core.domain.errors import InsufficientBalanceError, InvalidAmountError
from src.core.domain.snapshot import TokenMetadata
from src.core.domain.units import is_whole_amount

logger = logging.getLogger(__name__)


def _require_account(account: str) -> None:
    if not isinstance(account, str) or not account:
        raise ValueError(f"Account id must be a non-empty string, got {account!r}")


def _require_positive(amount: int) -> None:
    if not is_whole_amount(amount) or amount <= 0:
        raise InvalidAmountError(amount)


class Ledger:
    """Балансы units (целые, неотрицательные)."""

    def __init__(self, token: TokenMetadata, balances: Dict[str, int] | None = None):
        self.token = token
        self._balances: Dict[str, int] = {}
        self._total_supply = 0

        for account, amount in (balances or {}).items():
            self.mint(account, amount)

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def holders(self) -> Iterator[Tuple[str, int]]:
        """Пары (account, balance) в порядке появления счетов."""
        return iter(list(self._balances.items()))

    def require_balance(self, account: str, amount: int) -> None:
        """
        Проверка, что burn/transfer amount возможен, без мутации.

        Raises:
            InvalidAmountError: amount не положительное целое
            InsufficientBalanceError: balance(account) < amount
        """
        _require_account(account)
        _require_positive(amount)

        available = self.balance_of(account)
        if available < amount:
            raise InsufficientBalanceError(account, available, amount)

    def mint(self, account: str, amount: int) -> None:
        _require_account(account)
        _require_positive(amount)

        self._balances[account] = self.balance_of(account) + amount
        self._total_supply += amount
        logger.debug("mint %s -> %s", amount, account)

    def burn(self, account: str, amount: int) -> None:
        self.require_balance(account, amount)

        self._debit(account, amount)
        self._total_supply -= amount
        logger.debug("burn %s <- %s", amount, account)

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        _require_account(recipient)
        self.require_balance(sender, amount)

        self._debit(sender, amount)
        self._balances[recipient] = self.balance_of(recipient) + amount
        logger.debug("transfer %s: %s -> %s", amount, sender, recipient)

    def _debit(self, account: str, amount: int) -> None:
        remaining = self._balances[account] - amount
        if remaining:
            self._balances[account] = remaining
        else:
            del self._balances[account]
