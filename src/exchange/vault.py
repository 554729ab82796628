"""CurrencyVault — валюта на балансе движка и выплаты внешним получателям.

Выплата либо полностью успешна (баланс vault уменьшается), либо полностью
неуспешна (TransferFailedError / InsufficientFundsError, баланс не изменён).
Частичных выплат нет.
"""

import logging
from typing import Dict, Protocol, Set

from src.core.domain.errors import (
    InsufficientFundsError,
    PayoutRejected,
    TransferFailedError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# ПОЛУЧАТЕЛИ ВЫПЛАТ
# =============================================================================


class PayoutSink(Protocol):
    """Внешняя сторона перевода. Отказ получателя — PayoutRejected."""

    def receive(self, recipient: str, amount_wei: int) -> None:
        ...


class ExternalAccounts:
    """
    In-memory книга внешних валютных счетов.

    Получатели из rejecting отклоняют любые поступления
    (аналог контракта без receive/fallback).
    """

    def __init__(self, rejecting: Set[str] | None = None):
        self._balances: Dict[str, int] = {}
        self.rejecting: Set[str] = set(rejecting or ())

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def receive(self, recipient: str, amount_wei: int) -> None:
        if recipient in self.rejecting:
            raise PayoutRejected(f"{recipient} does not accept funds")
        self._balances[recipient] = self.balance_of(recipient) + amount_wei


# =============================================================================
# VAULT
# =============================================================================


class CurrencyVault:
    """Валюта, удерживаемая движком (wei)."""

    def __init__(self, sink: PayoutSink, balance_wei: int = 0):
        if balance_wei < 0:
            raise ValueError(f"Vault balance cannot be negative: {balance_wei}")
        self.sink = sink
        self._balance_wei = balance_wei

    @property
    def balance_wei(self) -> int:
        return self._balance_wei

    def deposit(self, amount_wei: int) -> None:
        if amount_wei < 0:
            raise ValueError(f"Deposit cannot be negative: {amount_wei}")
        self._balance_wei += amount_wei

    def require_available(self, amount_wei: int) -> None:
        """
        Raises:
            InsufficientFundsError: vault не покрывает amount_wei
        """
        if amount_wei > self._balance_wei:
            raise InsufficientFundsError(required=amount_wei, available=self._balance_wei)

    def pay(self, recipient: str, amount_wei: int) -> None:
        """
        Перевод amount_wei получателю.

        Raises:
            InsufficientFundsError: недостаточно валюты в vault
            TransferFailedError: получатель отклонил перевод
        """
        self.require_available(amount_wei)

        try:
            self.sink.receive(recipient, amount_wei)
        except PayoutRejected as e:
            logger.warning("payout of %s wei to %s rejected: %s", amount_wei, recipient, e)
            raise TransferFailedError(recipient, amount_wei, str(e)) from e

        self._balance_wei -= amount_wei
