"""
ExchangeErrors — Таксономия отказов обменного движка

Каждый отказ — отклонение одной операции:
- Состояние движка НЕ изменяется (validate-then-mutate)
- Движок остаётся работоспособным
- Повторов внутри движка нет, решение о повторе принимает вызывающий

Все исключения несут идентифицирующие данные (payload) и стабильный
машинный code для логов и API-слоя.
"""

from typing import Any, Dict


# =============================================================================
# BASE
# =============================================================================


class ExchangeError(Exception):
    """Базовый класс отказов обменного движка."""

    code: str = "exchange_error"

    def payload(self) -> Dict[str, Any]:
        """Данные, идентифицирующие отказ."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, **self.payload()}


# =============================================================================
# AMOUNT / FUNDS / BALANCE
# =============================================================================


class InvalidAmountError(ExchangeError):
    """Нулевое (или вне домена) количество units для Pawn/Redeem."""

    code = "invalid_exchange_amount"

    def __init__(self, amount: Any):
        self.amount = amount
        super().__init__(f"Invalid exchange amount: {amount!r} ({self.code})")

    def payload(self) -> Dict[str, Any]:
        return {"amount": self.amount}


class InsufficientFundsError(ExchangeError):
    """
    Недостаточно валюты.

    Pawn: оплата меньше required.
    Redeem: vault не покрывает payout.
    """

    code = "insufficient_funds"

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient funds: required {required} wei, "
            f"available {available} wei ({self.code})"
        )

    def payload(self) -> Dict[str, Any]:
        return {"required": self.required, "available": self.available}


class InsufficientBalanceError(ExchangeError):
    """Запрошено больше units, чем есть на счёте."""

    code = "insufficient_balance"

    def __init__(self, account: str, available: int, requested: int):
        self.account = account
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient balance for {account!r}: available {available}, "
            f"requested {requested} ({self.code})"
        )

    def payload(self) -> Dict[str, Any]:
        return {
            "account": self.account,
            "available": self.available,
            "requested": self.requested,
        }


# =============================================================================
# ADMIN
# =============================================================================


class InvalidFeeConfigError(ExchangeError):
    """
    UpdateFee отклонил одно из полей.

    field:
    - fee_factor       → code invalid_fee_factor
    - fee_decimals     → code invalid_fee_decimals
    - exit_multiplier  → code invalid_exit_multiplier
    """

    _CODES = {
        "fee_factor": "invalid_fee_factor",
        "fee_decimals": "invalid_fee_decimals",
        "exit_multiplier": "invalid_exit_multiplier",
    }

    def __init__(self, field: str, value: Any, reason: str = ""):
        if field not in self._CODES:
            raise ValueError(f"Unknown fee config field: {field!r}")
        self.field = field
        self.value = value
        self.reason = reason
        self.code = self._CODES[field]
        message = f"Invalid {field}: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)

    def payload(self) -> Dict[str, Any]:
        return {"field": self.field, "value": self.value}


class NotOwnerError(ExchangeError):
    """Admin-операция вызвана не владельцем."""

    code = "not_owner"

    def __init__(self, caller: str, owner: str):
        self.caller = caller
        self.owner = owner
        super().__init__(f"Caller {caller!r} is not the owner ({self.code})")

    def payload(self) -> Dict[str, Any]:
        return {"caller": self.caller}


# =============================================================================
# TRANSFERS
# =============================================================================


class PayoutRejected(Exception):
    """Получатель отказался принять валюту (поднимается реализацией получателя)."""


class TransferFailedError(ExchangeError):
    """Перевод валюты внешнему получателю не выполнен; состояние не изменено."""

    code = "transfer_failed"

    def __init__(self, recipient: str, amount: int, reason: str = ""):
        self.recipient = recipient
        self.amount = amount
        self.reason = reason
        super().__init__(
            f"Transfer of {amount} wei to {recipient!r} failed: {reason or 'rejected'}"
        )

    def payload(self) -> Dict[str, Any]:
        return {"recipient": self.recipient, "amount": self.amount, "reason": self.reason}
