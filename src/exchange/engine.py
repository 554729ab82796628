"""ExchangeEngine — обмен валюта ⇄ units с протокольной комиссией.

Операции:
- pawn(caller, unit_amount, paid_wei):  валюта → units, комиссия base fee
- redeem(caller, unit_amount):          units → валюта, комиссия exit fee
- update_fee(caller, ...):              owner-only, замена FeeConfig
- claim_revenue(caller):                owner-only, вывод выручки

Модель исполнения:
- Однопоточный сериализованный state machine, без блокировок и async
- Каждая операция: validate → compute → mutate → emit
- Любой отказ — ExchangeError, состояние не изменено

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. protocol_revenue ≤ held_balance
2. total_supply == sum(balances), балансы ≥ 0
3. Сброс выручки только после успешного перевода владельцу
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from src.core.contracts import validate_exchange_state
from src.core.domain.errors import (
    ExchangeError,
    InsufficientFundsError,
    InvalidAmountError,
    NotOwnerError,
)
from src.core.domain.fee_config import FeeConfig
from src.core.domain.snapshot import ExchangeSnapshot, TokenMetadata
from src.core.domain.units import (
    EXCHANGE_RATE_WEI,
    FEE_UPPER_LIMIT_WEI,
    is_whole_amount,
)
from src.core.math.fees import PawnQuote, RedeemQuote, quote_pawn, quote_redeem

from .config import DEFAULT_TOKEN_NAME, DEFAULT_TOKEN_SYMBOL, ExchangeConfig
from .events import EventLog, FeeConfigUpdated, Pawned, Redeemed, RevenueClaimed
from .ledger import Ledger
from .revenue import RevenueAccount
from .vault import CurrencyVault, ExternalAccounts, PayoutSink

logger = logging.getLogger(__name__)


# =============================================================================
# RECEIPTS
# =============================================================================


@dataclass(frozen=True)
class PawnReceipt:
    """Результат Pawn."""

    account: str
    unit_amount: int
    paid_wei: int
    principal_wei: int
    fee_wei: int
    surplus_wei: int  # paid - required, удерживается движком


@dataclass(frozen=True)
class RedeemReceipt:
    """Результат Redeem."""

    account: str
    unit_amount: int
    principal_wei: int
    fee_wei: int
    payout_wei: int


@dataclass(frozen=True)
class ClaimReceipt:
    """Результат ClaimRevenue (amount_wei = 0 — no-op)."""

    owner: str
    amount_wei: int


# =============================================================================
# ENGINE
# =============================================================================


class ExchangeEngine:
    """Обменный движок: Ledger + RevenueAccount + CurrencyVault + FeeConfig."""

    def __init__(
        self,
        owner: str,
        exchange_rate_wei: int = EXCHANGE_RATE_WEI,
        fee_upper_limit_wei: int = FEE_UPPER_LIMIT_WEI,
        fee_config: Optional[FeeConfig] = None,
        token: Optional[TokenMetadata] = None,
        payout_sink: Optional[PayoutSink] = None,
    ):
        """
        Args:
            owner: владелец (update_fee, claim_revenue)
            exchange_rate_wei: курс, wei за unit (неизменен)
            fee_upper_limit_wei: потолок базовой комиссии (неизменен)
            fee_config: начальная комиссия (default 8 / 10^3, x2)
            token: метаданные токена (default JumpCrossCoupon / JCC)
            payout_sink: получатель выплат (default ExternalAccounts)
        """
        config = ExchangeConfig(
            owner=owner,
            exchange_rate_wei=exchange_rate_wei,
            fee_upper_limit_wei=fee_upper_limit_wei,
            fee=fee_config or FeeConfig(),
            token_name=token.name if token else DEFAULT_TOKEN_NAME,
            token_symbol=token.symbol if token else DEFAULT_TOKEN_SYMBOL,
        )

        self._owner = config.owner
        self._exchange_rate_wei = config.exchange_rate_wei
        self._fee_upper_limit_wei = config.fee_upper_limit_wei
        self._fee_config = config.fee

        self.ledger = Ledger(config.token)
        self.revenue = RevenueAccount()
        self.vault = CurrencyVault(payout_sink if payout_sink is not None else ExternalAccounts())
        self.events = EventLog()

    @classmethod
    def from_config(
        cls, config: ExchangeConfig, payout_sink: Optional[PayoutSink] = None
    ) -> "ExchangeEngine":
        return cls(
            owner=config.owner,
            exchange_rate_wei=config.exchange_rate_wei,
            fee_upper_limit_wei=config.fee_upper_limit_wei,
            fee_config=config.fee,
            token=config.token,
            payout_sink=payout_sink,
        )

    @classmethod
    def from_snapshot(
        cls, snapshot: ExchangeSnapshot, payout_sink: Optional[PayoutSink] = None
    ) -> "ExchangeEngine":
        """Восстановление движка из снапшота (история событий не восстанавливается)."""
        engine = cls(
            owner=snapshot.owner,
            exchange_rate_wei=snapshot.exchange_rate_wei,
            fee_upper_limit_wei=snapshot.fee_upper_limit_wei,
            fee_config=snapshot.fee,
            token=snapshot.token,
            payout_sink=payout_sink,
        )
        engine.ledger = Ledger(snapshot.token, dict(snapshot.balances))
        engine.revenue = RevenueAccount(snapshot.protocol_revenue_wei)
        engine.vault.deposit(snapshot.held_balance_wei)
        return engine

    @classmethod
    def from_state_dict(
        cls, data: Dict[str, Any], payout_sink: Optional[PayoutSink] = None
    ) -> "ExchangeEngine":
        """
        Восстановление из JSON-данных.

        Raises:
            jsonschema.ValidationError: данные не соответствуют exchange_state.json
            pydantic.ValidationError: нарушены инварианты снапшота
        """
        validate_exchange_state(data)
        return cls.from_snapshot(ExchangeSnapshot.model_validate(data), payout_sink)

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def exchange_rate(self) -> int:
        return self._exchange_rate_wei

    @property
    def fee_upper_limit(self) -> int:
        return self._fee_upper_limit_wei

    @property
    def fee_config(self) -> FeeConfig:
        return self._fee_config

    @property
    def fee_factor(self) -> int:
        return self._fee_config.fee_factor

    @property
    def fee_decimals(self) -> int:
        return self._fee_config.fee_decimals

    @property
    def fee_scale(self) -> int:
        return self._fee_config.fee_scale

    @property
    def exit_multiplier(self) -> int:
        return self._fee_config.exit_multiplier

    @property
    def protocol_revenue(self) -> int:
        return self.revenue.balance_wei

    @property
    def held_balance(self) -> int:
        return self.vault.balance_wei

    @property
    def total_supply(self) -> int:
        return self.ledger.total_supply

    @property
    def name(self) -> str:
        return self.ledger.token.name

    @property
    def symbol(self) -> str:
        return self.ledger.token.symbol

    @property
    def decimals(self) -> int:
        return self.ledger.token.decimals

    def balance_of(self, account: str) -> int:
        return self.ledger.balance_of(account)

    def quote_pawn(self, unit_amount: int) -> PawnQuote:
        self._require_unit_amount(unit_amount)
        return quote_pawn(
            unit_amount, self._fee_config, self._exchange_rate_wei, self._fee_upper_limit_wei
        )

    def quote_redeem(self, unit_amount: int) -> RedeemQuote:
        self._require_unit_amount(unit_amount)
        return quote_redeem(
            unit_amount, self._fee_config, self._exchange_rate_wei, self._fee_upper_limit_wei
        )

    def snapshot(self) -> ExchangeSnapshot:
        return ExchangeSnapshot(
            token=self.ledger.token,
            owner=self._owner,
            exchange_rate_wei=self._exchange_rate_wei,
            fee_upper_limit_wei=self._fee_upper_limit_wei,
            fee=self._fee_config,
            protocol_revenue_wei=self.revenue.balance_wei,
            held_balance_wei=self.vault.balance_wei,
            total_supply=self.ledger.total_supply,
            balances=dict(self.ledger.holders()),
        )

    # -------------------------------------------------------------------------
    # Exchange operations
    # -------------------------------------------------------------------------

    def pawn(self, caller: str, unit_amount: int, paid_wei: int) -> PawnReceipt:
        """
        Pawn: caller платит paid_wei и получает unit_amount units.

        1. unit_amount > 0, иначе InvalidAmountError
        2. required = principal + base_fee
        3. paid_wei ≥ required, иначе InsufficientFundsError(required, paid_wei)
        4. mint, revenue += fee, vault удерживает весь paid_wei (излишек не возвращается)
        """
        with self._operation("pawn", caller):
            self._require_caller(caller)
            quote = self.quote_pawn(unit_amount)
            if not is_whole_amount(paid_wei) or paid_wei < 0:
                raise ValueError(f"paid_wei must be a non-negative integer, got {paid_wei!r}")

            if paid_wei < quote.required_wei:
                raise InsufficientFundsError(required=quote.required_wei, available=paid_wei)

            self.vault.deposit(paid_wei)
            self.ledger.mint(caller, unit_amount)
            self.revenue.accrue(quote.fee_wei)

        receipt = PawnReceipt(
            account=caller,
            unit_amount=unit_amount,
            paid_wei=paid_wei,
            principal_wei=quote.principal_wei,
            fee_wei=quote.fee_wei,
            surplus_wei=paid_wei - quote.required_wei,
        )
        logger.info(
            "pawn %s units by %s, fee %s wei",
            unit_amount,
            caller,
            quote.fee_wei,
            extra={"operation": "pawn", "account": caller, "amount_wei": paid_wei},
        )
        self.events.emit(Pawned(caller, unit_amount, paid_wei, quote.fee_wei))
        return receipt

    def redeem(self, caller: str, unit_amount: int) -> RedeemReceipt:
        """
        Redeem: caller сжигает unit_amount units и получает principal - exit_fee.

        Отказы: InvalidAmountError, InsufficientBalanceError (без изменений),
        InsufficientFundsError (vault не покрывает payout), TransferFailedError.
        """
        with self._operation("redeem", caller):
            self._require_caller(caller)
            self._require_unit_amount(unit_amount)
            self.ledger.require_balance(caller, unit_amount)

            quote = self.quote_redeem(unit_amount)
            self.vault.pay(caller, quote.payout_wei)

            self.ledger.burn(caller, unit_amount)
            self.revenue.accrue(quote.fee_wei)

        logger.info(
            "redeem %s units by %s, payout %s wei, fee %s wei",
            unit_amount,
            caller,
            quote.payout_wei,
            quote.fee_wei,
            extra={"operation": "redeem", "account": caller, "amount_wei": quote.payout_wei},
        )
        self.events.emit(Redeemed(caller, unit_amount, quote.payout_wei, quote.fee_wei))
        return RedeemReceipt(
            account=caller,
            unit_amount=unit_amount,
            principal_wei=quote.principal_wei,
            fee_wei=quote.fee_wei,
            payout_wei=quote.payout_wei,
        )

    # -------------------------------------------------------------------------
    # Admin operations
    # -------------------------------------------------------------------------

    def update_fee(
        self, caller: str, fee_factor: int, fee_decimals: int, exit_multiplier: int
    ) -> FeeConfig:
        """
        Замена FeeConfig (owner-only).

        Порядок проверок: owner → fee_factor → fee_decimals → exit_multiplier.
        """
        with self._operation("update_fee", caller):
            self._require_owner(caller)
            new_config = FeeConfig.checked(fee_factor, fee_decimals, exit_multiplier)
            self._fee_config = new_config

        logger.info(
            "fee config updated to factor=%s decimals=%s exit_multiplier=%s",
            fee_factor,
            fee_decimals,
            exit_multiplier,
            extra={"operation": "update_fee", "account": caller},
        )
        self.events.emit(FeeConfigUpdated(fee_factor, fee_decimals, exit_multiplier))
        return new_config

    def claim_revenue(self, caller: str) -> ClaimReceipt:
        """
        Вывод всей выручки владельцу (owner-only).

        Нулевая выручка — успешный no-op (перевод не выполняется).
        Выручка обнуляется только после успешного перевода.
        """
        with self._operation("claim_revenue", caller):
            self._require_owner(caller)

            amount = self.revenue.balance_wei
            if amount == 0:
                return ClaimReceipt(owner=caller, amount_wei=0)

            self.vault.pay(caller, amount)
            self.revenue.reset()

        logger.info(
            "revenue claimed: %s wei",
            amount,
            extra={"operation": "claim_revenue", "account": caller, "amount_wei": amount},
        )
        self.events.emit(RevenueClaimed(caller, amount))
        return ClaimReceipt(owner=caller, amount_wei=amount)

    # -------------------------------------------------------------------------
    # Guards
    # -------------------------------------------------------------------------

    @contextmanager
    def _operation(self, operation: str, caller: str) -> Iterator[None]:
        """Логирование отклонённых операций; исключение пробрасывается дальше."""
        try:
            yield
        except ExchangeError as e:
            logger.warning(
                "%s rejected for %s: %s",
                operation,
                caller,
                e,
                extra={"operation": operation, "account": caller, "error_code": e.code},
            )
            raise

    def _require_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise NotOwnerError(caller, self._owner)

    @staticmethod
    def _require_caller(caller: str) -> None:
        if not isinstance(caller, str) or not caller:
            raise ValueError(f"Caller must be a non-empty account id, got {caller!r}")

    @staticmethod
    def _require_unit_amount(unit_amount: int) -> None:
        if not is_whole_amount(unit_amount) or unit_amount <= 0:
            raise InvalidAmountError(unit_amount)
