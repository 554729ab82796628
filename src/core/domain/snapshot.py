"""
ExchangeSnapshot — Модель сохраняемого состояния обменного движка

Immutable Pydantic модель, представляющая снапшот состояния движка.
Полная совместимость с JSON Schema (contracts/schema/exchange_state.json).

Инварианты снапшота:
- total_supply == sum(balances)
- все балансы > 0 (нулевые счета не хранятся)
- protocol_revenue_wei <= held_balance_wei
"""

from pydantic import BaseModel, Field, model_validator

from .fee_config import FeeConfig


# =============================================================================
# TOKEN METADATA
# =============================================================================


class TokenMetadata(BaseModel):
    """Метаданные fungible unit (units всегда целые, decimals = 0)."""

    name: str = Field(..., min_length=1, description="Название токена")
    symbol: str = Field(..., min_length=1, description="Тикер токена")
    decimals: int = Field(0, ge=0, le=0, description="Units неделимы")

    model_config = {"frozen": True}


# =============================================================================
# SNAPSHOT MODEL
# =============================================================================


class ExchangeSnapshot(BaseModel):
    """
    Снапшот состояния обменного движка.

    Содержит:
    - Метаданные (schema_version, token)
    - Неизменяемые параметры (owner, exchange_rate_wei, fee_upper_limit_wei)
    - Текущую конфигурацию комиссии (fee)
    - Бухгалтерию (revenue, held balance, supply, balances)
    """

    schema_version: str = Field(
        "1", pattern="^1$", description="Версия схемы для tracking совместимости"
    )
    token: TokenMetadata = Field(..., description="Метаданные токена")

    owner: str = Field(..., min_length=1, description="Владелец движка")
    exchange_rate_wei: int = Field(..., gt=0, description="Курс (wei за unit)")
    fee_upper_limit_wei: int = Field(..., gt=0, description="Потолок базовой комиссии")

    fee: FeeConfig = Field(..., description="Параметры комиссии")

    protocol_revenue_wei: int = Field(..., ge=0, description="Накопленная выручка")
    held_balance_wei: int = Field(..., ge=0, description="Валюта на балансе движка")
    total_supply: int = Field(..., ge=0, description="Всего units в обращении")
    balances: dict[str, int] = Field(
        default_factory=dict, description="Балансы units по счетам"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_accounting(self) -> "ExchangeSnapshot":
        """Проверка бухгалтерских инвариантов снапшота."""
        for account, balance in self.balances.items():
            if not account:
                raise ValueError("Account id cannot be empty")
            if balance <= 0:
                raise ValueError(f"Balance of {account!r} must be positive, got {balance}")

        if sum(self.balances.values()) != self.total_supply:
            raise ValueError(
                f"total_supply {self.total_supply} != sum(balances) "
                f"{sum(self.balances.values())}"
            )

        if self.protocol_revenue_wei > self.held_balance_wei:
            raise ValueError(
                f"protocol_revenue_wei {self.protocol_revenue_wei} exceeds "
                f"held_balance_wei {self.held_balance_wei}"
            )
        return self
