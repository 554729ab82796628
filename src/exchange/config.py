"""ExchangeConfig — параметры создания обменного движка.

Значения по умолчанию воспроизводят исходное развёртывание:
- курс 0.000014 ETH за unit
- потолок базовой комиссии 0.01 ETH
- комиссия 8 / 10^3 = 0.8%, на выходе x2
- токен JumpCrossCoupon (JCC), decimals = 0
"""

from pydantic import BaseModel, Field

from src.core.domain.fee_config import FeeConfig
from src.core.domain.snapshot import TokenMetadata
from src.core.domain.units import EXCHANGE_RATE_WEI, FEE_UPPER_LIMIT_WEI

DEFAULT_TOKEN_NAME = "JumpCrossCoupon"
DEFAULT_TOKEN_SYMBOL = "JCC"


class ExchangeConfig(BaseModel):
    """Immutable конфигурация движка (ошибки — pydantic.ValidationError)."""

    owner: str = Field(..., min_length=1, description="Владелец (admin-операции)")
    exchange_rate_wei: int = Field(
        EXCHANGE_RATE_WEI, gt=0, strict=True, description="Курс (wei за unit)"
    )
    fee_upper_limit_wei: int = Field(
        FEE_UPPER_LIMIT_WEI, gt=0, strict=True, description="Потолок базовой комиссии"
    )
    fee: FeeConfig = Field(default_factory=FeeConfig, description="Начальная комиссия")
    token_name: str = Field(DEFAULT_TOKEN_NAME, min_length=1)
    token_symbol: str = Field(DEFAULT_TOKEN_SYMBOL, min_length=1)

    model_config = {"frozen": True}

    @property
    def token(self) -> TokenMetadata:
        return TokenMetadata(name=self.token_name, symbol=self.token_symbol)
