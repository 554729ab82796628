"""
FeeConfig — Модель параметров протокольной комиссии

Immutable Pydantic модель (frozen=True) с тремя настраиваемыми параметрами:
- fee_factor:      числитель ставки, [1, 9]
- fee_decimals:    показатель шкалы, [2, 18]; ставка = fee_factor / 10^fee_decimals
- exit_multiplier: множитель комиссии на выходе (Redeem), [1, max_exit_multiplier(fee_decimals)]

Хранится ВХОДНОЙ показатель шкалы (fee_decimals), а не 10^fee_decimals.
Производная шкала доступна через fee_scale.

ПРАВИЛА ВАЛИДАЦИИ UpdateFee (порядок фиксирован, первая ошибка побеждает):
1. fee_factor ∉ [1, 9]       → InvalidFeeConfigError(field="fee_factor")
2. fee_decimals ∉ [2, 18]    → InvalidFeeConfigError(field="fee_decimals")
3. exit_multiplier ∉ [1, max_exit_multiplier(fee_decimals)]
                              → InvalidFeeConfigError(field="exit_multiplier")
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from .errors import InvalidFeeConfigError
from .units import (
    DEFAULT_EXIT_MULTIPLIER,
    DEFAULT_FEE_DECIMALS,
    DEFAULT_FEE_FACTOR,
    EXIT_MULTIPLIER_MAX,
    EXIT_MULTIPLIER_MIN,
    EXIT_MULTIPLIER_TAPER_FROM,
    FEE_DECIMALS_MAX,
    FEE_DECIMALS_MIN,
    FEE_FACTOR_MAX,
    FEE_FACTOR_MIN,
    is_whole_amount,
)


# =============================================================================
# ГРАНИЦА EXIT MULTIPLIER
# =============================================================================


def max_exit_multiplier(fee_decimals: int) -> int:
    """
    Верхняя граница exit_multiplier для заданной шкалы.

    min(10, 23 - fee_decimals):
    - fee_decimals ≤ 13 → 10
    - далее уменьшается на 1 за шаг, до 5 при fee_decimals = 18

    При fee_decimals = 2, fee_factor = 9, multiplier = 10 комиссия на выходе
    не превышает 90% principal, поэтому payout всегда положителен.

    Args:
        fee_decimals: Показатель шкалы комиссии [2, 18]

    Returns:
        Максимальный допустимый exit_multiplier
    """
    excess = max(0, fee_decimals - EXIT_MULTIPLIER_TAPER_FROM)
    return EXIT_MULTIPLIER_MAX - excess


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_fee_update(fee_factor: Any, fee_decimals: Any, exit_multiplier: Any) -> None:
    """
    Проверка параметров UpdateFee в фиксированном порядке.

    Raises:
        InvalidFeeConfigError: первое нарушенное поле (fee_factor → fee_decimals → exit_multiplier)
    """
    if not is_whole_amount(fee_factor) or not (
        FEE_FACTOR_MIN <= fee_factor <= FEE_FACTOR_MAX
    ):
        raise InvalidFeeConfigError(
            "fee_factor",
            fee_factor,
            f"must be an integer in [{FEE_FACTOR_MIN}, {FEE_FACTOR_MAX}]",
        )

    if not is_whole_amount(fee_decimals) or not (
        FEE_DECIMALS_MIN <= fee_decimals <= FEE_DECIMALS_MAX
    ):
        raise InvalidFeeConfigError(
            "fee_decimals",
            fee_decimals,
            f"must be an integer in [{FEE_DECIMALS_MIN}, {FEE_DECIMALS_MAX}]",
        )

    upper = max_exit_multiplier(fee_decimals)
    if not is_whole_amount(exit_multiplier) or not (
        EXIT_MULTIPLIER_MIN <= exit_multiplier <= upper
    ):
        raise InvalidFeeConfigError(
            "exit_multiplier",
            exit_multiplier,
            f"must be an integer in [{EXIT_MULTIPLIER_MIN}, {upper}] "
            f"for fee_decimals={fee_decimals}",
        )


# =============================================================================
# FEE CONFIG MODEL
# =============================================================================


class FeeConfig(BaseModel):
    """
    Параметры протокольной комиссии.

    Immutable модель (frozen=True). UpdateFee создаёт новый экземпляр.
    """

    fee_factor: int = Field(
        DEFAULT_FEE_FACTOR,
        ge=FEE_FACTOR_MIN,
        le=FEE_FACTOR_MAX,
        strict=True,
        description="Числитель ставки комиссии",
    )
    fee_decimals: int = Field(
        DEFAULT_FEE_DECIMALS,
        ge=FEE_DECIMALS_MIN,
        le=FEE_DECIMALS_MAX,
        strict=True,
        description="Показатель шкалы: ставка = fee_factor / 10^fee_decimals",
    )
    exit_multiplier: int = Field(
        DEFAULT_EXIT_MULTIPLIER,
        ge=EXIT_MULTIPLIER_MIN,
        strict=True,
        description="Множитель комиссии на выходе (после cap)",
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_exit_multiplier_bound(self) -> "FeeConfig":
        """exit_multiplier не превышает max_exit_multiplier(fee_decimals)."""
        upper = max_exit_multiplier(self.fee_decimals)
        if self.exit_multiplier > upper:
            raise ValueError(
                f"exit_multiplier {self.exit_multiplier} exceeds {upper} "
                f"for fee_decimals={self.fee_decimals}"
            )
        return self

    @classmethod
    def checked(cls, fee_factor: Any, fee_decimals: Any, exit_multiplier: Any) -> "FeeConfig":
        """
        Конструктор для UpdateFee: ошибки в виде InvalidFeeConfigError, а не ValidationError.
        """
        validate_fee_update(fee_factor, fee_decimals, exit_multiplier)
        return cls(
            fee_factor=fee_factor,
            fee_decimals=fee_decimals,
            exit_multiplier=exit_multiplier,
        )

    @property
    def fee_scale(self) -> int:
        """Производная шкала 10^fee_decimals."""
        return 10**self.fee_decimals

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.fee_factor, self.fee_decimals, self.exit_multiplier)
