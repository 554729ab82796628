"""
ProtocolFees — Формулы комиссии Pawn / Redeem

Модуль вычисляет суммы обмена в целых wei:
- principal = unit_amount * exchange_rate_wei
- base fee (вход):  min(floor(principal * fee_factor / 10^fee_decimals), fee_upper_limit)
- exit fee (выход): base_fee * exit_multiplier

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Только целочисленная арифметика, результат воспроизводим бит-в-бит
2. exit_multiplier применяется ПОСЛЕ cap: exit fee может превышать fee_upper_limit
3. compute_base_fee монотонно не убывает по amount и ограничен fee_upper_limit
4. required (Pawn) = principal + base_fee; payout (Redeem) = principal - exit_fee
"""

from typing import NamedTuple

from src.core.domain.fee_config import FeeConfig
from src.core.domain.units import EXCHANGE_RATE_WEI, FEE_UPPER_LIMIT_WEI


# =============================================================================
# ТИПЫ
# =============================================================================


class PawnQuote(NamedTuple):
    """Расчёт Pawn: сколько валюты требуется за unit_amount."""

    unit_amount: int
    principal_wei: int
    fee_wei: int
    required_wei: int  # principal + fee


class RedeemQuote(NamedTuple):
    """Расчёт Redeem: сколько валюты получит владелец units."""

    unit_amount: int
    principal_wei: int
    fee_wei: int
    payout_wei: int  # principal - fee


# =============================================================================
# КОМИССИИ
# =============================================================================


def compute_principal(unit_amount: int, exchange_rate_wei: int = EXCHANGE_RATE_WEI) -> int:
    """principal = unit_amount * exchange_rate_wei."""
    if unit_amount < 0:
        raise ValueError(f"unit_amount cannot be negative: {unit_amount}")
    return unit_amount * exchange_rate_wei


def compute_base_fee(
    amount_wei: int,
    fee_config: FeeConfig,
    fee_upper_limit_wei: int = FEE_UPPER_LIMIT_WEI,
) -> int:
    """
    Базовая комиссия (взимается при Pawn).

    base_fee = min(floor(amount * fee_factor / 10^fee_decimals), fee_upper_limit)

    Args:
        amount_wei: Сумма в wei (principal)
        fee_config: Текущие параметры комиссии
        fee_upper_limit_wei: Потолок базовой комиссии

    Returns:
        Комиссия в wei

    Raises:
        ValueError: Если amount_wei отрицательный

    Examples:
        >>> compute_base_fee(70_000_000_000_000, FeeConfig())
        560000000000
    """
    if amount_wei < 0:
        raise ValueError(f"amount_wei cannot be negative: {amount_wei}")

    raw_fee = amount_wei * fee_config.fee_factor // fee_config.fee_scale
    return min(raw_fee, fee_upper_limit_wei)


def compute_exit_fee(
    amount_wei: int,
    fee_config: FeeConfig,
    fee_upper_limit_wei: int = FEE_UPPER_LIMIT_WEI,
) -> int:
    """
    Комиссия на выходе (взимается при Redeem).

    exit_fee = compute_base_fee(amount) * exit_multiplier
    Multiplier применяется после cap.
    """
    base_fee = compute_base_fee(amount_wei, fee_config, fee_upper_limit_wei)
    return base_fee * fee_config.exit_multiplier


# =============================================================================
# КОТИРОВКИ
# =============================================================================


def quote_pawn(
    unit_amount: int,
    fee_config: FeeConfig,
    exchange_rate_wei: int = EXCHANGE_RATE_WEI,
    fee_upper_limit_wei: int = FEE_UPPER_LIMIT_WEI,
) -> PawnQuote:
    """Полный расчёт Pawn (без проверки unit_amount > 0)."""
    principal = compute_principal(unit_amount, exchange_rate_wei)
    fee = compute_base_fee(principal, fee_config, fee_upper_limit_wei)
    return PawnQuote(
        unit_amount=unit_amount,
        principal_wei=principal,
        fee_wei=fee,
        required_wei=principal + fee,
    )


def quote_redeem(
    unit_amount: int,
    fee_config: FeeConfig,
    exchange_rate_wei: int = EXCHANGE_RATE_WEI,
    fee_upper_limit_wei: int = FEE_UPPER_LIMIT_WEI,
) -> RedeemQuote:
    """
    Полный расчёт Redeem (без проверки unit_amount > 0).

    Raises:
        ValueError: Если exit fee превышает principal (недопустимая конфигурация)
    """
    principal = compute_principal(unit_amount, exchange_rate_wei)
    fee = compute_exit_fee(principal, fee_config, fee_upper_limit_wei)
    if fee > principal:
        raise ValueError(
            f"exit fee {fee} wei exceeds principal {principal} wei "
            f"(config={fee_config.as_tuple()})"
        )
    return RedeemQuote(
        unit_amount=unit_amount,
        principal_wei=principal,
        fee_wei=fee,
        payout_wei=principal - fee,
    )


def round_trip_cost(
    unit_amount: int,
    fee_config: FeeConfig,
    exchange_rate_wei: int = EXCHANGE_RATE_WEI,
    fee_upper_limit_wei: int = FEE_UPPER_LIMIT_WEI,
) -> int:
    """
    Стоимость Pawn + Redeem одного и того же количества: pawn_fee + exit_fee.
    """
    pawn = quote_pawn(unit_amount, fee_config, exchange_rate_wei, fee_upper_limit_wei)
    redeem = quote_redeem(unit_amount, fee_config, exchange_rate_wei, fee_upper_limit_wei)
    return pawn.required_wei - redeem.payout_wei
