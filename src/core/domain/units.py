"""
CurrencyUnits — Централизованный модуль денежных единиц

Вся арифметика обмена ведётся в целых wei (1 ether = 10^18 wei).
Десятичные суммы (например, "0.00007056") конвертируются один раз, на входе,
через функции этого модуля. Float внутри расчётов ЗАПРЕЩЁН.

Константы:
- EXCHANGE_RATE_WEI: курс обмена (wei за 1 unit), неизменен для движка
- FEE_UPPER_LIMIT_WEI: потолок базовой комиссии
- границы параметров комиссии (factor, decimals, exit multiplier)
"""

from decimal import Decimal, InvalidOperation
from typing import Final, Union


# =============================================================================
# ДЕНЕЖНЫЕ ЕДИНИЦЫ
# =============================================================================

WEI_DECIMALS: Final[int] = 18
WEI_PER_ETHER: Final[int] = 10**WEI_DECIMALS

# Курс: 0.000014 ether за 1 unit
EXCHANGE_RATE_WEI: Final[int] = 14 * 10**12

# Потолок базовой комиссии: 0.01 ether
FEE_UPPER_LIMIT_WEI: Final[int] = 10**16


# =============================================================================
# ГРАНИЦЫ ПАРАМЕТРОВ КОМИССИИ
# =============================================================================

FEE_FACTOR_MIN: Final[int] = 1
FEE_FACTOR_MAX: Final[int] = 9

FEE_DECIMALS_MIN: Final[int] = 2
FEE_DECIMALS_MAX: Final[int] = 18

EXIT_MULTIPLIER_MIN: Final[int] = 1
EXIT_MULTIPLIER_MAX: Final[int] = 10

# Начиная с этой шкалы верхняя граница exit multiplier уменьшается на 1 за шаг
EXIT_MULTIPLIER_TAPER_FROM: Final[int] = 13

# Параметры по умолчанию: 0.8% на входе, x2 на выходе
DEFAULT_FEE_FACTOR: Final[int] = 8
DEFAULT_FEE_DECIMALS: Final[int] = 3
DEFAULT_EXIT_MULTIPLIER: Final[int] = 2


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def to_wei(amount: Union[str, int, Decimal]) -> int:
    """
    Конверсия: ether → wei.

    float не принимается: двоичное представление теряет точность
    (0.000014 * 10**18 != 14 * 10**12).

    Args:
        amount: Сумма в ether (str, int или Decimal)

    Returns:
        Сумма в wei (int)

    Raises:
        TypeError: Если передан float или неподдерживаемый тип
        ValueError: Если сумма отрицательная, не число, или точнее 1 wei

    Examples:
        >>> to_wei("0.00007056")
        70560000000000
        >>> to_wei(1)
        1000000000000000000
    """
    if isinstance(amount, bool) or not isinstance(amount, (str, int, Decimal)):
        raise TypeError(
            f"amount must be str, int or Decimal, got {type(amount).__name__}"
        )

    try:
        value = Decimal(amount)
    except InvalidOperation:
        raise ValueError(f"Not a decimal amount: {amount!r}")

    if not value.is_finite():
        raise ValueError(f"Amount must be finite: {amount!r}")
    if value < 0:
        raise ValueError(f"Amount cannot be negative: {amount!r}")

    wei = value * WEI_PER_ETHER
    if wei != wei.to_integral_value():
        raise ValueError(f"Amount {amount!r} is more precise than 1 wei")

    return int(wei)


def from_wei(amount_wei: int) -> Decimal:
    """
    Конверсия: wei → ether (Decimal, без потери точности).

    Examples:
        >>> from_wei(70560000000000)
        Decimal('0.00007056')
    """
    if isinstance(amount_wei, bool) or not isinstance(amount_wei, int):
        raise TypeError(f"amount_wei must be int, got {type(amount_wei).__name__}")

    return (Decimal(amount_wei) / WEI_PER_ETHER).normalize()


def format_ether(amount_wei: int) -> str:
    """Строковое представление суммы в ether для логов и сообщений."""
    return f"{from_wei(amount_wei):f} ETH"


def is_whole_amount(value: object) -> bool:
    """True если value — int (bool не считается целым количеством)."""
    return isinstance(value, int) and not isinstance(value, bool)
