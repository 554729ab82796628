"""
Тесты для модуля денежных единиц (wei ⇄ ether)

Проверяет:
1. Точность конверсий из десятичной записи
2. Отказ от float и неточных сумм
3. Значения констант исходного развёртывания
"""

from decimal import Decimal

import pytest

from src.core.domain.units import (
    EXCHANGE_RATE_WEI,
    FEE_UPPER_LIMIT_WEI,
    WEI_PER_ETHER,
    format_ether,
    from_wei,
    is_whole_amount,
    to_wei,
)


class TestConstants:
    """Константы курса и потолка комиссии"""

    def test_exchange_rate(self) -> None:
        """Курс 0.000014 ETH за unit"""
        assert EXCHANGE_RATE_WEI == to_wei("0.000014")

    def test_fee_upper_limit(self) -> None:
        """Потолок базовой комиссии 0.01 ETH"""
        assert FEE_UPPER_LIMIT_WEI == to_wei("0.01")

    def test_wei_per_ether(self) -> None:
        assert WEI_PER_ETHER == 1_000_000_000_000_000_000


class TestToWei:
    """Тесты для to_wei"""

    def test_decimal_string(self) -> None:
        assert to_wei("0.00007056") == 70_560_000_000_000
        assert to_wei("1.260004") == 1_260_004_000_000_000_000

    def test_int_and_decimal(self) -> None:
        assert to_wei(2) == 2 * WEI_PER_ETHER
        assert to_wei(Decimal("0.00000112")) == 1_120_000_000_000

    def test_float_rejected(self) -> None:
        """float запрещён: потеря точности"""
        with pytest.raises(TypeError):
            to_wei(0.000014)  # type: ignore[arg-type]

    def test_bool_rejected(self) -> None:
        with pytest.raises(TypeError):
            to_wei(True)  # type: ignore[arg-type]

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            to_wei("-0.1")

    def test_sub_wei_precision_rejected(self) -> None:
        with pytest.raises(ValueError, match="more precise than 1 wei"):
            to_wei("0.0000000000000000001")

    def test_garbage_rejected(self) -> None:
        with pytest.raises(ValueError, match="Not a decimal amount"):
            to_wei("abc")

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            to_wei("Infinity")


class TestFromWei:
    """Тесты для from_wei и format_ether"""

    def test_exact(self) -> None:
        assert from_wei(70_560_000_000_000) == Decimal("0.00007056")
        assert from_wei(10**16) == Decimal("0.01")

    def test_inverse_of_to_wei(self) -> None:
        for amount in ("0.00000056", "0.00000224", "1.260004"):
            assert from_wei(to_wei(amount)) == Decimal(amount)

    def test_non_int_rejected(self) -> None:
        with pytest.raises(TypeError):
            from_wei("1")  # type: ignore[arg-type]

    def test_format_ether(self) -> None:
        assert format_ether(10**16) == "0.01 ETH"
        assert format_ether(2 * WEI_PER_ETHER) == "2 ETH"


class TestIsWholeAmount:
    def test_int(self) -> None:
        assert is_whole_amount(5)
        assert is_whole_amount(0)

    def test_not_int(self) -> None:
        assert not is_whole_amount(True)
        assert not is_whole_amount(5.0)
        assert not is_whole_amount("5")
