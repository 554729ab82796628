"""
Тесты для FeeConfig и правил UpdateFee

Проверяет:
1. Значения по умолчанию (8 / 10^3, x2)
2. Порядок валидации: fee_factor → fee_decimals → exit_multiplier
3. Границы exit_multiplier в зависимости от fee_decimals
4. Immutability и pydantic-валидацию модели
"""

import pytest
from pydantic import ValidationError

from src.core.domain.errors import InvalidFeeConfigError
from src.core.domain.fee_config import FeeConfig, max_exit_multiplier, validate_fee_update


class TestFeeConfigDefaults:
    """Параметры по умолчанию"""

    def test_defaults(self) -> None:
        config = FeeConfig()
        assert config.fee_factor == 8
        assert config.fee_decimals == 3
        assert config.exit_multiplier == 2

    def test_fee_scale_derived(self) -> None:
        """Хранится показатель, шкала вычисляется"""
        config = FeeConfig()
        assert config.fee_scale == 1000
        assert config.as_tuple() == (8, 3, 2)

    def test_immutable(self) -> None:
        config = FeeConfig()
        with pytest.raises(ValidationError):
            config.fee_factor = 5  # type: ignore[misc]


class TestValidateFeeUpdate:
    """Порядок и тип ошибок UpdateFee"""

    @pytest.mark.parametrize("factor", [0, 10, -1])
    def test_invalid_factor(self, factor: int) -> None:
        with pytest.raises(InvalidFeeConfigError) as exc_info:
            validate_fee_update(factor, 2, 2)
        assert exc_info.value.field == "fee_factor"
        assert exc_info.value.code == "invalid_fee_factor"
        assert exc_info.value.value == factor

    @pytest.mark.parametrize("decimals", [1, 19, 0])
    def test_invalid_decimals(self, decimals: int) -> None:
        with pytest.raises(InvalidFeeConfigError) as exc_info:
            validate_fee_update(1, decimals, 2)
        assert exc_info.value.field == "fee_decimals"
        assert exc_info.value.code == "invalid_fee_decimals"

    def test_zero_multiplier_invalid(self) -> None:
        with pytest.raises(InvalidFeeConfigError) as exc_info:
            validate_fee_update(1, 2, 0)
        assert exc_info.value.field == "exit_multiplier"
        assert exc_info.value.code == "invalid_exit_multiplier"

    def test_multiplier_6_at_decimals_18_invalid(self) -> None:
        with pytest.raises(InvalidFeeConfigError) as exc_info:
            validate_fee_update(1, 18, 6)
        assert exc_info.value.field == "exit_multiplier"

    def test_multiplier_5_at_decimals_18_valid(self) -> None:
        validate_fee_update(1, 18, 5)

    def test_factor_checked_first(self) -> None:
        """При нескольких нарушениях сообщается первое по порядку"""
        with pytest.raises(InvalidFeeConfigError) as exc_info:
            validate_fee_update(0, 1, 0)
        assert exc_info.value.field == "fee_factor"

    def test_decimals_checked_before_multiplier(self) -> None:
        with pytest.raises(InvalidFeeConfigError) as exc_info:
            validate_fee_update(1, 19, 0)
        assert exc_info.value.field == "fee_decimals"

    def test_non_integer_rejected(self) -> None:
        with pytest.raises(InvalidFeeConfigError) as exc_info:
            validate_fee_update(True, 2, 2)
        assert exc_info.value.field == "fee_factor"

        with pytest.raises(InvalidFeeConfigError) as exc_info:
            validate_fee_update(1, 2.0, 2)
        assert exc_info.value.field == "fee_decimals"

        with pytest.raises(InvalidFeeConfigError) as exc_info:
            validate_fee_update(1, 2, "2")
        assert exc_info.value.field == "exit_multiplier"

    def test_error_payload(self) -> None:
        with pytest.raises(InvalidFeeConfigError) as exc_info:
            validate_fee_update(10, 2, 2)
        assert exc_info.value.to_dict() == {
            "code": "invalid_fee_factor",
            "field": "fee_factor",
            "value": 10,
        }


class TestMaxExitMultiplier:
    """Граница exit_multiplier сужается к максимальной шкале"""

    def test_flat_region(self) -> None:
        for decimals in range(2, 14):
            assert max_exit_multiplier(decimals) == 10

    def test_taper(self) -> None:
        assert max_exit_multiplier(14) == 9
        assert max_exit_multiplier(16) == 7
        assert max_exit_multiplier(18) == 5

    def test_non_increasing(self) -> None:
        bounds = [max_exit_multiplier(d) for d in range(2, 19)]
        assert bounds == sorted(bounds, reverse=True)


class TestFeeConfigModel:
    """pydantic-валидация модели"""

    def test_checked_builds_config(self) -> None:
        config = FeeConfig.checked(9, 2, 10)
        assert config.as_tuple() == (9, 2, 10)

    def test_checked_raises_domain_error(self) -> None:
        with pytest.raises(InvalidFeeConfigError):
            FeeConfig.checked(1, 18, 6)

    def test_model_rejects_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            FeeConfig(fee_factor=10)

    def test_model_rejects_multiplier_above_bound(self) -> None:
        with pytest.raises(ValidationError, match="exceeds 5"):
            FeeConfig(fee_factor=1, fee_decimals=18, exit_multiplier=6)

    def test_model_strict_ints(self) -> None:
        with pytest.raises(ValidationError):
            FeeConfig(fee_factor="8")  # type: ignore[arg-type]
