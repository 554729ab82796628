"""
Contract Validation Module

Модуль для валидации JSON контрактов обменного движка.
"""

from .validators import (
    ContractValidator,
    ExchangeStateValidator,
    FeeConfigUpdatedValidator,
    SchemaLoader,
    validate_exchange_state,
    validate_fee_config_updated,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ExchangeStateValidator",
    "FeeConfigUpdatedValidator",
    # Functions
    "validate_exchange_state",
    "validate_fee_config_updated",
]
