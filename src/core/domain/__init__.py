"""
Domain models and value objects.

Contains currency units, fee configuration, error taxonomy and state snapshot.
"""

from src.core.domain.errors import (
    ExchangeError,
    InsufficientBalanceError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidFeeConfigError,
    NotOwnerError,
    PayoutRejected,
    TransferFailedError,
)
from src.core.domain.fee_config import FeeConfig, max_exit_multiplier, validate_fee_update
from src.core.domain.snapshot import ExchangeSnapshot, TokenMetadata
from src.core.domain.units import (
    EXCHANGE_RATE_WEI,
    FEE_UPPER_LIMIT_WEI,
    WEI_PER_ETHER,
    format_ether,
    from_wei,
    to_wei,
)

__all__ = [
    # Units module
    "WEI_PER_ETHER",
    "EXCHANGE_RATE_WEI",
    "FEE_UPPER_LIMIT_WEI",
    "to_wei",
    "from_wei",
    "format_ether",
    # Fee config
    "FeeConfig",
    "max_exit_multiplier",
    "validate_fee_update",
    # Snapshot
    "ExchangeSnapshot",
    "TokenMetadata",
    # Errors
    "ExchangeError",
    "InvalidAmountError",
    "InsufficientFundsError",
    "InsufficientBalanceError",
    "InvalidFeeConfigError",
    "NotOwnerError",
    "PayoutRejected",
    "TransferFailedError",
]
