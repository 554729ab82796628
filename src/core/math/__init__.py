"""
Core math modules

Целочисленные формулы протокольной комиссии (wei).
"""

from src.core.math.fees import (
    PawnQuote,
    RedeemQuote,
    compute_base_fee,
    compute_exit_fee,
    compute_principal,
    quote_pawn,
    quote_redeem,
    round_trip_cost,
)

__all__ = [
    # Types
    "PawnQuote",
    "RedeemQuote",
    # Functions
    "compute_principal",
    "compute_base_fee",
    "compute_exit_fee",
    "quote_pawn",
    "quote_redeem",
    "round_trip_cost",
]
