"""Exchange — обменный движок валюта ⇄ units.

- Ledger: балансы units и supply
- RevenueAccount: накопленная протокольная выручка
- CurrencyVault: валюта движка и выплаты
- ExchangeEngine: Pawn / Redeem / UpdateFee / ClaimRevenue
"""

from .config import ExchangeConfig
from .engine import ClaimReceipt, ExchangeEngine, PawnReceipt, RedeemReceipt
from .events import (
    EventLog,
    FeeConfigUpdated,
    Pawned,
    Redeemed,
    RevenueClaimed,
    event_to_dict,
)
from .ledger import Ledger
from .revenue import RevenueAccount
from .vault import CurrencyVault, ExternalAccounts, PayoutSink

__all__ = [
    "ExchangeEngine",
    "ExchangeConfig",
    "PawnReceipt",
    "RedeemReceipt",
    "ClaimReceipt",
    "Ledger",
    "RevenueAccount",
    "CurrencyVault",
    "ExternalAccounts",
    "PayoutSink",
    "EventLog",
    "FeeConfigUpdated",
    "Pawned",
    "Redeemed",
    "RevenueClaimed",
    "event_to_dict",
]
