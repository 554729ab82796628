"""
Core domain models, fee arithmetic, and contracts.

This module contains the foundational building blocks that are independent
of the exchange engine state (ledger, vault, events).
"""
