"""
Test suite for the coupon exchange ledger

Contains:
- tests/unit/          : Unit tests for individual modules and the engine
"""
