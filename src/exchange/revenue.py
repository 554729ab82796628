"""RevenueAccount — накопитель протокольной выручки (wei)."""


class RevenueAccount:
    """
    Единственный неотрицательный счётчик валюты, причитающейся владельцу.

    - accrue(fee): увеличивается комиссией каждого Pawn/Redeem
    - reset(): обнуляется только после успешного ClaimRevenue
    """

    def __init__(self, balance_wei: int = 0):
        if balance_wei < 0:
            raise ValueError(f"Revenue cannot be negative: {balance_wei}")
        self._balance_wei = balance_wei
        self._total_accrued_wei = balance_wei

    @property
    def balance_wei(self) -> int:
        return self._balance_wei

    @property
    def total_accrued_wei(self) -> int:
        """Вся выручка за время жизни экземпляра (не уменьшается при claim)."""
        return self._total_accrued_wei

    def accrue(self, fee_wei: int) -> None:
        if fee_wei < 0:
            raise ValueError(f"Fee cannot be negative: {fee_wei}")
        self._balance_wei += fee_wei
        self._total_accrued_wei += fee_wei

    def reset(self) -> int:
        """Обнуление; возвращает сумму до обнуления."""
        claimed = self._balance_wei
        self._balance_wei = 0
        return claimed
