"""
Bank capability interface.

Shared by the host application and every bank plugin package, so neither
has to import the other.
"""

import math
from abc import abstractmethod
from typing import Union

from capreg import Capability

# Marker plugin classes carry to be picked up at startup
BANK_TAG = "app.bank"

Amount = Union[int, float]


def check_amount(amount: Amount) -> Amount:
    """
    Return `amount` if it is a finite, positive number.

    Raises:
        TypeError: not a number (bool included)
        ValueError: NaN, infinite, zero or negative
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise TypeError(f"amount must be a number, got {type(amount).__name__}")
    if not math.isfinite(amount):
        raise ValueError(f"amount must be finite, got {amount}")
    if amount <= 0:
        raise ValueError(f"amount must be positive, got {amount}")
    return amount


class BankProvider(Capability):
    """A bank the host can deposit into and link accounts with."""

    @abstractmethod
    def get_name(self) -> str:
        """Registry key, e.g. "acme_bank"."""
        ...

    @abstractmethod
    def deposit(self, amount: Amount) -> str:
        """
        Deposit a positive amount and return a human-readable receipt.

        Raises ValueError for amounts the bank refuses.
        """
        ...

    @abstractmethod
    def oauth_link(self) -> str:
        """URL the user follows to authorize account access."""
        ...
