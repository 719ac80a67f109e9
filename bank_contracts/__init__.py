"""
Bank Contracts - capability interface shared by host and plugins.

Depends only on capreg. Plugin packages and the host both import from here;
this package never imports either of them.
"""

from bank_contracts.provider import BANK_TAG, Amount, BankProvider, check_amount

__all__ = [
    "BANK_TAG",
    "Amount",
    "BankProvider",
    "check_amount",
]
