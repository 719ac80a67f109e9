"""
Domain Types for the Bank Host.

Response shapes returned to the presentation layer (CLI today).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DepositStatus(str, Enum):
    """Outcome of a deposit request."""

    OK = "ok"
    UNKNOWN_SELECTION = "unknown_selection"
    INVALID_AMOUNT = "invalid_amount"


@dataclass
class DepositResponse:
    """Result of routing a deposit to a bank plugin."""

    status: DepositStatus
    bank: str
    message: str
    available: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == DepositStatus.OK


@dataclass
class OAuthLink:
    """One entry of the "link your bank" list."""

    bank: str
    url: str
    source: Optional[str] = None
