"""
Bank Host - composition layer for bank plugins.

Architecture:
    bank_plugins (tagged classes) -> TaggedSource -> CapabilityRegistry -> BankService

Key components:
- wiring.py: startup discovery and registry construction
- service.py: BankService (deposit routing, OAuth link listing)
- cli.py: command line entry point

Usage:
    from bank_host import build_bank_registry, BankService

    service = BankService(build_bank_registry())
    service.deposit("acme_bank", 100)
"""

from bank_host.service import BankService
from bank_host.types import DepositResponse, DepositStatus, OAuthLink
from bank_host.wiring import ENTRY_POINT_GROUP, PLUGIN_PACKAGES, build_bank_registry, default_sources

__all__ = [
    "BankService",
    "DepositResponse",
    "DepositStatus",
    "OAuthLink",
    "ENTRY_POINT_GROUP",
    "PLUGIN_PACKAGES",
    "build_bank_registry",
    "default_sources",
]
