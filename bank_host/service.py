from typing import Any, List, Optional

from capreg import CapabilityRegistry, NotFoundError, get_component_logger

from bank_contracts import Amount, BankProvider, check_amount
from bank_host.types import DepositResponse, DepositStatus, OAuthLink


class BankService:
    """
    Request-handling facade over the bank registry.

    Lookup failures and rejected amounts become user-facing responses instead
    of exceptions; the registry is only read here.
    """

    def __init__(self, registry: CapabilityRegistry[BankProvider], logger: Optional[Any] = None):
        self._registry = registry
        self._logger = get_component_logger("BankService", logger)

    def deposit(self, bank: str, amount: Amount) -> DepositResponse:
        try:
            provider = self._registry.lookup(bank)
        except NotFoundError as exc:
            self._logger.info("deposit_unknown_bank", bank=bank)
            return DepositResponse(
                status=DepositStatus.UNKNOWN_SELECTION,
                bank=bank,
                message=f"Unknown bank '{bank}'",
                available=exc.available,
            )

        try:
            check_amount(amount)
        except (TypeError, ValueError) as exc:
            return self._rejected(bank, amount, exc)

        # Banks refuse amounts with ValueError; other errors propagate
        try:
            receipt = provider.deposit(amount)
        except ValueError as exc:
            return self._rejected(bank, amount, exc)

        self._logger.info("deposit_completed", bank=bank, amount=amount)
        return DepositResponse(status=DepositStatus.OK, bank=bank, message=receipt)

    def _rejected(self, bank: str, amount: Any, exc: Exception) -> DepositResponse:
        self._logger.info("deposit_rejected", bank=bank, amount=amount, reason=str(exc))
        return DepositResponse(
            status=DepositStatus.INVALID_AMOUNT,
            bank=bank,
            message=str(exc),
        )

    def oauth_links(self) -> List[OAuthLink]:
        """Links for every registered bank, in registration order."""
        return [
            OAuthLink(bank=entry.name, url=entry.plugin.oauth_link(), source=entry.source)
            for entry in self._registry.list_all().entries()
        ]

    def bank_names(self) -> List[str]:
        return self._registry.names()
