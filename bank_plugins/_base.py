from bank_contracts import Amount, BankProvider, check_amount


class SimpleBank(BankProvider):
    """
    Shared behaviour for banks that only differ by name and OAuth endpoint.

    Not tagged itself; concrete subclasses are.
    """

    name: str = ""
    display_name: str = ""
    authorize_url: str = ""
    client_id: str = ""

    def get_name(self) -> str:
        return self.name

    def deposit(self, amount: Amount) -> str:
        check_amount(amount)
        return f"Deposited {amount} into {self.display_name}"

    def oauth_link(self) -> str:
        return f"{self.authorize_url}?client_id={self.client_id}&response_type=code"
