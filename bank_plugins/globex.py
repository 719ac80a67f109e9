from capreg import tagged

from bank_contracts import BANK_TAG
from bank_plugins._base import SimpleBank


@tagged(BANK_TAG)
class GlobexBank(SimpleBank):
    name = "globex_bank"
    display_name = "Globex Bank"
    authorize_url = "https://login.globex.example/oauth2/authorize"
    client_id = "globex-client"
