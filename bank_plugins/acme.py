from capreg import tagged

from bank_contracts import BANK_TAG
from bank_plugins._base import SimpleBank


@tagged(BANK_TAG)
class AcmeBank(SimpleBank):
    name = "acme_bank"
    display_name = "AcmeBank"
    authorize_url = "https://auth.acmebank.example/oauth/authorize"
    client_id = "acme-client"
