import sys

from bank_host.cli import main

sys.exit(main())
