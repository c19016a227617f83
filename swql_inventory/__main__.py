"""Allow ``python -m swql_inventory``."""

import sys

from .cli import main

sys.exit(main())
