"""Allow ``python -m party_host``."""

import sys

from .cli import main

sys.exit(main())
