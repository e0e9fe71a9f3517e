"""Entry point for ``python -m scrollfield``."""

import sys

from .cli import main

sys.exit(main())
