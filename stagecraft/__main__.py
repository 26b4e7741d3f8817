"""Allow running stagecraft with ``python -m stagecraft``."""

import sys

from stagecraft.entrypoints.cli import main

sys.exit(main())
