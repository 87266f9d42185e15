"""Allow running as ``python -m muninbox``."""

import sys

from muninbox.cli import main

sys.exit(main())
