"""Allow ``python -m slidemark``."""

import sys

from slidemark.cli import main

sys.exit(main())
