"""Allow ``python -m tracksort``."""

import sys

from tracksort.ui.cli import main

sys.exit(main())
