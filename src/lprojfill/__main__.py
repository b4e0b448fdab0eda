"""Allow ``python -m lprojfill``."""

import sys

from lprojfill.cli import main

sys.exit(main())
