"""Allow ``python -m airportgen``."""

import sys

from airportgen.main import main

sys.exit(main())
