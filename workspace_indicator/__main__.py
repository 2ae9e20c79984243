"""Allow running the indicator with `python -m workspace_indicator`."""

import sys
from .main import main

sys.exit(main())
