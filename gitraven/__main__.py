"""Allow running as: python -m gitraven"""

import sys

from gitraven.cli.main import main

sys.exit(main())
