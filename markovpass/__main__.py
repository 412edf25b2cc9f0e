"""Allow running as: python -m markovpass"""

import sys

from markovpass.cli import main

sys.exit(main())
