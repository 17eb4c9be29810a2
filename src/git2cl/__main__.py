"""Allow running as ``python -m git2cl``."""

import sys

from git2cl.cli import main

sys.exit(main())
