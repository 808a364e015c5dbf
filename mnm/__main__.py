# SPDX-License-Identifier: MIT
"""Allow running mnm as ``python -m mnm``."""

import sys

from mnm.cli import main

sys.exit(main())
