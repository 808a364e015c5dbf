# SPDX-License-Identifier: MIT
"""Platform detection and configure-phase checks."""
