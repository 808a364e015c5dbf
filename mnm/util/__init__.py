# SPDX-License-Identifier: MIT
"""Utility modules."""
