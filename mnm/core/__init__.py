# SPDX-License-Identifier: MIT
"""Core build engine: flags, staleness checks, compile and link stages."""
