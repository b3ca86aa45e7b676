"""
Core types for mledger: errors and the clock capability.

Copyright (c) 2025 Firefly Software Solutions Inc.
Licensed under the Apache License, Version 2.0 (the "License");
"""

from .clock import Clock, FixedClock, SystemClock
from .errors import InvalidConfigurationArgument, ManagedLedgerError, OffloadNotSupportedError

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "ManagedLedgerError",
    "InvalidConfigurationArgument",
    "OffloadNotSupportedError",
]
