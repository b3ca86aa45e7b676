#!/usr/bin/env python3
"""
mledger - Managed Ledger Policy Configuration

Configuration contract for a segmented, replicated, append-only log backing a
durable pub/sub broker. Declares and validates every tunable consumed by the
ledger allocator, the rollover scheduler, the retention sweep and the offload
trigger.

Key Features:
- Ledger sizing and rollover bounds with fail-fast ordering checks
- Replication quorum geometry for data and metadata ledgers
- Time and size based retention with sentinel values
- Tiered offload threshold, deletion lag and pluggable offload driver
- Injectable clock for deterministic testing
- YAML, TOML, JSON and environment variable loading

Usage:
    from mledger import LedgerPolicyConfig, TimeUnit

    config = (
        LedgerPolicyConfig()
        .set_ensemble_size(5)
        .set_write_quorum_size(3)
        .set_ack_quorum_size(2)
        .set_retention_time(7, TimeUnit.DAYS)
        .set_retention_size_in_mb(-1)
    )
    config.set_minimum_rollover_time(10, TimeUnit.MINUTES)

Copyright (c) 2025 Firefly Software Solutions Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at:

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

__version__ = "1.0.0"
__author__ = "Firefly Software Solutions Inc"
__license__ = "Apache 2.0"

# Configuration
from .config import ConfigurationManager, DigestType, LedgerPolicyConfig, TimeUnit
from .config.logging_config import LoggingConfig

# Core types
from .core import (
    Clock,
    FixedClock,
    InvalidConfigurationArgument,
    ManagedLedgerError,
    OffloadNotSupportedError,
    SystemClock,
)

# Offload
from .offload import NULL_LEDGER_OFFLOADER, LedgerOffloader, NullLedgerOffloader

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Configuration
    "LedgerPolicyConfig",
    "DigestType",
    "TimeUnit",
    "ConfigurationManager",
    "LoggingConfig",
    # Errors
    "ManagedLedgerError",
    "InvalidConfigurationArgument",
    "OffloadNotSupportedError",
    # Capabilities
    "Clock",
    "SystemClock",
    "FixedClock",
    "LedgerOffloader",
    "NullLedgerOffloader",
    "NULL_LEDGER_OFFLOADER",
]
