"""
Configuration module for mledger.

Copyright (c) 2025 Firefly Software Solutions Inc.
Licensed under the Apache License, Version 2.0 (the "License");
"""

from .ledger_config import LedgerPolicyConfig
from .loader import ConfigurationManager
from .types import DigestType, TimeUnit

__all__ = [
    # Ledger policy
    "LedgerPolicyConfig",
    "DigestType",
    "TimeUnit",
    # Loading and merging
    "ConfigurationManager",
]
