"""
Offload driver capability for mledger.

Copyright (c) 2025 Firefly Software Solutions Inc.
Licensed under the Apache License, Version 2.0 (the "License");
"""

from .ledger_offloader import NULL_LEDGER_OFFLOADER, LedgerOffloader, NullLedgerOffloader

__all__ = [
    "LedgerOffloader",
    "NullLedgerOffloader",
    "NULL_LEDGER_OFFLOADER",
]
