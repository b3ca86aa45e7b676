"""
Exception types raised by the managed ledger configuration layer.
"""

"""
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


class ManagedLedgerError(Exception):
    """Base exception for all managed ledger errors."""

    pass


class InvalidConfigurationArgument(ManagedLedgerError, ValueError):
    """
    Raised when a setter receives a value that breaks a configuration invariant.

    Only the rollover bound ordering and the non-negative mark-delete throttle
    are enforced. Callers should treat this as fatal misconfiguration.
    """

    pass


class OffloadNotSupportedError(ManagedLedgerError, NotImplementedError):
    """Raised by the null offloader on any offload or delete attempt."""

    pass
