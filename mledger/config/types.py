"""
Value types shared by the ledger configuration: time units and digest types.
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

from enum import Enum
from typing import Union


class DigestType(str, Enum):
    """Integrity-check algorithm applied to each replicated entry."""

    CRC32 = "CRC32"
    MAC = "MAC"
    CRC32C = "CRC32C"
    DUMMY = "DUMMY"

    @classmethod
    def parse(cls, value: Union[str, "DigestType"]) -> "DigestType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Digest type must be one of: {valid}")


# Nanoseconds per unit
_NANOS = {
    "NANOSECONDS": 1,
    "MICROSECONDS": 1_000,
    "MILLISECONDS": 1_000_000,
    "SECONDS": 1_000_000_000,
    "MINUTES": 60_000_000_000,
    "HOURS": 3_600_000_000_000,
    "DAYS": 86_400_000_000_000,
}


class TimeUnit(str, Enum):
    """
    Unit attached to a duration passed to a ledger config setter.

    Conversion to coarser units truncates toward zero, so negative sentinel
    durations keep their sign.
    """

    NANOSECONDS = "NANOSECONDS"
    MICROSECONDS = "MICROSECONDS"
    MILLISECONDS = "MILLISECONDS"
    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"
    DAYS = "DAYS"

    def to_millis(self, duration: int) -> int:
        """Convert ``duration`` expressed in this unit to milliseconds."""
        nanos = _NANOS[self.value]
        per_milli = _NANOS["MILLISECONDS"]
        if nanos >= per_milli:
            return int(duration) * (nanos // per_milli)
        divisor = per_milli // nanos
        quotient = abs(int(duration)) // divisor
        return quotient if duration >= 0 else -quotient

    @classmethod
    def parse(cls, value: Union[str, "TimeUnit"]) -> "TimeUnit":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Time unit must be one of: {valid}")
