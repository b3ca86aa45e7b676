"""
Clock capability used for every duration-based ledger decision.
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

import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):
    """Abstract time source consulted for rollover age and retention age."""

    @abstractmethod
    def millis(self) -> int:
        """Current time in milliseconds since the epoch."""
        pass

    def instant(self) -> datetime:
        """Current time as a timezone-aware UTC datetime."""
        return datetime.fromtimestamp(self.millis() / 1000, tz=timezone.utc)


class SystemClock(Clock):
    """Wall clock in UTC."""

    def millis(self) -> int:
        return int(time.time() * 1000)

    def instant(self) -> datetime:
        return datetime.now(timezone.utc)

    def __eq__(self, other) -> bool:
        return isinstance(other, SystemClock)

    def __hash__(self) -> int:
        return hash(SystemClock)

    def __repr__(self) -> str:
        return "SystemClock(UTC)"


class FixedClock(Clock):
    """
    Manually driven clock for deterministic tests.

    The clock never moves on its own; use ``set_millis`` or ``advance``.
    """

    def __init__(self, millis: int = 0):
        self._millis = millis

    def millis(self) -> int:
        return self._millis

    def set_millis(self, millis: int) -> None:
        self._millis = millis

    def advance(self, delta_ms: int) -> None:
        self._millis += delta_ms

    def __repr__(self) -> str:
        return f"FixedClock(millis={self._millis})"
