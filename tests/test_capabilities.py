#!/usr/bin/env python3
"""
Unit tests for time units, digest types, the clock and the offload driver.
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
import uuid
from datetime import datetime, timezone

import pytest

from mledger import LedgerPolicyConfig
from mledger.config.types import DigestType, TimeUnit
from mledger.core.clock import FixedClock, SystemClock
from mledger.core.errors import ManagedLedgerError, OffloadNotSupportedError
from mledger.offload.ledger_offloader import NULL_LEDGER_OFFLOADER, NullLedgerOffloader


class TestTimeUnit:
    """Test TimeUnit conversions."""

    def test_coarse_units(self):
        """Test conversion from units coarser than a millisecond."""
        assert TimeUnit.MILLISECONDS.to_millis(42) == 42
        assert TimeUnit.SECONDS.to_millis(3) == 3_000
        assert TimeUnit.MINUTES.to_millis(2) == 120_000
        assert TimeUnit.HOURS.to_millis(4) == 14_400_000
        assert TimeUnit.DAYS.to_millis(1) == 86_400_000

    def test_fine_units_truncate_toward_zero(self):
        """Test conversion from sub-millisecond units."""
        assert TimeUnit.MICROSECONDS.to_millis(1_999) == 1
        assert TimeUnit.MICROSECONDS.to_millis(-1_999) == -1
        assert TimeUnit.NANOSECONDS.to_millis(999_999) == 0
        assert TimeUnit.NANOSECONDS.to_millis(3_000_000) == 3

    def test_negative_sentinels_keep_sign(self):
        """Test that negative durations stay negative."""
        assert TimeUnit.SECONDS.to_millis(-1) == -1_000

    def test_parse(self):
        """Test looking up units by name."""
        assert TimeUnit.parse("seconds") is TimeUnit.SECONDS
        assert TimeUnit.parse(TimeUnit.DAYS) is TimeUnit.DAYS

        with pytest.raises(ValueError, match="Time unit must be one of"):
            TimeUnit.parse("fortnights")


class TestDigestType:
    """Test DigestType parsing."""

    def test_members(self):
        """Test the supported digest types."""
        assert {d.value for d in DigestType} == {"CRC32", "MAC", "CRC32C", "DUMMY"}

    def test_parse(self):
        """Test looking up digest types by name."""
        assert DigestType.parse("crc32c") is DigestType.CRC32C
        assert DigestType.parse(DigestType.MAC) is DigestType.MAC

        with pytest.raises(ValueError):
            DigestType.parse("md5")


class TestClock:
    """Test clock implementations."""

    def test_fixed_clock(self):
        """Test that the fixed clock only moves when told to."""
        clock = FixedClock(1_000)

        assert clock.millis() == 1_000

        clock.advance(500)
        assert clock.millis() == 1_500
        assert clock.instant() == datetime(1970, 1, 1, 0, 0, 1, 500_000, tzinfo=timezone.utc)

        clock.set_millis(0)
        assert clock.millis() == 0

    def test_system_clock(self):
        """Test that the system clock follows wall time in UTC."""
        clock = SystemClock()
        before = int(time.time() * 1000)
        now = clock.millis()
        after = int(time.time() * 1000)

        assert before <= now <= after
        assert clock.instant().tzinfo == timezone.utc

    def test_system_clocks_are_equal(self):
        """Test that independently created system clocks compare equal."""
        assert SystemClock() == SystemClock()
        assert SystemClock() != FixedClock()

    def test_clock_drives_retention_age(self):
        """Test a collaborator computing retention age from an injected clock."""
        clock = FixedClock(0)
        config = LedgerPolicyConfig().set_clock(clock).set_retention_time(1, TimeUnit.HOURS)
        ledger_closed_at = config.clock.millis()

        clock.advance(TimeUnit.MINUTES.to_millis(59))
        assert config.clock.millis() - ledger_closed_at < config.get_retention_time_millis()

        clock.advance(TimeUnit.MINUTES.to_millis(1))
        assert config.clock.millis() - ledger_closed_at >= config.get_retention_time_millis()


class TestLedgerOffloader:
    """Test the offload driver capability."""

    @pytest.mark.asyncio
    async def test_null_offloader_refuses_offload(self):
        """Test that the null offloader refuses to offload."""
        with pytest.raises(OffloadNotSupportedError, match="Offload not supported"):
            await NullLedgerOffloader().offload(1, uuid.uuid4(), {"topic": "t"})

    @pytest.mark.asyncio
    async def test_null_offloader_refuses_delete(self):
        """Test that the null offloader refuses to delete."""
        with pytest.raises(OffloadNotSupportedError):
            await NULL_LEDGER_OFFLOADER.delete_offloaded(1, uuid.uuid4())

    def test_error_hierarchy(self):
        """Test that refusals are catchable as library and builtin errors."""
        assert issubclass(OffloadNotSupportedError, ManagedLedgerError)
        assert issubclass(OffloadNotSupportedError, NotImplementedError)

    def test_null_offloader_config(self):
        """Test the null offloader description."""
        assert NULL_LEDGER_OFFLOADER.get_offloader_config() == {"type": "noop", "enabled": False}

    @pytest.mark.asyncio
    async def test_custom_offloader(self, recording_offloader):
        """Test a custom driver wired through the config."""
        config = LedgerPolicyConfig().set_ledger_offloader(recording_offloader)
        uid = uuid.uuid4()

        await config.ledger_offloader.offload(7, uid, {"topic": "orders"})
        await config.ledger_offloader.delete_offloaded(7, uid)

        assert recording_offloader.offloaded == [(7, uid, {"topic": "orders"})]
        assert recording_offloader.deleted == [(7, uid)]
        assert recording_offloader.get_offloader_config() == {
            "type": "RecordingOffloader",
            "enabled": True,
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
