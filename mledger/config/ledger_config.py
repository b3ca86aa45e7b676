#!/usr/bin/env python3
"""
Policy configuration for a managed ledger.

Holds every tunable governing ledger sizing and rollover cadence, replication
quorum geometry for data and metadata ledgers, retention, tiered offload and
operational timeouts.
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

import logging
from typing import Any, Dict, List, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretBytes,
    field_validator,
    model_validator,
)
from typing_extensions import Self

from ..core.clock import Clock, SystemClock
from ..core.errors import InvalidConfigurationArgument
from ..offload.ledger_offloader import NULL_LEDGER_OFFLOADER, LedgerOffloader, NullLedgerOffloader
from ..utils.helpers import format_duration_ms
from .types import DigestType, TimeUnit

logger = logging.getLogger(__name__)

FOUR_HOURS_MS = TimeUnit.HOURS.to_millis(4)

MIN_ROLLOVER_ERROR = "Minimum rollover time must be less than or equal to maximum rollover time"
MAX_ROLLOVER_ERROR = "Maximum rollover time must be greater than or equal to minimum rollover time"


class LedgerPolicyConfig(BaseModel):
    """
    Configuration for one managed ledger.

    The object is plain data plus validation. It is built with defaults,
    adjusted through the chained ``set_*`` methods during initialization and
    then handed by reference to the ledger allocator, the rollover scheduler,
    the retention sweep and the offload trigger. It performs no locking: all
    mutation must complete before the object is shared with other threads.

    Only three inputs are rejected: a minimum rollover time above the current
    maximum, a maximum rollover time below the current minimum, and a negative
    mark-delete throttle. Every other setter stores its value verbatim because
    negative and zero values are sentinels interpreted by collaborators.

    Quorum geometry (``ack_quorum_size <= write_quorum_size <= ensemble_size``)
    is not enforced here; the replication layer checks it when a ledger is
    created. ``validate_configuration`` reports violations as warnings.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    create_if_missing: bool = Field(default=True, description="Create the ledger if it does not exist")

    # Cursor state
    max_unacked_ranges_to_persist: int = Field(
        default=10000, description="Max unacked message ranges persisted and recovered by a cursor"
    )
    max_unacked_ranges_to_persist_in_metadata_store: int = Field(
        default=1000, description="Max unacked message ranges stored inline in the metadata store"
    )

    # Rollover
    max_entries_per_ledger: int = Field(default=50000, description="Entries before rollover")
    max_size_per_ledger_mb: int = Field(default=100, description="Ledger size in MB before rollover")
    minimum_rollover_time_ms: int = Field(
        default=0, description="Ledgers are never rolled more often than this"
    )
    maximum_rollover_time_ms: int = Field(
        default=FOUR_HOURS_MS, description="Ledgers are rolled at least this often"
    )
    ledger_rollover_timeout: int = Field(
        default=4 * 3600, description="Legacy rollover timeout in seconds"
    )

    # Data ledger replication
    ensemble_size: int = Field(default=3, description="Bookies in a data ledger ensemble")
    write_quorum_size: int = Field(default=2, description="Replicas written per entry")
    ack_quorum_size: int = Field(default=2, description="Acks required per entry")

    # Metadata ledger replication
    metadata_ensemble_size: int = Field(default=3, description="Bookies in a metadata ledger ensemble")
    metadata_write_quorum_size: int = Field(default=2, description="Metadata replicas written per entry")
    metadata_ack_quorum_size: int = Field(default=2, description="Metadata acks required per entry")
    metadata_max_entries_per_ledger: int = Field(
        default=50000, description="Entries per metadata ledger before rollover"
    )

    throttle_mark_delete: float = Field(
        default=0.0, description="Max mark-delete calls per second, 0 disables"
    )

    # Retention
    retention_time_ms: int = Field(
        default=0, description="Retention time, 0 disables and negative retains forever"
    )
    retention_size_in_mb: int = Field(
        default=0, description="Retention quota, 0 deletes immediately and -1 is unlimited"
    )
    auto_skip_non_recoverable_data: bool = Field(
        default=False, description="Skip unreadable data ledgers instead of stalling cursors"
    )

    # Offload
    offload_ledger_deletion_lag_ms: int = Field(
        default=FOUR_HOURS_MS, description="Grace period before deleting an offloaded ledger"
    )
    offload_auto_trigger_size_threshold_bytes: int = Field(
        default=-1, description="Backlog size that triggers offload, negative disables"
    )

    # Timeouts
    metadata_operations_timeout_seconds: int = Field(
        default=60, description="Ledger create/delete timeout"
    )
    read_entry_timeout_seconds: int = Field(
        default=120, description="Read entry timeout, 0 or negative disables"
    )

    # Identity
    digest_type: DigestType = Field(default=DigestType.CRC32C, description="Entry digest type")
    password: SecretBytes = Field(default=SecretBytes(b""), description="Ledger password")

    # Capabilities
    ledger_offloader: LedgerOffloader = Field(
        default_factory=lambda: NULL_LEDGER_OFFLOADER, exclude=True
    )
    clock: Clock = Field(default_factory=SystemClock, exclude=True)

    @field_validator("digest_type", mode="before")
    @classmethod
    def parse_digest_type(cls, v):
        return DigestType.parse(v)

    @field_validator("throttle_mark_delete")
    @classmethod
    def throttle_must_be_non_negative(cls, v):
        if not v >= 0.0:
            raise ValueError(f"throttle_mark_delete must be >= 0, got {v}")
        return v

    @model_validator(mode="after")
    def rollover_bounds_must_be_ordered(self):
        if self.maximum_rollover_time_ms < self.minimum_rollover_time_ms:
            raise ValueError(MIN_ROLLOVER_ERROR)
        return self

    def _update(self, name: str, value: Any) -> Self:
        setattr(self, name, value)
        logger.debug("Ledger config updated", extra={"setting": name, "value": value})
        return self

    def set_create_if_missing(self, create_if_missing: bool) -> Self:
        return self._update("create_if_missing", create_if_missing)

    def set_max_entries_per_ledger(self, max_entries_per_ledger: int) -> Self:
        return self._update("max_entries_per_ledger", max_entries_per_ledger)

    def set_max_size_per_ledger_mb(self, max_size_per_ledger_mb: int) -> Self:
        return self._update("max_size_per_ledger_mb", max_size_per_ledger_mb)

    def set_minimum_rollover_time(
        self, minimum_rollover_time: int, unit: Union[TimeUnit, str]
    ) -> Self:
        """
        Set the minimum rollover time.

        When greater than zero a ledger is not rolled over more often than this,
        even once it has reached the entry or size limit. Useful to cut the
        number of rollovers on ledgers with high write throughput.

        Raises:
            InvalidConfigurationArgument: if the value exceeds the current
                maximum rollover time. Nothing is modified in that case.
        """
        minimum_ms = TimeUnit.parse(unit).to_millis(minimum_rollover_time)
        if self.maximum_rollover_time_ms < minimum_ms:
            raise InvalidConfigurationArgument(MIN_ROLLOVER_ERROR)
        return self._update("minimum_rollover_time_ms", minimum_ms)

    def set_maximum_rollover_time(
        self, maximum_rollover_time: int, unit: Union[TimeUnit, str]
    ) -> Self:
        """
        Set the maximum rollover time.

        A ledger that has not been rolled over by this age is rolled even if it
        is below the entry and size limits, so that recovery on low-traffic
        ledgers never has to go far back.

        Raises:
            InvalidConfigurationArgument: if the value is below the current
                minimum rollover time. Nothing is modified in that case.
        """
        maximum_ms = TimeUnit.parse(unit).to_millis(maximum_rollover_time)
        if maximum_ms < self.minimum_rollover_time_ms:
            raise InvalidConfigurationArgument(MAX_ROLLOVER_ERROR)
        return self._update("maximum_rollover_time_ms", maximum_ms)

    def set_ensemble_size(self, ensemble_size: int) -> Self:
        return self._update("ensemble_size", ensemble_size)

    def set_write_quorum_size(self, write_quorum_size: int) -> Self:
        return self._update("write_quorum_size", write_quorum_size)

    def set_ack_quorum_size(self, ack_quorum_size: int) -> Self:
        return self._update("ack_quorum_size", ack_quorum_size)

    def set_metadata_ensemble_size(self, metadata_ensemble_size: int) -> Self:
        return self._update("metadata_ensemble_size", metadata_ensemble_size)

    def set_metadata_write_quorum_size(self, metadata_write_quorum_size: int) -> Self:
        return self._update("metadata_write_quorum_size", metadata_write_quorum_size)

    def set_metadata_ack_quorum_size(self, metadata_ack_quorum_size: int) -> Self:
        return self._update("metadata_ack_quorum_size", metadata_ack_quorum_size)

    def set_metadata_max_entries_per_ledger(self, metadata_max_entries_per_ledger: int) -> Self:
        return self._update("metadata_max_entries_per_ledger", metadata_max_entries_per_ledger)

    def set_ledger_rollover_timeout(self, ledger_rollover_timeout: int) -> Self:
        """Set the legacy rollover timeout, in seconds."""
        return self._update("ledger_rollover_timeout", ledger_rollover_timeout)

    def set_throttle_mark_delete(self, throttle_mark_delete: float) -> Self:
        """
        Set the rate limit on mark-delete calls per second.

        0 disables the limiter.

        Raises:
            InvalidConfigurationArgument: if the rate is negative.
        """
        if not throttle_mark_delete >= 0.0:
            raise InvalidConfigurationArgument(
                f"throttle_mark_delete must be >= 0, got {throttle_mark_delete}"
            )
        return self._update("throttle_mark_delete", throttle_mark_delete)

    def set_retention_time(self, retention_time: int, unit: Union[TimeUnit, str]) -> Self:
        """
        Set the retention time.

        Data is kept for at least this long even when no cursor exists or every
        cursor has marked it for deletion. 0 means no time based retention; a
        negative value retains data indefinitely, bounded only by the retention
        size.
        """
        return self._update("retention_time_ms", TimeUnit.parse(unit).to_millis(retention_time))

    def get_retention_time_millis(self) -> int:
        return self.retention_time_ms

    def set_retention_size_in_mb(self, retention_size_in_mb: int) -> Self:
        """
        Set the retention size quota.

        Past this size retained data is deleted. 0 deletes data as soon as it is
        no longer referenced; -1 means no size limit.
        """
        return self._update("retention_size_in_mb", retention_size_in_mb)

    def set_auto_skip_non_recoverable_data(self, skip_non_recoverable_data: bool) -> Self:
        """Skip unreadable data ledgers so that cursors do not get stuck on them."""
        return self._update("auto_skip_non_recoverable_data", skip_non_recoverable_data)

    def set_max_unacked_ranges_to_persist(self, max_unacked_ranges_to_persist: int) -> Self:
        return self._update("max_unacked_ranges_to_persist", max_unacked_ranges_to_persist)

    def set_max_unacked_ranges_to_persist_in_metadata_store(self, max_unacked_ranges: int) -> Self:
        return self._update("max_unacked_ranges_to_persist_in_metadata_store", max_unacked_ranges)

    def set_offload_ledger_deletion_lag(self, lag_time: int, unit: Union[TimeUnit, str]) -> Self:
        """
        Set the grace period between offloading a ledger and deleting it.

        An offloaded ledger is not deleted from the replicated store right away;
        it stays for this long first.
        """
        return self._update(
            "offload_ledger_deletion_lag_ms", TimeUnit.parse(unit).to_millis(lag_time)
        )

    def get_offload_ledger_deletion_lag_millis(self) -> int:
        return self.offload_ledger_deletion_lag_ms

    def set_offload_auto_trigger_size_threshold_bytes(self, threshold: int) -> Self:
        """
        Set the size in bytes at which offload is triggered automatically.

        Checked when a ledger is rolled: if the ledgers up to that point exceed
        the threshold they are offloaded. A negative value disables automatic
        offload and 0 offloads as soon as possible. Nothing is offloaded while
        the null offloader is installed.
        """
        return self._update("offload_auto_trigger_size_threshold_bytes", threshold)

    def set_metadata_operations_timeout_seconds(self, timeout_seconds: int) -> Self:
        """Set the ledger create/delete timeout after which the operation fails."""
        return self._update("metadata_operations_timeout_seconds", timeout_seconds)

    def set_read_entry_timeout_seconds(self, timeout_seconds: int) -> Self:
        """Set the read entry timeout. 0 or negative disables it."""
        return self._update("read_entry_timeout_seconds", timeout_seconds)

    def set_digest_type(self, digest_type: Union[DigestType, str]) -> Self:
        return self._update("digest_type", DigestType.parse(digest_type))

    def set_password(self, password: str) -> Self:
        self.password = SecretBytes(password.encode("utf-8"))
        logger.debug("Ledger config updated", extra={"setting": "password"})
        return self

    def get_password(self) -> bytearray:
        """Return a new mutable copy of the password on every call."""
        return bytearray(self.password.get_secret_value())

    def set_ledger_offloader(self, offloader: LedgerOffloader) -> Self:
        return self._update("ledger_offloader", offloader)

    def set_clock(self, clock: Clock) -> Self:
        return self._update("clock", clock)

    def copy_config(self) -> "LedgerPolicyConfig":
        """Copy all values; the clock and offloader stay shared."""
        return self.model_copy()

    def validate_configuration(self) -> List[str]:
        """Check the configuration and return any warnings."""
        warnings = []

        # Quorum geometry is only checked by the replication layer
        warnings.extend(
            _quorum_warnings("", self.ensemble_size, self.write_quorum_size, self.ack_quorum_size)
        )
        warnings.extend(
            _quorum_warnings(
                "metadata_",
                self.metadata_ensemble_size,
                self.metadata_write_quorum_size,
                self.metadata_ack_quorum_size,
            )
        )

        if self.max_entries_per_ledger <= 0:
            warnings.append("max_entries_per_ledger should be greater than 0")
        if self.max_size_per_ledger_mb <= 0:
            warnings.append("max_size_per_ledger_mb should be greater than 0")

        if self.offload_auto_trigger_size_threshold_bytes >= 0 and isinstance(
            self.ledger_offloader, NullLedgerOffloader
        ):
            warnings.append(
                "offload_auto_trigger_size_threshold_bytes is set but no ledger offloader is configured"
            )

        if self.retention_size_in_mb == 0 and self.retention_time_ms > 0:
            warnings.append(
                "retention_time_ms is set but retention_size_in_mb is 0, data will not be retained"
            )

        if self.read_entry_timeout_seconds <= 0:
            warnings.append("read_entry_timeout_seconds <= 0 disables the read entry timeout")

        return warnings

    def describe(self) -> Dict[str, Any]:
        """Human-readable summary for diagnostics. The password is never included."""
        return {
            "rollover": {
                "max_entries_per_ledger": self.max_entries_per_ledger,
                "max_size_per_ledger_mb": self.max_size_per_ledger_mb,
                "minimum_rollover_time": format_duration_ms(self.minimum_rollover_time_ms),
                "maximum_rollover_time": format_duration_ms(self.maximum_rollover_time_ms),
            },
            "replication": {
                "data": f"{self.ensemble_size}/{self.write_quorum_size}/{self.ack_quorum_size}",
                "metadata": (
                    f"{self.metadata_ensemble_size}/{self.metadata_write_quorum_size}"
                    f"/{self.metadata_ack_quorum_size}"
                ),
                "digest_type": self.digest_type.value,
            },
            "retention": {
                "time": (
                    "infinite"
                    if self.retention_time_ms < 0
                    else format_duration_ms(self.retention_time_ms)
                ),
                "size_mb": "unlimited" if self.retention_size_in_mb < 0 else self.retention_size_in_mb,
            },
            "offload": {
                "deletion_lag": format_duration_ms(self.offload_ledger_deletion_lag_ms),
                "auto_trigger_bytes": (
                    "disabled"
                    if self.offload_auto_trigger_size_threshold_bytes < 0
                    else self.offload_auto_trigger_size_threshold_bytes
                ),
                "offloader": self.ledger_offloader.get_offloader_config(),
            },
            "clock": repr(self.clock),
        }


def _quorum_warnings(prefix: str, ensemble: int, write_quorum: int, ack_quorum: int) -> List[str]:
    warnings = []
    if write_quorum > ensemble:
        warnings.append(f"{prefix}write_quorum_size is larger than {prefix}ensemble_size")
    if ack_quorum > write_quorum:
        warnings.append(f"{prefix}ack_quorum_size is larger than {prefix}write_quorum_size")
    return warnings
