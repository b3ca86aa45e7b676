"""
Ledger offloader capability for moving closed ledgers to long-term storage.
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
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from uuid import UUID

from ..core.errors import OffloadNotSupportedError

logger = logging.getLogger(__name__)


class LedgerOffloader(ABC):
    """
    Abstract offload driver.

    Implementations copy a closed ledger to long-term storage and later delete
    that offloaded copy. The managed ledger owns the decision of when to call
    either operation; see ``LedgerPolicyConfig`` for the trigger threshold and
    the deletion lag.
    """

    @abstractmethod
    async def offload(
        self, ledger_id: int, uid: UUID, extra_metadata: Optional[Dict[str, str]] = None
    ) -> None:
        """Offload a closed ledger under the given unique id."""
        pass

    @abstractmethod
    async def delete_offloaded(self, ledger_id: int, uid: UUID) -> None:
        """Delete a previously offloaded copy of a ledger."""
        pass

    def get_offloader_config(self) -> Dict[str, Any]:
        """Describe this driver for diagnostics and config dumps."""
        return {"type": type(self).__name__, "enabled": True}


class NullLedgerOffloader(LedgerOffloader):
    """
    Offloader installed by default.

    Refuses every attempt, so auto-triggered offload is inert until a real
    driver is configured.
    """

    async def offload(
        self, ledger_id: int, uid: UUID, extra_metadata: Optional[Dict[str, str]] = None
    ) -> None:
        logger.debug(f"NoOp offload refused: ledger {ledger_id}")
        raise OffloadNotSupportedError("Offload not supported: no ledger offloader configured")

    async def delete_offloaded(self, ledger_id: int, uid: UUID) -> None:
        logger.debug(f"NoOp delete_offloaded refused: ledger {ledger_id}")
        raise OffloadNotSupportedError(
            "Delete offloaded not supported: no ledger offloader configured"
        )

    def get_offloader_config(self) -> Dict[str, Any]:
        return {"type": "noop", "enabled": False}

    def __repr__(self) -> str:
        return "NullLedgerOffloader()"


NULL_LEDGER_OFFLOADER = NullLedgerOffloader()
