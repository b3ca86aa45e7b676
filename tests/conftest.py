"""
Shared fixtures for mledger tests.
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

from typing import Dict, List, Optional, Tuple
from uuid import UUID

import pytest

from mledger.logging import shutdown_mledger_logging
from mledger.offload.ledger_offloader import LedgerOffloader


class RecordingOffloader(LedgerOffloader):
    """Offloader that records calls instead of moving data."""

    def __init__(self):
        self.offloaded: List[Tuple[int, UUID, Dict[str, str]]] = []
        self.deleted: List[Tuple[int, UUID]] = []

    async def offload(
        self, ledger_id: int, uid: UUID, extra_metadata: Optional[Dict[str, str]] = None
    ) -> None:
        self.offloaded.append((ledger_id, uid, extra_metadata or {}))

    async def delete_offloaded(self, ledger_id: int, uid: UUID) -> None:
        self.deleted.append((ledger_id, uid))


@pytest.fixture
def recording_offloader():
    return RecordingOffloader()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    shutdown_mledger_logging()
