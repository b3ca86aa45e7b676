"""
Logging utilities and configuration for mledger.

Provides JSON logging with the mledger prefix and centralized setup.
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

from .json_formatter import MLedgerJSONFormatter, create_json_handler
from .manager import (
    MLedgerLoggingManager,
    get_logging_manager,
    get_mledger_logger,
    setup_mledger_logging,
    shutdown_mledger_logging,
)

__all__ = [
    "MLedgerJSONFormatter",
    "create_json_handler",
    "MLedgerLoggingManager",
    "get_logging_manager",
    "setup_mledger_logging",
    "get_mledger_logger",
    "shutdown_mledger_logging",
]
