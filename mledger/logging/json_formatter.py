"""
JSON logging formatter for mledger.

Formats every log entry as a single JSON object carrying the mledger prefix.
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

import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional

from ..utils.helpers import SENSITIVE_KEYS, REDACTED, SafeJSONEncoder

DEFAULT_PREFIX = "mledger::config::log"

# Standard LogRecord attributes, never copied as extra fields
_RECORD_FIELDS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
}


class MLedgerJSONFormatter(logging.Formatter):
    """
    JSON formatter for the mledger logging system.

    Extra fields passed through ``extra=`` are merged into the entry. Values
    under sensitive keys are redacted.
    """

    def __init__(self, prefix: Optional[str] = None, include_extra: bool = True):
        """
        Initialize the JSON formatter.

        Args:
            prefix: Log prefix to use. If None, defaults to mledger::config::log
            include_extra: Whether to include extra fields from log records
        """
        super().__init__()
        self.prefix = prefix or DEFAULT_PREFIX
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "prefix": self.prefix,
        }

        if record.threadName:
            log_data["thread"] = record.threadName
        if record.filename:
            log_data["module"] = record.filename
        if record.funcName and record.funcName != "<module>":
            log_data["function"] = record.funcName
        if record.lineno:
            log_data["line"] = record.lineno

        if self.include_extra:
            log_data.update(self._extract_extra_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, separators=(",", ":"), cls=SafeJSONEncoder)

    def _extract_extra_fields(self, record: logging.LogRecord) -> Dict[str, Any]:
        extra = {}

        for key, value in record.__dict__.items():
            if key in _RECORD_FIELDS or key.startswith("_"):
                continue
            if value is None or value == "":
                continue
            if any(pattern in key.lower() for pattern in SENSITIVE_KEYS):
                value = REDACTED
            extra[key] = value

        return extra


def create_json_handler(level: int = logging.INFO, stream=None) -> logging.Handler:
    """
    Create a logging handler with JSON formatting.

    Args:
        level: Logging level
        stream: Output stream (defaults to sys.stdout)

    Returns:
        Configured logging handler
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(MLedgerJSONFormatter())
    return handler
