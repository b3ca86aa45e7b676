#!/usr/bin/env python3
"""
Helper utilities for common functionality.

Provides duration formatting, dictionary merging and log sanitising used by the
configuration loader, the CLI and the logging layer.
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
import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict

SENSITIVE_KEYS = ("password", "secret", "token", "key", "auth")
REDACTED = "[REDACTED]"


class SafeJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles non-serializable objects safely."""

    def default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        elif isinstance(obj, Enum):
            return obj.value
        elif isinstance(obj, (bytes, bytearray)):
            return REDACTED
        return str(obj)


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """
    Serialize an object to a JSON string.

    Non-serializable values are converted to strings.
    """
    return json.dumps(obj, cls=SafeJSONEncoder, **kwargs)


def deep_merge_dicts(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        update: Dictionary to merge into base

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def format_duration_ms(duration_ms: int) -> str:
    """
    Format duration in milliseconds to human-readable string.

    Negative durations are sentinels in the ledger config and are rendered
    as-is rather than formatted.

    Args:
        duration_ms: Duration in milliseconds

    Returns:
        Formatted duration string
    """
    if duration_ms < 1000:
        return f"{duration_ms}ms"
    elif duration_ms < 60000:
        return f"{duration_ms / 1000:.1f}s"
    elif duration_ms < 3600000:
        minutes = duration_ms // 60000
        seconds = (duration_ms % 60000) // 1000
        return f"{minutes}m {seconds}s"
    else:
        hours = duration_ms // 3600000
        minutes = (duration_ms % 3600000) // 60000
        return f"{hours}h {minutes}m"


def redact_secrets(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` with values under sensitive keys replaced."""
    result = {}
    for key, value in data.items():
        if isinstance(value, dict):
            result[key] = redact_secrets(value)
        elif any(pattern in str(key).lower() for pattern in SENSITIVE_KEYS):
            result[key] = REDACTED
        else:
            result[key] = value
    return result


def sanitize_for_logging(data: Any, max_length: int = 1000) -> str:
    """
    Sanitize data for safe logging.

    Args:
        data: Data to sanitize
        max_length: Maximum length of output string

    Returns:
        Sanitized string safe for logging
    """
    if isinstance(data, dict):
        data = redact_secrets(data)

    if isinstance(data, str):
        result = data
        # key=value and "key": "value" forms
        for pattern in SENSITIVE_KEYS:
            result = re.sub(
                rf'("?{pattern}"?\s*[:=]\s*)("[^"]*"|[^\s,}}]+)',
                rf"\1{REDACTED}",
                result,
                flags=re.IGNORECASE,
            )
    else:
        result = safe_json_dumps(data, indent=None)

    if len(result) > max_length:
        result = result[: max_length - 3] + "..."

    return result
