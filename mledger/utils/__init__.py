"""
Utility helpers for mledger.

Copyright (c) 2025 Firefly Software Solutions Inc.
Licensed under the Apache License, Version 2.0 (the "License");
"""

from .helpers import (
    deep_merge_dicts,
    format_duration_ms,
    redact_secrets,
    safe_json_dumps,
    sanitize_for_logging,
)

__all__ = [
    "deep_merge_dicts",
    "format_duration_ms",
    "redact_secrets",
    "safe_json_dumps",
    "sanitize_for_logging",
]
