"""
Centralized logging manager for mledger.

Sets up JSON or text logging for every mledger component, with optional
rotating file output.
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
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from ..config.logging_config import LoggingConfig
from .json_formatter import MLedgerJSONFormatter

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

MLEDGER_LOGGERS = [
    "mledger.config",
    "mledger.offload",
    "mledger.cli",
]


class MLedgerLoggingManager:
    """
    Central manager for mledger logging.

    Owns the handlers it installs on the root logger so that ``shutdown``
    removes exactly those.
    """

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or LoggingConfig()
        self.log_level = getattr(logging, self.config.level)
        self.handlers = []
        self.configured = False

    def _formatter(self) -> logging.Formatter:
        if self.config.format == "json":
            return MLedgerJSONFormatter()
        return logging.Formatter(TEXT_FORMAT)

    def setup_logging(self) -> None:
        """Install the configured handlers on the root logger."""
        if self.configured:
            return

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(self._formatter())
        console_handler.setLevel(self.log_level)
        self.handlers.append(console_handler)

        if self.config.output_file:
            self.handlers.append(self._file_handler())

        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)
        for handler in self.handlers:
            root_logger.addHandler(handler)

        for logger_name in MLEDGER_LOGGERS:
            logger = logging.getLogger(logger_name)
            logger.setLevel(self.log_level)
            logger.propagate = True

        self.configured = True

        logging.getLogger("mledger.logging").info(
            "mledger logging initialized",
            extra={
                "log_level": self.config.level,
                "format_type": self.config.format,
                "output_file": self.config.output_file,
            },
        )

    def _file_handler(self) -> logging.Handler:
        output_path = Path(self.config.output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=str(output_path),
            maxBytes=self.config.max_file_size_mb * 1024 * 1024,
            backupCount=self.config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(self._formatter())
        file_handler.setLevel(self.log_level)
        return file_handler

    def get_logger(self, name: str) -> logging.Logger:
        if not self.configured:
            self.setup_logging()
        return logging.getLogger(name)

    def shutdown(self) -> None:
        """Remove and close the handlers installed by this manager."""
        root_logger = logging.getLogger()
        for handler in self.handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self.handlers = []
        self.configured = False


_logging_manager: Optional[MLedgerLoggingManager] = None


def get_logging_manager(config: Optional[LoggingConfig] = None) -> MLedgerLoggingManager:
    """Get or create the global logging manager."""
    global _logging_manager

    if _logging_manager is None:
        _logging_manager = MLedgerLoggingManager(config)

    return _logging_manager


def setup_mledger_logging(config: Optional[LoggingConfig] = None) -> None:
    """Setup the mledger logging system."""
    get_logging_manager(config).setup_logging()


def get_mledger_logger(name: str) -> logging.Logger:
    """Get an mledger logger, setting up logging on first use."""
    return get_logging_manager().get_logger(f"mledger.{name}")


def shutdown_mledger_logging() -> None:
    """Shutdown the mledger logging system."""
    global _logging_manager

    if _logging_manager:
        _logging_manager.shutdown()
        _logging_manager = None
