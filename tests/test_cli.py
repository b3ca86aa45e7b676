#!/usr/bin/env python3
"""
Tests for the mledger command-line interface.
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
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from mledger.cli import main
from mledger.config import ConfigurationManager


class TestInitConfig:
    """Test the init-config command."""

    def test_writes_defaults(self, capsys):
        """Test writing a default configuration file."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "ledger.toml"

            assert main(["init-config", str(path)]) == 0
            assert ConfigurationManager.from_file(path).max_entries_per_ledger == 50000

        assert "Default ledger configuration written" in capsys.readouterr().out


class TestValidate:
    """Test the validate command."""

    def test_valid(self, capsys):
        """Test validating a clean configuration."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "ledger.yml"
            path.write_text("ensemble_size: 3\n")

            assert main(["validate", str(path)]) == 0

        assert "is valid" in capsys.readouterr().out

    def test_warnings(self, capsys):
        """Test validating a configuration with inconsistent quorums."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "ledger.yml"
            path.write_text("ensemble_size: 1\n")

            assert main(["validate", str(path)]) == 0

        out = capsys.readouterr().out
        assert "warning" in out
        assert "write_quorum_size is larger than ensemble_size" in out

    def test_invalid(self, capsys):
        """Test validating inverted rollover bounds."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "ledger.json"
            path.write_text(
                json.dumps({"minimum_rollover_time_ms": 10, "maximum_rollover_time_ms": 5})
            )

            assert main(["validate", str(path)]) == 1

        assert "Invalid configuration" in capsys.readouterr().out

    def test_missing(self, capsys):
        """Test validating a file that does not exist."""
        assert main(["validate", "/nonexistent/ledger.yml"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_missing_with_env(self, capsys):
        """Test that --env does not turn a missing file into defaults."""
        with patch.dict(os.environ, {"MLEDGER_ENSEMBLE_SIZE": "5"}):
            assert main(["validate", "/nonexistent/ledger.yml", "--env"]) == 1

        out = capsys.readouterr().out
        assert "not found" in out
        assert "is valid" not in out

    def test_env_rollover_minimum_against_file_maximum(self, capsys):
        """Test that --env bounds are validated against the file's bounds."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "ledger.yml"
            path.write_text("maximum_rollover_time_ms: 36000000\n")

            env_vars = {"MLEDGER_MINIMUM_ROLLOVER_TIME_MS": "18000000"}
            with patch.dict(os.environ, env_vars, clear=True):
                assert main(["validate", str(path), "--env"]) == 0

        assert "is valid" in capsys.readouterr().out

    def test_env_overrides(self, capsys):
        """Test that --env applies environment overrides before validating."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "ledger.yml"
            path.write_text("ensemble_size: 3\n")

            with patch.dict(os.environ, {"MLEDGER_ACK_QUORUM_SIZE": "3"}):
                assert main(["validate", str(path), "--env"]) == 0

        assert "ack_quorum_size is larger than write_quorum_size" in capsys.readouterr().out


class TestShow:
    """Test the show command."""

    def test_show(self, capsys):
        """Test printing the effective configuration."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "ledger.yml"
            path.write_text("retention_time_ms: -1\npassword: hunter2\n")

            assert main(["show", str(path), "--no-env"]) == 0

        out = capsys.readouterr().out
        output = json.loads(out)
        assert output["settings"]["retention_time_ms"] == -1
        assert output["summary"]["retention"]["time"] == "infinite"
        assert output["summary"]["offload"]["offloader"] == {"type": "noop", "enabled": False}
        assert "password" not in output["settings"]
        assert "hunter2" not in out

    def test_show_defaults(self, capsys):
        """Test printing the defaults without a file."""
        with patch.dict(os.environ, {}, clear=True):
            assert main(["show"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["summary"]["replication"]["data"] == "3/2/2"
        assert output["warnings"] == []


class TestNoCommand:
    """Test running without a command."""

    def test_prints_help(self, capsys):
        """Test that help is printed and a failure code returned."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
