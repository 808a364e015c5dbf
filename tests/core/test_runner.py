# SPDX-License-Identifier: MIT
"""Tests for mnm.core.runner."""

import subprocess
import sys
from unittest.mock import patch

from mnm.core.runner import LAUNCH_FAILED, run_command


class TestRunCommand:
    def test_returns_exit_code(self):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess([], 2)
            assert run_command("g++", ["-c", "a.cpp"]) == 2
        assert mock_run.call_args[0][0] == ["g++", "-c", "a.cpp"]

    def test_output_not_captured(self):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess([], 0)
            run_command("g++", [])
        kwargs = mock_run.call_args[1]
        assert "capture_output" not in kwargs
        assert "stdout" not in kwargs

    def test_launch_failure(self):
        with patch("subprocess.run", side_effect=FileNotFoundError("g++")):
            assert run_command("g++", []) == LAUNCH_FAILED

    def test_real_process(self, capfd):
        code = run_command(sys.executable, ["-c", "print('hello from child')"])
        assert code == 0
        assert "hello from child" in capfd.readouterr().out

    def test_real_process_failure(self):
        assert run_command(sys.executable, ["-c", "raise SystemExit(4)"]) == 4
