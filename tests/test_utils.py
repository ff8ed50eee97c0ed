"""Unit tests for dependency probing, command running and logging setup"""

import logging
import subprocess
import unittest
from unittest.mock import patch

from vidshuffle.config import ShufflerConfig
from vidshuffle.exceptions import DependencyError
from vidshuffle.logging import configure_logging
from vidshuffle.utils import (
    FFMPEG, OPENCV, SCENEDETECT,
    describe_missing, format_size, probe_dependencies, require_dependencies, run_cmd
)

class TestProbeDependencies(unittest.TestCase):
    @patch("vidshuffle.utils._module_available", return_value=True)
    @patch("vidshuffle.utils.shutil.which", return_value="/usr/bin/ffmpeg")
    def test_nothing_missing(self, mock_which, mock_module):
        self.assertEqual(probe_dependencies(ShufflerConfig()), set())
        mock_which.assert_called_with("ffmpeg")

    @patch("vidshuffle.utils._module_available", return_value=False)
    @patch("vidshuffle.utils.shutil.which", return_value=None)
    def test_everything_missing(self, mock_which, mock_module):
        self.assertEqual(probe_dependencies(ShufflerConfig()), {FFMPEG, SCENEDETECT, OPENCV})

    @patch("vidshuffle.utils.shutil.which", return_value=None)
    def test_probe_uses_configured_ffmpeg(self, mock_which):
        probe_dependencies(ShufflerConfig(ffmpeg_path="/opt/ffmpeg"))
        mock_which.assert_called_with("/opt/ffmpeg")

    @patch("vidshuffle.utils.probe_dependencies", return_value={SCENEDETECT})
    def test_require_only_checks_needed(self, mock_probe):
        require_dependencies(ShufflerConfig(), {FFMPEG})
        with self.assertRaises(DependencyError) as ctx:
            require_dependencies(ShufflerConfig(), {FFMPEG, SCENEDETECT})
        self.assertEqual(ctx.exception.missing, {SCENEDETECT})
        self.assertIn("pip install scenedetect", str(ctx.exception))

    def test_describe_missing_is_sorted(self):
        message = describe_missing({OPENCV, FFMPEG})
        self.assertLess(message.index("ffmpeg"), message.index("opencv"))

class TestRunCmd(unittest.TestCase):
    @patch("vidshuffle.utils.subprocess.run")
    def test_run_cmd_failure_propagates(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, ["ffmpeg"], stderr="boom")
        with self.assertRaises(subprocess.CalledProcessError):
            run_cmd(["ffmpeg"])

    def test_format_size(self):
        self.assertEqual(format_size(512), "512.0B")
        self.assertEqual(format_size(2048), "2.0KiB")

def test_configure_logging_writes_file(tmp_path):
    log_file = configure_logging("DEBUG", tmp_path / "logs")
    try:
        assert log_file.parent == tmp_path / "logs"
        logging.getLogger("vidshuffle.test").debug("hello file")
        for handler in logging.getLogger("vidshuffle").handlers:
            handler.flush()
        assert "hello file" in log_file.read_text()
    finally:
        configure_logging("INFO")

def test_configure_logging_console_only():
    assert configure_logging("WARNING") is None
    logger = logging.getLogger("vidshuffle")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
