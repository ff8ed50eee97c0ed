"""Unit tests for ffmpeg command and manifest builders"""

import unittest
from pathlib import Path
from vidshuffle.video.command_builders import (
    build_concat_command, build_concat_manifest, escape_concat_path
)

class TestCommandBuilders(unittest.TestCase):
    def test_build_concat_command(self):
        cmd = build_concat_command(Path("/tmp/concat.txt"), Path("/out/shuffled.mp4"))
        self.assertEqual(cmd[0], "ffmpeg")
        self.assertEqual(cmd[cmd.index("-f") + 1], "concat")
        self.assertEqual(cmd[cmd.index("-safe") + 1], "0")
        self.assertEqual(cmd[cmd.index("-i") + 1], "/tmp/concat.txt")
        self.assertEqual(cmd[cmd.index("-c") + 1], "copy")
        self.assertEqual(cmd[-2:], ["-y", "/out/shuffled.mp4"])

    def test_build_concat_command_custom_ffmpeg(self):
        cmd = build_concat_command(Path("c.txt"), Path("o.mp4"), ffmpeg_path="/opt/ffmpeg/bin/ffmpeg")
        self.assertEqual(cmd[0], "/opt/ffmpeg/bin/ffmpeg")

    def test_escape_concat_path(self):
        self.assertEqual(escape_concat_path(Path("/a/b.mp4")), "'/a/b.mp4'")
        self.assertEqual(escape_concat_path(Path("/a/it's.mp4")), "'/a/it'\\''s.mp4'")

    def test_manifest_preserves_order(self):
        text = build_concat_manifest([Path("/c/2.mp4"), Path("/c/1.mp4")])
        self.assertEqual(text, "file '/c/2.mp4'\nfile '/c/1.mp4'\n")

if __name__ == "__main__":
    unittest.main()
