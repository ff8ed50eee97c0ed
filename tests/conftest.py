import os
import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path so the package imports without an install.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from vidshuffle.config import ShufflerConfig


def make_clips(directory: Path, names) -> list:
    """Create small placeholder clip files and return their paths."""
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for name in names:
        path = directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"clip:" + name.encode())
        paths.append(path)
    return paths


def fake_splitter(scene_count: int):
    """Stand-in for the scene splitter: writes one file per scene, returns 0."""
    def _split(source_video, scene_list, destination_dir, config):
        for number in range(1, scene_count + 1):
            name = f"{Path(source_video).stem}-{config.scene_marker}{number:03d}{config.clip_extension}"
            (Path(destination_dir) / name).write_bytes(b"scene %d" % number)
        return 0
    return _split


def fake_ffmpeg(captured: list):
    """Stand-in for run_cmd on a concat command: records the manifest and writes the output."""
    def _run(cmd, *args, **kwargs):
        manifest = Path(cmd[cmd.index("-i") + 1])
        captured.append(manifest.read_text(encoding="utf-8").splitlines())
        Path(cmd[-1]).write_bytes(b"concatenated")
    return _run


@pytest.fixture
def config(tmp_path: Path) -> ShufflerConfig:
    """Settings with scratch space confined to the test's tmp_path."""
    work = tmp_path / "work"
    work.mkdir()
    return ShufflerConfig(temp_root=work)
