"""Helper functions for building ffmpeg commands"""

from pathlib import Path
from typing import Iterable, List

def escape_concat_path(path: Path) -> str:
    """Quote a path for an ffmpeg concat manifest ``file`` directive."""
    return "'" + str(path).replace("'", "'\\''") + "'"

def build_concat_manifest(clips: Iterable[Path]) -> str:
    """Render concat-demuxer manifest text, one clip per line, in order."""
    return "".join(f"file {escape_concat_path(Path(clip).absolute())}\n" for clip in clips)

def build_concat_command(
    concat_file: Path,
    output_file: Path,
    ffmpeg_path: str = "ffmpeg"
) -> List[str]:
    """Build ffmpeg command for stream-copy concatenation of a manifest"""
    return [
        ffmpeg_path, "-hide_banner", "-loglevel", "error",
        "-fflags", "+genpts",
        "-f", "concat",
        "-safe", "0",
        "-i", str(concat_file),
        "-c", "copy",
        "-y", str(output_file)
    ]
