"""Clip enumeration, shuffle planning and stream-copy concatenation."""

import logging
import os
import random
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional

from ..config import ShufflerConfig
from ..exceptions import ConcatenationError, InputNotFoundError, NoClipsFoundError
from ..formatting import print_check, print_success
from .command_builders import build_concat_command, build_concat_manifest

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Clip:
    """A video file on disk; position is set once a shuffle plan places it."""
    path: Path
    position: Optional[int] = None

@dataclass(frozen=True)
class ShufflePlan:
    """
    A permutation of a clip set.

    Attributes:
        clips: The clip set in discovery order
        order: order[i] is the index into clips of the clip played i-th
    """
    clips: List[Clip]
    order: List[int]

    def __post_init__(self):
        if sorted(self.order) != list(range(len(self.clips))):
            raise ValueError("order must be a permutation of the clip indices")

    def ordered_clips(self) -> List[Clip]:
        return [replace(self.clips[index], position=pos) for pos, index in enumerate(self.order)]

    def __len__(self) -> int:
        return len(self.clips)

def find_clips(directory: Path, extension: str, exclude: Optional[Path] = None) -> List[Clip]:
    """
    Recursively collect clip files under directory.

    Matching is on file suffix, case-insensitively. The result is sorted
    by path so the unshuffled order does not depend on the filesystem.
    """
    extension = extension.lower()
    excluded = exclude.resolve() if exclude is not None else None
    paths = sorted(
        path for path in Path(directory).rglob("*")
        if path.is_file()
        and path.suffix.lower() == extension
        and (excluded is None or path.resolve() != excluded)
    )
    return [Clip(path) for path in paths]

def plan_shuffle(clips: List[Clip], rng: Optional[random.Random] = None) -> ShufflePlan:
    """Draw a uniformly random permutation of clips (Fisher-Yates via Random.shuffle)."""
    rng = rng or random.SystemRandom()
    order = list(range(len(clips)))
    rng.shuffle(order)
    return ShufflePlan(clips=list(clips), order=order)

def write_concat_manifest(plan: ShufflePlan, directory: Optional[Path] = None) -> Path:
    """Write the plan as an ffmpeg concat manifest in a fresh temporary file."""
    fd, name = tempfile.mkstemp(
        prefix="vidshuffle_concat_",
        suffix=".txt",
        dir=str(directory) if directory is not None else None
    )
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(build_concat_manifest(clip.path for clip in plan.ordered_clips()))
    return Path(name)

def concatenate_clips(plan: ShufflePlan, output_file: Path, config: ShufflerConfig) -> None:
    """
    Concatenate the plan's clips into output_file with stream copy.

    The manifest is removed whether or not ffmpeg succeeds.

    Raises:
        ConcatenationError: If ffmpeg fails or leaves no output
    """
    from ..command_jobs import ConcatJob

    output_file.parent.mkdir(parents=True, exist_ok=True)
    scratch = config.scratch_root
    scratch.mkdir(parents=True, exist_ok=True)
    concat_file = write_concat_manifest(plan, scratch)
    try:
        logger.debug("Concat manifest %s lists %d clips", concat_file, len(plan))
        cmd = build_concat_command(concat_file, output_file, config.ffmpeg_path)
        ConcatJob(cmd).execute()

        if not output_file.exists() or output_file.stat().st_size == 0:
            raise ConcatenationError(
                "Concatenated output is missing or empty",
                module="concatenation"
            )
    finally:
        if concat_file.exists():
            concat_file.unlink()

def shuffle_clips(source_dir: Path, output_file: Path, config: ShufflerConfig,
                  rng: Optional[random.Random] = None) -> ShufflePlan:
    """
    Concatenate every clip under source_dir into output_file in random order.

    Args:
        source_dir: Directory searched recursively for clips
        output_file: Concatenated result; parent directories are created
        config: Pipeline settings
        rng: Random source, defaults to random.SystemRandom

    Returns:
        The shuffle plan that was applied

    Raises:
        InputNotFoundError: If source_dir is not a directory
        NoClipsFoundError: If source_dir holds no matching clips
        ConcatenationError: If ffmpeg fails
    """
    source_dir = Path(source_dir)
    output_file = Path(output_file)
    if not source_dir.is_dir():
        raise InputNotFoundError(
            f"Source directory '{source_dir}' does not exist",
            module="concatenation"
        )

    clips = find_clips(source_dir, config.clip_extension, exclude=output_file)
    if not clips:
        raise NoClipsFoundError(
            f"No {config.clip_extension} files found in '{source_dir}'",
            module="concatenation"
        )
    print_check(f"Found {len(clips)} video clips to shuffle")

    plan = plan_shuffle(clips, rng)
    print_check(f"Merging shuffled clips into {output_file}...")
    concatenate_clips(plan, output_file, config)
    print_success(f"Successfully created shuffled video: {output_file}")
    return plan
