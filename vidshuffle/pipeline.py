"""High-level pipeline orchestration: split a video, then shuffle its scenes

Responsibilities:
  - Allocate the scratch directory holding intermediate scene clips.
  - Run scene extraction followed by shuffle/concatenation.
  - Remove the scratch directory on every exit path unless retention
    was requested, in which case report where the clips were kept.
"""

import logging
import random
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

from .config import ShufflerConfig
from .exceptions import InputNotFoundError
from .formatting import print_warning
from .video.concatenation import ShufflePlan, find_clips, shuffle_clips
from .video.scene_detection import extract_scenes

logger = logging.getLogger(__name__)

class PipelineState(Enum):
    INIT = "init"
    EXTRACTING = "extracting"
    SHUFFLING = "shuffling"
    CLEANUP = "cleanup"
    PRESERVE = "preserve"
    DONE = "done"
    FAILED = "failed"

@dataclass
class RunSummary:
    """Outcome of a full split-and-shuffle run."""
    output_file: Path
    clip_count: int
    plan: ShufflePlan
    scenes_dir: Optional[Path] = None

def default_output_path(source_video: Path, config: ShufflerConfig) -> Path:
    """<source dir>/<source stem><suffix><extension>, e.g. video_shuffled.mp4"""
    source_video = Path(source_video)
    return source_video.with_name(f"{source_video.stem}{config.shuffled_suffix}{config.output_extension}")

class ShufflePipeline:
    """Runs extraction then shuffling for a single source video."""

    def __init__(self, config: ShufflerConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng
        self.state = PipelineState.INIT

    def _transition(self, state: PipelineState) -> None:
        logger.debug("Pipeline state: %s -> %s", self.state.value, state.value)
        self.state = state

    @contextmanager
    def scratch_directory(self, output_file: Path, keep: bool) -> Iterator[Path]:
        """
        Yield the directory that receives intermediate scene clips.

        Without keep, a private temporary directory is removed when the
        block exits for any reason, including KeyboardInterrupt and
        SystemExit. With keep, <output dir>/scenes is created and left alone.
        """
        if keep:
            scenes_dir = output_file.parent / self.config.kept_scenes_dirname
            scenes_dir.mkdir(parents=True, exist_ok=True)
            if find_clips(scenes_dir, self.config.clip_extension):
                print_warning(f"{scenes_dir} already contains clips; they will be shuffled in too")
            yield scenes_dir
            return

        root = self.config.scratch_root
        root.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(prefix="vidshuffle_", dir=str(root)) as tmp:
            logger.debug("Allocated scratch directory %s", tmp)
            try:
                yield Path(tmp)
            finally:
                if self.state != PipelineState.FAILED:
                    self._transition(PipelineState.CLEANUP)
                logger.debug("Removing scratch directory %s", tmp)

    def run(self, source_video: Path, output_file: Path, keep_scenes: bool = False) -> RunSummary:
        """
        Split source_video into scenes and write them shuffled to output_file.

        Raises:
            InputNotFoundError, DetectionError, NoClipsFoundError,
            ConcatenationError: propagated unchanged from the components
        """
        source_video = Path(source_video)
        output_file = Path(output_file)
        # Checked before any scratch directory is allocated
        if not source_video.is_file():
            raise InputNotFoundError(
                f"Input file '{source_video}' does not exist",
                module="pipeline"
            )

        with self.scratch_directory(output_file, keep_scenes) as scenes_dir:
            try:
                self._transition(PipelineState.EXTRACTING)
                extract_scenes(source_video, scenes_dir, self.config)

                self._transition(PipelineState.SHUFFLING)
                plan = shuffle_clips(scenes_dir, output_file, self.config, rng=self.rng)
            except BaseException:
                self._transition(PipelineState.FAILED)
                raise

            if keep_scenes:
                self._transition(PipelineState.PRESERVE)
                logger.info("Scene clips preserved in: %s", scenes_dir)

        self._transition(PipelineState.DONE)
        return RunSummary(
            output_file=output_file,
            clip_count=len(plan),
            plan=plan,
            scenes_dir=scenes_dir if keep_scenes else None
        )

def run_full(source_video: Path, output_file: Optional[Path], keep_scenes: bool,
             config: ShufflerConfig, rng: Optional[random.Random] = None) -> RunSummary:
    """Split and shuffle in one go; output defaults to <stem>_shuffled.mp4 next to the source."""
    if output_file is None:
        output_file = default_output_path(source_video, config)
    return ShufflePipeline(config, rng=rng).run(source_video, output_file, keep_scenes)
