"""Scene extraction: detect content changes and write one clip per scene"""

import logging
from pathlib import Path
from typing import Dict, List

from ..config import ShufflerConfig
from ..exceptions import DetectionError, InputNotFoundError
from ..formatting import print_check, print_success

logger = logging.getLogger(__name__)

def _detect_scenes(source_video: Path, config: ShufflerConfig) -> list:
    """Run PySceneDetect's content detector and return its scene list."""
    from scenedetect import ContentDetector, detect

    detector = ContentDetector(
        threshold=config.scene_threshold,
        min_scene_len=config.min_scene_len
    )
    # start_in_scene: a video with no cuts still yields one scene
    return detect(str(source_video), detector, start_in_scene=True)

def _split_scenes(source_video: Path, scene_list: list, destination_dir: Path,
                  config: ShufflerConfig) -> int:
    """Write each scene to its own file with ffmpeg; returns the exit status."""
    from scenedetect import split_video_ffmpeg

    return split_video_ffmpeg(
        str(source_video),
        scene_list,
        output_dir=str(destination_dir),
        output_file_template=config.scene_template,
        show_progress=False
    )

def list_scene_clips(directory: Path, config: ShufflerConfig) -> Dict[Path, int]:
    """Scene clip files directly inside directory, mapped to their mtime in ns."""
    if not directory.is_dir():
        return {}
    return {
        path: path.stat().st_mtime_ns for path in directory.iterdir()
        if path.is_file()
        and config.scene_marker in path.name
        and path.suffix.lower() == config.clip_extension.lower()
    }

def extract_scenes(source_video: Path, destination_dir: Path, config: ShufflerConfig) -> List[Path]:
    """
    Split a video into one clip per detected scene.

    Args:
        source_video: Video to analyse
        destination_dir: Directory receiving the clips (created if absent)
        config: Pipeline settings

    Returns:
        Sorted paths of the clips written by this call

    Raises:
        InputNotFoundError: If source_video is not an existing file
        DetectionError: If detection or splitting fails, or no clips were produced
    """
    source_video = Path(source_video)
    destination_dir = Path(destination_dir)
    if not source_video.is_file():
        raise InputNotFoundError(
            f"Input file '{source_video}' does not exist",
            module="scene_detection"
        )

    destination_dir.mkdir(parents=True, exist_ok=True)
    before = list_scene_clips(destination_dir, config)

    print_check(f"Detecting and extracting scenes from {source_video}...")
    try:
        scene_list = _detect_scenes(source_video, config)
    except Exception as e:
        raise DetectionError(f"Scene detection failed: {e}", module="scene_detection") from e
    logger.info("Detected %d scenes in %s", len(scene_list), source_video.name)

    if not scene_list:
        raise DetectionError(
            f"No scenes detected in '{source_video}'",
            module="scene_detection"
        )

    try:
        status = _split_scenes(source_video, scene_list, destination_dir, config)
    except Exception as e:
        raise DetectionError(f"Scene splitting failed: {e}", module="scene_detection") from e
    if status != 0:
        raise DetectionError(
            f"Scene splitting exited with status {status}",
            module="scene_detection"
        )

    # Clips that are new, or were rewritten by this run
    produced = sorted(
        path for path, mtime in list_scene_clips(destination_dir, config).items()
        if before.get(path) != mtime
    )
    if not produced:
        raise DetectionError(
            f"Scene splitting produced no clips in '{destination_dir}'",
            module="scene_detection"
        )

    print_success(f"Successfully extracted {len(produced)} scenes to {destination_dir}")
    return produced
