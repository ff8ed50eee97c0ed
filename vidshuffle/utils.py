"""Utility functions for the vidshuffle pipeline"""

import importlib.util
import logging
import shutil
import subprocess
from datetime import datetime
from pathlib import Path
from typing import List, Set, Union

from .config import ShufflerConfig
from .exceptions import DependencyError

logger = logging.getLogger(__name__)

# Capability names reported by probe_dependencies
FFMPEG = "ffmpeg"
SCENEDETECT = "scenedetect"
OPENCV = "opencv"

INSTALL_HINTS = {
    FFMPEG: "install ffmpeg and make sure it is on PATH",
    SCENEDETECT: "pip install scenedetect",
    OPENCV: "pip install 'scenedetect[opencv]'",
}

def run_cmd(cmd: List[str], capture_output: bool = True,
            check: bool = True) -> subprocess.CompletedProcess:
    """Run a command and handle errors"""
    logger.info("Running command: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture_output,
            check=check,
            text=True
        )
        if result.stdout:
            logger.debug("Command stdout: %s", result.stdout)
        if result.stderr:
            logger.debug("Command stderr: %s", result.stderr)
        return result
    except subprocess.CalledProcessError as e:
        logger.error("Command failed: %s", " ".join(cmd))
        logger.error("Error output: %s", e.stderr)
        raise

def get_file_size(path: Union[str, Path]) -> int:
    """Get file size in bytes"""
    return Path(path).stat().st_size

def get_timestamp() -> str:
    """Get current timestamp in YYYYMMDD_HHMMSS format"""
    return datetime.now().strftime("%Y%m%d_%H%M%S")

def format_size(size: int) -> str:
    """Format file size for display"""
    for unit in ['B', 'KiB', 'MiB', 'GiB', 'TiB']:
        if size < 1024:
            return f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}TiB"

def _module_available(name: str) -> bool:
    try:
        return importlib.util.find_spec(name) is not None
    except (ImportError, ValueError):
        return False

def probe_dependencies(config: ShufflerConfig) -> Set[str]:
    """
    Check which external capabilities are unavailable.

    The scene detector needs scenedetect with its OpenCV backend; both the
    scene splitter and the concatenator need the ffmpeg executable.
    Shuffling happens in-process and has no external requirement.

    Returns:
        Set of missing capability names (empty when everything is present)
    """
    missing = set()
    if shutil.which(config.ffmpeg_path) is None:
        logger.debug("ffmpeg not found at %s", config.ffmpeg_path)
        missing.add(FFMPEG)
    if not _module_available("scenedetect"):
        missing.add(SCENEDETECT)
    if not _module_available("cv2"):
        missing.add(OPENCV)
    return missing

def describe_missing(missing: Set[str]) -> str:
    """Build a one-line diagnostic for a set of missing capabilities."""
    parts = [f"{name} ({INSTALL_HINTS.get(name, 'not found')})" for name in sorted(missing)]
    return "Missing required dependencies: " + ", ".join(parts)

def require_dependencies(config: ShufflerConfig, needed: Set[str]) -> None:
    """
    Raise if any of the needed capabilities is missing.

    Raises:
        DependencyError: Lists the missing capabilities with install hints
    """
    missing = probe_dependencies(config) & set(needed)
    if missing:
        raise DependencyError(describe_missing(missing), module="dependencies", missing=missing)
