"""Configuration settings for the vidshuffle pipeline

This module centralizes all configuration settings including:
- External tool locations
- Clip naming and file extensions
- Scene detection parameters
- Scratch and log directory locations

Settings are collected once into a ShufflerConfig (optionally seeded from
VIDSHUFFLE_* environment variables) and passed explicitly to each
component; nothing below the command-line layer reads the environment.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import ConfigurationError

# Scene detection settings (PySceneDetect ContentDetector defaults)
SCENE_THRESHOLD = 27.0
MIN_SCENE_LEN = 15  # frames

# Clip naming
CLIP_EXTENSION = ".mp4"
SCENE_MARKER = "Scene-"

# Output naming
DEFAULT_SCENES_DIR = Path("scenes")
KEPT_SCENES_DIRNAME = "scenes"
SHUFFLED_SUFFIX = "_shuffled"

# Logging configuration
LOG_LEVEL = "INFO"  # valid values: DEBUG, INFO, WARNING, ERROR, CRITICAL

ENV_PREFIX = "VIDSHUFFLE_"


@dataclass
class ShufflerConfig:
    """Settings shared by the extractor, shuffler and pipeline."""
    ffmpeg_path: str = "ffmpeg"
    clip_extension: str = CLIP_EXTENSION
    scene_marker: str = SCENE_MARKER
    scene_threshold: float = SCENE_THRESHOLD
    min_scene_len: int = MIN_SCENE_LEN
    temp_root: Optional[Path] = None
    default_scenes_dir: Path = field(default_factory=lambda: DEFAULT_SCENES_DIR)
    kept_scenes_dirname: str = KEPT_SCENES_DIRNAME
    shuffled_suffix: str = SHUFFLED_SUFFIX
    output_extension: str = CLIP_EXTENSION
    log_dir: Optional[Path] = None
    log_level: str = LOG_LEVEL

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ShufflerConfig":
        """
        Create settings from VIDSHUFFLE_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Field values that take precedence over the environment

        Raises:
            ConfigurationError: If a variable cannot be parsed or a value is invalid
        """
        env = os.environ if environ is None else environ
        values = {}

        def _get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            return value if value else None

        try:
            if _get("FFMPEG"):
                values["ffmpeg_path"] = _get("FFMPEG")
            if _get("SCENE_THRESHOLD"):
                values["scene_threshold"] = float(_get("SCENE_THRESHOLD"))
            if _get("MIN_SCENE_LEN"):
                values["min_scene_len"] = int(_get("MIN_SCENE_LEN"))
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment setting: {e}", module="config") from e

        if _get("WORKDIR"):
            values["temp_root"] = Path(_get("WORKDIR"))
        if _get("LOG_DIR"):
            values["log_dir"] = Path(_get("LOG_DIR"))
        if _get("LOG_LEVEL"):
            values["log_level"] = _get("LOG_LEVEL").upper()

        values.update({k: v for k, v in overrides.items() if v is not None})
        config = cls(**values)
        config.validate()
        return config

    def with_overrides(self, **overrides) -> "ShufflerConfig":
        """Return a validated copy with the non-None overrides applied."""
        config = replace(self, **{k: v for k, v in overrides.items() if v is not None})
        config.validate()
        return config

    def validate(self) -> None:
        """Validate all configuration settings."""
        if self.scene_threshold <= 0:
            raise ConfigurationError(
                f"Scene threshold must be positive, got {self.scene_threshold}",
                module="config"
            )
        if self.min_scene_len < 0:
            raise ConfigurationError(
                f"Minimum scene length must not be negative, got {self.min_scene_len}",
                module="config"
            )
        for name in ("clip_extension", "output_extension"):
            ext = getattr(self, name)
            if not ext.startswith(".") or len(ext) < 2:
                raise ConfigurationError(f"Invalid {name}: {ext!r}", module="config")
        if not self.scene_marker:
            raise ConfigurationError("Scene marker must not be empty", module="config")
        if self.log_level.upper() not in logging._nameToLevel:
            raise ConfigurationError(f"Unknown log level: {self.log_level}", module="config")

    @property
    def scratch_root(self) -> Path:
        """Directory under which private scratch directories are created."""
        return self.temp_root if self.temp_root is not None else Path(tempfile.gettempdir())

    @property
    def scene_template(self) -> str:
        """Output file template handed to the scene splitter."""
        return f"$VIDEO_NAME-{self.scene_marker}$SCENE_NUMBER{self.clip_extension}"
