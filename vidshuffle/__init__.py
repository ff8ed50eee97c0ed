"""
vidshuffle - Split a video at scene changes and reassemble it in random order

This package provides a small command-line pipeline that:
- Detects content-based scene changes with PySceneDetect
- Writes one clip per detected scene
- Shuffles the clips with an unbiased random permutation
- Concatenates the shuffled clips with ffmpeg stream copy

Scene detection and all decoding/encoding are delegated to external
tools; this package sequences them and manages intermediate files.
"""

__version__ = "0.1.0"
