from setuptools import setup, find_packages

setup(
    name="vidshuffle",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "rich>=13.0.0",  # Explicit minimum version
        "scenedetect[opencv]>=0.6.2",  # detect(start_in_scene=...), split_video_ffmpeg(output_dir=...)
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "vidshuffle=vidshuffle.__main__:main",
        ],
    },
    python_requires=">=3.8",
)
