"""
Command-line interface for the vidshuffle scene shuffler
"""
import argparse
import logging
import signal
import sys
from pathlib import Path

from . import __version__
from .config import LOG_LEVEL, SCENE_THRESHOLD, ShufflerConfig
from .exceptions import ConfigurationError, ShufflerError, UsageError
from .formatting import print_error, print_header, print_info, print_success, print_usage
from .logging import configure_logging
from .pipeline import run_full
from .utils import (
    FFMPEG, OPENCV, SCENEDETECT,
    format_size, get_file_size, require_dependencies
)
from .video.concatenation import shuffle_clips
from .video.scene_detection import extract_scenes

log = logging.getLogger("vidshuffle")

PROG = "vidshuffle"

HELP_TEXT = f"""\
Usage: {PROG} <command> [options]

Commands:
  split    Split a video into scenes
  shuffle  Randomly concatenate video clips from a directory
  full     Both split video into scenes and create shuffled version
  help     Show this help message

Options for 'split':
  -s, --source <input_video.mp4>  Path to the source video file (required)
  -o, --output <output_dir>       Output directory for scenes (default: ./scenes)
  -t, --threshold <value>         Content detection threshold (default: {SCENE_THRESHOLD})

Options for 'shuffle':
  -s, --source <clips_dir>        Directory containing video clips (required)
  -o, --output <output_file.mp4>  Output file for shuffled video (required)

Options for 'full':
  -s, --source <input_video.mp4>  Path to the source video file (required)
  -o, --output <output_file.mp4>  Output file for shuffled video (default: input_shuffled.mp4)
  -k, --keep-scenes               Keep extracted scene clips after processing
  -t, --threshold <value>         Content detection threshold (default: {SCENE_THRESHOLD})

General options:
  --log-level <level>             Logging level (default: {LOG_LEVEL})
  --version                       Show the version and exit
  -h, --help                      Show this help message and exit
"""

# External capabilities each command needs
REQUIRED_TOOLS = {
    "split": {FFMPEG, SCENEDETECT, OPENCV},
    "shuffle": {FFMPEG},
    "full": {FFMPEG, SCENEDETECT, OPENCV},
}

class CliArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2"""
    def error(self, message):
        raise UsageError(message)

def _add_common_options(parser: argparse.ArgumentParser, source_help: str, output_help: str) -> None:
    parser.add_argument("-h", "--help", action="store_true", help="Show help and exit")
    parser.add_argument("-s", "--source", type=Path, help=source_help)
    parser.add_argument("-o", "--output", type=Path, help=output_help)

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with split/shuffle/full/help subcommands"""
    parser = CliArgumentParser(
        prog=PROG,
        description="Split videos into scenes and shuffle them",
        add_help=False
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show help and exit")
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level"
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    split = subparsers.add_parser("split", add_help=False, help="Split a video into scenes")
    _add_common_options(split, "Path to the source video file", "Output directory for scenes")
    split.add_argument("-t", "--threshold", type=float, default=None,
                       help="Content detection threshold")

    shuffle = subparsers.add_parser("shuffle", add_help=False,
                                    help="Randomly concatenate video clips from a directory")
    _add_common_options(shuffle, "Directory containing video clips", "Output file for shuffled video")

    full = subparsers.add_parser("full", add_help=False,
                                 help="Split a video into scenes and create a shuffled version")
    _add_common_options(full, "Path to the source video file", "Output file for shuffled video")
    full.add_argument("-k", "--keep-scenes", dest="keep_scenes", action="store_true",
                      help="Keep extracted scene clips after processing")
    full.add_argument("-t", "--threshold", type=float, default=None,
                      help="Content detection threshold")

    help_cmd = subparsers.add_parser("help", add_help=False, help="Show help and exit")
    help_cmd.add_argument("-h", "--help", action="store_true", help=argparse.SUPPRESS)

    return parser

def validate_args(args: argparse.Namespace) -> None:
    """Check the flags each command requires before dispatch"""
    if args.command is None:
        raise UsageError("A command is required")
    if args.command in ("split", "shuffle", "full") and args.source is None:
        raise UsageError(f"--source is required for {args.command} command")
    if args.command == "shuffle" and args.output is None:
        raise UsageError("--output file is required for shuffle command")

def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments; raises UsageError on bad input"""
    return build_parser().parse_args(argv)

def _run_split(args: argparse.Namespace, config: ShufflerConfig) -> None:
    output_dir = args.output or config.default_scenes_dir
    clips = extract_scenes(args.source, output_dir, config)
    log.info("Wrote %d scene clips to %s", len(clips), output_dir)

def _run_shuffle(args: argparse.Namespace, config: ShufflerConfig) -> None:
    plan = shuffle_clips(args.source, args.output, config)
    log.info("Shuffled %d clips into %s (%s)", len(plan), args.output,
             format_size(get_file_size(args.output)))

def _run_full(args: argparse.Namespace, config: ShufflerConfig) -> None:
    summary = run_full(args.source, args.output, args.keep_scenes, config)
    if summary.scenes_dir is not None:
        print_info(f"Scene clips preserved in: {summary.scenes_dir}")
    print_success(f"Shuffled {summary.clip_count} scenes into {summary.output_file}")

COMMANDS = {
    "split": _run_split,
    "shuffle": _run_shuffle,
    "full": _run_full,
}

def _handle_sigterm(signum, frame):
    # SystemExit unwinds through finally blocks, so scratch cleanup still runs
    raise SystemExit(128 + signum)

def _run(argv=None) -> int:
    try:
        args = parse_args(argv)
        if args.help or args.command == "help":
            print_usage(HELP_TEXT)
            return 0
        validate_args(args)
    except UsageError as e:
        print_error(e.message)
        print_usage(HELP_TEXT, stderr=True)
        return 1

    try:
        config = ShufflerConfig.from_environment(
            log_level=args.log_level,
            scene_threshold=getattr(args, "threshold", None)
        )
    except ConfigurationError as e:
        print_error(str(e))
        return 1

    configure_logging(config.log_level, config.log_dir)
    print_header("Video Shuffler")

    try:
        require_dependencies(config, REQUIRED_TOOLS[args.command])
        COMMANDS[args.command](args, config)
        return 0
    except ShufflerError as e:
        log.debug("Command %s failed", args.command, exc_info=True)
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        log.warning("Interrupted by user")
        return 130

def main(argv=None) -> int:
    """Main entry point"""
    previous = signal.signal(signal.SIGTERM, _handle_sigterm)
    try:
        return _run(argv)
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)

if __name__ == "__main__":
    sys.exit(main())
