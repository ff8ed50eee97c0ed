"""Custom exceptions for the vidshuffle pipeline"""

class ShufflerError(Exception):
    """
    Base exception for all vidshuffle errors.

    Attributes:
        message (str): A description of the error.
        module (str): The module where the error originated.

    Usage:
        raise ShufflerError("An error occurred", module="concatenation")
    """
    def __init__(self, message: str, module: str = None):
        self.message = message
        self.module = module or "unknown"
        super().__init__(f"[{self.module}] {self.message}")

class DependencyError(ShufflerError):
    """
    Exception raised when required external tools are missing.

    Attributes:
        missing (set): Names of the capabilities that could not be found.
    """
    def __init__(self, message: str, module: str = None, missing=None):
        super().__init__(message, module)
        self.missing = set(missing or ())

class ConfigurationError(ShufflerError):
    """Error in configuration/setup"""

class UsageError(ShufflerError):
    """Invalid command-line usage (missing or unknown flags/subcommands)"""
    def __init__(self, message: str, module: str = "cli"):
        super().__init__(message, module)

class InputNotFoundError(ShufflerError):
    """A source video or clip directory does not exist"""

class NoClipsFoundError(ShufflerError):
    """A clip directory holds no files with the accepted extension"""

class CommandExecutionError(ShufflerError):
    """
    Exception raised when a subprocess command fails during execution.

    Attributes:
        returncode (int): Exit status of the command, or None if it never started.
    """
    def __init__(self, message: str, module: str = None, returncode: int = None):
        super().__init__(message, module)
        self.returncode = returncode

class DetectionError(ShufflerError):
    """
    Exception raised when scene detection or scene splitting fails.

    Raised when the detector errors out, the splitter exits non-zero,
    or no clip files were produced.
    """

class ConcatenationError(ShufflerError):
    """
    Exception raised when clip concatenation fails.

    Stream-copy concatenation of clips with mismatched codecs or
    resolutions also ends up here; no re-encoding is attempted.
    """
