"""Exception hierarchy for home index synthesis."""

from pathlib import Path


class WikiHomeError(Exception):
    """Base class for all wikihome errors."""


class PreconditionError(WikiHomeError):
    """The scan root is unusable; raised before any walk starts."""


class RootDirectoryError(PreconditionError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Failed to find directory {path}")


class HomeFileError(PreconditionError):
    def __init__(self, home_file: str, root: Path):
        self.home_file = home_file
        self.root = root
        super().__init__(f"Failed to find {home_file} in {root}")


class HomeFileMissingError(WikiHomeError):
    """A home file disappeared between discovery and write."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Home file no longer exists: {path}")
