"""Storage abstraction for home files."""

import asyncio
import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from wikihome.core.errors import HomeFileMissingError

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract base class for home file storage."""

    @abstractmethod
    async def home_exists(self, path: Path) -> bool:
        """Check if a home file exists and is a regular file."""
        ...

    @abstractmethod
    async def read_home(self, path: Path) -> str | None:
        """Get the current content of a home file. Returns None if not found."""
        ...

    @abstractmethod
    async def write_home(self, path: Path, content: str) -> None:
        """Replace the whole content of an existing home file.

        Raises HomeFileMissingError if the file no longer exists.
        """
        ...


class FileStorage(Storage):
    """File-based storage implementation.

    Writes go to a temporary sibling first and are moved over the target
    with ``os.replace``, so a failed write leaves the old content intact.
    """

    encoding = "utf-8"

    async def home_exists(self, path: Path) -> bool:
        """Check if a home file exists."""
        return await asyncio.to_thread(path.is_file)

    async def read_home(self, path: Path) -> str | None:
        """Read a home file."""
        if not await self.home_exists(path):
            return None
        return await asyncio.to_thread(path.read_text, encoding=self.encoding)

    async def write_home(self, path: Path, content: str) -> None:
        """Atomically replace a home file."""
        if not await self.home_exists(path):
            raise HomeFileMissingError(path)
        await asyncio.to_thread(self._replace, path, content)
        logger.debug("Replaced %s (%d bytes)", path, len(content.encode(self.encoding)))

    def _replace(self, path: Path, content: str) -> None:
        # Replace the file a symlinked home file points at, not the link
        path = path.resolve()
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            # newline="" keeps "\n" as-is on every platform
            with os.fdopen(fd, "w", encoding=self.encoding, newline="") as handle:
                handle.write(content)
            shutil.copymode(path, tmp_path)
            os.replace(tmp_path, path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
