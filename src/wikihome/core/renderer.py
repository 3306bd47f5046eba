"""Rendering and writing of home files."""

import logging
from operator import attrgetter
from pathlib import Path

from wikihome.core.errors import HomeFileMissingError
from wikihome.core.models import Document, Folder, SynthesisReport, WriteFailure
from wikihome.core.sorting import natural_sorted
from wikihome.core.storage import Storage

logger = logging.getLogger(__name__)

_by_display_name = attrgetter("display_name")
_by_link = attrgetter("link")


def sorted_documents(folder: Folder) -> list[Document]:
    return natural_sorted(folder.documents.values(), key=_by_display_name, tiebreak=_by_link)


def sorted_subfolders(folder: Folder) -> list[Folder]:
    return natural_sorted(folder.subfolders.values(), key=_by_display_name, tiebreak=_by_link)


def format_home(lines: list[str]) -> str:
    """Join rendered lines into home file content; every line starts with a line break."""
    return "".join(f"\n{line}" for line in lines)


class HomeRenderer:
    """Turns a folder into ordered markdown link lines."""

    def render(self, folder: Folder, inline: bool = False) -> list[str]:
        """Render ``folder``.

        Args:
            folder: The folder scope to list.
            inline: True when the folder is being listed inside its parent's
                output. Only inlined folders get a heading line; a top-level
                render (root or override home file) starts straight with the
                documents.

        Returns:
            Documents first, then every subfolder that has direct documents,
            inlined recursively under its own heading. Both groups are in
            natural order by display name.
        """
        lines: list[str] = []
        if inline and folder.link:
            lines.append(folder.heading_line())
        for document in sorted_documents(folder):
            lines.append(document.link_line())
        for subfolder in sorted_subfolders(folder):
            if subfolder.has_documents:
                lines.extend(self.render(subfolder, inline=True))
        return lines


class HomeWriter:
    """Writes the root home file and every override home file below it.

    A subfolder that owns an override home file gets its own self-contained
    page, even when its parent's page already inlines it.
    """

    def __init__(self, storage: Storage, renderer: HomeRenderer | None = None):
        self.storage = storage
        self.renderer = renderer or HomeRenderer()

    async def write_home(self, target: Path, folder: Folder, report: SynthesisReport) -> None:
        """Replace ``target`` with the rendering of ``folder``, then its overrides."""
        content = format_home(self.renderer.render(folder))
        try:
            await self.storage.write_home(target, content)
        except (HomeFileMissingError, OSError) as exc:
            logger.error("Failed to write %s: %s", target, exc)
            report.failures.append(WriteFailure(path=target, error=str(exc)))
        else:
            logger.info("Wrote %s", target)
            report.written.append(target)
        await self._visit_overrides(folder, report, self.write_home)

    async def check_home(self, target: Path, folder: Folder, report: SynthesisReport) -> None:
        """Record ``target`` as stale when its content differs from the rendering."""
        content = format_home(self.renderer.render(folder))
        try:
            current = await self.storage.read_home(target)
        except UnicodeDecodeError as exc:
            logger.info("Out of date (not valid UTF-8): %s: %s", target, exc)
            report.stale.append(target)
        except OSError as exc:
            logger.error("Failed to read %s: %s", target, exc)
            report.failures.append(WriteFailure(path=target, error=str(exc)))
        else:
            if current is None:
                logger.error("Home file no longer exists: %s", target)
                report.failures.append(
                    WriteFailure(path=target, error=str(HomeFileMissingError(target)))
                )
            elif current != content:
                logger.info("Out of date: %s", target)
                report.stale.append(target)
        await self._visit_overrides(folder, report, self.check_home)

    async def _visit_overrides(self, folder: Folder, report: SynthesisReport, handler) -> None:
        for subfolder in sorted_subfolders(folder):
            override = folder.override_home_files.get(subfolder.name)
            if override is not None:
                await handler(override.absolute_path, subfolder, report)
            else:
                await self._visit_overrides(subfolder, report, handler)
