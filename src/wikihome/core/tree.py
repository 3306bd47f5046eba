"""Filesystem walk that builds the Folder/Document tree.

Names and links are computed top-down while walking, since a node's link
and display name depend on its ancestors. Each node stores the precomputed
values and holds no reference back to its parent.
"""

import asyncio
import logging
import os
import stat
from pathlib import Path

from wikihome.config import Settings, settings as default_settings
from wikihome.core.errors import RootDirectoryError
from wikihome.core.models import Document, Folder
from wikihome.core.naming import (
    MARKDOWN_SUFFIX,
    compose_display_name,
    derive_link,
    humanize,
    strip_markdown_suffix,
)

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Walks a wiki directory sequentially and returns its root Folder."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings
        self._ancestors: set[tuple[int, int]] = set()

    async def build(self, root: Path) -> Folder:
        """Build the synthetic root folder for ``root``.

        The root folder has an empty link, so it never renders a heading.

        Raises:
            RootDirectoryError: ``root`` cannot be stat'ed or listed.
        """
        try:
            root_stat = await asyncio.to_thread(root.stat)
            self._ancestors = {(root_stat.st_dev, root_stat.st_ino)}
            documents, subfolders = await self.scan(root, "", "", 0)
        except OSError as exc:
            raise RootDirectoryError(root) from exc
        folder = Folder(
            name=root.name,
            display_name=humanize(self.settings.home_file),
            link="",
            absolute_path=root,
            documents=documents,
            subfolders=subfolders,
        )
        logger.info(
            "Scanned %s: %d documents, %d folders at top level",
            root,
            len(folder.documents),
            len(folder.subfolders),
        )
        return folder

    async def scan(
        self,
        directory: Path,
        ancestor_link: str,
        ancestor_display: str,
        depth: int,
    ) -> tuple[dict[str, Document], dict[str, Folder]]:
        """Collect the direct documents and (recursively) subfolders of ``directory``.

        A failure on one entry is logged and the entry is skipped; siblings
        are still scanned. Listing ``directory`` itself may raise OSError.
        """
        documents: dict[str, Document] = {}
        subfolders: dict[str, Folder] = {}

        names = sorted(await asyncio.to_thread(os.listdir, directory))
        for name in names:
            path = directory / name
            try:
                entry_stat = await asyncio.to_thread(path.stat)
            except OSError as exc:
                logger.warning("Skipping %s: %s", path, exc)
                continue

            if stat.S_ISREG(entry_stat.st_mode):
                if not name.endswith(MARKDOWN_SUFFIX):
                    continue
                if name in self.settings.skipped_files:
                    logger.debug("Skipping excluded file %s", path)
                    continue
                documents[name] = self._document(path, ancestor_link, depth)
            elif stat.S_ISDIR(entry_stat.st_mode):
                if depth == 0 and name in self.settings.excluded_folders:
                    logger.debug("Skipping excluded folder %s", path)
                    continue
                folder = await self._folder(
                    path, entry_stat, ancestor_link, ancestor_display, depth
                )
                if folder is not None:
                    subfolders[name] = folder

        return documents, subfolders

    def _document(self, path: Path, ancestor_link: str, depth: int) -> Document:
        base_name = strip_markdown_suffix(path.name)
        return Document(
            raw_name=path.name,
            base_name=base_name,
            display_name=humanize(base_name),
            link=derive_link(path.name, ancestor_link, depth),
            absolute_path=path,
        )

    async def _folder(
        self,
        path: Path,
        entry_stat: os.stat_result,
        ancestor_link: str,
        ancestor_display: str,
        depth: int,
    ) -> Folder | None:
        identity = (entry_stat.st_dev, entry_stat.st_ino)
        if identity in self._ancestors:
            logger.warning("Skipping %s: directory loop", path)
            return None

        link = derive_link(path.name, ancestor_link, depth)
        display_name = compose_display_name(path.name, ancestor_display, depth)

        self._ancestors.add(identity)
        try:
            documents, subfolders = await self.scan(path, link, display_name, depth + 1)
        except OSError as exc:
            logger.warning("Skipping %s: %s", path, exc)
            return None
        finally:
            self._ancestors.discard(identity)

        return Folder(
            name=path.name,
            display_name=display_name,
            link=link,
            absolute_path=path,
            documents=documents,
            subfolders=subfolders,
        )
