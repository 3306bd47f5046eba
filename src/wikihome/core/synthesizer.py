"""Entry point tying the walk, the rendering and the writes together."""

import logging
import os
from pathlib import Path

from wikihome.config import Settings, settings as default_settings
from wikihome.core.errors import HomeFileError, RootDirectoryError
from wikihome.core.models import SynthesisReport
from wikihome.core.renderer import HomeWriter
from wikihome.core.storage import FileStorage, Storage
from wikihome.core.tree import TreeBuilder

logger = logging.getLogger(__name__)


def check_preconditions(root: Path, home_file: str) -> Path:
    """Validate the scan root and return the path of its home file.

    Raises:
        RootDirectoryError: ``root`` is missing, not a directory, or cannot
            be listed.
        HomeFileError: ``root/home_file`` is missing or not a regular file.
    """
    try:
        if not root.is_dir():
            raise RootDirectoryError(root)
        os.listdir(root)
    except OSError as exc:
        raise RootDirectoryError(root) from exc

    home_path = root / home_file
    try:
        if not home_path.is_file():
            raise HomeFileError(home_file, root)
    except OSError as exc:
        raise HomeFileError(home_file, root) from exc
    return home_path


async def synthesize(
    root_dir: Path | str,
    settings: Settings | None = None,
    storage: Storage | None = None,
    check: bool = False,
) -> SynthesisReport:
    """Regenerate the home file of ``root_dir`` and every override home file.

    With ``check`` set nothing is written; out-of-date files are reported in
    ``SynthesisReport.stale`` instead.
    """
    settings = settings or default_settings
    storage = storage or FileStorage()
    root = Path(root_dir)

    home_path = check_preconditions(root, settings.home_file)
    tree = await TreeBuilder(settings).build(root)

    report = SynthesisReport(root=root, check=check)
    writer = HomeWriter(storage)
    if check:
        await writer.check_home(home_path, tree, report)
    else:
        await writer.write_home(home_path, tree, report)

    logger.info(
        "Synthesis of %s finished: %d written, %d stale, %d failed",
        root,
        len(report.written),
        len(report.stale),
        len(report.failures),
    )
    return report
