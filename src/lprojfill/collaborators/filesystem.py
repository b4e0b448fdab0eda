"""Local directory-copy collaborator.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from lprojfill.diagnostics import CollaboratorError

__all__ = ["FileSystemCopier"]

logger = logging.getLogger(__name__)


class FileSystemCopier:
    """DirectoryCopier that mirrors trees with :func:`shutil.copytree`.

    Existing destination directories are merged into rather than rejected,
    so a partially seeded locale directory can be completed.
    """

    __slots__ = ()

    def copy_tree(self, source_dir: Path, dest_dir: Path) -> None:
        """Recursively copy ``source_dir`` to ``dest_dir``.

        Raises:
            CollaboratorError: If the source is missing or any file fails to copy
        """
        try:
            shutil.copytree(source_dir, dest_dir, dirs_exist_ok=True)
        except OSError as e:
            msg = f"Failed to copy {source_dir} to {dest_dir}: {e}"
            raise CollaboratorError(msg, collaborator="filesystem") from e
        logger.info("Copied %s to %s", source_dir, dest_dir)
